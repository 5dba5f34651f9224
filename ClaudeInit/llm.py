"""LLM backends for ClaudeInit.

Default backend: the Anthropic Messages API via the ``anthropic`` SDK.
``claude -p`` via subprocess is available for machines without an API key,
and any callable can be injected for testing or alternative providers.
LoggingBackend wraps any of them to record each call.
"""

from __future__ import annotations

import os
import subprocess
import time as _time
from typing import Any, Callable, Protocol

import anthropic

MODEL_IDS = {
    "sonnet": "claude-sonnet-4-20250514",
    "opus": "claude-opus-4-20250514",
}

DEFAULT_MAX_TOKENS = 6000


class LLMBackend(Protocol):
    """Protocol for LLM backends."""
    def query(self, system_prompt: str, user_prompt: str) -> str: ...


def resolve_model(model_type: str) -> str:
    """Map a model type (``sonnet`` | ``opus``) to a model id.

    Unknown values are passed through so explicit ids keep working.
    """
    return MODEL_IDS.get(model_type, model_type)


class AnthropicBackend:
    """Uses the Anthropic Messages API."""

    def __init__(
        self,
        api_key: str | None = None,
        model_type: str = "sonnet",
        max_tokens: int = DEFAULT_MAX_TOKENS,
        client: anthropic.Anthropic | None = None,
    ):
        self.model = resolve_model(model_type)
        self.max_tokens = max_tokens
        self.client = client or anthropic.Anthropic(api_key=api_key)

    def query(self, system_prompt: str, user_prompt: str) -> str:
        kwargs = {}
        if system_prompt:
            kwargs["system"] = system_prompt
        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                messages=[{"role": "user", "content": user_prompt}],
                **kwargs,
            )
        except anthropic.APIError as e:
            raise RuntimeError(f"Anthropic API request failed: {e}") from e

        return "".join(
            block.text for block in response.content if block.type == "text"
        )

    def validate_api_key(self) -> bool:
        """Send a tiny test request.

        Only an authentication failure means the key is bad; rate limits
        and other API errors still count as a usable key.
        """
        try:
            self.client.messages.create(
                model=self.model,
                max_tokens=10,
                messages=[{"role": "user", "content": "test"}],
            )
        except anthropic.AuthenticationError:
            return False
        except anthropic.APIError:
            return True
        return True


class ClaudeCLIBackend:
    """Uses `claude -p` subprocess as the LLM backend."""

    def __init__(self, model_type: str | None = None, timeout: int = 900):
        self.model = model_type
        self.timeout = timeout

    def query(self, system_prompt: str, user_prompt: str) -> str:
        full_prompt = f"{system_prompt}\n\n{user_prompt}" if system_prompt else user_prompt

        cmd = ["claude", "-p"]
        if self.model:
            cmd.extend(["--model", self.model])

        env = os.environ.copy()
        # Allow running from within Claude Code sessions
        env.pop("CLAUDECODE", None)
        env.pop("CLAUDE_CODE_ENTRYPOINT", None)

        result = subprocess.run(
            cmd,
            input=full_prompt,
            capture_output=True,
            text=True,
            timeout=self.timeout,
            env=env,
        )

        if result.returncode != 0:
            raise RuntimeError(
                f"claude -p failed (exit {result.returncode}): {result.stderr}"
            )

        return result.stdout.strip()


class CallableBackend:
    """Wraps a simple callable as an LLM backend."""

    def __init__(self, fn: Callable[[str, str], str]):
        self._fn = fn

    def query(self, system_prompt: str, user_prompt: str) -> str:
        return self._fn(system_prompt, user_prompt)


class LoggingBackend:
    """Wraps any LLMBackend, recording every call.

    Each call records: agent label, model reply length, duration and a
    rough token estimate. Calls an optional ``on_log`` callback with the
    entry dict. Failed calls are recorded with an ``error`` and re-raised.
    """

    def __init__(self, inner: LLMBackend, on_log: Callable[[dict], Any] | None = None):
        self._inner = inner
        self._on_log = on_log
        self._agent_label: str = "unknown"

    def set_agent_label(self, label: str) -> None:
        """Set the agent label for the next call(s)."""
        self._agent_label = label

    def query(self, system_prompt: str, user_prompt: str) -> str:
        start = _time.time()
        entry: dict[str, Any] = {
            "ts": start,
            "agent": self._agent_label,
            # ~4 chars per token for English text
            "est_input_tokens": (len(system_prompt) + len(user_prompt)) // 4,
        }
        try:
            response = self._inner.query(system_prompt, user_prompt)
        except Exception as e:
            entry["duration"] = round(_time.time() - start, 2)
            entry["error"] = f"{type(e).__name__}: {e}"
            self._emit(entry)
            raise

        entry["duration"] = round(_time.time() - start, 2)
        entry["response_chars"] = len(response)
        entry["est_output_tokens"] = len(response) // 4
        self._emit(entry)
        return response

    def _emit(self, entry: dict) -> None:
        if self._on_log:
            self._on_log(entry)
