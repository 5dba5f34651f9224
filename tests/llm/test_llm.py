"""Tests for the LLM module."""

import os
import subprocess
import sys
import unittest
from types import SimpleNamespace
from unittest.mock import patch

import anthropic
import httpx

sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", ".."))

from ClaudeInit.llm import (
    AnthropicBackend,
    CallableBackend,
    ClaudeCLIBackend,
    LoggingBackend,
    resolve_model,
)


_REQUEST = httpx.Request("POST", "https://api.anthropic.com/v1/messages")


class FakeMessages:
    """Stands in for ``client.messages``; records each create() call."""

    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.reply


def _fake_client(reply=None, error=None):
    return SimpleNamespace(messages=FakeMessages(reply=reply, error=error))


def _reply(*blocks):
    return SimpleNamespace(content=list(blocks))


def _text(text):
    return SimpleNamespace(type="text", text=text)


# ── Tests: resolve_model ──────────────────────────────────────────────

class TestResolveModel(unittest.TestCase):
    def test_known_types(self):
        self.assertEqual(resolve_model("sonnet"), "claude-sonnet-4-20250514")
        self.assertEqual(resolve_model("opus"), "claude-opus-4-20250514")

    def test_unknown_passes_through(self):
        self.assertEqual(resolve_model("claude-3-5-haiku-latest"), "claude-3-5-haiku-latest")


# ── Tests: AnthropicBackend ───────────────────────────────────────────

class TestAnthropicBackend(unittest.TestCase):
    def test_query_joins_text_blocks(self):
        client = _fake_client(reply=_reply(
            _text('{"a": '),
            SimpleNamespace(type="tool_use"),
            _text("1}"),
        ))
        backend = AnthropicBackend(client=client)
        self.assertEqual(backend.query("sys", "user"), '{"a": 1}')

    def test_request_parameters(self):
        client = _fake_client(reply=_reply(_text("ok")))
        backend = AnthropicBackend(model_type="opus", max_tokens=1234, client=client)
        backend.query("be terse", "hello")

        call = client.messages.calls[0]
        self.assertEqual(call["model"], "claude-opus-4-20250514")
        self.assertEqual(call["max_tokens"], 1234)
        self.assertEqual(call["system"], "be terse")
        self.assertEqual(call["messages"], [{"role": "user", "content": "hello"}])

    def test_empty_system_prompt_omitted(self):
        client = _fake_client(reply=_reply(_text("ok")))
        AnthropicBackend(client=client).query("", "hello")
        self.assertNotIn("system", client.messages.calls[0])

    def test_api_error_becomes_runtime_error(self):
        client = _fake_client(error=anthropic.APIConnectionError(request=_REQUEST))
        backend = AnthropicBackend(client=client)
        with self.assertRaises(RuntimeError) as ctx:
            backend.query("sys", "user")
        self.assertIn("Anthropic API request failed", str(ctx.exception))

    def test_validate_api_key_ok(self):
        client = _fake_client(reply=_reply(_text("hi")))
        self.assertTrue(AnthropicBackend(client=client).validate_api_key())
        self.assertEqual(client.messages.calls[0]["max_tokens"], 10)

    def test_validate_api_key_rejected(self):
        error = anthropic.AuthenticationError(
            "invalid x-api-key",
            response=httpx.Response(401, request=_REQUEST),
            body=None,
        )
        client = _fake_client(error=error)
        self.assertFalse(AnthropicBackend(client=client).validate_api_key())

    def test_validate_api_key_other_errors_count_as_valid(self):
        client = _fake_client(error=anthropic.APIConnectionError(request=_REQUEST))
        self.assertTrue(AnthropicBackend(client=client).validate_api_key())


# ── Tests: ClaudeCLIBackend ───────────────────────────────────────────

class TestClaudeCLIBackend(unittest.TestCase):
    def test_prompt_sent_on_stdin(self):
        done = subprocess.CompletedProcess(args=[], returncode=0, stdout="  reply \n", stderr="")
        with patch("ClaudeInit.llm.subprocess.run", return_value=done) as run:
            result = ClaudeCLIBackend(model_type="opus").query("sys", "user")

        self.assertEqual(result, "reply")
        args, kwargs = run.call_args
        self.assertEqual(args[0], ["claude", "-p", "--model", "opus"])
        self.assertEqual(kwargs["input"], "sys\n\nuser")
        self.assertNotIn("CLAUDECODE", kwargs["env"])

    def test_nonzero_exit_raises(self):
        done = subprocess.CompletedProcess(args=[], returncode=2, stdout="", stderr="not logged in")
        with patch("ClaudeInit.llm.subprocess.run", return_value=done):
            with self.assertRaises(RuntimeError) as ctx:
                ClaudeCLIBackend().query("", "user")
        self.assertIn("not logged in", str(ctx.exception))


# ── Tests: CallableBackend ────────────────────────────────────────────

class TestCallableBackend(unittest.TestCase):
    def test_basic_query(self):
        backend = CallableBackend(lambda s, u: f"echo: {u}")
        result = backend.query("sys", "hello")
        self.assertEqual(result, "echo: hello")

    def test_receives_both_prompts(self):
        captured = {}

        def fn(system_prompt, user_prompt):
            captured["system"] = system_prompt
            captured["user"] = user_prompt
            return "ok"

        backend = CallableBackend(fn)
        backend.query("sys_prompt", "user_prompt")
        self.assertEqual(captured["system"], "sys_prompt")
        self.assertEqual(captured["user"], "user_prompt")

    def test_exception_propagates(self):
        def failing_fn(s, u):
            raise ValueError("LLM error")

        backend = CallableBackend(failing_fn)
        with self.assertRaises(ValueError):
            backend.query("sys", "user")


# ── Tests: LoggingBackend ─────────────────────────────────────────────

class TestLoggingBackend(unittest.TestCase):
    def test_delegates_and_logs(self):
        logs = []
        inner = CallableBackend(lambda s, u: "a" * 100)
        backend = LoggingBackend(inner, on_log=logs.append)
        backend.set_agent_label("setup_agent")
        result = backend.query("b" * 200, "c" * 200)

        self.assertEqual(result, "a" * 100)
        entry = logs[0]
        self.assertEqual(entry["agent"], "setup_agent")
        self.assertEqual(entry["est_input_tokens"], 100)
        self.assertEqual(entry["est_output_tokens"], 25)
        self.assertEqual(entry["response_chars"], 100)
        self.assertGreaterEqual(entry["duration"], 0)
        self.assertNotIn("error", entry)

    def test_default_agent_label(self):
        logs = []
        LoggingBackend(CallableBackend(lambda s, u: "ok"), on_log=logs.append).query("s", "u")
        self.assertEqual(logs[0]["agent"], "unknown")

    def test_no_on_log_callback(self):
        backend = LoggingBackend(CallableBackend(lambda s, u: "ok"))
        self.assertEqual(backend.query("s", "u"), "ok")

    def test_failure_logged_and_reraised(self):
        def failing(s, u):
            raise RuntimeError("boom")

        logs = []
        backend = LoggingBackend(CallableBackend(failing), on_log=logs.append)
        with self.assertRaises(RuntimeError):
            backend.query("s", "u")
        self.assertEqual(logs[0]["error"], "RuntimeError: boom")
        self.assertNotIn("response_chars", logs[0])


if __name__ == "__main__":
    unittest.main()
