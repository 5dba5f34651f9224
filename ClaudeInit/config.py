"""Run configuration for ClaudeInit.

Values come from defaults, then environment variables, then CLI flags
(applied by the caller on top of ``SetupConfig.from_env()``).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, asdict

from .llm import AnthropicBackend, ClaudeCLIBackend, DEFAULT_MAX_TOKENS, LLMBackend
from .response import PolicyMode, ValidationPolicy

_TRUTHY = ("1", "true", "yes", "on")


@dataclass
class SetupConfig:
    """Configuration for a setup run."""
    model_type: str = "sonnet"       # sonnet | opus
    backend: str = "api"             # api | cli
    api_key: str | None = None
    max_tokens: int = DEFAULT_MAX_TOKENS
    strict: bool = False
    min_agents: int = 2
    min_rule_categories: int = 2
    scan_depth: int = 3

    def to_dict(self) -> dict:
        data = asdict(self)
        data.pop("api_key")
        return data

    @classmethod
    def from_dict(cls, data: dict) -> SetupConfig:
        return cls(
            model_type=data.get("model_type", "sonnet"),
            backend=data.get("backend", "api"),
            api_key=data.get("api_key"),
            max_tokens=data.get("max_tokens", DEFAULT_MAX_TOKENS),
            strict=data.get("strict", False),
            min_agents=data.get("min_agents", 2),
            min_rule_categories=data.get("min_rule_categories", 2),
            scan_depth=data.get("scan_depth", 3),
        )

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> SetupConfig:
        env = os.environ if environ is None else environ
        config = cls()
        if env.get("ANTHROPIC_API_KEY"):
            config.api_key = env["ANTHROPIC_API_KEY"]
        if env.get("CLAUDE_INIT_MODEL"):
            config.model_type = env["CLAUDE_INIT_MODEL"]
        if env.get("CLAUDE_INIT_BACKEND"):
            config.backend = env["CLAUDE_INIT_BACKEND"]
        if env.get("CLAUDE_INIT_STRICT"):
            config.strict = env["CLAUDE_INIT_STRICT"].strip().lower() in _TRUTHY
        return config

    def policy(self) -> ValidationPolicy:
        return ValidationPolicy(
            mode=PolicyMode.STRICT if self.strict else PolicyMode.PERMISSIVE,
            min_agents=self.min_agents,
            min_rule_categories=self.min_rule_categories,
        )

    def build_backend(self) -> LLMBackend:
        if self.backend == "cli":
            return ClaudeCLIBackend(model_type=self.model_type)
        if not self.api_key:
            raise RuntimeError(
                "ANTHROPIC_API_KEY is not set. Export it, or use --cli-backend "
                "to run through the claude CLI instead."
            )
        return AnthropicBackend(
            api_key=self.api_key,
            model_type=self.model_type,
            max_tokens=self.max_tokens,
        )
