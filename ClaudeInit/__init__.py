"""ClaudeInit: generate a Claude Code setup for a project or an idea.

Asks Claude for recommended agents, commands, hooks and CLAUDE.md rules,
validates the reply, and writes the files under ``.claude/``.

Modules:
    ClaudeInit.response     - Model reply → validated ProjectConfiguration
    ClaudeInit.setup_agent  - Prompting, file generation and the CLI

Shared infrastructure:
    ClaudeInit.llm          - LLM backend protocol and implementations
    ClaudeInit.base_agent   - BaseAgent with _llm_query_config() helper
    ClaudeInit.config       - SetupConfig (defaults, environment, flags)
"""

from .llm import LLMBackend, AnthropicBackend, ClaudeCLIBackend, CallableBackend
from .base_agent import BaseAgent
from .config import SetupConfig

__all__ = [
    "LLMBackend",
    "AnthropicBackend",
    "ClaudeCLIBackend",
    "CallableBackend",
    "BaseAgent",
    "SetupConfig",
]
