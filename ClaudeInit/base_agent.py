"""Base agent class for ClaudeInit agents.

Provides the shared _llm_query_config() helper with retry logic.
"""

from __future__ import annotations

import subprocess
import sys

from .llm import LLMBackend
from .response import ParseFailure, ResponseValidator, ValidationPolicy, ValidationResult

MAX_LLM_RETRIES = 3


class BaseAgent:
    """Base class for agents that turn an LLM reply into a configuration."""

    def __init__(
        self,
        llm: LLMBackend,
        policy: ValidationPolicy | None = None,
    ):
        self.llm = llm
        self.validator = ResponseValidator(policy)

    @property
    def policy(self) -> ValidationPolicy:
        return self.validator.policy

    def _llm_query_config(self, system_prompt: str, user_prompt: str) -> ValidationResult:
        """Query the LLM and validate the reply, with retry on failure.

        Retries transient LLM/subprocess failures (RuntimeError,
        TimeoutExpired, OSError) and unparseable replies (ParseFailure).
        A QualityError is raised straight away.
        """
        last_error: Exception | None = None
        for attempt in range(MAX_LLM_RETRIES):
            try:
                response = self.llm.query(system_prompt, user_prompt)
            except (RuntimeError, subprocess.TimeoutExpired, OSError) as e:
                last_error = e
                print(
                    f"  [Retry {attempt + 1}/{MAX_LLM_RETRIES}] "
                    f"LLM query failed ({type(e).__name__}), retrying...",
                    file=sys.stderr,
                )
                continue
            try:
                return self.validator.parse_and_validate(response)
            except ParseFailure as e:
                last_error = e
                print(
                    f"  [Retry {attempt + 1}/{MAX_LLM_RETRIES}] "
                    f"LLM response was not valid JSON, retrying...",
                    file=sys.stderr,
                )
        if isinstance(last_error, ParseFailure):
            raise last_error
        raise RuntimeError(
            f"LLM failed after {MAX_LLM_RETRIES} attempts: {last_error}"
        )
