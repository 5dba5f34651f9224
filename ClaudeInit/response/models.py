"""Data models for the response pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .schema import ProjectConfiguration


class ExtractionStrategy(str, Enum):
    """How a JSON candidate was located in the raw completion."""
    FENCED_JSON = "fenced-json-block"
    FENCED_GENERIC = "fenced-generic-block"
    BRACE_SCAN = "brace-scan"
    LAST_RESORT = "last-resort-regex"


@dataclass(frozen=True)
class ExtractionCandidate:
    """A string believed to hold one JSON object.

    ``strategy`` is None when nothing JSON-like was found; ``text`` is then
    the untouched input so that the following parse fails visibly.
    """
    text: str
    strategy: ExtractionStrategy | None = None
    repaired: bool = False

    @property
    def found(self) -> bool:
        return self.strategy is not None


class PolicyMode(str, Enum):
    PERMISSIVE = "permissive"
    STRICT = "strict"


@dataclass(frozen=True)
class ValidationPolicy:
    """Strictness settings for ResponseValidator."""
    mode: PolicyMode = PolicyMode.PERMISSIVE
    min_agents: int = 2
    min_rule_categories: int = 2

    @property
    def strict(self) -> bool:
        return self.mode == PolicyMode.STRICT

    @classmethod
    def permissive(cls) -> ValidationPolicy:
        return cls(mode=PolicyMode.PERMISSIVE)

    @classmethod
    def strict_policy(
        cls, min_agents: int = 2, min_rule_categories: int = 2
    ) -> ValidationPolicy:
        return cls(
            mode=PolicyMode.STRICT,
            min_agents=min_agents,
            min_rule_categories=min_rule_categories,
        )


@dataclass
class Diagnostic:
    """One event recorded while validating a response."""
    level: str  # info | warning | error
    message: str


@dataclass
class ValidationResult:
    """Outcome of a pipeline run that produced a configuration.

    ``degraded`` is True when the configuration came from the keyword
    fallback rather than from parsed JSON.
    """
    config: ProjectConfiguration
    candidate: ExtractionCandidate
    degraded: bool = False
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def repaired(self) -> bool:
        return self.candidate.repaired

    @property
    def warnings(self) -> list[str]:
        return [d.message for d in self.diagnostics if d.level != "info"]
