"""Turn an extracted candidate into a validated ProjectConfiguration.

State flow:
    direct parse ──ok──────────────────────────────┐
        └─fail─> repair pipeline ──ok──────────────┤
                     └─fail─> strict: ParseFailure │
                              permissive: keyword  │
                              fallback (degraded)  v
                                            schema check
                                  complete ─> return
                                  incomplete ─> strict: QualityError
                                                permissive: synthesize defaults

Nothing here prints; every warning is a Diagnostic on the result.
"""

from __future__ import annotations

import json
from dataclasses import replace

from .errors import ParseFailure, QualityError
from .extractor import ResponseExtractor
from .fallback import build_fallback_config
from .models import Diagnostic, ExtractionCandidate, ValidationPolicy, ValidationResult
from .repair import REPAIR_PIPELINE, RepairStep, repair_and_parse
from .schema import (
    COMPLEXITY_LEVELS,
    CORE_RULE_CATEGORIES,
    REQUIRED_FIELDS,
    ProjectConfiguration,
)

DEFAULT_RULES: dict[str, list[str]] = {
    "codingStandards": ["Follow existing code patterns"],
    "architectureGuidelines": ["Keep solutions simple"],
    "testingRequirements": ["Write real tests, not just mocks"],
    "simplicityGuardrails": ["Implement only what is required"],
}

_EXPECTED_TYPES: dict[str, type] = {
    "projectAnalysis": dict,
    "recommendedAgents": list,
    "recommendedCommands": list,
    "claudeRules": dict,
}


def _plural(n: int, word: str, plural: str | None = None) -> str:
    return f"{n} {word}" if n == 1 else f"{n} {plural or word + 's'}"


class ResponseValidator:
    """Parse, repair and schema-check model output.

    The policy decides what happens to incomplete or unparseable replies:
    permissive synthesizes defaults (and falls back to keyword scanning),
    strict raises ParseFailure / QualityError.

    Usage:
        validator = ResponseValidator(ValidationPolicy.strict_policy())
        result = validator.parse_and_validate(completion_text)
        config = result.config
    """

    def __init__(
        self,
        policy: ValidationPolicy | None = None,
        extractor: ResponseExtractor | None = None,
        repair_pipeline: tuple[RepairStep, ...] = REPAIR_PIPELINE,
    ):
        self.policy = policy or ValidationPolicy()
        self.extractor = extractor or ResponseExtractor()
        self.repair_pipeline = repair_pipeline

    # ── Pipeline entry points ────────────────────────────────────────

    def parse_and_validate(self, raw_text: str) -> ValidationResult:
        """Extract, then validate. ``raw_text`` is the full completion."""
        candidate = self.extractor.extract(raw_text)
        return self.validate_and_repair(candidate, raw_text=raw_text)

    def validate_and_repair(
        self,
        candidate: ExtractionCandidate | str,
        raw_text: str | None = None,
    ) -> ValidationResult:
        """Validate one candidate.

        ``raw_text`` feeds the keyword fallback; it defaults to the
        candidate text.

        Raises:
            ParseFailure: strict policy, no parseable JSON.
            QualityError: strict policy, JSON misses required content.
        """
        if isinstance(candidate, str):
            candidate = ExtractionCandidate(text=candidate)
        if raw_text is None:
            raw_text = candidate.text

        diagnostics: list[Diagnostic] = []
        if not candidate.found:
            diagnostics.append(Diagnostic("info", "No JSON-like span found in the response"))

        try:
            value = json.loads(candidate.text)
        except json.JSONDecodeError as e:
            diagnostics.append(Diagnostic("warning", "Initial JSON parse failed, attempting repairs"))
            outcome = repair_and_parse(candidate.text, self.repair_pipeline)
            if outcome is None:
                if self.policy.strict:
                    raise ParseFailure(candidate.text, str(e)) from e
                return self._fallback(raw_text, candidate, diagnostics, "JSON repair failed")
            diagnostics.append(Diagnostic("info", f"JSON repaired with: {', '.join(outcome.steps)}"))
            candidate = replace(candidate, text=outcome.text, repaired=True)
            value = outcome.value

        if not isinstance(value, dict):
            if self.policy.strict:
                raise QualityError([f"response is a JSON {type(value).__name__}, not an object"])
            return self._fallback(raw_text, candidate, diagnostics, "Response JSON is not an object")

        data = self._check_schema(value, diagnostics)
        return ValidationResult(
            config=ProjectConfiguration.from_dict(data),
            candidate=candidate,
            diagnostics=diagnostics,
        )

    # ── Internals ────────────────────────────────────────────────────

    def _fallback(
        self,
        raw_text: str,
        candidate: ExtractionCandidate,
        diagnostics: list[Diagnostic],
        reason: str,
    ) -> ValidationResult:
        diagnostics.append(Diagnostic(
            "warning",
            f"{reason}; using fallback configuration built from response keywords",
        ))
        return ValidationResult(
            config=build_fallback_config(raw_text),
            candidate=candidate,
            degraded=True,
            diagnostics=diagnostics,
        )

    @staticmethod
    def _keep_named_entries(
        data: dict, key: str, diagnostics: list[Diagnostic]
    ) -> None:
        entries = data.get(key)
        if not isinstance(entries, list):
            return
        kept = [e for e in entries if isinstance(e, dict) and e.get("name")]
        dropped = len(entries) - len(kept)
        if dropped:
            diagnostics.append(Diagnostic(
                "warning", f"Dropped {_plural(dropped, 'malformed entry', 'malformed entries')} from {key}",
            ))
            data[key] = kept

    def _check_schema(self, value: dict, diagnostics: list[Diagnostic]) -> dict:
        data = dict(value)
        failures: list[str] = []

        for key in REQUIRED_FIELDS:
            expected = _EXPECTED_TYPES[key]
            if key not in data:
                failures.append(f"missing {key}")
            elif not isinstance(data[key], expected):
                kind = "a list" if expected is list else "an object"
                failures.append(f"{key} must be {kind}")

        hooks = data.get("recommendedHooks")
        if hooks is not None and not isinstance(hooks, dict):
            failures.append("recommendedHooks must be an object")

        self._keep_named_entries(data, "recommendedAgents", diagnostics)
        self._keep_named_entries(data, "recommendedCommands", diagnostics)
        failures.extend(self._check_complexity(data, diagnostics))

        if self.policy.strict:
            failures.extend(self._adequacy_failures(data))
            if failures:
                raise QualityError(failures)
        elif failures:
            diagnostics.append(Diagnostic(
                "warning", f"Incomplete response: {', '.join(failures)}",
            ))
            diagnostics.append(Diagnostic(
                "info", f"Response keys: {', '.join(value.keys()) or '(none)'}",
            ))
            for key, expected in _EXPECTED_TYPES.items():
                if not isinstance(data.get(key), expected):
                    data[key] = expected()

        if not isinstance(data.get("recommendedHooks"), dict):
            data["recommendedHooks"] = {}

        data["claudeRules"] = self._with_default_rules(data["claudeRules"], diagnostics)
        return data

    def _check_complexity(self, data: dict, diagnostics: list[Diagnostic]) -> list[str]:
        analysis = data.get("projectAnalysis")
        if not isinstance(analysis, dict) or "complexity" not in analysis:
            return []
        if analysis["complexity"] in COMPLEXITY_LEVELS:
            return []
        message = f"projectAnalysis.complexity must be one of {', '.join(COMPLEXITY_LEVELS)}"
        if self.policy.strict:
            return [message]
        diagnostics.append(Diagnostic("warning", f"{message}; using medium"))
        data["projectAnalysis"] = dict(analysis, complexity="medium")
        return []

    def _adequacy_failures(self, data: dict) -> list[str]:
        failures: list[str] = []

        agents = data.get("recommendedAgents")
        if isinstance(agents, list) and len(agents) < self.policy.min_agents:
            failures.append(
                f"only {_plural(len(agents), 'agent')}, "
                f"minimum {self.policy.min_agents} required"
            )

        rules = data.get("claudeRules")
        if isinstance(rules, dict):
            filled = [k for k, v in rules.items() if isinstance(v, list) and v]
            if len(filled) < self.policy.min_rule_categories:
                failures.append(
                    f"only {_plural(len(filled), 'rule category', 'rule categories')}"
                    f" in claudeRules, minimum {self.policy.min_rule_categories} required"
                )
        return failures

    @staticmethod
    def _with_default_rules(rules: dict, diagnostics: list[Diagnostic]) -> dict:
        rules = dict(rules)
        injected = []
        for key in CORE_RULE_CATEGORIES:
            if not isinstance(rules.get(key), list):
                rules[key] = list(DEFAULT_RULES[key])
                injected.append(key)
        if injected:
            diagnostics.append(Diagnostic(
                "info", f"Default rules injected for: {', '.join(injected)}",
            ))
        return rules


def process_completion(
    raw_text: str, policy: ValidationPolicy | None = None
) -> ValidationResult:
    """One-shot pipeline: raw completion → ValidationResult."""
    return ResponseValidator(policy).parse_and_validate(raw_text)
