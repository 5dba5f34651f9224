"""Locate a JSON object inside free-form model output.

The model is asked to reply with bare JSON, but replies arrive fenced,
wrapped in prose, or cut off. ResponseExtractor tries a fixed list of
strategies and never raises: when nothing JSON-like is found it hands the
input back unchanged so the caller's parse fails visibly.
"""

from __future__ import annotations

import json
import re

from .models import ExtractionCandidate, ExtractionStrategy

_FENCED_JSON = re.compile(r"```json\s*\n(.*?)\n\s*```", re.DOTALL | re.IGNORECASE)
_FENCED_GENERIC = re.compile(r"```\s*\n(.*?)\n\s*```", re.DOTALL)
# One level of nesting only; used when nothing better parses.
_LAST_RESORT = re.compile(r"\{[^{}]*(?:\{[^{}]*\}[^{}]*)*\}")


def scan_balanced_object(text: str) -> str | None:
    """Return the first ``{...}`` span whose braces balance, or None.

    A plain depth counter: braces inside string literals are counted too.
    """
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    for i in range(start, len(text)):
        ch = text[i]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start:i + 1]
    return None


def _parses(text: str) -> bool:
    """True only for text that parses to a JSON object."""
    try:
        value = json.loads(text)
    except json.JSONDecodeError:
        return False
    return isinstance(value, dict)


class ResponseExtractor:
    """Pick the most plausible JSON object substring out of a completion."""

    def _fenced(self, pattern: re.Pattern, text: str) -> str | None:
        match = pattern.search(text)
        if match is None:
            return None
        return match.group(1).strip()

    def _candidates(self, text: str) -> list[tuple[ExtractionStrategy, str]]:
        found: list[tuple[ExtractionStrategy, str]] = []

        fenced_json = self._fenced(_FENCED_JSON, text)
        if fenced_json:
            found.append((ExtractionStrategy.FENCED_JSON, fenced_json))

        fenced = self._fenced(_FENCED_GENERIC, text)
        if fenced:
            found.append((ExtractionStrategy.FENCED_GENERIC, fenced))

        scanned = scan_balanced_object(text)
        if scanned:
            found.append((ExtractionStrategy.BRACE_SCAN, scanned.strip()))

        return found

    def extract(self, text: str) -> ExtractionCandidate:
        """Extract one JSON object candidate from ``text``.

        Order: ```json fence, bare ``` fence, brace-depth scan, then a
        permissive regex. The first candidate that parses to an object wins.
        If none does, the first brace-shaped candidate is returned for repair.
        """
        candidates = self._candidates(text)

        # Try 1: anything that already parses
        for strategy, candidate in candidates:
            if _parses(candidate):
                return ExtractionCandidate(text=candidate, strategy=strategy)

        # Try 2: last-resort regex
        match = _LAST_RESORT.search(text)
        if match:
            candidates.append((ExtractionStrategy.LAST_RESORT, match.group(0).strip()))
            if _parses(candidates[-1][1]):
                return ExtractionCandidate(
                    text=candidates[-1][1], strategy=ExtractionStrategy.LAST_RESORT
                )

        # Try 3: something brace-shaped that repair may be able to fix
        for strategy, candidate in candidates:
            if candidate.startswith("{"):
                return ExtractionCandidate(text=candidate, strategy=strategy)

        if candidates:
            strategy, candidate = candidates[0]
            return ExtractionCandidate(text=candidate, strategy=strategy)

        return ExtractionCandidate(text=text)
