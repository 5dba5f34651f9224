"""Textual repairs for near-valid JSON.

Each transform is a pure ``str -> str`` function. REPAIR_PIPELINE is applied
cumulatively, in order, with a parse attempt after every step; the first
string that parses is kept. Reorder or extend the list to change policy.
"""

from __future__ import annotations

import json
import re
from typing import Any, Callable, NamedTuple

from .extractor import scan_balanced_object

_TRAILING_COMMA = re.compile(r",(\s*[}\]])")
_BARE_KEY = re.compile(r"([{,]\s*)([A-Za-z_$][\w$]*)(\s*:)")
_DOUBLED_KEY = re.compile(r'""([^"]+)""')


def strip_trailing_commas(text: str) -> str:
    return _TRAILING_COMMA.sub(r"\1", text)


def single_to_double_quotes(text: str) -> str:
    # Lossy: apostrophes inside string values become quotes too.
    return text.replace("'", '"')


def quote_bare_keys(text: str) -> str:
    return _BARE_KEY.sub(r'\1"\2"\3', text)


def collapse_doubled_keys(text: str) -> str:
    return _DOUBLED_KEY.sub(r'"\1"', text)


def trim_to_first_object(text: str) -> str:
    """Keep exactly one balanced top-level object, dropping trailing garbage."""
    return scan_balanced_object(text) or text


class RepairStep(NamedTuple):
    name: str
    transform: Callable[[str], str]


REPAIR_PIPELINE: tuple[RepairStep, ...] = (
    RepairStep("strip-trailing-commas", strip_trailing_commas),
    RepairStep("single-to-double-quotes", single_to_double_quotes),
    RepairStep("quote-bare-keys", quote_bare_keys),
    RepairStep("collapse-doubled-keys", collapse_doubled_keys),
    RepairStep("trim-to-first-object", trim_to_first_object),
)


class RepairOutcome(NamedTuple):
    text: str
    value: Any
    steps: list[str]


def repair_and_parse(
    text: str,
    pipeline: tuple[RepairStep, ...] = REPAIR_PIPELINE,
) -> RepairOutcome | None:
    """Apply ``pipeline`` cumulatively until the text parses.

    Returns the repaired text, its parsed value and the names of the steps
    applied, or None if the text still does not parse after the last step.
    """
    current = text
    applied: list[str] = []
    for step in pipeline:
        current = step.transform(current)
        applied.append(step.name)
        try:
            value = json.loads(current)
        except json.JSONDecodeError:
            continue
        return RepairOutcome(text=current, value=value, steps=applied)
    return None
