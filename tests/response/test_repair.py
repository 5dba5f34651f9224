"""Tests for the JSON repair transforms and pipeline."""

import os
import sys
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", ".."))

from ClaudeInit.response import REPAIR_PIPELINE, RepairStep, repair_and_parse
from ClaudeInit.response.repair import (
    collapse_doubled_keys,
    quote_bare_keys,
    single_to_double_quotes,
    strip_trailing_commas,
    trim_to_first_object,
)


# ── Tests: individual transforms ──────────────────────────────────────

class TestTransforms(unittest.TestCase):
    def test_strip_trailing_commas(self):
        self.assertEqual(
            strip_trailing_commas('{"a": [1, 2,], "b": 3,\n}'),
            '{"a": [1, 2], "b": 3\n}',
        )

    def test_strip_trailing_commas_leaves_inner_commas(self):
        text = '{"a": 1, "b": 2}'
        self.assertEqual(strip_trailing_commas(text), text)

    def test_single_to_double_quotes(self):
        self.assertEqual(single_to_double_quotes("{'a': 'b'}"), '{"a": "b"}')

    def test_quote_bare_keys(self):
        self.assertEqual(
            quote_bare_keys('{name: "x", count: 2}'),
            '{"name": "x", "count": 2}',
        )

    def test_quote_bare_keys_leaves_quoted_keys(self):
        text = '{"name": "x"}'
        self.assertEqual(quote_bare_keys(text), text)

    def test_collapse_doubled_keys(self):
        self.assertEqual(collapse_doubled_keys('{""name"": "x"}'), '{"name": "x"}')

    def test_trim_to_first_object(self):
        self.assertEqual(trim_to_first_object('{"a": 1} trailing }'), '{"a": 1}')

    def test_trim_without_balanced_object_is_noop(self):
        self.assertEqual(trim_to_first_object('{"a": '), '{"a": ')


# ── Tests: repair_and_parse ───────────────────────────────────────────

class TestRepairAndParse(unittest.TestCase):
    def test_pipeline_order(self):
        self.assertEqual(
            [step.name for step in REPAIR_PIPELINE],
            [
                "strip-trailing-commas",
                "single-to-double-quotes",
                "quote-bare-keys",
                "collapse-doubled-keys",
                "trim-to-first-object",
            ],
        )

    def test_trailing_comma_repaired_in_first_step(self):
        outcome = repair_and_parse('{"a": 1,}')
        self.assertEqual(outcome.value, {"a": 1})
        self.assertEqual(outcome.steps, ["strip-trailing-commas"])

    def test_single_quotes(self):
        outcome = repair_and_parse("{'a': 'b'}")
        self.assertEqual(outcome.value, {"a": "b"})
        self.assertEqual(outcome.steps, ["strip-trailing-commas", "single-to-double-quotes"])

    def test_steps_are_cumulative(self):
        outcome = repair_and_parse("{name: 'x',}")
        self.assertEqual(outcome.value, {"name": "x"})
        self.assertEqual(len(outcome.steps), 3)

    def test_doubled_keys(self):
        outcome = repair_and_parse('{""a"": 1}')
        self.assertEqual(outcome.value, {"a": 1})
        self.assertEqual(outcome.steps[-1], "collapse-doubled-keys")

    def test_trailing_garbage(self):
        outcome = repair_and_parse('{"a": 1} and then some}')
        self.assertEqual(outcome.value, {"a": 1})
        self.assertEqual(outcome.text, '{"a": 1}')
        self.assertEqual(outcome.steps[-1], "trim-to-first-object")

    def test_unrepairable_returns_none(self):
        self.assertIsNone(repair_and_parse("This is not valid JSON at all"))

    def test_custom_pipeline(self):
        noop = (RepairStep("noop", lambda s: s),)
        self.assertIsNone(repair_and_parse('{"a": 1,}', pipeline=noop))

        only_commas = (RepairStep("commas", strip_trailing_commas),)
        outcome = repair_and_parse('{"a": 1,}', pipeline=only_commas)
        self.assertEqual(outcome.steps, ["commas"])


if __name__ == "__main__":
    unittest.main()
