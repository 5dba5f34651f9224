"""Tests for ResponseExtractor and the brace-depth scanner."""

import json
import os
import sys
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", ".."))

from ClaudeInit.response import (
    ExtractionStrategy,
    ResponseExtractor,
    process_completion,
    scan_balanced_object,
)


MINIMAL = '{"projectAnalysis":{},"recommendedAgents":[],"recommendedCommands":[],"claudeRules":{}}'


# ── Tests: fenced blocks ──────────────────────────────────────────────

class TestFencedExtraction(unittest.TestCase):
    def setUp(self):
        self.extractor = ResponseExtractor()

    def test_labeled_fence_returns_inner_text(self):
        text = f"Here you go:\n```json\n{MINIMAL}\n```\nEnjoy!"
        candidate = self.extractor.extract(text)
        self.assertEqual(candidate.text, MINIMAL)
        self.assertEqual(candidate.strategy, ExtractionStrategy.FENCED_JSON)
        self.assertTrue(candidate.found)
        self.assertFalse(candidate.repaired)

    def test_labeled_fence_is_case_insensitive(self):
        text = '```JSON\n{"key": "value"}\n```'
        candidate = self.extractor.extract(text)
        self.assertEqual(candidate.text, '{"key": "value"}')
        self.assertEqual(candidate.strategy, ExtractionStrategy.FENCED_JSON)

    def test_labeled_fence_with_indented_content(self):
        body = json.dumps({"outer": {"inner": [1, 2]}}, indent=2)
        text = f"```json\n{body}\n  ```"
        candidate = self.extractor.extract(text)
        self.assertEqual(json.loads(candidate.text), {"outer": {"inner": [1, 2]}})

    def test_bare_fence(self):
        text = 'Result:\n```\n{"key": "value"}\n```'
        candidate = self.extractor.extract(text)
        self.assertEqual(candidate.text, '{"key": "value"}')
        self.assertEqual(candidate.strategy, ExtractionStrategy.FENCED_GENERIC)

    def test_bare_fence_with_prose_falls_through_to_brace_scan(self):
        text = '```\nnot json at all\n```\n\nAnswer: {"valid": true}'
        candidate = self.extractor.extract(text)
        self.assertEqual(candidate.text, '{"valid": true}')
        self.assertEqual(candidate.strategy, ExtractionStrategy.BRACE_SCAN)


# ── Tests: brace scanning ─────────────────────────────────────────────

class TestBraceScan(unittest.TestCase):
    def setUp(self):
        self.extractor = ResponseExtractor()

    def test_nested_object_in_prose_extracts_outer(self):
        text = 'Sure, here it is: {"a":{"b":{"c":1}}} Let me know if you need more.'
        candidate = self.extractor.extract(text)
        self.assertEqual(candidate.text, '{"a":{"b":{"c":1}}}')
        self.assertEqual(candidate.strategy, ExtractionStrategy.BRACE_SCAN)

    def test_scan_returns_first_balanced_span(self):
        self.assertEqual(scan_balanced_object('x {"a": 1} y {"b": 2}'), '{"a": 1}')

    def test_scan_unbalanced_returns_none(self):
        self.assertIsNone(scan_balanced_object('{"a": {"b": 1}'))

    def test_scan_no_brace_returns_none(self):
        self.assertIsNone(scan_balanced_object("no braces here"))


# ── Tests: fallbacks ──────────────────────────────────────────────────

class TestExtractionFallbacks(unittest.TestCase):
    def setUp(self):
        self.extractor = ResponseExtractor()

    def test_last_resort_regex_when_scan_never_balances(self):
        text = 'oops { broken {"k": 1} tail'
        candidate = self.extractor.extract(text)
        self.assertEqual(candidate.text, '{"k": 1}')
        self.assertEqual(candidate.strategy, ExtractionStrategy.LAST_RESORT)

    def test_unparseable_fence_still_returned_for_repair(self):
        text = "```json\n{name: 'x',}\n```"
        candidate = self.extractor.extract(text)
        self.assertEqual(candidate.text, "{name: 'x',}")
        self.assertEqual(candidate.strategy, ExtractionStrategy.FENCED_JSON)

    def test_scalar_fence_does_not_shadow_object(self):
        for scalar in ("42", "true", '"just a string"', "[1, 2]"):
            text = f"Run this:\n```\n{scalar}\n```\n{MINIMAL}"
            candidate = self.extractor.extract(text)
            self.assertEqual(candidate.text, MINIMAL, scalar)
            self.assertEqual(candidate.strategy, ExtractionStrategy.BRACE_SCAN)

    def test_scalar_fence_keeps_full_configuration(self):
        text = f"Run this:\n```\n42\n```\n{MINIMAL}"
        result = process_completion(text)
        self.assertFalse(result.degraded)
        self.assertEqual(result.candidate.text, MINIMAL)

    def test_no_json_returns_input_unchanged(self):
        text = "This is not valid JSON at all"
        candidate = self.extractor.extract(text)
        self.assertEqual(candidate.text, text)
        self.assertIsNone(candidate.strategy)
        self.assertFalse(candidate.found)

    def test_empty_input_never_raises(self):
        candidate = self.extractor.extract("")
        self.assertEqual(candidate.text, "")
        self.assertFalse(candidate.found)


if __name__ == "__main__":
    unittest.main()
