"""Tests for the project scanner."""

import json
import os
import sys
import tempfile
import unittest
from pathlib import Path

sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", ".."))

from ClaudeInit.setup_agent.scanner import (
    MAX_LISTED_ENTRIES,
    ProjectListing,
    format_for_llm,
    list_entries,
    scan_project,
)


class TestListEntries(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def _touch(self, *parts):
        path = self.root.joinpath(*parts)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("")

    def test_sorted_with_nested_indent(self):
        self._touch("src", "main.py")
        self._touch("README.md")
        self.assertEqual(list_entries(self.root), ["README.md", "src/", "  main.py"])

    def test_skips_build_and_hidden_dirs(self):
        self._touch("node_modules", "lib.js")
        self._touch(".git", "HEAD")
        self._touch(".cache", "x")
        self._touch(".github", "workflows", "ci.yml")
        self._touch("app.js")

        entries = list_entries(self.root)
        self.assertEqual(entries, [".github/", "  workflows/", "    ci.yml", "app.js"])

    def test_max_depth(self):
        self._touch("a", "b", "c", "deep.txt")
        self.assertEqual(list_entries(self.root, max_depth=2), ["a/", "  b/"])

    def test_missing_root(self):
        self.assertEqual(list_entries(self.root / "nope"), [])


class TestScanProject(unittest.TestCase):
    def test_package_json_dependencies(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            Path(tmpdir, "package.json").write_text(json.dumps({
                "dependencies": {"react": "18", "vite": "5"},
                "devDependencies": {"vitest": "1"},
                "scripts": {"dev": "vite"},
            }))
            listing = scan_project(tmpdir)

        self.assertEqual(listing.entries, ["package.json"])
        self.assertEqual(listing.dependencies, ["react", "vite"])
        self.assertEqual(listing.dev_dependencies, ["vitest"])
        self.assertEqual(listing.scripts, {"dev": "vite"})

    def test_invalid_package_json_ignored(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            Path(tmpdir, "package.json").write_text("{not json")
            listing = scan_project(tmpdir)
        self.assertEqual(listing.dependencies, [])
        self.assertEqual(listing.scripts, {})


class TestFormatForLLM(unittest.TestCase):
    def test_sections(self):
        listing = ProjectListing(
            entries=["main.py"],
            dependencies=["requests"],
            dev_dependencies=[],
            scripts={"test": "pytest"},
        )
        text = format_for_llm(listing)
        self.assertTrue(text.startswith("<codebase_data>"))
        self.assertIn('<file_structure total_files="1">\nmain.py\n</file_structure>', text)
        self.assertIn('<dependencies count="1">\nrequests\n</dependencies>', text)
        self.assertIn("<npm_scripts>\ntest: pytest\n</npm_scripts>", text)

    def test_long_listing_truncated(self):
        entries = [f"file{i}.txt" for i in range(MAX_LISTED_ENTRIES + 5)]
        text = format_for_llm(ProjectListing(entries=entries))
        self.assertIn(f'total_files="{MAX_LISTED_ENTRIES + 5}"', text)
        self.assertIn("... and 5 more files", text)
        self.assertNotIn(f"file{MAX_LISTED_ENTRIES}.txt", text)


if __name__ == "__main__":
    unittest.main()
