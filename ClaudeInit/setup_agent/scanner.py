"""Shallow project listing used as prompt context.

The model does the interpreting; this only lists what is on disk.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

SKIP_DIRS = {
    "node_modules", ".git", "dist", "build", "target", "__pycache__",
    ".pytest_cache", ".next", ".nuxt", "coverage",
}

KEEP_HIDDEN_PREFIXES = (
    ".github", ".gitlab", ".vscode", ".idea", ".env", ".docker", ".k8s",
    ".aws", ".azure",
)

MAX_LISTED_ENTRIES = 50
MAX_LISTED_DEPENDENCIES = 20


@dataclass
class ProjectListing:
    """What the scanner saw under a project root."""
    entries: list[str] = field(default_factory=list)
    dependencies: list[str] = field(default_factory=list)
    dev_dependencies: list[str] = field(default_factory=list)
    scripts: dict[str, str] = field(default_factory=dict)


def _skipped(name: str) -> bool:
    if name in SKIP_DIRS:
        return True
    return name.startswith(".") and not name.startswith(KEEP_HIDDEN_PREFIXES)


def list_entries(root: Path, max_depth: int = 3, _depth: int = 0) -> list[str]:
    """List entries down to ``max_depth`` levels.

    Directories end with ``/``; each nesting level is indented two spaces.
    Unreadable directories are listed without children.
    """
    if _depth >= max_depth:
        return []
    try:
        children = sorted(root.iterdir(), key=lambda p: p.name)
    except OSError:
        return []

    lines: list[str] = []
    for child in children:
        if _skipped(child.name):
            continue
        if child.is_dir():
            lines.append(f"{child.name}/")
            lines.extend(f"  {sub}" for sub in list_entries(child, max_depth, _depth + 1))
        else:
            lines.append(child.name)
    return lines


def scan_project(project_path: str | Path, max_depth: int = 3) -> ProjectListing:
    """Scan a project root. A root package.json contributes dependency names."""
    root = Path(project_path)
    listing = ProjectListing(entries=list_entries(root, max_depth))

    package_json = root / "package.json"
    if package_json.is_file():
        try:
            pkg = json.loads(package_json.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            pkg = {}
        if isinstance(pkg, dict):
            listing.dependencies = list((pkg.get("dependencies") or {}).keys())
            listing.dev_dependencies = list((pkg.get("devDependencies") or {}).keys())
            listing.scripts = dict(pkg.get("scripts") or {})

    return listing


def _truncated(items: list[str], limit: int, sep: str, unit: str) -> str:
    text = sep.join(items[:limit])
    if len(items) > limit:
        text += f"\n... and {len(items) - limit} more{unit}"
    return text


def format_for_llm(listing: ProjectListing) -> str:
    """Render the listing as the ``<codebase_data>`` prompt block."""
    scripts = "\n".join(f"{name}: {cmd}" for name, cmd in listing.scripts.items())
    return f"""\
<codebase_data>
<file_structure total_files="{len(listing.entries)}">
{_truncated(listing.entries, MAX_LISTED_ENTRIES, chr(10), " files")}
</file_structure>

<dependencies count="{len(listing.dependencies)}">
{_truncated(listing.dependencies, MAX_LISTED_DEPENDENCIES, ", ", "")}
</dependencies>

<dev_dependencies count="{len(listing.dev_dependencies)}">
{_truncated(listing.dev_dependencies, MAX_LISTED_DEPENDENCIES, ", ", "")}
</dev_dependencies>

<npm_scripts>
{scripts}
</npm_scripts>
</codebase_data>"""
