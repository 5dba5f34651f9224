"""Data models for the Setup Agent."""

from __future__ import annotations

from dataclasses import dataclass, field

ROLES = ("frontend", "backend", "fullstack", "devops")
EXPERIENCE_LEVELS = ("junior", "senior")
PROJECT_TYPES = ("new", "existing", "update")


@dataclass
class UserProfile:
    """Who the setup is for and what it is generated from."""
    role: str = "fullstack"          # frontend | backend | fullstack | devops
    experience: str = "senior"       # junior | senior
    project_type: str = "existing"   # new | existing | update
    project_path: str | None = None
    project_idea: str | None = None

    @property
    def is_new(self) -> bool:
        return self.project_type == "new"


@dataclass
class GeneratedFile:
    """One file written by the generator."""
    name: str
    path: str
    content: str


@dataclass
class GeneratedFiles:
    """Everything a generator run wrote."""
    agents: list[GeneratedFile] = field(default_factory=list)
    commands: list[GeneratedFile] = field(default_factory=list)
    hooks: GeneratedFile | None = None
    claude_md: GeneratedFile | None = None

    def all_paths(self) -> list[str]:
        paths = [f.path for f in self.agents + self.commands]
        for extra in (self.hooks, self.claude_md):
            if extra is not None:
                paths.append(extra.path)
        return paths
