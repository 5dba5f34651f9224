"""ProjectConfiguration: the validated shape of an LLM recommendation.

Records map the camelCase JSON keys the model returns onto snake_case
dataclass fields. Keys a record does not know are kept in ``extra`` and
written back by ``to_dict()`` so nothing the model sent is lost.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

REQUIRED_FIELDS = (
    "projectAnalysis",
    "recommendedAgents",
    "recommendedCommands",
    "claudeRules",
)

CORE_RULE_CATEGORIES = (
    "codingStandards",
    "architectureGuidelines",
    "testingRequirements",
    "simplicityGuardrails",
)

OPTIONAL_RULE_CATEGORIES = (
    "verificationStandards",
    "complianceProtocols",
)

COMPLEXITY_LEVELS = ("simple", "medium", "complex")

DEFAULT_AGENT_TOOLS = ["Read", "Write", "Edit", "Bash"]


def _extra(data: dict, known: tuple[str, ...]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if k not in known}


def _str_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value]


def _text(value: Any, default: str = "") -> str:
    """JSON null becomes ``default``; other scalars are stringified."""
    if value is None:
        return default
    return str(value)


def _optional_text(value: Any) -> str | None:
    return None if value is None else str(value)


@dataclass
class ProjectAnalysis:
    """What the model detected (or recommends) for the project."""
    detected_technologies: list[str] = field(default_factory=list)
    project_type: str = "unknown"
    complexity: str = "medium"  # simple | medium | complex
    build_tools: list[str] = field(default_factory=list)
    testing_setup: str = "unknown"
    main_languages: list[str] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    _KEYS = (
        "detectedTechnologies", "projectType", "complexity",
        "buildTools", "testingSetup", "mainLanguages",
    )

    def to_dict(self) -> dict:
        data = {
            "detectedTechnologies": list(self.detected_technologies),
            "projectType": self.project_type,
            "complexity": self.complexity,
            "buildTools": list(self.build_tools),
            "testingSetup": self.testing_setup,
            "mainLanguages": list(self.main_languages),
        }
        data.update(self.extra)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> ProjectAnalysis:
        return cls(
            detected_technologies=_str_list(data.get("detectedTechnologies")),
            project_type=_text(data.get("projectType"), "unknown"),
            complexity=_text(data.get("complexity"), "medium"),
            build_tools=_str_list(data.get("buildTools")),
            testing_setup=_text(data.get("testingSetup"), "unknown"),
            main_languages=_str_list(data.get("mainLanguages")),
            extra=_extra(data, cls._KEYS),
        )


@dataclass
class AgentDefinition:
    """A recommended sub-agent."""
    name: str
    description: str = ""
    tools: list[str] = field(default_factory=list)
    system_prompt: str = ""
    model: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    _KEYS = ("name", "description", "tools", "systemPrompt", "model")

    def to_dict(self) -> dict:
        data: dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "tools": list(self.tools),
            "systemPrompt": self.system_prompt,
        }
        if self.model is not None:
            data["model"] = self.model
        data.update(self.extra)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> AgentDefinition:
        return cls(
            name=str(data.get("name", "")),
            description=_text(data.get("description")),
            tools=_str_list(data.get("tools")),
            system_prompt=_text(data.get("systemPrompt")),
            model=_optional_text(data.get("model")),
            extra=_extra(data, cls._KEYS),
        )


@dataclass
class CommandDefinition:
    """A recommended slash command."""
    name: str
    description: str = ""
    prompt: str = ""
    argument_hint: str | None = None
    allowed_tools: list[str] | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    _KEYS = ("name", "description", "prompt", "argumentHint", "allowedTools")

    def to_dict(self) -> dict:
        data: dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "prompt": self.prompt,
        }
        if self.argument_hint is not None:
            data["argumentHint"] = self.argument_hint
        if self.allowed_tools is not None:
            data["allowedTools"] = list(self.allowed_tools)
        data.update(self.extra)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> CommandDefinition:
        allowed = data.get("allowedTools")
        return cls(
            name=str(data.get("name", "")),
            description=_text(data.get("description")),
            prompt=_text(data.get("prompt")),
            argument_hint=_optional_text(data.get("argumentHint")),
            allowed_tools=_str_list(allowed) if allowed is not None else None,
            extra=_extra(data, cls._KEYS),
        )


@dataclass
class HookDefinition:
    """One automation hook under a trigger such as PostToolUse or Stop."""
    command: str
    description: str = ""
    matcher: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    _KEYS = ("command", "description", "matcher")

    def to_dict(self) -> dict:
        data: dict[str, Any] = {}
        if self.matcher is not None:
            data["matcher"] = self.matcher
        data["description"] = self.description
        data["command"] = self.command
        data.update(self.extra)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> HookDefinition:
        return cls(
            command=_text(data.get("command")),
            description=_text(data.get("description")),
            matcher=_optional_text(data.get("matcher")),
            extra=_extra(data, cls._KEYS),
        )


@dataclass
class ClaudeRules:
    """Rule categories written to CLAUDE.md."""
    coding_standards: list[str] = field(default_factory=list)
    architecture_guidelines: list[str] = field(default_factory=list)
    testing_requirements: list[str] = field(default_factory=list)
    simplicity_guardrails: list[str] = field(default_factory=list)
    verification_standards: list[str] | None = None
    compliance_protocols: list[str] | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    _KEYS = CORE_RULE_CATEGORIES + OPTIONAL_RULE_CATEGORIES

    def categories(self) -> dict[str, list[str]]:
        """Present rule categories keyed by their JSON name, in file order."""
        cats = {
            "codingStandards": self.coding_standards,
            "architectureGuidelines": self.architecture_guidelines,
            "testingRequirements": self.testing_requirements,
            "simplicityGuardrails": self.simplicity_guardrails,
        }
        if self.verification_standards is not None:
            cats["verificationStandards"] = self.verification_standards
        if self.compliance_protocols is not None:
            cats["complianceProtocols"] = self.compliance_protocols
        return cats

    def to_dict(self) -> dict:
        data: dict[str, Any] = {k: list(v) for k, v in self.categories().items()}
        data.update(self.extra)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> ClaudeRules:
        def optional(key: str) -> list[str] | None:
            return _str_list(data[key]) if key in data else None

        return cls(
            coding_standards=_str_list(data.get("codingStandards")),
            architecture_guidelines=_str_list(data.get("architectureGuidelines")),
            testing_requirements=_str_list(data.get("testingRequirements")),
            simplicity_guardrails=_str_list(data.get("simplicityGuardrails")),
            verification_standards=optional("verificationStandards"),
            compliance_protocols=optional("complianceProtocols"),
            extra=_extra(data, cls._KEYS),
        )


@dataclass
class ProjectConfiguration:
    """The validated recommendation handed to the file generator."""
    project_analysis: ProjectAnalysis = field(default_factory=ProjectAnalysis)
    recommended_agents: list[AgentDefinition] = field(default_factory=list)
    recommended_commands: list[CommandDefinition] = field(default_factory=list)
    recommended_hooks: dict[str, list[HookDefinition]] = field(default_factory=dict)
    claude_rules: ClaudeRules = field(default_factory=ClaudeRules)
    extra: dict[str, Any] = field(default_factory=dict)

    _KEYS = REQUIRED_FIELDS + ("recommendedHooks",)

    @property
    def hook_count(self) -> int:
        return sum(len(hooks) for hooks in self.recommended_hooks.values())

    def to_dict(self) -> dict:
        data = {
            "projectAnalysis": self.project_analysis.to_dict(),
            "recommendedAgents": [a.to_dict() for a in self.recommended_agents],
            "recommendedCommands": [c.to_dict() for c in self.recommended_commands],
            "recommendedHooks": {
                trigger: [h.to_dict() for h in hooks]
                for trigger, hooks in self.recommended_hooks.items()
            },
            "claudeRules": self.claude_rules.to_dict(),
        }
        data.update(self.extra)
        return data

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: dict) -> ProjectConfiguration:
        """Build from an already-validated dict (see ResponseValidator)."""
        hooks: dict[str, list[HookDefinition]] = {}
        for trigger, entries in (data.get("recommendedHooks") or {}).items():
            if isinstance(entries, list):
                hooks[trigger] = [
                    HookDefinition.from_dict(h) for h in entries if isinstance(h, dict)
                ]

        return cls(
            project_analysis=ProjectAnalysis.from_dict(data.get("projectAnalysis") or {}),
            recommended_agents=[
                AgentDefinition.from_dict(a) for a in data.get("recommendedAgents", [])
            ],
            recommended_commands=[
                CommandDefinition.from_dict(c) for c in data.get("recommendedCommands", [])
            ],
            recommended_hooks=hooks,
            claude_rules=ClaudeRules.from_dict(data.get("claudeRules") or {}),
            extra=_extra(data, cls._KEYS),
        )
