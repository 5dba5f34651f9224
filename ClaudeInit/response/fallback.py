"""Keyword-scan fallback for replies that hold no usable JSON.

When parsing and every repair fail under the permissive policy, a weak
configuration is built by looking for keywords in the lower-cased reply.
The tables below are plain data: replace or extend them freely, they are
not meant to be exhaustive.
"""

from __future__ import annotations

from typing import NamedTuple

from .schema import (
    AgentDefinition,
    ClaudeRules,
    ProjectAnalysis,
    ProjectConfiguration,
)


class KeywordRule(NamedTuple):
    """If any of ``keywords`` occurs, add ``value`` to the target list(s)."""
    keywords: tuple[str, ...]
    value: str
    languages: bool = False  # also record as a main language


TECHNOLOGY_RULES: list[KeywordRule] = [
    KeywordRule(("python",), "Python", languages=True),
    KeywordRule(("typescript", "react"), "TypeScript", languages=True),
    KeywordRule(("react",), "React"),
    KeywordRule(("fastapi",), "FastAPI"),
    KeywordRule(("django",), "Django"),
    KeywordRule(("azure",), "Azure"),
    KeywordRule(("docker",), "Docker"),
    KeywordRule(("bicep",), "Azure Bicep"),
    KeywordRule(("n8n",), "N8N"),
]

BUILD_TOOL_RULES: list[KeywordRule] = [
    KeywordRule(("npm",), "npm"),
    KeywordRule(("docker",), "docker"),
    KeywordRule(("azure pipeline",), "Azure Pipelines"),
    KeywordRule(("pytest",), "pytest"),
]

# (all keywords must appear, project type); first match wins
PROJECT_TYPE_RULES: list[tuple[tuple[str, ...], str]] = [
    (("fullstack",), "fullstack-web-app"),
    (("frontend", "backend"), "fullstack-web-app"),
    (("enterprise",), "enterprise-system"),
    (("microservice",), "enterprise-system"),
    (("api",), "api-service"),
    (("cli",), "cli-tool"),
]

COMPLEX_KEYWORDS = ("complex", "enterprise", "microservice")
SIMPLE_KEYWORDS = ("simple", "basic")
TESTING_RISK_KEYWORDS = ("mock-only", "inadequate")

# technology → agent recommended when it is detected
TECHNOLOGY_AGENTS: dict[str, AgentDefinition] = {
    "Python": AgentDefinition(
        name="Python Backend Specialist",
        description=(
            "Expert in Python backend development with FastAPI/Django "
            "patterns and real testing practices."
        ),
        tools=["Read", "Write", "Edit", "Bash", "Grep"],
        system_prompt=(
            "You are a Python backend specialist. Focus on clean, testable "
            "code with real integration tests."
        ),
    ),
    "TypeScript": AgentDefinition(
        name="TypeScript Frontend Specialist",
        description=(
            "Expert in TypeScript and React development with strict typing "
            "and component best practices."
        ),
        tools=["Read", "Write", "Edit", "Bash", "Grep"],
        system_prompt=(
            "You are a TypeScript/React specialist. Enforce strict typing "
            "and component-based architecture."
        ),
    ),
}

FALLBACK_RULES = {
    "codingStandards": [
        "Follow existing code patterns",
        "Implement proper error handling",
    ],
    "architectureGuidelines": [
        "Keep solutions simple",
        "Use established patterns",
    ],
    "testingRequirements": [
        "Write real integration tests",
        "Avoid mock-only testing",
    ],
    "simplicityGuardrails": [
        "Implement only what is required",
        "Prefer composition over complexity",
    ],
}

RISK_TESTING_REQUIREMENTS = [
    "CRITICAL: Mock-only tests are INADEQUATE and HIGH RISK",
    "MANDATORY: Replace mock-only tests with REAL integration tests",
    "All external API calls must have corresponding REAL integration tests",
    "Performance claims require actual measurements, not assumptions",
]


def _any(text: str, keywords: tuple[str, ...]) -> bool:
    return any(k in text for k in keywords)


def _detect_project_type(text: str) -> str:
    for keywords, project_type in PROJECT_TYPE_RULES:
        if all(k in text for k in keywords):
            return project_type
    return "unknown"


def _detect_complexity(text: str) -> str:
    if _any(text, COMPLEX_KEYWORDS):
        return "complex"
    if _any(text, SIMPLE_KEYWORDS):
        return "simple"
    return "medium"


def build_fallback_config(raw_text: str) -> ProjectConfiguration:
    """Build a low-fidelity configuration from keywords in ``raw_text``.

    Always returns a configuration with every required field populated,
    even for empty input.
    """
    text = raw_text.lower()
    analysis = ProjectAnalysis()

    for rule in TECHNOLOGY_RULES:
        if _any(text, rule.keywords):
            analysis.detected_technologies.append(rule.value)
            if rule.languages:
                analysis.main_languages.append(rule.value)

    for rule in BUILD_TOOL_RULES:
        if _any(text, rule.keywords):
            analysis.build_tools.append(rule.value)

    analysis.project_type = _detect_project_type(text)
    analysis.complexity = _detect_complexity(text)

    rules = ClaudeRules.from_dict(FALLBACK_RULES)
    if _any(text, TESTING_RISK_KEYWORDS):
        analysis.testing_setup = "mock-only-inadequate"
        rules.testing_requirements = list(RISK_TESTING_REQUIREMENTS)

    agents = [
        AgentDefinition.from_dict(TECHNOLOGY_AGENTS[tech].to_dict())
        for tech in analysis.detected_technologies
        if tech in TECHNOLOGY_AGENTS
    ]

    return ProjectConfiguration(
        project_analysis=analysis,
        recommended_agents=agents,
        recommended_commands=[],
        recommended_hooks={},
        claude_rules=rules,
    )
