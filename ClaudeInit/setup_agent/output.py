"""Output formatters for ProjectConfiguration → .claude/ files and Markdown."""

from __future__ import annotations

import json
import re
from pathlib import Path

import yaml

from ClaudeInit.response import (
    AgentDefinition,
    CommandDefinition,
    ProjectConfiguration,
)
from ClaudeInit.response.schema import DEFAULT_AGENT_TOOLS

from .models import GeneratedFile, GeneratedFiles, UserProfile

RULE_SECTION_TITLES = {
    "codingStandards": "Coding Standards",
    "architectureGuidelines": "Architecture Guidelines",
    "testingRequirements": "Testing Requirements",
    "simplicityGuardrails": "Simplicity Guardrails",
    "verificationStandards": "Verification Standards",
    "complianceProtocols": "Compliance Protocols",
}

IMPORTANT_REMINDERS = [
    "Always write REAL tests that actually test functionality, not mocks",
    "Keep solutions simple and appropriate for the project complexity",
    "Follow the existing patterns and conventions in this codebase",
    "Verify your implementations actually work by testing them",
]

APPENDED_HEADING = "# Auto-generated Configuration"


def _slugify(name: str) -> str:
    """Single file name for an agent or command; path separators become dashes."""
    name = re.sub(r"[\\/]+", "-", name.strip().lower().lstrip("/"))
    return re.sub(r"\s+", "-", name)


def _front_matter(fields: dict) -> str:
    # width keeps long descriptions on one line
    header = yaml.safe_dump(
        fields,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        width=1000,
    )
    return f"---\n{header}---\n\n"


# ── File contents ─────────────────────────────────────────────────────

def agent_file_content(agent: AgentDefinition) -> str:
    fields = {
        "name": agent.name,
        "description": agent.description,
        "tools": ", ".join(agent.tools or DEFAULT_AGENT_TOOLS),
    }
    if agent.model:
        fields["model"] = agent.model
    return _front_matter(fields) + agent.system_prompt


def command_file_content(command: CommandDefinition) -> str:
    fields: dict[str, str] = {}
    if command.allowed_tools:
        fields["allowed-tools"] = ", ".join(command.allowed_tools)
    if command.argument_hint:
        fields["argument-hint"] = command.argument_hint
    fields["description"] = command.description
    return _front_matter(fields) + command.prompt


def hooks_config(config: ProjectConfiguration) -> dict:
    """Build the settings-style hooks mapping. Empty triggers are dropped."""
    hooks: dict[str, list[dict]] = {}
    for trigger, entries in config.recommended_hooks.items():
        if not entries:
            continue
        blocks = []
        for hook in entries:
            block: dict = {}
            if trigger == "PostToolUse" and hook.matcher:
                block["matcher"] = hook.matcher
            block["hooks"] = [{"type": "command", "command": hook.command}]
            blocks.append(block)
        hooks[trigger] = blocks
    return {"hooks": hooks}


def claude_md_content(config: ProjectConfiguration, profile: UserProfile) -> str:
    analysis = config.project_analysis
    lines: list[str] = []

    lines.append("# Claude Code Configuration")
    lines.append("")
    lines.append(f"Generated for: {profile.role} ({profile.experience} level)")
    lines.append(f"Project: {analysis.project_type} ({analysis.complexity} complexity)")
    lines.append("")

    for key, rules in config.claude_rules.categories().items():
        lines.append(f"## {RULE_SECTION_TITLES[key]}")
        lines.append("")
        for rule in rules:
            lines.append(f"- {rule}")
        lines.append("")

    lines.append("## Important Reminders")
    lines.append("")
    for reminder in IMPORTANT_REMINDERS:
        lines.append(f"- {reminder}")
    lines.append("")

    return "\n".join(lines)


# ── Writing ───────────────────────────────────────────────────────────

def generate_files(
    project_path: str | Path,
    config: ProjectConfiguration,
    profile: UserProfile,
) -> GeneratedFiles:
    """Write agents, commands, hooks and CLAUDE.md under ``project_path``.

    An existing CLAUDE.md is kept and the generated rules are appended to it.
    """
    root = Path(project_path)
    claude_dir = root / ".claude"
    agents_dir = claude_dir / "agents"
    commands_dir = claude_dir / "commands"
    agents_dir.mkdir(parents=True, exist_ok=True)
    commands_dir.mkdir(parents=True, exist_ok=True)

    generated = GeneratedFiles()

    for agent in config.recommended_agents:
        path = agents_dir / f"{_slugify(agent.name)}.md"
        content = agent_file_content(agent)
        path.write_text(content, encoding="utf-8")
        generated.agents.append(GeneratedFile(agent.name, str(path), content))

    for command in config.recommended_commands:
        path = commands_dir / f"{_slugify(command.name)}.md"
        content = command_file_content(command)
        path.write_text(content, encoding="utf-8")
        generated.commands.append(GeneratedFile(command.name, str(path), content))

    claude_md_path = root / "CLAUDE.md"
    content = claude_md_content(config, profile)
    if claude_md_path.exists():
        existing = claude_md_path.read_text(encoding="utf-8")
        claude_md_path.write_text(
            f"{existing}\n\n{APPENDED_HEADING}\n{content}", encoding="utf-8"
        )
    else:
        claude_md_path.write_text(content, encoding="utf-8")
    generated.claude_md = GeneratedFile("CLAUDE.md", str(claude_md_path), content)

    if config.hook_count:
        hooks_dir = claude_dir / "hooks"
        hooks_dir.mkdir(parents=True, exist_ok=True)
        hooks_path = hooks_dir / "config.json"
        content = json.dumps(hooks_config(config), indent=2)
        hooks_path.write_text(content, encoding="utf-8")
        generated.hooks = GeneratedFile("hooks", str(hooks_path), content)

    return generated


# ── Summaries ─────────────────────────────────────────────────────────

def to_markdown(config: ProjectConfiguration) -> str:
    """Convert a ProjectConfiguration to a human-readable Markdown summary."""
    analysis = config.project_analysis
    lines: list[str] = []

    lines.append("# Recommended Claude Code Setup")
    lines.append("")
    lines.append(f"> {analysis.project_type} project, {analysis.complexity} complexity")
    lines.append("")

    if analysis.detected_technologies:
        lines.append("## Technologies")
        lines.append("")
        for tech in analysis.detected_technologies:
            lines.append(f"- {tech}")
        lines.append("")

    if config.recommended_agents:
        lines.append("## Agents")
        lines.append("")
        for agent in config.recommended_agents:
            lines.append(f"- **{agent.name}**: {agent.description}")
        lines.append("")

    if config.recommended_commands:
        lines.append("## Commands")
        lines.append("")
        for command in config.recommended_commands:
            lines.append(f"- `/{_slugify(command.name)}`: {command.description}")
        lines.append("")

    if config.recommended_hooks:
        lines.append("## Hooks")
        lines.append("")
        for trigger, hooks in config.recommended_hooks.items():
            for hook in hooks:
                lines.append(f"- `{trigger}` `{hook.command}` {hook.description}".rstrip())
        lines.append("")

    return "\n".join(lines)


def save_configuration(
    config: ProjectConfiguration, output_dir: str = "claude_init_output"
) -> tuple[str, str]:
    """Save the configuration as both JSON and Markdown files.

    Returns:
        Tuple of (json_path, markdown_path).
    """
    path = Path(output_dir)
    path.mkdir(parents=True, exist_ok=True)

    json_path = path / "configuration.json"
    md_path = path / "configuration.md"

    json_path.write_text(config.to_json(), encoding="utf-8")
    md_path.write_text(to_markdown(config), encoding="utf-8")

    return str(json_path), str(md_path)
