"""CLI entry point for ClaudeInit.

Usage:
    python -m ClaudeInit
    python -m ClaudeInit --idea "A CLI that syncs dotfiles across machines"
    python -m ClaudeInit --path ./my-project --strict
    python -m ClaudeInit --help
"""

from __future__ import annotations

import json
import os
import sys

from ClaudeInit.config import SetupConfig
from ClaudeInit.llm import AnthropicBackend, LoggingBackend
from ClaudeInit.response import ParseFailure, QualityError, ValidationResult

from .agent import SetupAgent
from .models import EXPERIENCE_LEVELS, PROJECT_TYPES, ROLES, UserProfile
from .output import generate_files, save_configuration

MIN_IDEA_LENGTH = 10

PROJECT_TYPE_LABELS = {
    "new": "New project from idea",
    "existing": "Existing codebase",
    "update": "Update existing setup",
}

ROLE_LABELS = {
    "frontend": "Frontend Developer",
    "backend": "Backend Developer",
    "fullstack": "Full-stack Developer",
    "devops": "DevOps Engineer",
}

EXPERIENCE_LABELS = {
    "junior": "Junior (more explanations)",
    "senior": "Senior (concise guidance)",
}


# ANSI color helpers
def _c(code: int, text: str) -> str:
    if not sys.stdout.isatty():
        return text
    return f"\033[{code}m{text}\033[0m"

def _bold(text: str) -> str:
    return _c(1, text)

def _cyan(text: str) -> str:
    return _c(36, text)

def _green(text: str) -> str:
    return _c(32, text)

def _yellow(text: str) -> str:
    return _c(33, text)

def _dim(text: str) -> str:
    return _c(2, text)

def _red(text: str) -> str:
    return _c(31, text)


def _print_header():
    print()
    print(_bold("=" * 60))
    print(_bold("  CLAUDE INIT: Claude Code setup generator"))
    print(_bold("=" * 60))
    print()


def _print_help():
    print("Usage: python -m ClaudeInit [OPTIONS]")
    print()
    print("Options:")
    print("  --help, -h           Show this help message")
    print("  --idea TEXT          Generate a setup for a new project idea")
    print("  --path DIR           Analyze the codebase at DIR (default: current directory)")
    print("  --role ROLE          frontend | backend | fullstack | devops")
    print("  --experience LEVEL   junior | senior")
    print("  --strict             Reject replies that miss fields or minimum counts")
    print("  --opus               Use Claude Opus instead of Sonnet")
    print("  --cli-backend        Query through the claude CLI instead of the API")
    print("  --force              Overwrite an existing .claude/ setup without asking")
    print("  --dry-run DIR        Save the configuration to DIR instead of writing .claude/")
    print("  --log FILE           Append one JSON line per Claude request to FILE")
    print()
    print("Environment:")
    print("  ANTHROPIC_API_KEY    API key for the Anthropic backend")
    print("  CLAUDE_INIT_MODEL    sonnet | opus")
    print("  CLAUDE_INIT_BACKEND  api | cli")
    print("  CLAUDE_INIT_STRICT   1 to validate strictly")
    print()
    print("Answer q at any prompt to quit.")


def _get_flag_value(flag: str) -> str | None:
    """Get the value of a --flag VALUE pair from sys.argv."""
    if flag in sys.argv:
        idx = sys.argv.index(flag)
        if idx + 1 < len(sys.argv):
            return sys.argv[idx + 1]
    return None


def _cancel():
    print()
    print(_yellow("  Setup cancelled"))
    sys.exit(0)


# ── Interactive questions ─────────────────────────────────────────────

def _ask(prompt: str) -> str:
    answer = input(_green(prompt)).strip()
    if answer.lower() == "q":
        _cancel()
    return answer


def _choose(question: str, options: tuple[str, ...], labels: dict[str, str]) -> str:
    """Numbered single choice. Accepts the number or the value itself."""
    print(_bold(f"  {question}"))
    for i, opt in enumerate(options, 1):
        print(f"    {_yellow(str(i))}. {labels.get(opt, opt)}")
    while True:
        choice = _ask("  Your choice: ")
        if choice in options:
            return choice
        if choice.isdigit() and 1 <= int(choice) <= len(options):
            return options[int(choice) - 1]
        print(f"    Please enter 1-{len(options)}")


def _ask_idea() -> str:
    while True:
        idea = _ask("  Describe your project idea: ")
        if len(idea) >= MIN_IDEA_LENGTH:
            return idea
        print(f"    Please provide at least {MIN_IDEA_LENGTH} characters.")


def _ask_path() -> str:
    while True:
        path = _ask("  Enter the path to your project [.]: ") or "."
        if os.path.isdir(path):
            return path
        print("    Path does not exist. Please enter a valid directory.")


def _confirm_overwrite(project_path: str) -> bool:
    answer = _ask(f"  Found existing .claude setup in {project_path}. Overwrite? [y/N]: ")
    return answer.lower() in ("y", "yes")


def collect_profile(force: bool = False) -> UserProfile:
    """Build the UserProfile from flags, asking for anything missing."""
    idea = _get_flag_value("--idea")
    path = _get_flag_value("--path")

    if idea:
        project_type = "new"
    elif path:
        project_type = "existing"
    else:
        project_type = _choose(
            "What are we working with today?", PROJECT_TYPES, PROJECT_TYPE_LABELS
        )
        print()

    if project_type == "new":
        if not idea:
            idea = _ask_idea()
        elif len(idea) < MIN_IDEA_LENGTH:
            print(_red(f"  Project idea must be at least {MIN_IDEA_LENGTH} characters."))
            sys.exit(1)
        path = path or "."
    else:
        if not path:
            path = _ask_path()
        elif not os.path.isdir(path):
            print(_red(f"  Path does not exist: {path}"))
            sys.exit(1)
        has_setup = os.path.isdir(os.path.join(path, ".claude"))
        if project_type == "existing" and has_setup and not force:
            if not _confirm_overwrite(path):
                _cancel()

    role = _get_flag_value("--role")
    if role not in ROLES:
        print()
        role = _choose("What's your primary role?", ROLES, ROLE_LABELS)

    experience = _get_flag_value("--experience")
    if experience not in EXPERIENCE_LEVELS:
        print()
        experience = _choose("Experience level?", EXPERIENCE_LEVELS, EXPERIENCE_LABELS)

    return UserProfile(
        role=role,
        experience=experience,
        project_type=project_type,
        project_path=path,
        project_idea=idea,
    )


# ── Reporting ─────────────────────────────────────────────────────────

def _print_diagnostics(result: ValidationResult):
    if result.degraded:
        print(_yellow("  Reply could not be parsed; using a keyword-based fallback setup."),
              file=sys.stderr)
    elif result.repaired:
        print(_dim("  Reply JSON was repaired before validation."), file=sys.stderr)
    for d in result.diagnostics:
        color = _dim if d.level == "info" else _yellow
        print(color(f"  [{d.level}] {d.message}"), file=sys.stderr)


def _print_quality_failures(err: QualityError):
    print(_red("  The response did not meet quality requirements:"), file=sys.stderr)
    for failure in err.failures:
        print(_red(f"    - {failure}"), file=sys.stderr)
    print(_dim("  Nothing was written. Retry, or run without --strict."), file=sys.stderr)


def _log_writer(path: str):
    def write(entry: dict):
        with open(path, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry) + "\n")
    return write


def main():
    if "--help" in sys.argv or "-h" in sys.argv:
        _print_header()
        _print_help()
        sys.exit(0)

    _print_header()

    config = SetupConfig.from_env()
    if "--strict" in sys.argv:
        config.strict = True
    if "--opus" in sys.argv:
        config.model_type = "opus"
    if "--cli-backend" in sys.argv:
        config.backend = "cli"
    force = "--force" in sys.argv
    dry_run_dir = _get_flag_value("--dry-run")

    try:
        profile = collect_profile(force=force)
    except (KeyboardInterrupt, EOFError):
        _cancel()

    try:
        backend = config.build_backend()
    except RuntimeError as e:
        print(_red(f"  Error: {e}"), file=sys.stderr)
        sys.exit(1)

    if isinstance(backend, AnthropicBackend) and not backend.validate_api_key():
        print(_red("  Error: invalid API key. Check ANTHROPIC_API_KEY."), file=sys.stderr)
        sys.exit(1)

    log_path = _get_flag_value("--log")
    if log_path:
        backend = LoggingBackend(backend, on_log=_log_writer(log_path))
        backend.set_agent_label("setup_agent")

    agent = SetupAgent(llm=backend, policy=config.policy(), scan_depth=config.scan_depth)

    print()
    if profile.is_new:
        print(f"  Idea: {_bold(profile.project_idea)}")
    else:
        print(f"  Project: {_bold(os.path.abspath(profile.project_path))}")
    print(_dim(f"  Asking Claude ({config.model_type}, {config.backend})..."))
    print()

    try:
        result = agent.run(profile)
    except KeyboardInterrupt:
        _cancel()
    except QualityError as e:
        _print_quality_failures(e)
        sys.exit(1)
    except (ParseFailure, RuntimeError, ValueError) as e:
        print(_red(f"  Error: {e}"), file=sys.stderr)
        sys.exit(1)

    _print_diagnostics(result)
    cfg = result.config

    if dry_run_dir:
        json_path, md_path = save_configuration(cfg, dry_run_dir)
        print(f"  Configuration: {_cyan(json_path)}")
        print(f"  Summary:       {_cyan(md_path)}")
        print()
        return

    files = generate_files(profile.project_path, cfg, profile)

    # Summary
    print()
    print(_bold("=" * 60))
    print(_green("  Setup Complete!"))
    print(_bold("=" * 60))
    print()
    print(f"  Agents:   {len(files.agents)}")
    print(f"  Commands: {len(files.commands)}")
    print(f"  Hooks:    {cfg.hook_count}")
    print()
    for path in files.all_paths():
        print(f"    {_cyan(path)}")
    print()
    print(_dim("  Start Claude Code in the project to use the new setup."))
    print()


if __name__ == "__main__":
    main()
