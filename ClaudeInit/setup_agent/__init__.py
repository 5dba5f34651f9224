"""Setup Agent: turns a codebase or an idea into Claude Code files.

Usage:
    from ClaudeInit.setup_agent import SetupAgent, UserProfile, generate_files

    agent = SetupAgent(llm=my_backend)
    profile = UserProfile(project_type="existing", project_path=".")
    result = agent.run(profile)
    generate_files(profile.project_path, result.config, profile)
"""

from .models import UserProfile, GeneratedFile, GeneratedFiles
from .agent import SetupAgent
from .output import generate_files, save_configuration, to_markdown

__all__ = [
    "UserProfile",
    "GeneratedFile",
    "GeneratedFiles",
    "SetupAgent",
    "generate_files",
    "save_configuration",
    "to_markdown",
]
