"""Allow running as: python -m ClaudeInit"""

from ClaudeInit.setup_agent.cli import main

main()
