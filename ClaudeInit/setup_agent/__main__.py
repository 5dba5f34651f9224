"""Allow running as: python -m ClaudeInit.setup_agent"""

from .cli import main

main()
