"""Core Setup Agent logic.

Builds the prompt for either an existing codebase or a project idea,
queries the LLM, and runs the reply through the response pipeline.
"""

from __future__ import annotations

from ClaudeInit.base_agent import BaseAgent
from ClaudeInit.llm import LLMBackend
from ClaudeInit.response import ValidationPolicy, ValidationResult

from .models import UserProfile
from .prompts import (
    AGENT_DESCRIPTION_RULES,
    CODEBASE_ANALYSIS_PROMPT,
    IDEA_GENERATION_PROMPT,
    OUTPUT_FORMAT,
    SYSTEM_PROMPT,
    TESTING_STANDARDS,
)
from .scanner import format_for_llm, scan_project


class SetupAgent(BaseAgent):
    """Turns a codebase or an idea into a validated ProjectConfiguration.

    Usage:
        agent = SetupAgent(llm=my_backend, policy=ValidationPolicy.strict_policy())
        result = agent.run(profile)
        generate_files(project_dir, result.config, profile)
    """

    def __init__(
        self,
        llm: LLMBackend,
        policy: ValidationPolicy | None = None,
        scan_depth: int = 3,
    ):
        super().__init__(llm=llm, policy=policy)
        self.scan_depth = scan_depth

    def build_codebase_prompt(self, project_path: str, profile: UserProfile) -> str:
        listing = scan_project(project_path, max_depth=self.scan_depth)
        return CODEBASE_ANALYSIS_PROMPT.format(
            codebase_info=format_for_llm(listing),
            role=profile.role,
            experience=profile.experience,
            project_type=profile.project_type,
            testing_standards=TESTING_STANDARDS,
            agent_description_rules=AGENT_DESCRIPTION_RULES,
            output_format=OUTPUT_FORMAT.format(),
        )

    def build_idea_prompt(self, idea: str, profile: UserProfile) -> str:
        return IDEA_GENERATION_PROMPT.format(
            project_idea=idea,
            role=profile.role,
            experience=profile.experience,
            testing_standards=TESTING_STANDARDS,
            agent_description_rules=AGENT_DESCRIPTION_RULES,
            output_format=OUTPUT_FORMAT.format(),
        )

    def analyze_codebase(self, project_path: str, profile: UserProfile) -> ValidationResult:
        """Recommend a setup for the project at ``project_path``."""
        prompt = self.build_codebase_prompt(project_path, profile)
        return self._llm_query_config(SYSTEM_PROMPT, prompt)

    def generate_from_idea(self, idea: str, profile: UserProfile) -> ValidationResult:
        """Recommend a stack and setup for a project that does not exist yet."""
        prompt = self.build_idea_prompt(idea, profile)
        return self._llm_query_config(SYSTEM_PROMPT, prompt)

    def run(self, profile: UserProfile) -> ValidationResult:
        if profile.is_new:
            if not profile.project_idea:
                raise ValueError("A project idea is required for a new project")
            return self.generate_from_idea(profile.project_idea, profile)
        return self.analyze_codebase(profile.project_path or ".", profile)
