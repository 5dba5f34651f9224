"""Prompt templates for the Setup Agent."""

SYSTEM_PROMPT = """\
You are a Claude Code configuration expert. You know software development \
practice across languages and frameworks, and Claude Code's agent, command \
and hook systems. You prevent over-engineering while keeping code quality \
high, and you flag inadequate (mock-only) testing wherever you see it.

IMPORTANT: Respond with a single valid JSON object as specified in each \
prompt. Do not include any text outside the JSON object."""


TESTING_STANDARDS = """\
Testing standards:
- Mock-only testing is NEVER sufficient for external integrations.
- Integration tests must use real calls, not mocks.
- Flag mock-only test suites as INADEQUATE and HIGH RISK.
- Claims that something works require real testing proof."""


AGENT_DESCRIPTION_RULES = """\
Agent descriptions:
- Start with "Use this agent when..." and use 2-4 sentences.
- List 3+ specific scenarios or use cases.
- Include "Perfect for...", "Essential when..." or "Excels at..." phrases.
- Be specific about technologies, capabilities and outcomes."""


OUTPUT_FORMAT = """\
Return ONLY valid JSON with this structure:
{{
  "projectAnalysis": {{
    "detectedTechnologies": ["..."],
    "projectType": "...",
    "complexity": "simple|medium|complex",
    "buildTools": ["..."],
    "testingSetup": "adequate|mock-only-inadequate|missing-integration-tests|no-tests",
    "testingRiskAssessment": "low|medium|high",
    "mainLanguages": ["..."]
  }},
  "recommendedAgents": [
    {{
      "name": "agent-name",
      "description": "Use this agent when ...",
      "tools": ["Read", "Write", "Edit", "Bash"],
      "systemPrompt": "Full system prompt with verification and YAGNI requirements"
    }}
  ],
  "recommendedCommands": [
    {{
      "name": "command-name",
      "description": "When and why to use this command",
      "argumentHint": "[optional arguments]",
      "allowedTools": ["Bash(git add:*)", "Write"],
      "prompt": "Command prompt with $ARGUMENTS placeholders"
    }}
  ],
  "recommendedHooks": {{
    "PostToolUse": [
      {{
        "matcher": "Write|Edit",
        "description": "Auto-format and verify code after edits",
        "command": "detected formatting command"
      }}
    ],
    "Stop": [
      {{
        "description": "Run REAL tests after task completion",
        "command": "detected test command"
      }}
    ]
  }},
  "claudeRules": {{
    "codingStandards": ["..."],
    "architectureGuidelines": ["..."],
    "testingRequirements": ["..."],
    "simplicityGuardrails": ["..."],
    "verificationStandards": ["..."],
    "complianceProtocols": ["..."]
  }}
}}"""


CODEBASE_ANALYSIS_PROMPT = """\
Analyze the codebase data and user profile below and generate a Claude Code \
setup: specialized agents, custom commands, automation hooks for the detected \
build tools, and CLAUDE.md rules that prevent over-engineering and enforce \
real testing.

{codebase_info}

<user_profile>
- Role: {role}
- Experience: {experience}
- Project Type: {project_type}
</user_profile>

Requirements:
1. DETECT project characteristics from the raw data (file extensions, \
dependencies, structure). Do not assume.
2. CREATE agents with detailed, multi-sentence descriptions.
3. DESIGN commands with YAML-frontmatter-ready tool restrictions and \
$ARGUMENTS placeholders.
4. GENERATE PostToolUse hooks for linting/formatting after edits and Stop \
hooks that run the real test suite.
5. FLAG any detected mock-only testing in the generated rules.

{testing_standards}

{agent_description_rules}

{output_format}"""


IDEA_GENERATION_PROMPT = """\
Based on the project idea and user profile below, recommend an appropriate, \
modern tech stack and generate a complete Claude Code setup: agents, commands, \
hooks and CLAUDE.md rules that prevent over-engineering and enforce real \
testing from day one.

<project_idea>
{project_idea}
</project_idea>

<user_profile>
- Role: {role}
- Experience: {experience}
</user_profile>

Requirements:
1. RECOMMEND a tech stack suited to the idea and to the user's experience.
2. Keep the setup to the minimum viable workflow (YAGNI).
3. CREATE agents with detailed, multi-sentence descriptions.
4. DESIGN commands for common workflows with verification built in.
5. GENERATE hooks that run real tests, not mocks.
6. Put the recommended stack in projectAnalysis.

{testing_standards}

{agent_description_rules}

{output_format}"""
