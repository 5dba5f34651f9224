"""Response pipeline: model text → validated ProjectConfiguration.

Usage:
    from ClaudeInit.response import ResponseValidator, ValidationPolicy

    validator = ResponseValidator(ValidationPolicy.permissive())
    result = validator.parse_and_validate(completion_text)
    for d in result.diagnostics:
        print(d.level, d.message)
    config = result.config

The pipeline is pure: no I/O, no printing, safe to call concurrently.
"""

from .errors import ResponseError, ParseFailure, QualityError
from .extractor import ResponseExtractor, scan_balanced_object
from .fallback import build_fallback_config
from .models import (
    Diagnostic,
    ExtractionCandidate,
    ExtractionStrategy,
    PolicyMode,
    ValidationPolicy,
    ValidationResult,
)
from .repair import REPAIR_PIPELINE, RepairStep, repair_and_parse
from .schema import (
    AgentDefinition,
    ClaudeRules,
    CommandDefinition,
    HookDefinition,
    ProjectAnalysis,
    ProjectConfiguration,
)
from .validator import ResponseValidator, process_completion

__all__ = [
    "ResponseError",
    "ParseFailure",
    "QualityError",
    "ResponseExtractor",
    "scan_balanced_object",
    "build_fallback_config",
    "Diagnostic",
    "ExtractionCandidate",
    "ExtractionStrategy",
    "PolicyMode",
    "ValidationPolicy",
    "ValidationResult",
    "REPAIR_PIPELINE",
    "RepairStep",
    "repair_and_parse",
    "AgentDefinition",
    "ClaudeRules",
    "CommandDefinition",
    "HookDefinition",
    "ProjectAnalysis",
    "ProjectConfiguration",
    "ResponseValidator",
    "process_completion",
]
