"""
bloomspec - Cognitive-Level Distribution Engine.

Turns a coarse assessment request (ability level, assessment type,
emphasis) into a per-cognitive-level question specification, then checks
that a batch of externally generated problems satisfies it.

Stages:
- Specification: build_specification (estimate -> sum guard -> allocate)
- Verification: validate_problems (field checks -> batch conformance)
"""

from bloomspec.core import (
    AbilityLevel,
    AssessmentType,
    CognitiveLevel,
    Distribution,
    Emphasis,
    ErrorKind,
    QuestionAllocation,
    ResponseType,
)
from bloomspec.distribution import (
    DistributionEstimator,
    allocate_question_counts,
    estimate_distribution,
    validate_target_sum,
)
from bloomspec.specification import (
    ContentSpecification,
    build_specification,
    validate_assessment_intent,
)
from bloomspec.validation import (
    AssessmentTargets,
    BatchValidationResult,
    format_validation_report,
    validate_problems,
    validate_single_problem,
)

__version__ = "1.0.0"

__all__ = [
    "AbilityLevel",
    "AssessmentType",
    "CognitiveLevel",
    "Emphasis",
    "ResponseType",
    "ErrorKind",
    "Distribution",
    "QuestionAllocation",
    "DistributionEstimator",
    "estimate_distribution",
    "validate_target_sum",
    "allocate_question_counts",
    "ContentSpecification",
    "build_specification",
    "validate_assessment_intent",
    "AssessmentTargets",
    "BatchValidationResult",
    "validate_single_problem",
    "validate_problems",
    "format_validation_report",
]
