"""
Specification Module - from assessment request to content targets.

Components:
- intent: validate_assessment_intent / assert_valid_assessment_intent
- builder: build_specification -> ContentSpecification
"""

from bloomspec.specification.builder import (
    ContentSpecification,
    SpecificationError,
    build_specification,
    estimate_question_count,
)
from bloomspec.specification.intent import (
    IntentValidationResult,
    assert_valid_assessment_intent,
    validate_assessment_intent,
)

__all__ = [
    "ContentSpecification",
    "SpecificationError",
    "build_specification",
    "estimate_question_count",
    "IntentValidationResult",
    "validate_assessment_intent",
    "assert_valid_assessment_intent",
]
