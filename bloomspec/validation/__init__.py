"""
Validation Module - verification stage for generated batches.

Components:
- models: GeneratedProblem, ValidationConfig, AssessmentTargets, results
- field_validator: per-item field checks
- statistics: batch aggregates
- batch_validator: batch conformance against targets
- report: rich-rendered validation report
"""

from bloomspec.validation.batch_validator import (
    validate_distribution_conformance,
    validate_problems,
    validate_question_count,
    validate_sequence_indices,
    validate_total_time,
)
from bloomspec.validation.field_validator import normalize_problem, validate_single_problem
from bloomspec.validation.models import (
    DEFAULT_VALIDATION_CONFIG,
    REQUIRED_FIELDS,
    AssessmentTargets,
    BatchError,
    BatchStatistics,
    BatchValidationResult,
    FieldError,
    GeneratedProblem,
    ProblemValidationResult,
    ValidationConfig,
)
from bloomspec.validation.report import format_validation_report, print_validation_report
from bloomspec.validation.statistics import calculate_batch_statistics

__all__ = [
    # Models
    "GeneratedProblem",
    "ValidationConfig",
    "DEFAULT_VALIDATION_CONFIG",
    "REQUIRED_FIELDS",
    "AssessmentTargets",
    "FieldError",
    "ProblemValidationResult",
    "BatchError",
    "BatchStatistics",
    "BatchValidationResult",
    # Validators
    "normalize_problem",
    "validate_single_problem",
    "calculate_batch_statistics",
    "validate_sequence_indices",
    "validate_total_time",
    "validate_distribution_conformance",
    "validate_question_count",
    "validate_problems",
    # Report
    "format_validation_report",
    "print_validation_report",
]
