"""
Problem Field Validator.

Stateless per-item checks on a (possibly partially populated) generated
problem. Every rule runs independently and every failure is reported;
nothing short-circuits.

Rules:
- Required fields present and non-null
- cognitive_level in the six Bloom levels
- complexity in [0, 1], and additionally never exactly 0 or 1
- estimated_time_minutes a positive integer, and additionally within
  [min_time, max_time]
- difficulty in {1..5}
- response_type in the closed set
- content non-empty after trimming
- sequence_index a non-negative integer
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from loguru import logger
from pydantic import BaseModel

from bloomspec.core.errors import ErrorKind
from bloomspec.core.taxonomy import COGNITIVE_LEVELS, CognitiveLevel, ResponseType
from bloomspec.validation.models import (
    DEFAULT_VALIDATION_CONFIG,
    PROBLEM_FIELD_ALIASES,
    FieldError,
    ProblemValidationResult,
    ValidationConfig,
)

_MISSING = object()

VALID_RESPONSE_TYPES = tuple(t.value for t in ResponseType)
VALID_COGNITIVE_LEVELS = tuple(level.value for level in COGNITIVE_LEVELS)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_integral(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and value.is_integer()


def normalize_problem(problem: Mapping[str, Any] | BaseModel | None) -> dict[str, Any]:
    """
    Map a raw problem onto canonical field names.

    Absent fields are omitted; present-but-null fields are kept as None.
    """
    if problem is None:
        return {}
    if isinstance(problem, BaseModel):
        problem = problem.model_dump()

    normalized = {}
    for name, aliases in PROBLEM_FIELD_ALIASES.items():
        for key in aliases:
            if key in problem:
                normalized[name] = problem[key]
                break
    return normalized


class _ErrorCollector:
    """Accumulates FieldErrors for one problem."""

    def __init__(self, problem_id: str, problem_index: int):
        self.problem_id = problem_id
        self.problem_index = problem_index
        self.errors: list[FieldError] = []

    def add(self, field: str, kind: ErrorKind, value: Any, constraint: str, message: str) -> None:
        self.errors.append(
            FieldError(
                problem_id=self.problem_id,
                problem_index=self.problem_index,
                field=field,
                kind=kind,
                value=value,
                constraint=constraint,
                message=message,
            )
        )


def validate_single_problem(
    problem: Mapping[str, Any] | BaseModel | None,
    config: ValidationConfig = DEFAULT_VALIDATION_CONFIG,
    problem_index: int = 0,
) -> ProblemValidationResult:
    """
    Validate one problem against field constraints.

    Args:
        problem: Raw problem (mapping or model), possibly partial
        config: Bounds configuration
        problem_index: Position in the batch, for error reporting

    Returns:
        ProblemValidationResult listing every error found
    """
    fields = normalize_problem(problem)
    raw_id = fields.get("problem_id")
    problem_id = raw_id if isinstance(raw_id, str) and raw_id else f"Problem-{problem_index}"
    errors = _ErrorCollector(problem_id, problem_index)

    # Required fields
    for name in config.required_fields:
        if fields.get(name, _MISSING) in (_MISSING, None):
            errors.add(
                name,
                ErrorKind.MISSING_FIELD,
                None,
                f"Field {name} is required",
                f"Problem missing required field: {name}",
            )

    def present(name: str) -> bool:
        return fields.get(name) is not None

    if present("problem_id") and not isinstance(raw_id, str):
        errors.add(
            "problem_id",
            ErrorKind.WRONG_TYPE,
            raw_id,
            "problem_id must be a string",
            f"Invalid problem_id type: {type(raw_id).__name__}",
        )

    if present("cognitive_level"):
        _check_cognitive_level(fields["cognitive_level"], errors)

    if present("complexity"):
        _check_complexity(fields["complexity"], config, errors)

    if present("estimated_time_minutes"):
        _check_time(fields["estimated_time_minutes"], config, errors)

    if present("difficulty"):
        _check_difficulty(fields["difficulty"], config, errors)

    if present("response_type"):
        _check_response_type(fields["response_type"], errors)

    if present("content"):
        _check_content(fields["content"], errors)

    if present("sequence_index"):
        _check_sequence_index(fields["sequence_index"], errors)

    if errors.errors:
        logger.debug(f"{problem_id} failed {len(errors.errors)} field check(s)")

    return ProblemValidationResult(
        problem_id=problem_id,
        problem_index=problem_index,
        errors=tuple(errors.errors),
    )


def _check_cognitive_level(value: Any, errors: _ErrorCollector) -> None:
    constraint = f"cognitive_level must be one of: {', '.join(VALID_COGNITIVE_LEVELS)}"
    if not isinstance(value, str):
        errors.add("cognitive_level", ErrorKind.WRONG_TYPE, value, constraint, f"Invalid cognitive_level type: {value!r}")
        return
    try:
        CognitiveLevel(value)
    except ValueError:
        errors.add("cognitive_level", ErrorKind.INVALID_CHOICE, value, constraint, f"Invalid cognitive_level: {value}")


def _check_complexity(value: Any, config: ValidationConfig, errors: _ErrorCollector) -> None:
    if not _is_number(value):
        errors.add(
            "complexity",
            ErrorKind.WRONG_TYPE,
            value,
            "complexity must be a number",
            f"complexity {value!r} is not a number",
        )
        return

    if not math.isfinite(value) or value < 0 or value > 1:
        errors.add(
            "complexity",
            ErrorKind.OUT_OF_RANGE,
            value,
            "complexity must be in range [0.0, 1.0]",
            f"complexity {value} is outside valid range",
        )

    # Endpoints are inside [0, 1] but still rejected
    if value == 0 or value == 1:
        errors.add(
            "complexity",
            ErrorKind.OUT_OF_RANGE,
            value,
            f"complexity must be in range [{config.min_complexity}, {config.max_complexity}] (not exactly 0 or 1)",
            f"complexity should not be exactly {value}; recommend {config.min_complexity}-{config.max_complexity}",
        )


def _check_time(value: Any, config: ValidationConfig, errors: _ErrorCollector) -> None:
    if not _is_number(value):
        errors.add(
            "estimated_time_minutes",
            ErrorKind.WRONG_TYPE,
            value,
            "estimated_time_minutes must be a positive integer",
            f"estimated_time_minutes {value!r} is not a number",
        )
        return

    if not _is_integral(value) or value <= 0:
        errors.add(
            "estimated_time_minutes",
            ErrorKind.WRONG_TYPE if not _is_integral(value) else ErrorKind.OUT_OF_RANGE,
            value,
            "estimated_time_minutes must be a positive integer",
            f"estimated_time_minutes {value} is invalid (must be > 0 and integer)",
        )

    if value < config.min_time or value > config.max_time:
        errors.add(
            "estimated_time_minutes",
            ErrorKind.OUT_OF_RANGE,
            value,
            f"estimated_time_minutes must be in range [{config.min_time}, {config.max_time}]",
            f"estimated_time_minutes {value} is outside allowed range",
        )


def _check_difficulty(value: Any, config: ValidationConfig, errors: _ErrorCollector) -> None:
    low, high = config.difficulty_range
    constraint = f"difficulty must be an integer from {low} to {high}"
    if not _is_number(value):
        errors.add("difficulty", ErrorKind.WRONG_TYPE, value, constraint, f"Invalid difficulty type: {value!r}")
    elif not _is_integral(value) or not low <= value <= high:
        errors.add("difficulty", ErrorKind.OUT_OF_RANGE, value, constraint, f"Invalid difficulty: {value}")


def _check_response_type(value: Any, errors: _ErrorCollector) -> None:
    constraint = f"response_type must be one of: {', '.join(VALID_RESPONSE_TYPES)}"
    if not isinstance(value, str):
        errors.add("response_type", ErrorKind.WRONG_TYPE, value, constraint, f"Invalid response_type type: {value!r}")
    elif value not in VALID_RESPONSE_TYPES:
        errors.add("response_type", ErrorKind.INVALID_CHOICE, value, constraint, f"Invalid response_type: {value}")


def _check_content(value: Any, errors: _ErrorCollector) -> None:
    if not isinstance(value, str):
        errors.add(
            "content",
            ErrorKind.WRONG_TYPE,
            value,
            "content must be a non-empty string",
            f"content must be text, got {type(value).__name__}",
        )
    elif not value.strip():
        errors.add(
            "content",
            ErrorKind.EMPTY_CONTENT,
            value,
            "content must be a non-empty string",
            "Problem content is empty",
        )


def _check_sequence_index(value: Any, errors: _ErrorCollector) -> None:
    constraint = "sequence_index must be a non-negative integer"
    if not _is_number(value) or not _is_integral(value):
        errors.add("sequence_index", ErrorKind.WRONG_TYPE, value, constraint, f"Invalid sequence_index: {value!r}")
    elif value < 0:
        errors.add("sequence_index", ErrorKind.OUT_OF_RANGE, value, constraint, f"Invalid sequence_index: {value}")
