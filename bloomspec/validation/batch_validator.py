"""
Batch Conformance Validator.

Verification stage for a generated batch against AssessmentTargets.

Flow:
1. Field-validate every item (all items, all rules)
2. If any item failed, stop: batch statistics over malformed items are
   meaningless, so no batch checks run
3. Otherwise run every batch check and collect every failure:
   - sequence contiguity (only when sequence indices are used)
   - total time within ±time_allowance_percent of target (relative)
   - each cognitive level within ±distribution_tolerance_percent points
     of its target fraction (absolute, per category)
   - item count equals the expected count, when one is given
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Optional

from loguru import logger
from pydantic import BaseModel

from bloomspec.core.distribution import Distribution
from bloomspec.core.errors import ErrorKind
from bloomspec.core.taxonomy import COGNITIVE_LEVELS
from bloomspec.validation.field_validator import normalize_problem, validate_single_problem
from bloomspec.validation.models import (
    DEFAULT_VALIDATION_CONFIG,
    AssessmentTargets,
    BatchError,
    BatchValidationResult,
    GeneratedProblem,
    ValidationConfig,
)
from bloomspec.validation.statistics import calculate_batch_statistics

# Float slack on bound comparisons (0.35 - 0.05 is not exactly 0.30)
_BOUND_EPSILON = 1e-9


def validate_sequence_indices(problems: Sequence[GeneratedProblem]) -> Optional[BatchError]:
    """
    Sorted sequence indices must be exactly 0..n-1.

    Skipped when no item carries an index. Once any item does, an item
    without one counts as a gap.
    """
    indices = [p.sequence_index for p in problems]
    if all(i is None for i in indices):
        return None

    expected = list(range(len(problems)))
    actual = sorted(i for i in indices if i is not None)
    if actual == expected:
        return None

    return BatchError(
        kind=ErrorKind.SEQUENCE_NOT_CONTIGUOUS,
        message=(
            f"Sequence indices are not contiguous. Expected [0, 1, ..., {len(problems) - 1}] "
            f"but got [{', '.join(str(i) for i in actual)}]"
        ),
        details={"actual": actual, "expected": expected, "missing_index_count": indices.count(None)},
    )


def validate_total_time(
    total_time: float,
    target_time: float,
    allowance_percent: float = 10.0,
) -> Optional[BatchError]:
    """Total time must lie in target x (1 ± allowance)."""
    allowance = allowance_percent / 100
    lower = target_time * (1 - allowance)
    upper = target_time * (1 + allowance)

    if lower - _BOUND_EPSILON <= total_time <= upper + _BOUND_EPSILON:
        return None

    return BatchError(
        kind=ErrorKind.TIME_OUT_OF_RANGE,
        message=(
            f"Total time {total_time}min is outside allowed range [{lower:.0f}, {upper:.0f}] "
            f"(target: {target_time}min ±{allowance_percent}%)"
        ),
        details={
            "total_time": total_time,
            "target_time": target_time,
            "lower_bound": round(lower, 1),
            "upper_bound": round(upper, 1),
            "allowance_percent": allowance_percent,
        },
    )


def validate_distribution_conformance(
    observed: Distribution,
    target: Distribution,
    tolerance_percent: float = 5.0,
) -> list[BatchError]:
    """
    Compare an observed batch distribution against its target.

    Each category is checked independently in absolute percentage points;
    one error is produced per category outside the band.
    """
    tolerance = tolerance_percent / 100
    errors = []

    for level in COGNITIVE_LEVELS:
        actual = observed[level]
        expected = target[level]
        if abs(actual - expected) <= tolerance + _BOUND_EPSILON:
            continue
        errors.append(
            BatchError(
                kind=ErrorKind.DISTRIBUTION_MISMATCH,
                message=(
                    f"{level.value} is {actual * 100:.1f}% of the batch "
                    f"(target: {expected * 100:.1f}% ±{tolerance_percent}%)"
                ),
                details={
                    "level": level.value,
                    "actual": actual,
                    "target": expected,
                    "lower_bound": expected - tolerance,
                    "upper_bound": expected + tolerance,
                    "tolerance_percent": tolerance_percent,
                },
            )
        )

    return errors


def validate_question_count(actual: int, expected: Optional[int]) -> Optional[BatchError]:
    if expected is None or actual == expected:
        return None
    return BatchError(
        kind=ErrorKind.COUNT_MISMATCH,
        message=f"Problem count {actual} does not match expected count {expected}",
        details={"actual": actual, "expected": expected},
    )


def validate_problems(
    problems: Sequence[Mapping[str, Any] | BaseModel],
    targets: AssessmentTargets,
    config: ValidationConfig | None = None,
) -> BatchValidationResult:
    """
    Validate a generated batch against its targets.

    Args:
        problems: Raw generated problems (mappings or models)
        targets: Time budget, target distribution, optional count
        config: Bounds and tolerances (defaults when omitted)

    Returns:
        BatchValidationResult with per-item and batch-level errors
    """
    config = config or DEFAULT_VALIDATION_CONFIG

    details = tuple(
        validate_single_problem(problem, config, index)
        for index, problem in enumerate(problems)
    )

    invalid = sum(1 for d in details if not d.valid)
    if invalid:
        logger.warning(f"{invalid}/{len(details)} problems failed field validation; batch checks skipped")
        return BatchValidationResult(total_problems=len(details), details=details)

    parsed = [GeneratedProblem.model_validate(normalize_problem(problem)) for problem in problems]
    stats = calculate_batch_statistics(parsed)

    batch_errors: list[BatchError] = []

    sequence_error = validate_sequence_indices(parsed)
    if sequence_error:
        batch_errors.append(sequence_error)

    time_error = validate_total_time(stats.total_time, targets.total_time_minutes, config.time_allowance_percent)
    if time_error:
        batch_errors.append(time_error)

    batch_errors.extend(
        validate_distribution_conformance(
            stats.cognitive_distribution,
            targets.distribution,
            config.distribution_tolerance_percent,
        )
    )

    count_error = validate_question_count(stats.total_problems, targets.expected_question_count)
    if count_error:
        batch_errors.append(count_error)

    result = BatchValidationResult(
        total_problems=len(details),
        details=details,
        batch_errors=tuple(batch_errors),
        statistics=stats,
    )

    if result.valid:
        logger.info(f"Batch of {len(details)} problems conforms to targets")
    else:
        kinds = ", ".join(sorted({e.kind.value for e in batch_errors}))
        logger.warning(f"Batch of {len(details)} problems rejected: {kinds}")

    return result
