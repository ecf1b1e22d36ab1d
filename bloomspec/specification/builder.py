"""
Specification Builder.

Specification stage of the engine: turns (level, type, emphasis, time,
optional count) into a ContentSpecification.

Pipeline:
1. DistributionEstimator  -> target Distribution
2. validate_target_sum    -> guard against rule-table defects
3. allocate_question_counts -> exact per-level counts

Steps 2 and 3 only run when the previous step produced a usable result;
failures are attached to the specification rather than raised.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Optional

from loguru import logger

from bloomspec.core.distribution import Distribution, QuestionAllocation
from bloomspec.core.errors import AllocationError, DegenerateNormalizationError, DistributionError, ErrorKind
from bloomspec.core.tables import (
    CLASS_LEVELS,
    COMPLEXITY_RANGES,
    DEFAULT_RULE_TABLES,
    FATIGUE_MULTIPLIERS,
    GRADE_BANDS,
    QUESTIONS_PER_MINUTE,
    RuleTables,
)
from bloomspec.core.taxonomy import AbilityLevel, AssessmentType, ClassLevel, Emphasis, GradeBand
from bloomspec.distribution.allocator import allocate_question_counts
from bloomspec.distribution.estimator import DistributionEstimator
from bloomspec.distribution.sum_validator import SumCheck, validate_target_sum
from bloomspec.validation.models import AssessmentTargets
from config import Settings, get_settings


@dataclass(frozen=True)
class SpecificationError:
    """An error attached to a specification instead of being raised."""
    kind: ErrorKind
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "message": self.message, "details": dict(self.details)}


@dataclass(frozen=True)
class ContentSpecification:
    """
    Machine-checkable targets for one assessment request.

    distribution is None only on degenerate normalization; allocation is
    None whenever the distribution is missing or fails the sum guard.
    """
    ability_level: AbilityLevel
    assessment_type: AssessmentType
    emphasis: Emphasis
    time_minutes: int
    grade_band: GradeBand
    class_level: ClassLevel
    distribution: Optional[Distribution]
    sum_check: Optional[SumCheck]
    allocation: Optional[QuestionAllocation]
    requested_question_count: Optional[int]
    estimated_question_count: int
    complexity_range: tuple[float, float]
    fatigue_multiplier: float
    errors: tuple[SpecificationError, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.errors and self.allocation is not None

    @property
    def question_count(self) -> int:
        """Requested count when given, otherwise the time-based estimate."""
        if self.requested_question_count is not None:
            return self.requested_question_count
        return self.estimated_question_count

    def to_targets(self) -> AssessmentTargets:
        """
        Targets for the verification stage.

        Raises:
            DistributionError: If no distribution was produced
        """
        if self.distribution is None:
            raise DistributionError("Specification has no distribution; cannot derive targets")
        return AssessmentTargets(
            total_time_minutes=self.time_minutes,
            distribution=self.distribution,
            expected_question_count=self.allocation.total if self.allocation else self.question_count,
        )

    def to_dict(self) -> dict:
        return {
            "ability_level": self.ability_level.value,
            "assessment_type": self.assessment_type.value,
            "emphasis": self.emphasis.value,
            "time_minutes": self.time_minutes,
            "grade_band": self.grade_band.value,
            "class_level": self.class_level.value,
            "distribution": self.distribution.to_dict() if self.distribution else None,
            "sum_check": self.sum_check.to_dict() if self.sum_check else None,
            "allocation": self.allocation.to_dict() if self.allocation else None,
            "requested_question_count": self.requested_question_count,
            "estimated_question_count": self.estimated_question_count,
            "complexity_range": list(self.complexity_range),
            "fatigue_multiplier": self.fatigue_multiplier,
            "valid": self.valid,
            "errors": [e.to_dict() for e in self.errors],
        }


def estimate_question_count(assessment_type: AssessmentType | str, time_minutes: float) -> int:
    """Questions that fit the time budget (rounded half up, at least 1)."""
    rate = QUESTIONS_PER_MINUTE[AssessmentType(assessment_type)]
    return max(1, math.floor(time_minutes * rate + 0.5))


def build_specification(
    level: AbilityLevel | str,
    assessment_type: AssessmentType | str,
    time_minutes: int,
    emphasis: Emphasis | str = Emphasis.BALANCED,
    question_count: Optional[int] = None,
    tables: RuleTables = DEFAULT_RULE_TABLES,
    settings: Settings | None = None,
) -> ContentSpecification:
    """
    Build the content specification for an assessment request.

    Args:
        level: Student ability level
        assessment_type: Quiz / Test / Practice
        time_minutes: Assessment time budget
        emphasis: Emphasis tag (Balanced by default)
        question_count: Requested total; estimated from time when omitted
        tables: Rule tables for the estimator
        settings: Tolerances (application settings when omitted)

    Returns:
        ContentSpecification, with any estimation or guard failure
        recorded in `errors`

    Raises:
        AllocationError: If time_minutes is not positive or question_count
            is not a positive integer
    """
    if isinstance(time_minutes, bool) or not isinstance(time_minutes, (int, float)) or time_minutes <= 0:
        raise AllocationError(f"Time budget must be a positive number of minutes, got {time_minutes!r}")

    settings = settings or get_settings()
    level = AbilityLevel(level)
    assessment_type = AssessmentType(assessment_type)
    emphasis = Emphasis(emphasis)

    estimated = estimate_question_count(assessment_type, time_minutes)
    total = question_count if question_count is not None else estimated

    errors: list[SpecificationError] = []
    distribution = None
    sum_check = None
    allocation = None

    try:
        distribution = DistributionEstimator(tables).estimate(level, assessment_type, emphasis)
    except DegenerateNormalizationError as e:
        errors.append(
            SpecificationError(
                kind=ErrorKind.DEGENERATE_NORMALIZATION,
                message=str(e),
                details={"clamped": dict(e.clamped)},
            )
        )

    if distribution is not None:
        sum_check = validate_target_sum(distribution, settings.target_sum_tolerance)
        if sum_check.valid:
            allocation = allocate_question_counts(distribution, total)
        else:
            errors.append(
                SpecificationError(
                    kind=ErrorKind.DISTRIBUTION_SUM_INVALID,
                    message=sum_check.message,
                    details={"total": sum_check.total, "tolerance": sum_check.tolerance},
                )
            )

    spec = ContentSpecification(
        ability_level=level,
        assessment_type=assessment_type,
        emphasis=emphasis,
        time_minutes=time_minutes,
        grade_band=GRADE_BANDS[level],
        class_level=CLASS_LEVELS[level],
        distribution=distribution,
        sum_check=sum_check,
        allocation=allocation,
        requested_question_count=question_count,
        estimated_question_count=estimated,
        complexity_range=COMPLEXITY_RANGES[level],
        fatigue_multiplier=FATIGUE_MULTIPLIERS[level],
        errors=tuple(errors),
    )

    if spec.valid:
        logger.info(
            f"Built specification {level.value}/{assessment_type.value}/{emphasis.value}: "
            f"{total} questions in {time_minutes} min"
        )
    else:
        logger.warning(f"Specification {level.value}/{emphasis.value} has errors: {[e.kind.value for e in errors]}")
    return spec
