"""
Validation data models.

- GeneratedProblem: parsed, fully valid problem (pydantic, accepts the
  generator's wire names as aliases)
- ValidationConfig: bounds and tolerances
- AssessmentTargets: what a batch is checked against
- FieldError / BatchError: collected, kind-tagged errors
- ProblemValidationResult / BatchStatistics / BatchValidationResult
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from bloomspec.core.distribution import Distribution
from bloomspec.core.errors import ErrorKind
from bloomspec.core.taxonomy import CognitiveLevel, ResponseType
from config import Settings, get_settings

# Canonical field name -> accepted input keys, in lookup order
PROBLEM_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "problem_id": ("problem_id", "ProblemId", "problemId"),
    "cognitive_level": ("cognitive_level", "BloomLevel", "bloom_level", "bloomLevel"),
    "complexity": ("complexity", "LinguisticComplexity", "linguistic_complexity"),
    "estimated_time_minutes": ("estimated_time_minutes", "EstimatedTimeMinutes", "estimatedTimeMinutes"),
    "difficulty": ("difficulty", "Difficulty"),
    "response_type": ("response_type", "Type", "type", "question_type"),
    "content": ("content", "Content"),
    "sequence_index": ("sequence_index", "SequenceIndex", "sequenceIndex"),
}

REQUIRED_FIELDS: tuple[str, ...] = (
    "problem_id",
    "cognitive_level",
    "complexity",
    "estimated_time_minutes",
    "difficulty",
    "response_type",
    "content",
)

# Batch checks read these from every item; they can never be made optional
BATCH_REQUIRED_FIELDS: tuple[str, ...] = ("cognitive_level", "estimated_time_minutes")


def _aliases(name: str) -> AliasChoices:
    return AliasChoices(*PROBLEM_FIELD_ALIASES[name])


class GeneratedProblem(BaseModel):
    """
    A problem produced by an external generator.

    Only built once a raw item has passed the field validator; the engine
    never mutates it. Fields outside BATCH_REQUIRED_FIELDS may be absent
    when ValidationConfig.required_fields does not list them.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    problem_id: Optional[str] = Field(default=None, validation_alias=_aliases("problem_id"))
    cognitive_level: CognitiveLevel = Field(validation_alias=_aliases("cognitive_level"))
    complexity: Optional[float] = Field(default=None, validation_alias=_aliases("complexity"))
    estimated_time_minutes: int = Field(validation_alias=_aliases("estimated_time_minutes"))
    difficulty: Optional[int] = Field(default=None, validation_alias=_aliases("difficulty"))
    response_type: Optional[ResponseType] = Field(default=None, validation_alias=_aliases("response_type"))
    content: Optional[str] = Field(default=None, validation_alias=_aliases("content"))
    sequence_index: Optional[int] = Field(default=None, validation_alias=_aliases("sequence_index"))


class ValidationConfig(BaseModel):
    """Bounds and tolerances for field and batch validation."""

    model_config = ConfigDict(frozen=True)

    time_allowance_percent: float = 10.0  # ±10% on total time
    min_time: int = 1  # Minutes per problem
    max_time: int = 120
    min_complexity: float = 0.1  # Soft limits; exact 0 and 1 are rejected
    max_complexity: float = 0.9
    distribution_tolerance_percent: float = 5.0  # ± points per category
    required_fields: tuple[str, ...] = REQUIRED_FIELDS
    difficulty_range: tuple[int, int] = (1, 5)

    @field_validator("required_fields")
    @classmethod
    def _check_required_fields(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        unknown = [name for name in value if name not in PROBLEM_FIELD_ALIASES]
        if unknown:
            raise ValueError(f"Unknown problem fields: {unknown}")
        missing = [name for name in BATCH_REQUIRED_FIELDS if name not in value]
        if missing:
            raise ValueError(f"required_fields must include {missing}; batch checks depend on them")
        return value

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> ValidationConfig:
        """Build from application settings (environment / .env)."""
        settings = settings or get_settings()
        return cls(
            time_allowance_percent=settings.time_allowance_percent,
            min_time=settings.min_time_minutes,
            max_time=settings.max_time_minutes,
            min_complexity=settings.min_complexity,
            max_complexity=settings.max_complexity,
            distribution_tolerance_percent=settings.distribution_tolerance_percent,
        )


DEFAULT_VALIDATION_CONFIG = ValidationConfig()


@dataclass(frozen=True)
class AssessmentTargets:
    """Targets a generated batch must conform to."""
    total_time_minutes: float
    distribution: Distribution
    expected_question_count: Optional[int] = None

    def __post_init__(self):
        if isinstance(self.distribution, Mapping):
            object.__setattr__(self, "distribution", Distribution.from_mapping(self.distribution))


@dataclass(frozen=True)
class FieldError:
    """A single per-item field error."""
    problem_id: str
    problem_index: int
    field: str
    kind: ErrorKind
    value: Any
    constraint: str
    message: str

    def to_dict(self) -> dict:
        return {
            "problem_id": self.problem_id,
            "problem_index": self.problem_index,
            "field": self.field,
            "kind": self.kind.value,
            "value": self.value,
            "constraint": self.constraint,
            "message": self.message,
        }


@dataclass(frozen=True)
class ProblemValidationResult:
    """Outcome of validating one problem."""
    problem_id: str
    problem_index: int
    errors: tuple[FieldError, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.errors

    def errors_for(self, field_name: str) -> list[FieldError]:
        return [e for e in self.errors if e.field == field_name]


@dataclass(frozen=True)
class BatchError:
    """A batch-level conformance error."""
    kind: ErrorKind
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "message": self.message, "details": dict(self.details)}


@dataclass(frozen=True)
class BatchStatistics:
    """Aggregates over a batch of valid problems."""
    total_problems: int
    total_time: int
    average_complexity: float
    cognitive_distribution: Distribution
    cognitive_counts: dict[str, int]
    difficulty_distribution: dict[int, int]
    type_distribution: dict[str, int]
    average_time_per_problem: float

    def to_dict(self) -> dict:
        return {
            "total_problems": self.total_problems,
            "total_time": self.total_time,
            "average_complexity": self.average_complexity,
            "cognitive_distribution": self.cognitive_distribution.to_dict(),
            "cognitive_counts": dict(self.cognitive_counts),
            "difficulty_distribution": dict(self.difficulty_distribution),
            "type_distribution": dict(self.type_distribution),
            "average_time_per_problem": self.average_time_per_problem,
        }


@dataclass(frozen=True)
class BatchValidationResult:
    """
    Outcome of validating a whole batch.

    Batch checks are skipped (statistics is None) when any item fails
    field validation.
    """
    total_problems: int
    details: tuple[ProblemValidationResult, ...] = ()
    batch_errors: tuple[BatchError, ...] = ()
    statistics: Optional[BatchStatistics] = None

    @property
    def valid_problems(self) -> int:
        return sum(1 for d in self.details if d.valid)

    @property
    def invalid_problems(self) -> int:
        return len(self.details) - self.valid_problems

    @property
    def valid(self) -> bool:
        return self.invalid_problems == 0 and not self.batch_errors

    @property
    def item_errors(self) -> list[FieldError]:
        """Every per-item error, in batch order."""
        return [error for detail in self.details for error in detail.errors]

    @property
    def error_kinds(self) -> set[ErrorKind]:
        return {e.kind for e in self.item_errors} | {e.kind for e in self.batch_errors}

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "total_problems": self.total_problems,
            "valid_problems": self.valid_problems,
            "invalid_problems": self.invalid_problems,
            "item_errors": [e.to_dict() for e in self.item_errors],
            "batch_errors": [e.to_dict() for e in self.batch_errors],
            "statistics": self.statistics.to_dict() if self.statistics else None,
        }
