"""
Distribution value types.

Distribution: fractional share per cognitive level (sum ~1.0)
QuestionAllocation: integer question count per cognitive level (exact sum)

Both are frozen; a computed value is never mutated after creation.
"""

from __future__ import annotations

import math
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, fields
from typing import Any

from bloomspec.core.errors import AllocationError, DistributionError
from bloomspec.core.taxonomy import COGNITIVE_LEVELS, CognitiveLevel


def _field_name(level: CognitiveLevel) -> str:
    return level.value.lower()


class _PerLevel:
    """Shared mapping-style access for per-level records."""

    def __getitem__(self, level: CognitiveLevel | str) -> Any:
        return getattr(self, _field_name(CognitiveLevel.parse(level)))

    def __iter__(self) -> Iterator[CognitiveLevel]:
        return iter(COGNITIVE_LEVELS)

    def items(self) -> list[tuple[CognitiveLevel, Any]]:
        """(level, value) pairs in declaration order."""
        return [(level, self[level]) for level in COGNITIVE_LEVELS]

    def values(self) -> list[Any]:
        return [self[level] for level in COGNITIVE_LEVELS]

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary keyed by level name ("Remember", ...)."""
        return {level.value: value for level, value in self.items()}


@dataclass(frozen=True)
class Distribution(_PerLevel):
    """
    Fractional share of question volume per cognitive level.

    Invariant: no category is negative. The sum is expected to be ~1.0 but
    that is checked by validate_target_sum, not here; the rigor-floor
    branch of the estimator may drift slightly.
    """

    remember: float = 0.0
    understand: float = 0.0
    apply: float = 0.0
    analyze: float = 0.0
    evaluate: float = 0.0
    create: float = 0.0

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise DistributionError(f"{f.name} must be a number, got {value!r}")
            if not math.isfinite(value) or value < 0:
                raise DistributionError(f"{f.name} must be a finite non-negative fraction, got {value}")
            object.__setattr__(self, f.name, float(value))

    @classmethod
    def from_mapping(cls, values: Mapping[CognitiveLevel | str, float]) -> Distribution:
        """
        Build from a mapping keyed by CognitiveLevel or level name.

        Missing levels default to 0.
        """
        kwargs = {}
        for key, value in values.items():
            try:
                level = CognitiveLevel.parse(key)
            except ValueError as e:
                raise DistributionError(str(e)) from e
            kwargs[_field_name(level)] = value
        return cls(**kwargs)

    @property
    def total(self) -> float:
        """Sum of all six fractions."""
        return math.fsum(self.values())

    def to_percentages(self) -> dict[str, float]:
        """Shares as percentages, rounded to one decimal."""
        return {level.value: round(value * 100, 1) for level, value in self.items()}


@dataclass(frozen=True)
class QuestionAllocation(_PerLevel):
    """
    Whole question count per cognitive level.

    Invariant: counts are non-negative integers; their sum equals the
    requested total exactly (enforced by the allocator).
    """

    remember: int = 0
    understand: int = 0
    apply: int = 0
    analyze: int = 0
    evaluate: int = 0
    create: int = 0

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise AllocationError(f"{f.name} must be a non-negative integer, got {value!r}")

    @classmethod
    def from_mapping(cls, values: Mapping[CognitiveLevel | str, int]) -> QuestionAllocation:
        return cls(**{_field_name(CognitiveLevel.parse(k)): v for k, v in values.items()})

    @property
    def total(self) -> int:
        return sum(self.values())
