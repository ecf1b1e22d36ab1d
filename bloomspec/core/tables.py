"""
Static Rule Tables.

Baseline distributions per ability level, emphasis deltas, and the lookup
tables the specification builder derives metadata from.

All tables are read-only process-wide constants built once at import.
The estimator receives them through a RuleTables value so tests can swap
in alternate tables.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from bloomspec.core.distribution import Distribution
from bloomspec.core.errors import DistributionError
from bloomspec.core.taxonomy import (
    AbilityLevel,
    AssessmentType,
    ClassLevel,
    CognitiveLevel,
    Emphasis,
    GradeBand,
)

R, U, AP_, AN, EV, CR = (
    CognitiveLevel.REMEMBER,
    CognitiveLevel.UNDERSTAND,
    CognitiveLevel.APPLY,
    CognitiveLevel.ANALYZE,
    CognitiveLevel.EVALUATE,
    CognitiveLevel.CREATE,
)

# ============================================================================
# Baseline distributions (each sums to 1.0)
# ============================================================================

BASELINE_DISTRIBUTIONS: Mapping[AbilityLevel, Distribution] = MappingProxyType({
    AbilityLevel.REMEDIAL: Distribution(0.25, 0.30, 0.30, 0.10, 0.05, 0.00),
    AbilityLevel.STANDARD: Distribution(0.10, 0.20, 0.35, 0.25, 0.05, 0.05),
    AbilityLevel.HONORS: Distribution(0.05, 0.15, 0.30, 0.30, 0.10, 0.10),
    AbilityLevel.AP: Distribution(0.05, 0.10, 0.25, 0.30, 0.15, 0.15),
})

# ============================================================================
# Emphasis deltas (added after the baseline, then renormalized)
# ExamStyle has no entry: it runs the exam correction chain.
# ============================================================================

EMPHASIS_MODIFIERS: Mapping[Emphasis, Mapping[CognitiveLevel, float]] = MappingProxyType({
    Emphasis.BALANCED: MappingProxyType({}),
    Emphasis.PROCEDURAL: MappingProxyType({AP_: 0.10, AN: -0.05, EV: -0.05}),
    Emphasis.CONCEPTUAL: MappingProxyType({R: -0.05, U: 0.10, AP_: -0.10, AN: 0.10}),
    Emphasis.APPLICATION: MappingProxyType({U: -0.05, AP_: 0.10, AN: 0.10, EV: -0.05}),
})

# Exam-style floors
RIGOR_FLOOR = 0.20  # Minimum Analyze + Evaluate
CREATE_FLOOR = 0.05  # Minimum Create for Honors/AP

# ============================================================================
# Specification metadata
# ============================================================================

# Questions per minute of assessment time
QUESTIONS_PER_MINUTE: Mapping[AssessmentType, float] = MappingProxyType({
    AssessmentType.QUIZ: 0.20,  # ~5 min per question
    AssessmentType.TEST: 0.24,  # ~4 min per question
    AssessmentType.PRACTICE: 0.25,  # ~4 min per question
})

COMPLEXITY_RANGES: Mapping[AbilityLevel, tuple[float, float]] = MappingProxyType({
    AbilityLevel.REMEDIAL: (0.2, 0.5),
    AbilityLevel.STANDARD: (0.3, 0.7),
    AbilityLevel.HONORS: (0.5, 0.9),
    AbilityLevel.AP: (0.6, 0.95),
})

# Cumulative fatigue = (prior minutes / time target) x multiplier
FATIGUE_MULTIPLIERS: Mapping[AbilityLevel, float] = MappingProxyType({
    AbilityLevel.REMEDIAL: 0.02,
    AbilityLevel.STANDARD: 0.03,
    AbilityLevel.HONORS: 0.035,
    AbilityLevel.AP: 0.04,
})

GRADE_BANDS: Mapping[AbilityLevel, GradeBand] = MappingProxyType({
    AbilityLevel.REMEDIAL: GradeBand.ELEMENTARY,
    AbilityLevel.STANDARD: GradeBand.MIDDLE,
    AbilityLevel.HONORS: GradeBand.HIGH,
    AbilityLevel.AP: GradeBand.HIGH,
})

CLASS_LEVELS: Mapping[AbilityLevel, ClassLevel] = MappingProxyType({
    AbilityLevel.REMEDIAL: ClassLevel.STANDARD,
    AbilityLevel.STANDARD: ClassLevel.STANDARD,
    AbilityLevel.HONORS: ClassLevel.HONORS,
    AbilityLevel.AP: ClassLevel.AP,
})


@dataclass(frozen=True)
class RuleTables:
    """
    Rule set consumed by the DistributionEstimator.

    Mappings are wrapped read-only on construction.
    """

    baselines: Mapping[AbilityLevel, Distribution] = field(default_factory=lambda: BASELINE_DISTRIBUTIONS)
    modifiers: Mapping[Emphasis, Mapping[CognitiveLevel, float]] = field(
        default_factory=lambda: EMPHASIS_MODIFIERS
    )
    rigor_floor: float = RIGOR_FLOOR
    create_floor: float = CREATE_FLOOR

    def __post_init__(self):
        missing = [level.value for level in AbilityLevel if level not in self.baselines]
        if missing:
            raise DistributionError(f"Rule tables missing baselines for: {missing}")

        additive = [e for e in Emphasis if e.is_additive and e is not Emphasis.BALANCED]
        missing = [e.value for e in additive if e not in self.modifiers]
        if missing:
            raise DistributionError(f"Rule tables missing emphasis modifiers for: {missing}")

        if not 0 <= self.rigor_floor < 1 or not 0 <= self.create_floor < 1:
            raise DistributionError("Exam-style floors must lie in [0, 1)")

        object.__setattr__(self, "baselines", MappingProxyType(dict(self.baselines)))
        object.__setattr__(
            self,
            "modifiers",
            MappingProxyType({k: MappingProxyType(dict(v)) for k, v in self.modifiers.items()}),
        )

    def baseline_for(self, level: AbilityLevel) -> Distribution:
        return self.baselines[level]

    def deltas_for(self, emphasis: Emphasis) -> Mapping[CognitiveLevel, float]:
        """Deltas for an additive emphasis; Balanced (or an absent entry) is all-zero."""
        return self.modifiers.get(emphasis, MappingProxyType({}))


DEFAULT_RULE_TABLES = RuleTables()
