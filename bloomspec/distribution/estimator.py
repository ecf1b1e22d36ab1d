"""
Distribution Estimator.

Derives the target cognitive-level distribution for an
(ability level, emphasis) pair from the injected rule tables.

Rules:
1. Start from the level's baseline.
2. Balanced returns the baseline unchanged.
3. Additive emphasis: add deltas, clamp each category at 0, renormalize
   by the clamped sum.
4. ExamStyle: first-match-wins correction chain
   a. Rigor floor  - Analyze + Evaluate below the floor
   b. Create floor - Honors/AP with Create below the floor
   c. Baseline unchanged

The chain is not composable: a distribution deficient in
both rigor and Create only receives the rigor correction.
"""

from __future__ import annotations

import math

from loguru import logger

from bloomspec.core.distribution import Distribution
from bloomspec.core.errors import DegenerateNormalizationError
from bloomspec.core.tables import DEFAULT_RULE_TABLES, RuleTables
from bloomspec.core.taxonomy import (
    COGNITIVE_LEVELS,
    AbilityLevel,
    AssessmentType,
    CognitiveLevel,
    Emphasis,
)


class DistributionEstimator:
    """
    Rule-based estimator over a RuleTables instance.

    Stateless apart from the (immutable) tables; safe to share across
    threads and requests.
    """

    def __init__(self, tables: RuleTables = DEFAULT_RULE_TABLES):
        self.tables = tables

    def estimate(
        self,
        level: AbilityLevel | str,
        assessment_type: AssessmentType | str | None = None,
        emphasis: Emphasis | str = Emphasis.BALANCED,
    ) -> Distribution:
        """
        Estimate the target distribution.

        Args:
            level: Student ability level
            assessment_type: Accepted for signature parity; does not affect
                the distribution
            emphasis: Pedagogical emphasis (default Balanced)

        Returns:
            Distribution (sums to 1.0, except within tolerance on the
            rigor-floor branch)

        Raises:
            DegenerateNormalizationError: If additive deltas clamp every
                category to zero
        """
        level = AbilityLevel(level)
        emphasis = Emphasis(emphasis)
        baseline = self.tables.baseline_for(level)

        if emphasis is Emphasis.BALANCED:
            result = baseline
        elif emphasis.is_additive:
            result = self._apply_additive(level, emphasis, baseline)
        else:
            result = self._apply_exam_style(level, baseline)

        logger.debug(f"Estimated {level.value}/{emphasis.value}: {result.to_percentages()}")
        return result

    def _apply_additive(
        self,
        level: AbilityLevel,
        emphasis: Emphasis,
        baseline: Distribution,
    ) -> Distribution:
        deltas = self.tables.deltas_for(emphasis)
        clamped = {
            lvl: max(0.0, baseline[lvl] + deltas.get(lvl, 0.0))
            for lvl in COGNITIVE_LEVELS
        }
        total = math.fsum(clamped.values())

        if total <= 0:
            logger.warning(
                f"Degenerate normalization for {level.value}/{emphasis.value}: "
                f"every category clamped to zero"
            )
            raise DegenerateNormalizationError(
                f"Emphasis {emphasis.value} clamps every category of the "
                f"{level.value} baseline to zero; cannot renormalize",
                clamped={lvl.value: v for lvl, v in clamped.items()},
            )

        return Distribution.from_mapping({lvl: v / total for lvl, v in clamped.items()})

    def _apply_exam_style(self, level: AbilityLevel, baseline: Distribution) -> Distribution:
        rigor_floor = self.tables.rigor_floor
        create_floor = self.tables.create_floor

        analyze = baseline.analyze
        evaluate = baseline.evaluate
        rigor = analyze + evaluate

        # (a) Rigor floor. Not renormalized: only "within tolerance" holds here.
        if rigor < rigor_floor:
            half_deficit = (rigor_floor - rigor) / 2
            scale = (1 - rigor_floor) / (1 - analyze - evaluate)
            logger.debug(
                f"Exam-style rigor floor for {level.value}: "
                f"A+E={rigor:.3f} < {rigor_floor}, lower-order scale={scale:.4f}"
            )
            return Distribution(
                remember=baseline.remember * scale,
                understand=baseline.understand * scale,
                apply=baseline.apply * scale,
                analyze=analyze + half_deficit,
                evaluate=evaluate + half_deficit,
                create=baseline.create if level.is_advanced else 0.0,
            )

        # (b) Create floor, sum-preserving
        if level.is_advanced and baseline.create < create_floor:
            scale = (1 - create_floor) / (1 - baseline.create)
            logger.debug(
                f"Exam-style create floor for {level.value}: "
                f"Create={baseline.create:.3f} < {create_floor}"
            )
            scaled = {
                lvl: baseline[lvl] * scale
                for lvl in COGNITIVE_LEVELS
                if lvl is not CognitiveLevel.CREATE
            }
            scaled[CognitiveLevel.CREATE] = create_floor
            return Distribution.from_mapping(scaled)

        return baseline


def estimate_distribution(
    level: AbilityLevel | str,
    assessment_type: AssessmentType | str | None = None,
    emphasis: Emphasis | str = Emphasis.BALANCED,
    tables: RuleTables = DEFAULT_RULE_TABLES,
) -> Distribution:
    """Estimate a distribution with a throwaway estimator over `tables`."""
    return DistributionEstimator(tables).estimate(level, assessment_type, emphasis)
