"""
Batch statistics over already-valid problems.
"""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Sequence

from bloomspec.core.distribution import Distribution
from bloomspec.core.taxonomy import COGNITIVE_LEVELS, DIFFICULTY_RATINGS
from bloomspec.validation.models import BatchStatistics, GeneratedProblem


def calculate_batch_statistics(problems: Sequence[GeneratedProblem]) -> BatchStatistics:
    """
    Aggregate a batch into totals, means and histograms.

    An empty batch yields zero totals and an all-zero cognitive
    distribution instead of dividing by zero. Optional fields that an item
    leaves out are skipped by their own mean or histogram.
    """
    count = len(problems)
    level_counts = Counter(p.cognitive_level for p in problems)
    difficulty_counts = Counter(p.difficulty for p in problems if p.difficulty is not None)
    type_counts = Counter(p.response_type.value for p in problems if p.response_type is not None)
    complexities = [p.complexity for p in problems if p.complexity is not None]

    total_time = sum(p.estimated_time_minutes for p in problems)
    average_complexity = math.fsum(complexities) / len(complexities) if complexities else 0.0

    if count:
        average_time = total_time / count
        fractions = {level: level_counts[level] / count for level in COGNITIVE_LEVELS}
    else:
        average_time = 0.0
        fractions = {level: 0.0 for level in COGNITIVE_LEVELS}

    return BatchStatistics(
        total_problems=count,
        total_time=total_time,
        average_complexity=average_complexity,
        cognitive_distribution=Distribution.from_mapping(fractions),
        cognitive_counts={level.value: level_counts[level] for level in COGNITIVE_LEVELS},
        difficulty_distribution={rating: difficulty_counts[rating] for rating in DIFFICULTY_RATINGS},
        type_distribution=dict(type_counts),
        average_time_per_problem=average_time,
    )
