"""
Integer Question Allocator (Largest Remainder / Hamilton method).

Guarantees:
- Every level gets floor(quota) items minimum
- The remainder goes one unit at a time to the levels with the largest
  fractional parts, descending
- Ties in fractional part are broken by CognitiveLevel declaration order
  (Remember before Understand before Apply ...), so identical input
  always yields identical output
- sum(output) == total, enforced by an invariant check

Quotas are fraction x total. When the distribution does not sum to 1.0
(the exam-style rigor-floor branch, or alternate tables) quotas are taken
relative to the sum so the remainder always stays below six.
"""

from __future__ import annotations

import math

from loguru import logger

from bloomspec.core.distribution import Distribution, QuestionAllocation
from bloomspec.core.errors import AllocationError, FatalDistributionError
from bloomspec.core.taxonomy import COGNITIVE_LEVELS

# Sums this close to 1.0 are used as-is
_UNIT_SUM_EPSILON = 1e-9


def allocate_question_counts(distribution: Distribution, total: int) -> QuestionAllocation:
    """
    Allocate an exact integer count per cognitive level.

    Args:
        distribution: Fractional share per level
        total: Requested number of questions (positive integer)

    Returns:
        QuestionAllocation whose counts sum exactly to `total`

    Raises:
        AllocationError: If total is not a positive integer or the
            distribution is all zero
        FatalDistributionError: If the exact-sum invariant is broken
    """
    if isinstance(total, bool) or not isinstance(total, int) or total < 1:
        raise AllocationError(f"Question total must be a positive integer, got {total!r}")

    share_sum = distribution.total
    if share_sum <= 0:
        raise AllocationError("Cannot allocate questions over an all-zero distribution")

    if abs(share_sum - 1.0) <= _UNIT_SUM_EPSILON:
        raw = {level: distribution[level] * total for level in COGNITIVE_LEVELS}
    else:
        logger.debug(f"Allocating relative to distribution sum {share_sum:.6f}")
        raw = {level: distribution[level] * total / share_sum for level in COGNITIVE_LEVELS}

    floored = {level: math.floor(raw[level]) for level in COGNITIVE_LEVELS}
    remainder = total - sum(floored.values())

    # Descending fractional part; declaration order breaks ties
    ranked = sorted(
        COGNITIVE_LEVELS,
        key=lambda level: (-(raw[level] - floored[level]), level.rank),
    )

    counts = dict(floored)
    for level in ranked[:remainder]:
        counts[level] += 1

    allocated = sum(counts.values())
    if allocated != total:
        raise FatalDistributionError(
            f"Allocation broke exact-sum invariant: expected {total}, got {allocated} "
            f"(input {distribution.to_dict()})"
        )

    allocation = QuestionAllocation.from_mapping(counts)
    logger.debug(f"Allocated {total} questions: {allocation.to_dict()}")
    return allocation
