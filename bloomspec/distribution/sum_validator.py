"""
Target Sum Validator.

Guard run right after estimation: an estimated Distribution must sum to
1.0 within a tolerance. A failure points at a rule-table defect, not at
generated content.

Not to be confused with validate_distribution_conformance, which compares
an observed batch against a target per category.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from loguru import logger

from bloomspec.core.distribution import Distribution
from bloomspec.core.errors import ErrorKind

DEFAULT_SUM_TOLERANCE = 0.02


@dataclass(frozen=True)
class SumCheck:
    """Result of a target sum check."""
    valid: bool
    total: float
    tolerance: float
    message: Optional[str] = None
    kind: Optional[ErrorKind] = None

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "total": self.total,
            "tolerance": self.tolerance,
            "message": self.message,
            "kind": self.kind.value if self.kind else None,
        }


def validate_target_sum(
    distribution: Distribution,
    tolerance: float = DEFAULT_SUM_TOLERANCE,
) -> SumCheck:
    """
    Check |sum - 1.0| <= tolerance.

    Args:
        distribution: Estimated target distribution
        tolerance: Allowed absolute deviation from 1.0

    Returns:
        SumCheck with the computed sum and, when invalid, a
        distribution-sum-invalid message
    """
    total = math.fsum(distribution.values())
    if abs(total - 1.0) <= tolerance:
        return SumCheck(valid=True, total=total, tolerance=tolerance)

    message = f"Distribution sums to {total:.4f}, expected 1.0 ±{tolerance}"
    logger.warning(message)
    return SumCheck(
        valid=False,
        total=total,
        tolerance=tolerance,
        message=message,
        kind=ErrorKind.DISTRIBUTION_SUM_INVALID,
    )
