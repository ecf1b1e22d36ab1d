"""
Distribution Module - target estimation and integer allocation.

Components:
- estimator: DistributionEstimator (baseline + emphasis rules)
- sum_validator: validate_target_sum guard
- allocator: allocate_question_counts (largest remainder)
"""

from bloomspec.distribution.allocator import allocate_question_counts
from bloomspec.distribution.estimator import DistributionEstimator, estimate_distribution
from bloomspec.distribution.sum_validator import (
    DEFAULT_SUM_TOLERANCE,
    SumCheck,
    validate_target_sum,
)

__all__ = [
    "DistributionEstimator",
    "estimate_distribution",
    "SumCheck",
    "validate_target_sum",
    "DEFAULT_SUM_TOLERANCE",
    "allocate_question_counts",
]
