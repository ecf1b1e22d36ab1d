"""
Core Module - taxonomy, value types, rule tables and errors.
"""

from bloomspec.core.distribution import Distribution, QuestionAllocation
from bloomspec.core.errors import (
    AllocationError,
    BloomspecError,
    DegenerateNormalizationError,
    DistributionError,
    ErrorKind,
    FatalDistributionError,
    InvalidIntentError,
)
from bloomspec.core.tables import DEFAULT_RULE_TABLES, RuleTables
from bloomspec.core.taxonomy import (
    COGNITIVE_LEVELS,
    AbilityLevel,
    AssessmentType,
    ClassLevel,
    CognitiveLevel,
    Emphasis,
    GradeBand,
    ResponseType,
)

__all__ = [
    # Taxonomy
    "AbilityLevel",
    "AssessmentType",
    "Emphasis",
    "CognitiveLevel",
    "COGNITIVE_LEVELS",
    "ResponseType",
    "GradeBand",
    "ClassLevel",
    # Values
    "Distribution",
    "QuestionAllocation",
    "RuleTables",
    "DEFAULT_RULE_TABLES",
    # Errors
    "ErrorKind",
    "BloomspecError",
    "DistributionError",
    "DegenerateNormalizationError",
    "AllocationError",
    "FatalDistributionError",
    "InvalidIntentError",
]
