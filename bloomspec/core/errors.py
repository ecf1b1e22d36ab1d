"""
Error taxonomy for the distribution engine.

Two families:
- ErrorKind: machine-readable tags on collected (returned) validation errors
- BloomspecError subclasses: raised for configuration or programmer faults
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Machine-readable tag carried by every reported validation error."""

    # Per-item field errors
    MISSING_FIELD = "missing-field"
    WRONG_TYPE = "wrong-type"
    OUT_OF_RANGE = "out-of-range"
    INVALID_CHOICE = "invalid-choice"
    EMPTY_CONTENT = "empty-content"

    # Specification-stage errors
    DISTRIBUTION_SUM_INVALID = "distribution-sum-invalid"
    DEGENERATE_NORMALIZATION = "degenerate-normalization"

    # Batch-level errors
    DISTRIBUTION_MISMATCH = "distribution-mismatch"
    TIME_OUT_OF_RANGE = "time-out-of-range"
    SEQUENCE_NOT_CONTIGUOUS = "sequence-not-contiguous"
    COUNT_MISMATCH = "count-mismatch"


class BloomspecError(Exception):
    """Base class for engine exceptions."""
    pass


class DistributionError(BloomspecError, ValueError):
    """Raised when a distribution or rule table is malformed."""
    pass


class DegenerateNormalizationError(DistributionError):
    """
    Raised when additive emphasis clamps every category to zero.

    Never occurs with the shipped modifier magnitudes; carries the clamped
    values so callers can report them.
    """

    def __init__(self, message: str, clamped: dict | None = None):
        super().__init__(message)
        self.clamped = clamped or {}


class AllocationError(BloomspecError, ValueError):
    """Raised when an allocation request is unsatisfiable (bad total, empty distribution)."""
    pass


class FatalDistributionError(AllocationError):
    """Raised when an allocation breaks the exact-sum invariant."""
    pass


class InvalidIntentError(BloomspecError, ValueError):
    """Raised by assert_valid_assessment_intent on a malformed request."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        summary = "\n- ".join(self.errors)
        super().__init__(f"Invalid assessment intent:\n- {summary}")
