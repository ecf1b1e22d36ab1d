"""
Assessment Taxonomy.

Closed vocabularies shared by the estimator, the allocator and the
validators.

Design:
- AbilityLevel: Student ability band chosen by the instructor
- AssessmentType: Quiz / Test / Practice (drives questions-per-minute)
- Emphasis: Pedagogical reshaping of the baseline distribution
- CognitiveLevel: Revised Bloom's Taxonomy, in declaration order
- ResponseType: Answer formats a generated problem may use
"""

from __future__ import annotations

from enum import Enum


class AbilityLevel(str, Enum):
    """Student ability level."""

    REMEDIAL = "Remedial"
    STANDARD = "Standard"
    HONORS = "Honors"
    AP = "AP"

    @property
    def is_advanced(self) -> bool:
        """Honors and AP receive the Create floor under exam-style emphasis."""
        return self in (AbilityLevel.HONORS, AbilityLevel.AP)


class AssessmentType(str, Enum):
    """Assessment format."""

    QUIZ = "Quiz"
    TEST = "Test"
    PRACTICE = "Practice"


class Emphasis(str, Enum):
    """
    Assessment emphasis.

    Balanced is neutral. Procedural, Conceptual and Application add signed
    deltas to the baseline. ExamStyle carries no deltas and instead runs the
    exam correction chain.
    """

    BALANCED = "Balanced"
    PROCEDURAL = "Procedural"
    CONCEPTUAL = "Conceptual"
    APPLICATION = "Application"
    EXAM_STYLE = "ExamStyle"

    @property
    def is_additive(self) -> bool:
        return self is not Emphasis.EXAM_STYLE


class CognitiveLevel(str, Enum):
    """
    Revised Bloom's Taxonomy levels.

    Declaration order is load-bearing: it is the tie-break key of the
    largest-remainder allocator.
    """

    REMEMBER = "Remember"
    UNDERSTAND = "Understand"
    APPLY = "Apply"
    ANALYZE = "Analyze"
    EVALUATE = "Evaluate"
    CREATE = "Create"

    @property
    def rank(self) -> int:
        """Zero-based position in declaration order."""
        return COGNITIVE_LEVELS.index(self)

    @classmethod
    def parse(cls, value: str | CognitiveLevel) -> CognitiveLevel:
        """
        Resolve a level from its value or its lowercase key.

        Args:
            value: "Analyze", "analyze" or CognitiveLevel.ANALYZE

        Returns:
            Matching CognitiveLevel

        Raises:
            ValueError: If the value names no level
        """
        if isinstance(value, cls):
            return value
        for level in cls:
            if value == level.value or value == level.value.lower():
                return level
        raise ValueError(f"Unknown cognitive level: {value!r}")


class ResponseType(str, Enum):
    """Answer format of a generated problem."""

    MULTIPLE_CHOICE = "multiple-choice"
    TRUE_FALSE = "true-false"
    SHORT_ANSWER = "short-answer"
    ESSAY = "essay"
    MATCHING = "matching"


class GradeBand(str, Enum):
    """Grade band used by downstream content systems."""

    ELEMENTARY = "3-5"
    MIDDLE = "6-8"
    HIGH = "9-12"


class ClassLevel(str, Enum):
    """Class level used by downstream content systems."""

    STANDARD = "standard"
    HONORS = "honors"
    AP = "AP"


COGNITIVE_LEVELS: tuple[CognitiveLevel, ...] = tuple(CognitiveLevel)
DIFFICULTY_RATINGS: tuple[int, ...] = (1, 2, 3, 4, 5)
