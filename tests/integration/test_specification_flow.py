"""
Integration tests: specification stage -> generated batch -> verification.

Simulates the surrounding pipeline: validate the request, build the
specification, "generate" a batch matching (or violating) the allocation,
then verify it.
"""

import pytest

from bloomspec import (
    ErrorKind,
    build_specification,
    format_validation_report,
    validate_assessment_intent,
    validate_problems,
)
from bloomspec.core.taxonomy import AbilityLevel, AssessmentType, Emphasis


def generate_batch(spec, make_problem):
    """A batch that fills the allocation and spends the time budget exactly."""
    problems = []
    slots = [level for level, count in spec.allocation.items() for _ in range(count)]
    base, extra = divmod(spec.time_minutes, len(slots))
    for index, level in enumerate(slots):
        problems.append(
            make_problem(
                index,
                cognitive_level=level.value,
                estimated_time_minutes=base + (1 if index < extra else 0),
            )
        )
    return problems


class TestSpecificationToVerification:
    def test_standard_balanced_twenty(self, make_problem, settings):
        """Should allocate 2/4/7/5/1/1 and accept a batch that follows it."""
        spec = build_specification(
            AbilityLevel.STANDARD,
            AssessmentType.TEST,
            time_minutes=60,
            emphasis=Emphasis.BALANCED,
            question_count=20,
            settings=settings,
        )
        assert spec.distribution.to_percentages() == {
            "Remember": 10.0,
            "Understand": 20.0,
            "Apply": 35.0,
            "Analyze": 25.0,
            "Evaluate": 5.0,
            "Create": 5.0,
        }
        assert spec.allocation.values() == [2, 4, 7, 5, 1, 1]

        batch = generate_batch(spec, make_problem)
        result = validate_problems(batch, spec.to_targets())

        assert result.valid, format_validation_report(result)

    def test_intent_then_specification(self, make_problem, settings):
        intent = {
            "ability_level": "Standard",
            "assessment_type": "Quiz",
            "time_minutes": 30,
            "emphasis": "Balanced",
        }
        assert validate_assessment_intent(intent, settings).valid

        spec = build_specification(
            intent["ability_level"],
            intent["assessment_type"],
            time_minutes=intent["time_minutes"],
            emphasis=intent["emphasis"],
            settings=settings,
        )
        assert spec.question_count == 6
        assert spec.allocation.total == 6

    @pytest.mark.parametrize(
        "level,emphasis",
        [
            ("Remedial", "ExamStyle"),
            ("Honors", "Conceptual"),
            ("AP", "Procedural"),
            ("Standard", "Application"),
        ],
    )
    def test_large_batches_conform_for_every_shape(self, make_problem, settings, level, emphasis):
        """Should accept a generated batch that follows any allocation of 40 items."""
        spec = build_specification(level, "Test", time_minutes=160, emphasis=emphasis,
                                   question_count=40, settings=settings)
        assert spec.valid

        result = validate_problems(generate_batch(spec, make_problem), spec.to_targets())
        assert result.valid, format_validation_report(result)

    def test_generator_drift_is_caught(self, make_problem, settings):
        """Should reject a batch whose generator ignored the allocation and time budget."""
        spec = build_specification("Honors", "Test", time_minutes=50, question_count=12, settings=settings)
        drifted = [
            make_problem(i, cognitive_level="Remember", estimated_time_minutes=6)
            for i in range(11)
        ]

        result = validate_problems(drifted, spec.to_targets())

        assert not result.valid
        assert {
            ErrorKind.DISTRIBUTION_MISMATCH,
            ErrorKind.TIME_OUT_OF_RANGE,
            ErrorKind.COUNT_MISMATCH,
        } <= result.error_kinds
        report = format_validation_report(result)
        assert "Status: INVALID" in report
        assert "count-mismatch" in report

    def test_malformed_generator_output(self, wire_problem, settings):
        """Should surface per-item errors from wire-format output and skip batch checks."""
        spec = build_specification("Standard", "Quiz", time_minutes=10, question_count=2, settings=settings)
        second = dict(wire_problem, ProblemId="gen-002", SequenceIndex=1, LinguisticComplexity=1.0)
        del second["Content"]

        result = validate_problems([wire_problem, second], spec.to_targets())

        assert result.invalid_problems == 1
        assert result.batch_errors == ()
        assert {e.kind for e in result.item_errors} == {ErrorKind.OUT_OF_RANGE, ErrorKind.MISSING_FIELD}
