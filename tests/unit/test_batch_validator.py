"""
Unit tests for batch conformance validation.
"""

import pytest

from bloomspec.core.distribution import Distribution
from bloomspec.core.errors import ErrorKind
from bloomspec.core.tables import BASELINE_DISTRIBUTIONS
from bloomspec.core.taxonomy import AbilityLevel, CognitiveLevel
from bloomspec.validation.batch_validator import (
    validate_distribution_conformance,
    validate_problems,
    validate_question_count,
    validate_sequence_indices,
    validate_total_time,
)
from bloomspec.validation.models import AssessmentTargets, GeneratedProblem, ValidationConfig

STANDARD = BASELINE_DISTRIBUTIONS[AbilityLevel.STANDARD]


@pytest.fixture
def standard_targets():
    return AssessmentTargets(total_time_minutes=60, distribution=STANDARD, expected_question_count=20)


def parsed(problems):
    return [GeneratedProblem.model_validate(p) for p in problems]


class TestValidateProblems:
    def test_conforming_batch_passes(self, standard_batch, standard_targets):
        """Should accept a batch matching the Standard target, time and count."""
        result = validate_problems(standard_batch, standard_targets)

        assert result.valid
        assert result.total_problems == 20
        assert result.valid_problems == 20
        assert result.item_errors == []
        assert result.batch_errors == ()
        assert result.statistics.total_time == 60

    def test_item_failure_skips_batch_checks(self, standard_batch, standard_targets):
        """Should report item errors and run no batch checks when any item fails."""
        standard_batch[3]["complexity"] = 0.0
        # Would also fail the count check if batch checks ran
        result = validate_problems(standard_batch[:10], standard_targets)

        assert not result.valid
        assert result.invalid_problems == 1
        assert result.batch_errors == ()
        assert result.statistics is None
        assert result.item_errors[0].problem_index == 3

    def test_gap_in_sequence(self, make_problem):
        """Should flag indices [0, 1, 3] as not contiguous."""
        problems = [make_problem(i, sequence_index=s) for i, s in enumerate([0, 1, 3])]
        targets = AssessmentTargets(total_time_minutes=9, distribution=Distribution(apply=1.0))

        result = validate_problems(problems, targets)

        assert result.error_kinds == {ErrorKind.SEQUENCE_NOT_CONTIGUOUS}
        error = result.batch_errors[0]
        assert error.details["actual"] == [0, 1, 3]
        assert error.details["expected"] == [0, 1, 2]

    def test_input_order_irrelevant(self, make_problem):
        problems = [make_problem(i, sequence_index=s) for i, s in enumerate([2, 0, 1])]
        targets = AssessmentTargets(total_time_minutes=9, distribution=Distribution(apply=1.0))
        assert validate_problems(problems, targets).valid

    def test_time_twenty_percent_over(self, standard_batch):
        """Should flag 60 minutes against a 50 minute target (±10%)."""
        targets = AssessmentTargets(total_time_minutes=50, distribution=STANDARD)
        result = validate_problems(standard_batch, targets)
        assert result.error_kinds == {ErrorKind.TIME_OUT_OF_RANGE}

    def test_count_mismatch(self, standard_batch):
        targets = AssessmentTargets(total_time_minutes=60, distribution=STANDARD, expected_question_count=25)
        result = validate_problems(standard_batch, targets)
        assert result.error_kinds == {ErrorKind.COUNT_MISMATCH}
        assert result.batch_errors[0].details == {"actual": 20, "expected": 25}

    def test_multiple_batch_errors_co_occur(self, make_problem):
        problems = [make_problem(i, sequence_index=s) for i, s in enumerate([0, 0, 5])]
        targets = AssessmentTargets(
            total_time_minutes=100,
            distribution=STANDARD,
            expected_question_count=4,
        )
        result = validate_problems(problems, targets)
        assert result.error_kinds == {
            ErrorKind.SEQUENCE_NOT_CONTIGUOUS,
            ErrorKind.TIME_OUT_OF_RANGE,
            ErrorKind.DISTRIBUTION_MISMATCH,
            ErrorKind.COUNT_MISMATCH,
        }

    def test_empty_batch_is_invalid(self):
        """Should fail an empty batch on time and distribution without crashing."""
        targets = AssessmentTargets(total_time_minutes=30, distribution=STANDARD)
        result = validate_problems([], targets)

        assert not result.valid
        assert result.total_problems == 0
        assert ErrorKind.TIME_OUT_OF_RANGE in result.error_kinds
        assert ErrorKind.DISTRIBUTION_MISMATCH in result.error_kinds

    def test_mapping_targets_accepted(self, standard_batch):
        targets = AssessmentTargets(
            total_time_minutes=60,
            distribution={"Remember": 0.10, "Understand": 0.20, "Apply": 0.35,
                          "Analyze": 0.25, "Evaluate": 0.05, "Create": 0.05},
        )
        assert validate_problems(standard_batch, targets).valid

    def test_custom_tolerances(self, standard_batch):
        targets = AssessmentTargets(total_time_minutes=50, distribution=STANDARD)
        config = ValidationConfig(time_allowance_percent=25)
        assert validate_problems(standard_batch, targets, config).valid

    def test_relaxed_required_fields_do_not_abort_batch(self, make_problem):
        """Should return a result when optional fields are left out of conforming items."""
        config = ValidationConfig(required_fields=("problem_id", "cognitive_level", "estimated_time_minutes"))
        problems = []
        for i in range(2):
            problem = make_problem(i)
            for name in ("content", "complexity", "difficulty", "response_type"):
                del problem[name]
            problems.append(problem)
        targets = AssessmentTargets(total_time_minutes=6, distribution=Distribution(apply=1.0))

        result = validate_problems(problems, targets, config)

        assert result.valid
        assert result.statistics.average_complexity == 0.0
        assert result.statistics.type_distribution == {}

    def test_relaxed_config_still_reports_batch_errors(self, make_problem):
        config = ValidationConfig(required_fields=("problem_id", "cognitive_level", "estimated_time_minutes"))
        problem = make_problem(0)
        del problem["content"]
        targets = AssessmentTargets(total_time_minutes=30, distribution=Distribution(apply=1.0))

        result = validate_problems([problem], targets, config)

        assert result.error_kinds == {ErrorKind.TIME_OUT_OF_RANGE}

    def test_to_dict(self, standard_batch, standard_targets):
        data = validate_problems(standard_batch, standard_targets).to_dict()
        assert data["valid"] is True
        assert data["statistics"]["total_problems"] == 20


class TestSequenceIndices:
    def test_skipped_without_indices(self, make_problem):
        problems = [make_problem(i, sequence_index=None) for i in range(3)]
        assert validate_sequence_indices(parsed(problems)) is None

    def test_duplicate_rejected(self, make_problem):
        problems = [make_problem(i, sequence_index=0) for i in range(2)]
        error = validate_sequence_indices(parsed(problems))
        assert error.kind == ErrorKind.SEQUENCE_NOT_CONTIGUOUS

    def test_partial_indices_rejected(self, make_problem):
        """Should treat an item without an index as a gap once indices are in use."""
        problems = [
            make_problem(0, sequence_index=0),
            make_problem(1, sequence_index=None),
            make_problem(2, sequence_index=1),
        ]
        error = validate_sequence_indices(parsed(problems))
        assert error.details["missing_index_count"] == 1


class TestTotalTime:
    @pytest.mark.parametrize("total", [45, 50, 55])
    def test_within_allowance(self, total):
        assert validate_total_time(total, 50) is None

    @pytest.mark.parametrize("total", [44, 56])
    def test_outside_allowance(self, total):
        error = validate_total_time(total, 50)
        assert error.kind == ErrorKind.TIME_OUT_OF_RANGE
        assert error.details["lower_bound"] == 45.0
        assert error.details["upper_bound"] == 55.0
        assert "[45, 55]" in error.message


class TestDistributionConformance:
    def test_each_failing_category_reported(self):
        """Should produce one error per category outside ±5 points."""
        observed = Distribution(0.25, 0.20, 0.20, 0.25, 0.05, 0.05)
        errors = validate_distribution_conformance(observed, STANDARD)

        assert [e.details["level"] for e in errors] == ["Remember", "Apply"]
        assert all(e.kind == ErrorKind.DISTRIBUTION_MISMATCH for e in errors)

    def test_exact_boundary_passes(self):
        """Should accept a category exactly 5 points off its target."""
        observed = Distribution(0.10, 0.20, 0.30, 0.30, 0.05, 0.05)
        assert validate_distribution_conformance(observed, STANDARD) == []

    def test_tolerance_is_absolute_points(self):
        """Should compare additively: 0.05 vs 0.09 is within 5 points."""
        target = Distribution(create=0.05, apply=0.95)
        observed = Distribution(create=0.09, apply=0.91)
        assert validate_distribution_conformance(observed, target) == []

    def test_custom_tolerance(self):
        observed = Distribution(0.10, 0.20, 0.30, 0.30, 0.05, 0.05)
        errors = validate_distribution_conformance(observed, STANDARD, tolerance_percent=2)
        assert {e.details["level"] for e in errors} == {
            CognitiveLevel.APPLY.value,
            CognitiveLevel.ANALYZE.value,
        }


class TestQuestionCount:
    def test_no_expectation(self):
        assert validate_question_count(7, None) is None

    def test_match(self):
        assert validate_question_count(7, 7) is None

    def test_mismatch(self):
        error = validate_question_count(6, 7)
        assert error.kind == ErrorKind.COUNT_MISMATCH
        assert "6" in error.message and "7" in error.message
