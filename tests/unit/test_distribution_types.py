"""
Unit tests for the Distribution and QuestionAllocation value types.
"""

import math

import pytest

from bloomspec.core.distribution import Distribution, QuestionAllocation
from bloomspec.core.errors import AllocationError, DistributionError
from bloomspec.core.taxonomy import COGNITIVE_LEVELS, CognitiveLevel


class TestDistribution:
    def test_lookup_by_level_value_or_key(self):
        distribution = Distribution(apply=0.4, analyze=0.6)
        assert distribution[CognitiveLevel.APPLY] == 0.4
        assert distribution["Analyze"] == 0.6
        assert distribution["analyze"] == 0.6

    def test_iterates_in_declaration_order(self):
        assert list(Distribution()) == list(COGNITIVE_LEVELS)

    def test_from_mapping_defaults_missing_levels(self):
        distribution = Distribution.from_mapping({"Remember": 0.5, CognitiveLevel.CREATE: 0.5})
        assert distribution.to_dict() == {
            "Remember": 0.5,
            "Understand": 0.0,
            "Apply": 0.0,
            "Analyze": 0.0,
            "Evaluate": 0.0,
            "Create": 0.5,
        }

    def test_from_mapping_rejects_unknown_level(self):
        with pytest.raises(DistributionError):
            Distribution.from_mapping({"Memorize": 1.0})

    @pytest.mark.parametrize("value", [-0.1, math.nan, math.inf, True, "0.5", None])
    def test_rejects_invalid_fractions(self, value):
        with pytest.raises(DistributionError):
            Distribution(remember=value)

    def test_integers_are_coerced_to_float(self):
        distribution = Distribution(apply=1)
        assert isinstance(distribution.apply, float)

    def test_is_frozen(self):
        distribution = Distribution(apply=1.0)
        with pytest.raises(AttributeError):
            distribution.apply = 0.5

    def test_total_and_percentages(self):
        distribution = Distribution(0.1, 0.2, 0.35, 0.25, 0.05, 0.05)
        assert distribution.total == pytest.approx(1.0)
        assert distribution.to_percentages()["Apply"] == 35.0


class TestQuestionAllocation:
    def test_total(self):
        allocation = QuestionAllocation(2, 4, 7, 5, 1, 1)
        assert allocation.total == 20
        assert allocation["Apply"] == 7

    @pytest.mark.parametrize("value", [-1, 1.5, True])
    def test_rejects_invalid_counts(self, value):
        with pytest.raises(AllocationError):
            QuestionAllocation(apply=value)

    def test_from_mapping(self):
        allocation = QuestionAllocation.from_mapping({CognitiveLevel.APPLY: 3, "Create": 1})
        assert allocation.values() == [0, 0, 3, 0, 0, 1]
