"""Tests for decision threshold and probability combination."""

import logging

import numpy as np
import pytest

from callconv.models import CombinePolicy, ModelFitError, combine_probabilities, to_decision


class TestToDecision:
    """Tests for to_decision()."""

    def test_threshold_inclusive(self):
        proba = np.array([0.1, 0.5, 0.49, 0.9])
        assert to_decision(proba).tolist() == [0, 1, 0, 1]

    def test_custom_threshold(self):
        proba = np.array([0.1, 0.3, 0.5])
        assert to_decision(proba, threshold=0.3).tolist() == [0, 1, 1]


class TestCombineProbabilities:
    """Tests for combine_probabilities()."""

    def test_mean_of_members(self):
        predictions = {
            "logistic": np.array([0.2, 0.8]),
            "forest": np.array([0.4, 0.6]),
            "tree": np.array([1.0, 1.0]),
        }
        combined = combine_probabilities(predictions, ["logistic", "forest"])
        np.testing.assert_allclose(combined, [0.3, 0.7])

    def test_order_of_members_irrelevant(self):
        predictions = {"logistic": np.array([0.1, 0.9]), "forest": np.array([0.3, 0.2])}
        np.testing.assert_allclose(
            combine_probabilities(predictions, ["logistic", "forest"]),
            combine_probabilities(predictions, ["forest", "logistic"]),
        )

    def test_missing_member_skipped_with_warning(self, caplog):
        predictions = {"forest": np.array([0.4, 0.6])}
        with caplog.at_level(logging.WARNING):
            combined = combine_probabilities(predictions, ["logistic", "forest"])
        np.testing.assert_allclose(combined, [0.4, 0.6])
        assert "logistic" in caplog.text

    def test_no_members_available_raises(self):
        with pytest.raises(ModelFitError):
            combine_probabilities({"tree": np.array([0.5])}, ["logistic", "forest"])


class TestCombinePolicy:
    """Tests for CombinePolicy."""

    def test_defaults(self):
        policy = CombinePolicy()
        assert policy.members == ("logistic", "forest")
        assert policy.threshold == 0.5

    def test_swappable_members(self):
        policy = CombinePolicy(members=("tree",), threshold=0.7)
        predictions = {"tree": np.array([0.6, 0.8]), "forest": np.array([0.0, 0.0])}
        combined = policy.combine(predictions)
        np.testing.assert_allclose(combined, [0.6, 0.8])
        assert policy.decide(combined).tolist() == [0, 1]
