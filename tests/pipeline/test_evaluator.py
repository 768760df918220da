"""Tests for Evaluator metrics."""

import json

import numpy as np
import pytest

from callconv.pipeline import ClassificationMetrics, Evaluator


class TestEvaluate:
    """Tests for Evaluator.evaluate()."""

    def test_perfect_separation_gives_auc_one(self):
        y = np.array([0, 0, 0, 1, 1])
        proba = np.array([0.1, 0.2, 0.3, 0.8, 0.9])
        metrics = Evaluator().evaluate("forest", y, proba)
        assert metrics.auc == pytest.approx(1.0)
        assert metrics.accuracy == 1.0

    def test_reversed_scores_give_auc_zero(self):
        y = np.array([0, 0, 1, 1])
        proba = np.array([0.9, 0.8, 0.2, 0.1])
        assert Evaluator().evaluate("tree", y, proba).auc == pytest.approx(0.0)

    def test_confusion_matrix_layout(self):
        y = np.array([0, 0, 1, 1, 1])
        proba = np.array([0.6, 0.1, 0.7, 0.4, 0.5])
        metrics = Evaluator().evaluate("logistic", y, proba)
        # [[tn, fp], [fn, tp]]
        assert metrics.confusion == [[1, 1], [1, 2]]
        assert metrics.accuracy == pytest.approx(3 / 5)

    def test_threshold_changes_accuracy_not_auc(self):
        y = np.array([0, 0, 1, 1])
        proba = np.array([0.1, 0.2, 0.6, 0.35])
        low = Evaluator(threshold=0.3).evaluate("m", y, proba)
        high = Evaluator(threshold=0.5).evaluate("m", y, proba)
        assert low.accuracy != high.accuracy
        assert low.auc == high.auc

    def test_roc_keeps_every_threshold(self):
        y = np.array([0, 1, 0, 1, 0, 1])
        proba = np.array([0.1, 0.2, 0.3, 0.4, 0.5, 0.6])
        metrics = Evaluator().evaluate("m", y, proba)
        # One point per distinct score plus the origin
        assert len(metrics.fpr) == 7
        assert metrics.fpr[0] == 0.0 and metrics.tpr[0] == 0.0
        assert metrics.fpr[-1] == 1.0 and metrics.tpr[-1] == 1.0
        assert list(metrics.roc_points.columns) == ["fpr", "tpr"]

    def test_length_mismatch_raises(self):
        with pytest.raises(ValueError, match="labels"):
            Evaluator().evaluate("m", [0, 1, 1], [0.5, 0.5])

    def test_single_class_raises(self):
        with pytest.raises(ValueError, match="both classes"):
            Evaluator().evaluate("m", [1, 1, 1], [0.2, 0.5, 0.9])


class TestCompareAndSave:
    """Tests for Evaluator.compare() and save_results()."""

    @pytest.fixture
    def results(self):
        evaluator = Evaluator()
        y = np.array([0, 0, 1, 1])
        return {
            "logistic": evaluator.evaluate("logistic", y, np.array([0.3, 0.6, 0.4, 0.9])),
            "forest": evaluator.evaluate("forest", y, np.array([0.1, 0.2, 0.8, 0.9])),
        }

    def test_compare_ranks_by_auc(self, results):
        table = Evaluator.compare(results)
        assert table["model"].tolist() == ["forest", "logistic"]
        assert list(table.columns) == ["model", "accuracy", "auc", "n_samples"]

    def test_save_results_json(self, results, tmp_path):
        out = tmp_path / "nested" / "report.json"
        Evaluator.save_results(results, out, failures={"tree": "too few rows"})
        report = json.loads(out.read_text())
        assert set(report["models"]) == {"logistic", "forest"}
        assert report["models"]["forest"]["auc"] == 1.0
        assert report["models"]["forest"]["confusion_matrix"] == [[2, 0], [0, 2]]
        assert report["failures"] == {"tree": "too few rows"}

    def test_to_dict_rounds(self):
        metrics = ClassificationMetrics(
            model_name="m", accuracy=0.123456, auc=0.654321, threshold=0.5,
            confusion=[[1, 0], [0, 1]],
        )
        d = metrics.to_dict()
        assert d["accuracy"] == 0.1235
        assert d["auc"] == 0.6543
