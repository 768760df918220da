"""Model evaluation on the held-out test partition.

Provides separate evaluation logic (decoupled from training). Three
measures are kept side by side; none is authoritative:
- Accuracy of thresholded decisions (confusion matrix)
- ROC curve over every distinct predicted probability
- AUC by trapezoidal integration of the ROC points

Key Classes:
    ClassificationMetrics - Container for one model's results
    Evaluator - Computes metrics and ranks models

Usage:
    from callconv.pipeline.evaluator import Evaluator

    evaluator = Evaluator(threshold=0.5)
    metrics = evaluator.evaluate("forest", y_test, proba)
    metrics.print_summary()
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np
import pandas as pd
from sklearn.metrics import accuracy_score, auc, confusion_matrix, roc_curve

from callconv.config import DECISION_THRESHOLD
from callconv.models.policy import to_decision


@dataclass
class ClassificationMetrics:
    """Container for evaluation results of one model."""

    model_name: str
    accuracy: float
    auc: float
    threshold: float
    confusion: List[List[int]]  # [[tn, fp], [fn, tp]]
    fpr: List[float] = field(default_factory=list)
    tpr: List[float] = field(default_factory=list)
    n_samples: int = 0

    @property
    def roc_points(self) -> pd.DataFrame:
        return pd.DataFrame({"fpr": self.fpr, "tpr": self.tpr})

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "model": self.model_name,
            "accuracy": round(self.accuracy, 4),
            "auc": round(self.auc, 4),
            "threshold": self.threshold,
            "confusion_matrix": self.confusion,
            "roc": {"fpr": [round(v, 4) for v in self.fpr], "tpr": [round(v, 4) for v in self.tpr]},
            "n_samples": self.n_samples,
        }

    def print_summary(self):
        """Print evaluation summary."""
        (tn, fp), (fn, tp) = self.confusion
        print(f"\n{'='*60}")
        print(f"Evaluation: {self.model_name.upper()}")
        print(f"{'='*60}")
        print(f"Accuracy (t={self.threshold:.2f}):  {self.accuracy:.4f}")
        print(f"AUC:                    {self.auc:.4f}")
        print(f"Confusion:              TN={tn} FP={fp} FN={fn} TP={tp}")
        print(f"\nSamples:                {self.n_samples}")


class Evaluator:
    """Evaluate probability estimates against true labels.

    Attributes:
        threshold: Probability cut-off for confusion-matrix decisions.
    """

    def __init__(self, threshold: float = DECISION_THRESHOLD):
        self.threshold = threshold

    def evaluate(self, model_name: str, y_true, proba) -> ClassificationMetrics:
        """Compute accuracy, confusion matrix, ROC and AUC.

        Raises:
            ValueError: If lengths differ or y_true holds a single class.
        """
        y_true = np.asarray(y_true).astype(int)
        proba = np.asarray(proba, dtype=float)
        if len(y_true) != len(proba):
            raise ValueError(f"{len(y_true)} labels vs {len(proba)} predictions")
        if len(np.unique(y_true)) < 2:
            raise ValueError("ROC/AUC needs both classes in y_true")

        decisions = to_decision(proba, self.threshold)
        cm = confusion_matrix(y_true, decisions, labels=[0, 1])
        fpr, tpr, _ = roc_curve(y_true, proba, drop_intermediate=False)

        return ClassificationMetrics(
            model_name=model_name,
            accuracy=float(accuracy_score(y_true, decisions)),
            auc=float(auc(fpr, tpr)),
            threshold=self.threshold,
            confusion=cm.astype(int).tolist(),
            fpr=fpr.tolist(),
            tpr=tpr.tolist(),
            n_samples=len(y_true),
        )

    @staticmethod
    def compare(results: Dict[str, ClassificationMetrics]) -> pd.DataFrame:
        """Side-by-side table ranked by AUC (highest first)."""
        rows = [
            {"model": name, "accuracy": m.accuracy, "auc": m.auc, "n_samples": m.n_samples}
            for name, m in results.items()
        ]
        table = pd.DataFrame(rows, columns=["model", "accuracy", "auc", "n_samples"])
        return table.sort_values("auc", ascending=False).reset_index(drop=True)

    @staticmethod
    def save_results(
        results: Dict[str, ClassificationMetrics],
        out_path: Path,
        failures: Optional[Dict[str, str]] = None,
    ) -> str:
        """Save evaluation results (and any per-model failures) to JSON.

        Returns:
            Path to saved file
        """
        out_path = Path(out_path)
        out_path.parent.mkdir(parents=True, exist_ok=True)

        report = {
            "models": {name: m.to_dict() for name, m in results.items()},
            "failures": failures or {},
        }
        with open(out_path, "w") as f:
            json.dump(report, f, indent=2)

        print(f"\nResults saved to {out_path}")
        return str(out_path)
