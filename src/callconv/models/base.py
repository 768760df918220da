"""Base model interface for conversion classifiers.

Provides the shared fit / predict_proba contract, feature validation and
joblib persistence. Each classifier implements only `_fit` and
`_predict_proba` on plain arrays.

GUARDRAIL: Fitting never proceeds on non-finite features. A failed fit
raises ModelFitError so the caller can drop that one model and continue.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

import joblib
import numpy as np
import pandas as pd

from callconv.config import RANDOM_SEED


class ModelFitError(RuntimeError):
    """A classifier could not be fitted or applied."""


class ConversionModel(ABC):
    """Abstract base class for classifiers that estimate P(conversion=1).

    Subclasses set `name` and implement `_fit()` / `_predict_proba()`.
    """

    name: str = "base"

    def __init__(self, seed: int = RANDOM_SEED):
        self.seed = seed
        self._model: Any = None
        self._feature_cols: List[str] = []

    @property
    def feature_cols(self) -> List[str]:
        """Feature columns this model was fitted on."""
        return self._feature_cols.copy()

    @property
    def is_fitted(self) -> bool:
        return self._model is not None

    @property
    def params(self) -> Dict[str, Any]:
        """Constructor parameters, for reporting."""
        return {"seed": self.seed}

    def fit(self, X: pd.DataFrame, y: pd.Series) -> "ConversionModel":
        """Fit on a feature frame and 0/1 label vector.

        Raises:
            ModelFitError: On non-finite features, a single-class label, or
                a classifier-specific failure.
        """
        self._feature_cols = list(X.columns) if isinstance(X, pd.DataFrame) else []
        values = self._check_finite(np.asarray(X, dtype=float), "fit")
        labels = np.asarray(y).astype(int)
        if len(np.unique(labels)) < 2:
            raise ModelFitError(f"{self.name}: need both classes to fit, got {np.unique(labels)}")

        self._fit(values, labels)
        return self

    def predict_proba(self, X: pd.DataFrame) -> np.ndarray:
        """Probability of conversion per row, in [0, 1]."""
        if not self.is_fitted:
            raise ValueError(f"{self.name}: call fit() first")
        return self._predict_proba(self._prepare_features(X))

    @abstractmethod
    def _fit(self, X: np.ndarray, y: np.ndarray) -> None:
        pass

    @abstractmethod
    def _predict_proba(self, X: np.ndarray) -> np.ndarray:
        pass

    def _positive_index(self) -> int:
        return int(np.flatnonzero(self._model.classes_ == 1)[0])

    def _check_finite(self, values: np.ndarray, stage: str) -> np.ndarray:
        if not np.isfinite(values).all():
            bad = np.flatnonzero(~np.isfinite(values).all(axis=0))
            cols = [self._feature_cols[i] for i in bad] if self._feature_cols else list(bad)
            raise ModelFitError(f"{self.name}: non-finite values at {stage} in columns {cols[:10]}")
        return values

    def _prepare_features(self, X: pd.DataFrame) -> np.ndarray:
        """Extract and validate features in fitted column order.

        Raises:
            ValueError: If required columns are missing.
            ModelFitError: If any value is non-finite.
        """
        if isinstance(X, pd.DataFrame) and self._feature_cols:
            missing = [c for c in self._feature_cols if c not in X.columns]
            if missing:
                raise ValueError(f"Missing required feature columns: {missing}")
            X = X[self._feature_cols]
        return self._check_finite(np.asarray(X, dtype=float), "predict")

    def save(self, model_dir: Path, filename: Optional[str] = None) -> Path:
        """Save model to disk.

        Args:
            model_dir: Directory to save to
            filename: Name of the model file (default: <name>.joblib)

        Returns:
            Path to saved model
        """
        model_dir = Path(model_dir)
        model_dir.mkdir(parents=True, exist_ok=True)
        path = model_dir / (filename or f"{self.name}.joblib")

        joblib.dump({
            "class": type(self),
            "model": self._model,
            "feature_cols": self._feature_cols,
            "params": self.params,
        }, path)

        return path

    @classmethod
    def load(cls, path: Path) -> "ConversionModel":
        """Load a model saved with save()."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Model artifact not found: {path}")

        data = joblib.load(path)
        instance = data["class"](**data["params"])
        instance._model = data["model"]
        instance._feature_cols = data["feature_cols"]
        return instance


__all__ = ["ConversionModel", "ModelFitError"]
