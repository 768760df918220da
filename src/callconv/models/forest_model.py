"""Random forest conversion model.

Bootstrap samples, a random sqrt-sized feature subset per split. The
probability is the fraction of trees voting for conversion, not the mean
of leaf class frequencies.
"""

from __future__ import annotations

from typing import Any, Dict

import numpy as np
from sklearn.ensemble import RandomForestClassifier

from callconv.config import FOREST_MIN_SAMPLES_LEAF, FOREST_N_ESTIMATORS, RANDOM_SEED
from callconv.models.base import ConversionModel


class ForestModel(ConversionModel):
    """Random forest with vote-fraction probabilities."""

    name = "forest"

    def __init__(
        self,
        seed: int = RANDOM_SEED,
        n_estimators: int = FOREST_N_ESTIMATORS,
        min_samples_leaf: int = FOREST_MIN_SAMPLES_LEAF,
    ):
        super().__init__(seed=seed)
        self.n_estimators = n_estimators
        self.min_samples_leaf = min_samples_leaf

    @property
    def params(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "n_estimators": self.n_estimators,
            "min_samples_leaf": self.min_samples_leaf,
        }

    def _fit(self, X: np.ndarray, y: np.ndarray) -> None:
        self._model = RandomForestClassifier(
            n_estimators=self.n_estimators,
            min_samples_leaf=self.min_samples_leaf,
            max_features="sqrt",
            bootstrap=True,
            random_state=self.seed,
        ).fit(X, y)

    def _predict_proba(self, X: np.ndarray) -> np.ndarray:
        # Sub-trees predict encoded class indices
        positive = self._positive_index()
        votes = np.stack([tree.predict(X) for tree in self._model.estimators_])
        return (votes == positive).mean(axis=0)

    @property
    def feature_importances(self) -> Dict[str, float]:
        """Mean impurity decrease per feature column."""
        if not self.is_fitted:
            raise ValueError(f"{self.name}: call fit() first")
        names = self._feature_cols or [f"x{i}" for i in range(len(self._model.feature_importances_))]
        return dict(zip(names, self._model.feature_importances_.tolist()))
