"""Single decision tree with cross-validated cost-complexity pruning.

Fitting:
1. Grow a tree with a minimum split size
2. Take candidate pruning strengths (ccp_alpha) from the tree's
   cost-complexity path, floored at TREE_CCP_ALPHA_FLOOR
3. Score each candidate by k-fold (default 10) cross-validated error
4. Refit with the candidate of lowest error; ties go to the larger alpha
   (the smaller tree)

The candidate table is kept on the model as `cv_table_`.
"""

from __future__ import annotations

from typing import Any, Dict

import numpy as np
import pandas as pd
from sklearn.model_selection import StratifiedKFold, cross_val_score
from sklearn.tree import DecisionTreeClassifier

from callconv.config import CV_FOLDS, RANDOM_SEED, TREE_CCP_ALPHA_FLOOR, TREE_MIN_SAMPLES_SPLIT
from callconv.models.base import ConversionModel, ModelFitError

# Upper bound on candidates scored by CV; long paths are thinned evenly
MAX_ALPHA_CANDIDATES = 30


class PrunedTreeModel(ConversionModel):
    """Decision tree pruned by cross-validated complexity cost."""

    name = "tree"

    def __init__(
        self,
        seed: int = RANDOM_SEED,
        min_samples_split: int = TREE_MIN_SAMPLES_SPLIT,
        ccp_alpha_floor: float = TREE_CCP_ALPHA_FLOOR,
        cv_folds: int = CV_FOLDS,
    ):
        super().__init__(seed=seed)
        self.min_samples_split = min_samples_split
        self.ccp_alpha_floor = ccp_alpha_floor
        self.cv_folds = cv_folds
        self.ccp_alpha_: float = ccp_alpha_floor
        self.cv_table_: pd.DataFrame = pd.DataFrame(columns=["ccp_alpha", "cv_error"])

    @property
    def params(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "min_samples_split": self.min_samples_split,
            "ccp_alpha_floor": self.ccp_alpha_floor,
            "cv_folds": self.cv_folds,
        }

    def _tree(self, ccp_alpha: float) -> DecisionTreeClassifier:
        return DecisionTreeClassifier(
            min_samples_split=self.min_samples_split,
            ccp_alpha=ccp_alpha,
            random_state=self.seed,
        )

    def _candidate_alphas(self, X: np.ndarray, y: np.ndarray) -> np.ndarray:
        path = self._tree(0.0).cost_complexity_pruning_path(X, y)
        alphas = path.ccp_alphas[path.ccp_alphas >= self.ccp_alpha_floor]
        alphas = np.unique(np.concatenate([[self.ccp_alpha_floor], alphas]))
        if len(alphas) > MAX_ALPHA_CANDIDATES:
            idx = np.unique(np.linspace(0, len(alphas) - 1, MAX_ALPHA_CANDIDATES).round().astype(int))
            alphas = alphas[idx]
        return alphas

    def _fit(self, X: np.ndarray, y: np.ndarray) -> None:
        n_folds = min(self.cv_folds, int(np.bincount(y).min()))
        if n_folds < 2:
            raise ModelFitError(f"{self.name}: too few minority rows for {self.cv_folds}-fold CV")

        cv = StratifiedKFold(n_splits=n_folds, shuffle=True, random_state=self.seed)
        alphas = self._candidate_alphas(X, y)
        errors = [
            1.0 - cross_val_score(self._tree(alpha), X, y, cv=cv, scoring="accuracy").mean()
            for alpha in alphas
        ]
        self.cv_table_ = pd.DataFrame({"ccp_alpha": alphas, "cv_error": errors})

        errors = np.asarray(errors)
        best = int(np.flatnonzero(errors == errors.min())[-1])
        self.ccp_alpha_ = float(alphas[best])
        self._model = self._tree(self.ccp_alpha_).fit(X, y)

    def _predict_proba(self, X: np.ndarray) -> np.ndarray:
        return self._model.predict_proba(X)[:, self._positive_index()]

    @property
    def n_leaves(self) -> int:
        if not self.is_fitted:
            raise ValueError(f"{self.name}: call fit() first")
        return int(self._model.get_n_leaves())
