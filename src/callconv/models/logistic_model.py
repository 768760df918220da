"""Logistic regression conversion model.

Unpenalized maximum-likelihood fit over all encoded features;
P(conversion=1 | x) = sigmoid(w . x + b).

Non-convergence is a failed fit, not a warning: coefficients from a
diverging solver (typically quasi-separated rare levels) are not usable.
"""

from __future__ import annotations

import warnings
from typing import Any, Dict

import numpy as np
from sklearn.exceptions import ConvergenceWarning
from sklearn.linear_model import LogisticRegression

from callconv.config import LOGISTIC_MAX_ITER, RANDOM_SEED
from callconv.models.base import ConversionModel, ModelFitError


class LogisticModel(ConversionModel):
    """Maximum-likelihood logistic regression."""

    name = "logistic"

    def __init__(self, seed: int = RANDOM_SEED, max_iter: int = LOGISTIC_MAX_ITER):
        super().__init__(seed=seed)
        self.max_iter = max_iter

    @property
    def params(self) -> Dict[str, Any]:
        return {"seed": self.seed, "max_iter": self.max_iter}

    def _fit(self, X: np.ndarray, y: np.ndarray) -> None:
        # C=inf: no regularization, plain maximum likelihood
        model = LogisticRegression(C=np.inf, max_iter=self.max_iter, random_state=self.seed)
        with warnings.catch_warnings():
            warnings.simplefilter("error", ConvergenceWarning)
            try:
                model.fit(X, y)
            except ConvergenceWarning as e:
                raise ModelFitError(f"{self.name}: solver did not converge in {self.max_iter} iterations") from e
        if not np.isfinite(model.coef_).all():
            raise ModelFitError(f"{self.name}: coefficients diverged")
        self._model = model

    def _predict_proba(self, X: np.ndarray) -> np.ndarray:
        return self._model.predict_proba(X)[:, self._positive_index()]

    @property
    def coefficients(self) -> Dict[str, float]:
        """Fitted coefficient per feature column (log-odds scale)."""
        if not self.is_fitted:
            raise ValueError(f"{self.name}: call fit() first")
        names = self._feature_cols or [f"x{i}" for i in range(self._model.coef_.shape[1])]
        return dict(zip(names, self._model.coef_[0].tolist()))
