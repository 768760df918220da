"""Model trainer for conversion scoring.

ALL TRAINING LOGIC MUST LIVE HERE.
This is the single source of truth for fitting the conversion classifiers.

Scorer contract:
    fit(name, feature_matrix, labels) -> fitted model
    predict_proba(fitted model, feature_matrix) -> probability vector

A failed fit of one classifier never aborts the others: fit_all() records
the failure and carries on.

Key Classes:
    Trainer - Canonical trainer for all classifiers

Usage:
    from callconv.pipeline import Trainer

    trainer = Trainer(seed=42)
    models, failures = trainer.fit_all(X_train, y_train)
    proba = Trainer.predict_proba(models["forest"], X_test)
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from callconv.config import RANDOM_SEED
from callconv.models.base import ConversionModel, ModelFitError
from callconv.models.registry import MODEL_NAMES, get_model

logger = logging.getLogger(__name__)


class Trainer:
    """Canonical trainer for all classifiers.

    ALL fitting flows through this class. No other file may fit models.
    """

    def __init__(
        self,
        seed: int = RANDOM_SEED,
        model_params: Optional[Dict[str, Dict[str, Any]]] = None,
    ):
        """Initialize trainer.

        Args:
            seed: Seed passed to every classifier.
            model_params: Per-model constructor overrides,
                e.g. {"forest": {"n_estimators": 200}}.
        """
        self.seed = seed
        self.model_params = model_params or {}

    def fit(self, name: str, X: pd.DataFrame, y: pd.Series) -> ConversionModel:
        """Fit one classifier by name.

        Raises:
            ModelFitError: If the classifier fails to fit.
            ValueError: If the name is unknown.
        """
        params = {"seed": self.seed, **self.model_params.get(name, {})}
        model = get_model(name, **params)

        print(f"Training {name} on {len(X):,} rows x {X.shape[1]} features...")
        model.fit(X, y)
        return model

    @staticmethod
    def predict_proba(model: ConversionModel, X: pd.DataFrame) -> np.ndarray:
        """Probability estimates from a fitted model."""
        return model.predict_proba(X)

    def fit_all(
        self,
        X: pd.DataFrame,
        y: pd.Series,
        names: Sequence[str] = MODEL_NAMES,
    ) -> Tuple[Dict[str, ConversionModel], Dict[str, str]]:
        """Fit every named classifier, isolating failures.

        Returns:
            (fitted models by name, failure message by name)
        """
        models: Dict[str, ConversionModel] = {}
        failures: Dict[str, str] = {}
        for name in names:
            try:
                models[name] = self.fit(name, X, y)
            except ModelFitError as e:
                logger.error(f"{name} failed to fit: {e}")
                failures[name] = str(e)

        if not models:
            logger.error(f"Every classifier failed: {failures}")
        return models, failures


# Re-export for convenience
__all__ = ["Trainer", "ModelFitError"]
