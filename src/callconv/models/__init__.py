"""Models module - classifiers, dataset splitting, and scoring policy.

This module contains:
- base: ConversionModel interface and ModelFitError
- logistic_model, tree_model, forest_model: the three classifiers
- registry: Model lookup by name
- train_val_test: Stratified split + training-only upsampling
- policy: Decision threshold and probability combination

For construction by name, use callconv.models.registry.get_model().
"""

from callconv.models.base import ConversionModel, ModelFitError
from callconv.models.forest_model import ForestModel
from callconv.models.logistic_model import LogisticModel
from callconv.models.policy import CombinePolicy, combine_probabilities, to_decision
from callconv.models.registry import MODEL_NAMES, get_model
from callconv.models.train_val_test import (
    DatasetBuilder,
    DatasetConfig,
    Datasets,
    upsample_minority,
)
from callconv.models.tree_model import PrunedTreeModel

__all__ = [
    # Interface
    "ConversionModel",
    "ModelFitError",
    # Classifiers
    "LogisticModel",
    "PrunedTreeModel",
    "ForestModel",
    "get_model",
    "MODEL_NAMES",
    # Dataset splitting
    "DatasetBuilder",
    "DatasetConfig",
    "Datasets",
    "upsample_minority",
    # Policy
    "CombinePolicy",
    "combine_probabilities",
    "to_decision",
]
