"""Model registry for conversion classifiers.

Provides get_model(name) to construct one of the interchangeable
classifiers. No fallbacks. No auto-selection.
"""

from __future__ import annotations

from typing import Dict, List, Literal, Type

from callconv.models.base import ConversionModel
from callconv.models.forest_model import ForestModel
from callconv.models.logistic_model import LogisticModel
from callconv.models.tree_model import PrunedTreeModel


# Type alias for classifier names
ModelName = Literal["logistic", "tree", "forest"]

MODEL_CLASSES: Dict[str, Type[ConversionModel]] = {
    "logistic": LogisticModel,
    "tree": PrunedTreeModel,
    "forest": ForestModel,
}

MODEL_NAMES: List[str] = list(MODEL_CLASSES)


def get_model(name: ModelName, **params) -> ConversionModel:
    """Construct an unfitted classifier by name.

    Args:
        name: One of "logistic", "tree", "forest"
        **params: Constructor parameters (seed, n_estimators, ...)

    Raises:
        ValueError: If name is unknown
    """
    if name not in MODEL_CLASSES:
        raise ValueError(
            f"Unknown model: {name}. "
            f"Must be one of: {MODEL_NAMES}"
        )
    return MODEL_CLASSES[name](**params)


__all__ = ["get_model", "MODEL_CLASSES", "MODEL_NAMES", "ModelName"]
