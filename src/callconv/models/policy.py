"""Decision and combination policies for probability estimates.

Two policy knobs live here rather than inside any model:
- the threshold that turns a probability into a 0/1 decision
- which models' probabilities are averaged into the final score
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Sequence, Tuple

import numpy as np

from callconv.config import COMBINE_MEMBERS, DECISION_THRESHOLD
from callconv.models.base import ModelFitError

logger = logging.getLogger(__name__)


def to_decision(proba: np.ndarray, threshold: float = DECISION_THRESHOLD) -> np.ndarray:
    """1 where proba >= threshold, else 0."""
    return (np.asarray(proba, dtype=float) >= threshold).astype(int)


def combine_probabilities(
    predictions: Dict[str, np.ndarray],
    members: Sequence[str] = COMBINE_MEMBERS,
) -> np.ndarray:
    """Elementwise mean of the member models' probabilities.

    Members absent from `predictions` (failed fits) are skipped with a
    warning.

    Raises:
        ModelFitError: If no member is available.
    """
    available = [m for m in members if m in predictions]
    missing = [m for m in members if m not in predictions]
    if not available:
        raise ModelFitError(f"No predictions for any combination member {list(members)}")
    if missing:
        logger.warning(f"Combining without failed members {missing}; using {available}")

    stacked = np.vstack([np.asarray(predictions[m], dtype=float) for m in available])
    return stacked.mean(axis=0)


@dataclass(frozen=True)
class CombinePolicy:
    """Which models to average, and where to cut for decisions."""

    members: Tuple[str, ...] = tuple(COMBINE_MEMBERS)
    threshold: float = DECISION_THRESHOLD

    def combine(self, predictions: Dict[str, np.ndarray]) -> np.ndarray:
        return combine_probabilities(predictions, self.members)

    def decide(self, proba: np.ndarray) -> np.ndarray:
        return to_decision(proba, self.threshold)
