"""
Pipeline Module

End-to-end workflow orchestration for conversion scoring.

Components:
    Pipeline  - Full workflow (gather → clean → encode → split → train → evaluate → score)
    Trainer   - Classifier fitting with per-model failure isolation
    Evaluator - Accuracy, ROC and AUC on the test partition
"""

from callconv.pipeline.evaluator import ClassificationMetrics, Evaluator
from callconv.pipeline.runner import Pipeline
from callconv.pipeline.trainer import Trainer

__all__ = [
    "Pipeline",
    "Trainer",
    "Evaluator",
    "ClassificationMetrics",
]
