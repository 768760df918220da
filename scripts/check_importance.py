#!/usr/bin/env python3
"""Check feature importance / coefficients for saved conversion models."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from callconv.config import MODELS_DIR
from callconv.models import ConversionModel

forest_path = MODELS_DIR / "forest.joblib"
if forest_path.exists():
    forest = ConversionModel.load(forest_path)
    print("=== FOREST MODEL ===")
    print("Feature Importance (impurity decrease):")
    importance = forest.feature_importances
    for feat, imp in sorted(importance.items(), key=lambda x: -x[1])[:25]:
        bar = "█" * int(imp / max(importance.values()) * 30)
        print(f"  {feat:32} {imp:8.4f} {bar}")
else:
    print(f"No forest model at {forest_path}")

logistic_path = MODELS_DIR / "logistic.joblib"
if logistic_path.exists():
    logistic = ConversionModel.load(logistic_path)
    print()
    print("=== LOGISTIC MODEL ===")
    print("Coefficients (log-odds, standardized features):")
    coefs = logistic.coefficients
    for feat, coef in sorted(coefs.items(), key=lambda x: -abs(x[1]))[:25]:
        print(f"  {feat:32} {coef:+8.3f}")
else:
    print(f"No logistic model at {logistic_path}")
