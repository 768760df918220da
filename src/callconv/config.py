"""Centralized configuration for call conversion scoring.

All paths, model parameters, and settings in one place.
Environment variables can override defaults.

Path Constants:
    PROJECT_ROOT - Root directory of the project
    STORAGE_DIR - Storage for input tables and outputs
    DATA_DIR - Directory holding the four input CSVs (overridable via CALLCONV_DATA_DIR)
    MODELS_DIR - Trained model artifacts
    OUTPUT_DIR - Scored dataset and evaluation report

Pipeline Constants:
    RANDOM_SEED - Single seed for split, upsampling, bootstrap and CV folds
    TEST_SIZE - Held-out fraction of labeled rows
    DECISION_THRESHOLD - Probability cut-off for confusion-matrix decisions
    COMBINE_MEMBERS - Models whose probabilities are averaged for the final score

Environment Variables:
    CALLCONV_DATA_DIR - Override input data directory
    CALLCONV_SEED - Override random seed
"""

from __future__ import annotations

import os
from pathlib import Path

# Project root (src/callconv/config.py -> callconv -> src -> project_root)
PROJECT_ROOT = Path(__file__).parent.parent.parent
STORAGE_DIR = PROJECT_ROOT / "storage"
DATA_DIR = Path(os.environ.get("CALLCONV_DATA_DIR", str(STORAGE_DIR / "raw")))
MODELS_DIR = STORAGE_DIR / "models"
OUTPUT_DIR = STORAGE_DIR / "output"

# Input tables
CALL_LOG_A_FILE = "calls_period_a.csv"
CALL_LOG_B_FILE = "calls_period_b.csv"
SOURCES_FILE = "sources.csv"
USER_PROVIDED_FILE = "user_provided.csv"

# Season tags (log A is tagged explicitly; everything else defaults to B)
SEASON_COLUMN = "season"
SEASON_A = "period A"
SEASON_B = "period B"

# Label
LABEL_COLUMN = "conversion"
BUYER_COLUMN = "buyer_id"

# Reproducibility
RANDOM_SEED = int(os.environ.get("CALLCONV_SEED", "42"))

# Split / decision policy
TEST_SIZE = 0.20
DECISION_THRESHOLD = 0.5

# Cleaning thresholds (used to review the static column table, not to build it)
SPARSE_MISSING_THRESHOLD = 0.85
IMPUTE_MISSING_THRESHOLD = 0.01
IQR_MULTIPLIER = 1.5

# Classifier defaults
CV_FOLDS = 10
TREE_MIN_SAMPLES_SPLIT = 20
TREE_CCP_ALPHA_FLOOR = 0.0005
FOREST_N_ESTIMATORS = 100
FOREST_MIN_SAMPLES_LEAF = 1
LOGISTIC_MAX_ITER = 1000

# Final score: mean of these models' probabilities
COMBINE_MEMBERS = ("logistic", "forest")

# Descriptive buckets (left-closed bins on raw values)
AGE_BINS = [18, 30, 40, 50, 60, 70, 80]
AGE_LABELS = ["18-29", "30-39", "40-49", "50-59", "60-69", "70-80"]
INCOME_BINS = [0, 100_000, 200_000, 500_000, 1_000_000, 2_000_000, 5_000_000, 8_500_000]
INCOME_LABELS = ["0-100K", "100K-200K", "200K-500K", "500K-1M", "1M-2M", "2M-5M", "5M+"]
