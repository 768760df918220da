"""Feature engineering module.

Public API:
    Cleaner - Drop / blank-to-NA / impute / outlier-cap treatments
    FeatureEncoder - Log, standardize and one-hot encode into aligned matrices
    FeatureConfig - Column treatment configuration
    Treatment - Column treatment enum

Usage:
    from callconv.features import Cleaner, FeatureEncoder

    clean_df = Cleaner().clean(raw_df)
    encoded = FeatureEncoder().fit_transform(clean_df)
"""

from callconv.features.cleaner import Cleaner, blank_to_na, cap_outliers, impute_mean, iqr_bounds
from callconv.features.definitions import (
    COLUMN_TREATMENTS,
    PRE_SPLIT_EXCLUSIONS,
    FeatureConfig,
    Treatment,
)
from callconv.features.encoder import FeatureEncoder, align_columns

__all__ = [
    # Core API
    "Cleaner",
    "FeatureEncoder",
    "FeatureConfig",
    "Treatment",
    "COLUMN_TREATMENTS",
    "PRE_SPLIT_EXCLUSIONS",
    # Helpers
    "blank_to_na",
    "cap_outliers",
    "impute_mean",
    "iqr_bounds",
    "align_columns",
]
