"""Column treatment table and feature configuration.

Every non-identifier column of the merged call dataset is assigned exactly one
treatment. The table is hand-reviewed against the data (see
``callconv.data.profile.profile_columns``), so adding or removing a column's
treatment is a one-line change here.

Treatments:
- DROP_CONSTANT: single value across the dataset, removed before modeling
- DROP_SPARSE: more than 85% missing, removed before modeling
- IMPUTE_MEAN: numeric, under 1% missing, NA -> column mean
- BLANK_TO_NA: categorical where "" means missing. NA is not a level, so NA
  rows encode as all-zero, the same as the reference (first sorted) level.
  For these columns an all-zero indicator block means "reference or missing".
- OUTLIER_CAP: numeric, clamped to the 1.5*IQR fences
- CATEGORICAL: categorical, NA kept as its own level

Metadata columns (identifiers, raw timestamp, call duration) are carried
alongside the data but never enter the feature matrix.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List

from callconv.config import LABEL_COLUMN


class Treatment(str, Enum):
    DROP_CONSTANT = "drop_constant"
    DROP_SPARSE = "drop_sparse"
    IMPUTE_MEAN = "impute_mean"
    BLANK_TO_NA = "blank_to_na"
    OUTLIER_CAP = "outlier_cap"
    CATEGORICAL = "categorical"


DROP_TREATMENTS = (Treatment.DROP_CONSTANT, Treatment.DROP_SPARSE)
NUMERIC_TREATMENTS = (Treatment.IMPUTE_MEAN, Treatment.OUTLIER_CAP)
CATEGORICAL_TREATMENTS = (Treatment.BLANK_TO_NA, Treatment.CATEGORICAL)


COLUMN_TREATMENTS: Dict[str, Treatment] = {
    # Constant across every call
    "country": Treatment.DROP_CONSTANT,
    "product_line": Treatment.DROP_CONSTANT,
    # Rarely answered by callers
    "occupation": Treatment.DROP_SPARSE,
    "medical_condition": Treatment.DROP_SPARSE,
    "expectant_parent": Treatment.DROP_SPARSE,
    # Numeric, near-complete
    "age": Treatment.IMPUTE_MEAN,
    "household_income": Treatment.IMPUTE_MEAN,
    "household_size": Treatment.IMPUTE_MEAN,
    # Numeric with implausible extremes
    "weight": Treatment.OUTLIER_CAP,
    "height": Treatment.OUTLIER_CAP,
    "bmi": Treatment.OUTLIER_CAP,
    # Free-text answers where blank means "not given"
    "gender": Treatment.BLANK_TO_NA,
    "device": Treatment.BLANK_TO_NA,
    "browser": Treatment.BLANK_TO_NA,
    "connection_type": Treatment.BLANK_TO_NA,
    "coverage_type": Treatment.BLANK_TO_NA,
    "company": Treatment.BLANK_TO_NA,
    "currently_insured": Treatment.BLANK_TO_NA,
    # Categorical, NA is informative
    "state": Treatment.CATEGORICAL,
    "marital_status": Treatment.CATEGORICAL,
    "source_type": Treatment.CATEGORICAL,
    "season": Treatment.CATEGORICAL,
}

# log(x + 1) after imputation/capping, before standardization
LOG_TRANSFORM_COLUMNS: List[str] = ["household_income"]

# Identifiers and leakage-prone columns, never model input
METADATA_COLUMNS: List[str] = [
    "call_id",
    "phone_hash",
    "buyer_id",
    "seller_id",
    "source_id",
    "call_time",
    "call_duration",
]

# Dropped right before the train/test split; indicator columns match by prefix
PRE_SPLIT_EXCLUSIONS: List[str] = ["weight", "height", "bmi", "currently_insured"]

# Placeholder level for NA in CATEGORICAL columns
NA_LEVEL = "NA"


@dataclass
class FeatureConfig:
    """Configuration for cleaning and encoding."""

    treatments: Dict[str, Treatment] = field(default_factory=lambda: dict(COLUMN_TREATMENTS))
    log_columns: List[str] = field(default_factory=lambda: list(LOG_TRANSFORM_COLUMNS))
    metadata_columns: List[str] = field(default_factory=lambda: list(METADATA_COLUMNS))
    label_column: str = LABEL_COLUMN

    def columns_with(self, *treatments: Treatment) -> List[str]:
        """Columns assigned any of the given treatments, in table order."""
        return [col for col, t in self.treatments.items() if t in treatments]

    @property
    def drop_columns(self) -> List[str]:
        return self.columns_with(*DROP_TREATMENTS)

    @property
    def numeric_columns(self) -> List[str]:
        return self.columns_with(*NUMERIC_TREATMENTS)

    @property
    def categorical_columns(self) -> List[str]:
        return self.columns_with(*CATEGORICAL_TREATMENTS)
