"""Feature encoding: cleaned call records -> fixed-width numeric matrix.

Key responsibilities:
- log(x + 1) on skewed numeric columns
- Standardization of numeric columns (zero mean, unit variance)
- One-hot encoding with k-1 indicators per categorical column (first
  sorted level is the reference)
- Stable column order across every frame transformed by the same encoder

The encoder is fitted once on the full cleaned dataset. Train, test and
full-dataset matrices are all produced by ``transform``, which reindexes to
the fitted columns and zero-pads any indicator for a level the frame lacks.

Usage:
    from callconv.features import FeatureEncoder

    encoder = FeatureEncoder().fit(clean_df)
    encoded = encoder.transform(clean_df)
    X = encoded[encoder.feature_columns]
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

import numpy as np
import pandas as pd

from callconv.features.definitions import NA_LEVEL, FeatureConfig, Treatment

logger = logging.getLogger(__name__)


def indicator_name(column: str, level: str) -> str:
    return f"{column}_{level}"


def align_columns(df: pd.DataFrame, columns: List[str]) -> pd.DataFrame:
    """Reindex to exactly `columns`, zero-filling any that are absent."""
    return df.reindex(columns=columns, fill_value=0)


class FeatureEncoder:
    """Learns numeric scaling and categorical levels, then encodes frames."""

    def __init__(self, config: Optional[FeatureConfig] = None):
        self.config = config or FeatureConfig()
        self.numeric_columns_: List[str] = []
        self.categorical_columns_: List[str] = []
        self.means_: Dict[str, float] = {}
        self.stds_: Dict[str, float] = {}
        self.levels_: Dict[str, List[str]] = {}
        self.feature_columns: List[str] = []
        self._fitted = False

    @property
    def is_fitted(self) -> bool:
        return self._fitted

    def _categorical_values(self, series: pd.Series, treatment: Treatment) -> pd.Series:
        """Level labels as strings; NA becomes its own level for CATEGORICAL.

        BLANK_TO_NA columns keep NA, which matches no indicator and so encodes
        like the reference level.
        """
        values = series.astype(object)
        missing = values.isna()
        values = values.where(missing, values.astype(str))
        if treatment == Treatment.CATEGORICAL:
            values = values.where(~missing, NA_LEVEL)
        return values

    def _numeric_frame(self, df: pd.DataFrame) -> pd.DataFrame:
        """Numeric feature columns as floats, log-transformed where configured."""
        numeric = pd.DataFrame(
            {col: pd.to_numeric(df[col], errors="coerce").astype(float) for col in self.numeric_columns_},
            index=df.index,
        )
        for col in self.config.log_columns:
            if col in numeric.columns:
                numeric[col] = np.log1p(numeric[col])
        return numeric

    def fit(self, df: pd.DataFrame) -> "FeatureEncoder":
        """Learn scaling statistics, levels and the output column order.

        Raises:
            ValueError: If a numeric feature column has zero variance.
        """
        treatments = self.config.treatments
        metadata = set(self.config.metadata_columns)

        unclassified = [
            c for c in df.columns
            if c not in treatments and c not in metadata and c != self.config.label_column
        ]
        if unclassified:
            logger.warning(f"Ignoring {len(unclassified)} unclassified columns: {unclassified}")

        self.numeric_columns_ = [
            c for c in self.config.numeric_columns if c in df.columns and c not in metadata
        ]
        self.categorical_columns_ = [
            c for c in self.config.categorical_columns if c in df.columns and c not in metadata
        ]

        numeric = self._numeric_frame(df)
        self.means_, self.stds_ = {}, {}
        for col in self.numeric_columns_:
            std = numeric[col].std()
            if not np.isfinite(std) or std == 0:
                raise ValueError(
                    f"Column '{col}' has zero variance; classify it as drop_constant "
                    f"before standardization"
                )
            self.means_[col] = float(numeric[col].mean())
            self.stds_[col] = float(std)

        self.levels_ = {}
        indicator_columns = []
        for col in self.categorical_columns_:
            values = self._categorical_values(df[col], treatments[col])
            levels = sorted(values.dropna().unique())
            self.levels_[col] = levels
            indicator_columns.extend(indicator_name(col, level) for level in levels[1:])

        self.feature_columns = self.numeric_columns_ + indicator_columns
        self._fitted = True
        logger.info(
            f"Encoder fitted: {len(self.numeric_columns_)} numeric, "
            f"{len(self.categorical_columns_)} categorical -> {len(self.feature_columns)} features"
        )
        return self

    def transform(self, df: pd.DataFrame) -> pd.DataFrame:
        """Encode df into the fitted feature columns (plus the label if present).

        The index of df is preserved so metadata can be rejoined.
        """
        if not self.is_fitted:
            raise ValueError("Call fit() first")

        numeric = self._numeric_frame(df)
        for col in self.numeric_columns_:
            numeric[col] = (numeric[col] - self.means_[col]) / self.stds_[col]

        blocks = [numeric]
        for col in self.categorical_columns_:
            values = self._categorical_values(df[col], self.config.treatments[col])
            levels = self.levels_[col]
            indicators = pd.DataFrame(
                {indicator_name(col, level): (values == level).astype(int) for level in levels[1:]},
                index=df.index,
            )
            blocks.append(indicators)

        encoded = align_columns(pd.concat(blocks, axis=1), self.feature_columns)

        label = self.config.label_column
        if label in df.columns:
            encoded[label] = pd.to_numeric(df[label], errors="coerce")
        return encoded

    def fit_transform(self, df: pd.DataFrame) -> pd.DataFrame:
        return self.fit(df).transform(df)
