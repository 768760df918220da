"""Data cleaning for the merged call dataset.

Applies the static column treatment table in a fixed order:
1. Drop constant and sparse columns
2. Blank-to-NA on free-text categorical columns
3. Mean imputation on near-complete numeric columns
4. IQR outlier capping on weight/height/bmi

The Cleaner follows a fit/transform split so that the statistics used
(column means, IQR fences) are recorded and can be learned on one frame and
applied to another. ``clean()`` fits and transforms on the same frame, which
is how the pipeline uses it.

Usage:
    from callconv.features import Cleaner

    cleaner = Cleaner()
    clean_df = cleaner.clean(raw_df)
    cleaner.bounds_["bmi"]  # (lower, upper)
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

from callconv.config import IQR_MULTIPLIER
from callconv.features.definitions import FeatureConfig, Treatment

logger = logging.getLogger(__name__)


def blank_to_na(df: pd.DataFrame, columns: List[str]) -> pd.DataFrame:
    """Replace empty-string values with NA in the given columns.

    Idempotent: a second application finds no empty strings left.
    """
    df = df.copy()
    for col in columns:
        if col not in df.columns:
            continue
        df[col] = df[col].mask(df[col] == "")
    return df


def iqr_bounds(series: pd.Series, multiplier: float = IQR_MULTIPLIER) -> Tuple[float, float]:
    """Tukey fences (Q1 - k*IQR, Q3 + k*IQR) over observed values."""
    observed = pd.to_numeric(series, errors="coerce").dropna()
    if observed.empty:
        raise ValueError(f"Column '{series.name}' has no observed values to compute IQR")
    q1, q3 = observed.quantile([0.25, 0.75])
    iqr = q3 - q1
    return float(q1 - multiplier * iqr), float(q3 + multiplier * iqr)


def cap_outliers(
    df: pd.DataFrame,
    bounds: Dict[str, Tuple[float, float]],
) -> pd.DataFrame:
    """Clamp values outside the given bounds. Values are capped, never dropped."""
    df = df.copy()
    for col, (lower, upper) in bounds.items():
        if col not in df.columns:
            continue
        df[col] = pd.to_numeric(df[col], errors="coerce").clip(lower=lower, upper=upper)
    return df


def impute_mean(df: pd.DataFrame, means: Dict[str, float]) -> pd.DataFrame:
    """Fill NA with the supplied per-column means."""
    df = df.copy()
    for col, mean in means.items():
        if col not in df.columns:
            continue
        df[col] = pd.to_numeric(df[col], errors="coerce").fillna(mean)
    return df


class Cleaner:
    """Applies drop / blank-to-NA / impute / cap treatments."""

    def __init__(self, config: Optional[FeatureConfig] = None):
        self.config = config or FeatureConfig()
        self.means_: Dict[str, float] = {}
        self.bounds_: Dict[str, Tuple[float, float]] = {}
        self.dropped_: List[str] = []

    def fit(self, df: pd.DataFrame) -> "Cleaner":
        """Learn imputation means and IQR fences from df.

        Means are computed after blank-to-NA so that blanks count as missing.
        """
        df = blank_to_na(df, self.config.columns_with(Treatment.BLANK_TO_NA))

        self.means_ = {}
        for col in self.config.columns_with(Treatment.IMPUTE_MEAN):
            if col not in df.columns:
                continue
            mean = pd.to_numeric(df[col], errors="coerce").mean()
            if np.isnan(mean):
                raise ValueError(f"Column '{col}' has no observed values to impute from")
            self.means_[col] = float(mean)

        self.bounds_ = {
            col: iqr_bounds(df[col])
            for col in self.config.columns_with(Treatment.OUTLIER_CAP)
            if col in df.columns
        }
        return self

    def transform(self, df: pd.DataFrame) -> pd.DataFrame:
        """Apply the fitted treatments. Input is not modified."""
        drop = [c for c in self.config.drop_columns if c in df.columns]
        self.dropped_ = drop
        df = df.drop(columns=drop)
        if drop:
            logger.info(f"Dropped {len(drop)} constant/sparse columns: {drop}")

        df = blank_to_na(df, self.config.columns_with(Treatment.BLANK_TO_NA))
        df = impute_mean(df, self.means_)

        for col, (lower, upper) in self.bounds_.items():
            if col not in df.columns:
                continue
            values = pd.to_numeric(df[col], errors="coerce")
            n_capped = int(((values < lower) | (values > upper)).sum())
            logger.info(f"Capping {col} to [{lower:.2f}, {upper:.2f}]: {n_capped} values")
        df = cap_outliers(df, self.bounds_)

        return df

    def clean(self, df: pd.DataFrame) -> pd.DataFrame:
        """Fit on df and transform it (statistics over the full frame)."""
        return self.fit(df).transform(df)
