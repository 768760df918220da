"""Output augmentation and segment analysis of conversion likelihood.

Adds per-call likelihood columns to the merged dataset, derives fixed-edge
age and income buckets from raw (untransformed) values, and summarizes the
likelihood distribution per segment (count, mean and the quartiles behind a
box plot).

Key Functions:
    likelihood_column() - Output column name for a model
    add_likelihood_columns() - Per-model and averaged likelihood columns
    add_buckets() - age_bucket / income_bucket
    segment_summary() - Likelihood distribution per segment

Usage:
    from callconv.analysis import add_buckets, add_likelihood_columns, segment_summary

    scored = add_likelihood_columns(raw_df, predictions)
    scored = add_buckets(scored)
    segment_summary(scored, "income_bucket")
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from callconv.config import AGE_BINS, AGE_LABELS, COMBINE_MEMBERS, INCOME_BINS, INCOME_LABELS
from callconv.models.policy import combine_probabilities

AVERAGE_COLUMN = "likelihood_avg"


def likelihood_column(model_name: str) -> str:
    return f"likelihood_{model_name}"


def add_likelihood_columns(
    df: pd.DataFrame,
    predictions: Dict[str, np.ndarray],
    members: Sequence[str] = COMBINE_MEMBERS,
) -> pd.DataFrame:
    """Append one likelihood column per member plus their average.

    A member without predictions (failed fit) gets an all-NA column; the
    average is taken over the members that are present.
    """
    df = df.copy()
    for name in members:
        values = predictions.get(name)
        if values is not None and len(values) != len(df):
            raise ValueError(f"{name}: {len(values)} predictions for {len(df)} rows")
        df[likelihood_column(name)] = np.nan if values is None else np.asarray(values, dtype=float)
    df[AVERAGE_COLUMN] = combine_probabilities(predictions, members)
    return df


def add_buckets(df: pd.DataFrame) -> pd.DataFrame:
    """Add age_bucket and income_bucket (left-closed bins) for grouping.

    Values outside the bin edges, or missing, get NA.
    """
    df = df.copy()
    if "age" in df.columns:
        df["age_bucket"] = pd.cut(
            pd.to_numeric(df["age"], errors="coerce"),
            bins=AGE_BINS,
            labels=AGE_LABELS,
            right=False,
        )
    if "household_income" in df.columns:
        df["income_bucket"] = pd.cut(
            pd.to_numeric(df["household_income"], errors="coerce"),
            bins=INCOME_BINS,
            labels=INCOME_LABELS,
            right=False,
        )
    return df


def segment_summary(
    df: pd.DataFrame,
    by: str,
    value: str = AVERAGE_COLUMN,
    min_count: int = 1,
) -> pd.DataFrame:
    """Distribution of `value` per level of `by`, sorted by median (descending).

    Returns:
        DataFrame indexed by segment with count, mean, q1, median, q3.
    """
    if by not in df.columns:
        raise ValueError(f"Column '{by}' not found in DataFrame")
    if value not in df.columns:
        raise ValueError(f"Column '{value}' not found in DataFrame")

    grouped = df.groupby(by, observed=True)[value]
    summary = pd.DataFrame({
        "count": grouped.count(),
        "mean": grouped.mean(),
        "q1": grouped.quantile(0.25),
        "median": grouped.median(),
        "q3": grouped.quantile(0.75),
    })
    summary = summary[summary["count"] >= min_count]
    return summary.sort_values("median", ascending=False)


def segment_report(
    df: pd.DataFrame,
    segments: Optional[List[str]] = None,
    value: str = AVERAGE_COLUMN,
) -> Dict[str, pd.DataFrame]:
    """segment_summary for several grouping columns at once (those present)."""
    segments = segments or [
        "age_bucket", "income_bucket", "gender", "state", "device",
        "connection_type", "coverage_type", "currently_insured", "season",
    ]
    return {seg: segment_summary(df, seg, value) for seg in segments if seg in df.columns}
