"""Column profiling for reviewing the static treatment table.

The treatment table in ``callconv.features.definitions`` is hand-curated.
``profile_columns`` measures what the data actually looks like so a reviewer
can spot drift (a column that became sparse, a constant that stopped being
constant). It never changes the table.
"""

from __future__ import annotations

from typing import Dict, Optional

import numpy as np
import pandas as pd

from callconv.config import IMPUTE_MISSING_THRESHOLD, SPARSE_MISSING_THRESHOLD, IQR_MULTIPLIER
from callconv.features.definitions import COLUMN_TREATMENTS, Treatment


def _suggest(missing_frac: float, n_unique: int) -> str:
    if n_unique <= 1:
        return Treatment.DROP_CONSTANT.value
    if missing_frac > SPARSE_MISSING_THRESHOLD:
        return Treatment.DROP_SPARSE.value
    if 0 < missing_frac < IMPUTE_MISSING_THRESHOLD:
        return Treatment.IMPUTE_MEAN.value
    return ""


def profile_columns(
    df: pd.DataFrame,
    treatments: Optional[Dict[str, Treatment]] = None,
) -> pd.DataFrame:
    """Per-column missingness, cardinality and outlier counts.

    Empty strings count as missing.

    Returns:
        DataFrame indexed by column with missing_frac, n_unique, n_outliers
        (numeric columns only, 1.5*IQR fences), assigned treatment and a
        suggested treatment where the data points at one.
    """
    treatments = COLUMN_TREATMENTS if treatments is None else treatments
    rows = []
    for col in df.columns:
        series = df[col]
        missing = series.isna() | (series == "")
        observed = series[~missing]
        numeric = pd.to_numeric(observed, errors="coerce").dropna()

        n_outliers = 0
        if len(numeric) == len(observed) and len(numeric) > 0:
            q1, q3 = np.percentile(numeric, [25, 75])
            iqr = q3 - q1
            low, high = q1 - IQR_MULTIPLIER * iqr, q3 + IQR_MULTIPLIER * iqr
            n_outliers = int(((numeric < low) | (numeric > high)).sum())

        missing_frac = float(missing.mean()) if len(series) else 0.0
        n_unique = int(observed.nunique())
        assigned = treatments.get(col)
        rows.append({
            "column": col,
            "missing_frac": round(missing_frac, 4),
            "n_unique": n_unique,
            "n_outliers": n_outliers,
            "treatment": assigned.value if assigned is not None else "",
            "suggested": _suggest(missing_frac, n_unique),
        })

    return pd.DataFrame(rows).set_index("column")
