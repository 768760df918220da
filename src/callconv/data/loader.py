"""Loading and merging of the four call-center input tables.

Builds the row-per-call dataset:
1. Tag the first call log with season A, concatenate the second log, and
   default every untagged row to season B
2. Left-join the source lookup on source_id
3. Left-join the caller-provided lookup on call_id

Unmatched keys leave NA in joined columns. Duplicate keys in a lookup fan
out silently (logged as a warning, never corrected).

Key Classes:
    CallDataLoader - Reads the four CSVs from a data directory

Key Functions:
    merge_sources() - Pure merge of four in-memory frames
    check_label_invariant() - Count labeled rows, warn on multi-buyer labels

Usage:
    from callconv.data import CallDataLoader

    loader = CallDataLoader()
    df = loader.load()
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Type, Union

import pandas as pd
from pydantic import BaseModel

from callconv.config import (
    BUYER_COLUMN,
    CALL_LOG_A_FILE,
    CALL_LOG_B_FILE,
    DATA_DIR,
    LABEL_COLUMN,
    SEASON_A,
    SEASON_B,
    SEASON_COLUMN,
    SOURCES_FILE,
    USER_PROVIDED_FILE,
)
from callconv.data.schemas import (
    CallLogSchema,
    SourceSchema,
    UserProvidedSchema,
    key_columns,
    validate_columns,
    validate_rows,
)

logger = logging.getLogger(__name__)

# Strings read as NA. The empty string is deliberately absent so that
# blank answers survive loading and are handled by the cleaner.
NA_STRINGS = ["NA", "N/A", "NaN", "nan", "NULL", "null", "None"]


def _as_keys(df: pd.DataFrame, columns: List[str]) -> pd.DataFrame:
    """Cast identifier columns to str (NA kept) so joins compare like with like."""
    df = df.copy()
    for col in columns:
        if col in df.columns:
            df[col] = df[col].where(df[col].isna(), df[col].astype(str))
    return df


def _warn_on_fanout(lookup: pd.DataFrame, key: str, table: str) -> None:
    n_dupes = int(lookup[key].duplicated().sum())
    if n_dupes:
        logger.warning(
            f"{table}: {n_dupes} duplicate '{key}' values; join will fan out rows"
        )


def merge_sources(
    call_log_a: pd.DataFrame,
    call_log_b: pd.DataFrame,
    sources: pd.DataFrame,
    user_data: pd.DataFrame,
) -> pd.DataFrame:
    """Merge the two call logs and both lookups into one row-per-call frame.

    Args:
        call_log_a: First time-sliced call log (tagged season A).
        call_log_b: Second call log (untagged rows default to season B).
        sources: Source lookup keyed by source_id.
        user_data: Caller-provided answers keyed by call_id.

    Returns:
        Merged DataFrame with a fresh RangeIndex.
    """
    call_keys = key_columns(CallLogSchema)
    log_a = _as_keys(call_log_a, call_keys)
    log_b = _as_keys(call_log_b, call_keys)
    sources = _as_keys(sources, key_columns(SourceSchema))
    user_data = _as_keys(user_data, key_columns(UserProvidedSchema))

    log_a[SEASON_COLUMN] = SEASON_A
    calls = pd.concat([log_a, log_b], ignore_index=True, sort=False)
    calls[SEASON_COLUMN] = calls[SEASON_COLUMN].fillna(SEASON_B)

    _warn_on_fanout(sources, "source_id", "sources")
    _warn_on_fanout(user_data, "call_id", "user_provided")

    merged = calls.merge(sources, on="source_id", how="left", suffixes=("", "_source"))
    merged = merged.merge(user_data, on="call_id", how="left", suffixes=("", "_user"))

    logger.info(
        f"Merged {len(log_a):,} + {len(log_b):,} calls -> {len(merged):,} rows, "
        f"{merged.shape[1]} columns"
    )
    return merged.reset_index(drop=True)


def check_label_invariant(
    df: pd.DataFrame,
    label: str = LABEL_COLUMN,
    buyer: str = BUYER_COLUMN,
) -> int:
    """Return the number of labeled rows; warn if labels span several buyers."""
    if label not in df.columns:
        logger.warning(f"No '{label}' column; nothing to train on")
        return 0

    labeled = df[label].notna()
    if buyer in df.columns:
        buyers = df.loc[labeled, buyer].dropna().unique()
        if len(buyers) > 1:
            logger.warning(f"Labeled rows come from {len(buyers)} buyers, expected 1: {list(buyers)[:5]}")
    return int(labeled.sum())


class CallDataLoader:
    """Reads the four input CSVs and merges them."""

    def __init__(self, data_dir: Optional[Union[str, Path]] = None):
        self.data_dir = Path(data_dir) if data_dir is not None else DATA_DIR

    def _read(self, filename: str, schema: Type[BaseModel]) -> pd.DataFrame:
        path = self.data_dir / filename
        if not path.exists():
            raise FileNotFoundError(f"Missing input table: {path}")

        # Ids are read as text so that a key column with gaps is not parsed as
        # float ("10" would become "10.0" and miss its lookup row)
        header = pd.read_csv(path, nrows=0).columns
        keys = {col: str for col in key_columns(schema) if col in header}
        df = pd.read_csv(path, keep_default_na=False, na_values=NA_STRINGS, dtype=keys)
        validate_columns(df, schema, table=filename)
        logger.info(f"Loaded {filename}: {len(df):,} rows, {df.shape[1]} columns")
        return _as_keys(df, key_columns(schema))

    def load(self) -> pd.DataFrame:
        """Load, validate and merge all input tables.

        Raises:
            FileNotFoundError: If any input table is missing.
            ValueError: If a table lacks a required key column.
        """
        log_a = self._read(CALL_LOG_A_FILE, CallLogSchema)
        log_b = self._read(CALL_LOG_B_FILE, CallLogSchema)
        sources = self._read(SOURCES_FILE, SourceSchema)
        user_data = self._read(USER_PROVIDED_FILE, UserProvidedSchema)

        for name, log in ((CALL_LOG_A_FILE, log_a), (CALL_LOG_B_FILE, log_b)):
            errors = validate_rows(log, CallLogSchema)
            if errors:
                logger.warning(f"{name}: {len(errors)} rows fail schema checks, e.g. {errors[:3]}")

        merged = merge_sources(log_a, log_b, sources, user_data)
        if LABEL_COLUMN in merged.columns:
            merged[LABEL_COLUMN] = pd.to_numeric(merged[LABEL_COLUMN], errors="coerce")

        n_labeled = check_label_invariant(merged)
        logger.info(f"{n_labeled:,} labeled rows of {len(merged):,}")
        return merged
