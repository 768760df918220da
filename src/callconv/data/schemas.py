"""Pydantic schemas for the four input tables.

Each schema declares the key columns a table must carry. Only required
fields are enforced at load time; every other column passes through
untouched so new caller attributes do not need a schema change.

Models:
    CallLogSchema - One row per call (both time-sliced logs)
    SourceSchema - Source lookup, keyed by source_id
    UserProvidedSchema - Caller-provided answers, keyed by call_id

Usage:
    from callconv.data.schemas import CallLogSchema, validate_columns

    validate_columns(df, CallLogSchema, table="calls_period_a.csv")
"""

from __future__ import annotations

from typing import List, Optional, Type

import pandas as pd
from pydantic import BaseModel, Field, ValidationError


class CallLogSchema(BaseModel):
    """Call log row. Label is present only for the labeled buyer's calls."""

    call_id: str = Field(description="Opaque call identifier")
    source_id: str = Field(description="Traffic source key")
    buyer_id: Optional[str] = None
    seller_id: Optional[str] = None
    phone_hash: Optional[str] = None
    call_time: Optional[str] = None
    call_duration: Optional[float] = None
    conversion: Optional[int] = Field(default=None, ge=0, le=1)


class SourceSchema(BaseModel):
    """Source lookup row."""

    source_id: str
    source_type: Optional[str] = None


class UserProvidedSchema(BaseModel):
    """Caller-provided attributes for one call."""

    call_id: str
    age: Optional[float] = None
    household_income: Optional[float] = None
    household_size: Optional[float] = None
    gender: Optional[str] = None
    state: Optional[str] = None


def required_columns(schema: Type[BaseModel]) -> List[str]:
    """Names of the fields a table must contain."""
    return [name for name, info in schema.model_fields.items() if info.is_required()]


def key_columns(schema: Type[BaseModel]) -> List[str]:
    """Identifier fields that are read as strings so joins line up."""
    return [name for name in schema.model_fields if name.endswith("_id")]


def validate_columns(df: pd.DataFrame, schema: Type[BaseModel], table: str = "") -> None:
    """Raise ValueError if df is missing any required column of schema."""
    missing = [c for c in required_columns(schema) if c not in df.columns]
    if missing:
        name = table or schema.__name__
        raise ValueError(f"{name} is missing required columns: {missing}")


def validate_rows(df: pd.DataFrame, schema: Type[BaseModel]) -> List[str]:
    """Validate each row's schema fields, returning one message per bad row.

    Fields absent from df are skipped; NA and "" are treated as None.
    """
    fields = [c for c in schema.model_fields if c in df.columns]
    errors = []
    for idx, row in df[fields].iterrows():
        record = {k: (None if pd.isna(v) or v == "" else v) for k, v in row.items()}
        try:
            schema.model_validate(record)
        except ValidationError as e:
            errors.append(f"row {idx}: {e.errors()[0]['loc'][0]}: {e.errors()[0]['msg']}")
    return errors
