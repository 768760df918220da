"""Data module - input loading, merging, schemas and profiling.

Public API:
    CallDataLoader - Reads and merges the four input CSVs
    merge_sources - Merge in-memory call logs and lookups
    check_label_invariant - Count labeled rows, warn on multi-buyer labels
    profile_columns - Missingness/cardinality review of the treatment table
    CallLogSchema, SourceSchema, UserProvidedSchema - Pydantic input schemas
"""

from callconv.data.loader import CallDataLoader, check_label_invariant, merge_sources
from callconv.data.profile import profile_columns
from callconv.data.schemas import (
    CallLogSchema,
    SourceSchema,
    UserProvidedSchema,
    validate_columns,
)

__all__ = [
    "CallDataLoader",
    "merge_sources",
    "check_label_invariant",
    "profile_columns",
    "CallLogSchema",
    "SourceSchema",
    "UserProvidedSchema",
    "validate_columns",
]
