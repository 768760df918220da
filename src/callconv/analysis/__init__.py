"""Analysis module - scored-dataset augmentation and segment summaries.

Public API:
    add_likelihood_columns - Per-model and averaged likelihood columns
    add_buckets - Fixed-edge age / income buckets
    segment_summary, segment_report - Likelihood distribution per segment
"""

from callconv.analysis.segments import (
    AVERAGE_COLUMN,
    add_buckets,
    add_likelihood_columns,
    likelihood_column,
    segment_report,
    segment_summary,
)

__all__ = [
    "AVERAGE_COLUMN",
    "add_buckets",
    "add_likelihood_columns",
    "likelihood_column",
    "segment_report",
    "segment_summary",
]
