"""
callconv - Conversion likelihood scoring for call-center calls

Estimates the probability that a call converts into a sale and which
caller/call attributes go with conversion.

Structure:
    data/      - Input loading, merging, schemas, profiling
    features/  - Cleaning and encoding
    models/    - Classifiers, train/test split, scoring policy
    pipeline/  - End-to-end workflow, training, evaluation
    analysis/  - Scored-dataset buckets and segment summaries

Usage:
    from callconv.pipeline import Pipeline
    from callconv.data import CallDataLoader
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
