"""Pytest fixtures/config for callconv tests."""

import os
import sys

import numpy as np
import pandas as pd
import pytest


def pytest_sessionstart(session) -> None:  # type: ignore[unused-argument]
    repo_root = os.path.dirname(os.path.dirname(__file__))
    src_path = os.path.join(repo_root, "src")
    if src_path not in sys.path:
        sys.path.insert(0, src_path)


CALL_COLUMNS = [
    "call_id", "phone_hash", "buyer_id", "seller_id", "source_id", "call_time",
    "call_duration", "conversion", "country", "product_line", "device", "browser",
    "connection_type",
]
USER_COLUMNS = [
    "call_id", "age", "household_income", "household_size", "gender", "weight",
    "height", "bmi", "coverage_type", "company", "currently_insured", "state",
    "marital_status", "occupation", "medical_condition", "expectant_parent",
]


def build_raw_calls(n: int = 300, seed: int = 0, labeled_frac: float = 0.7) -> pd.DataFrame:
    """Synthetic merged call dataset covering every treated column.

    The first `labeled_frac` of rows belong to buyer "b1" and carry a label
    that depends on age, income and device; the rest are unlabeled.
    """
    rng = np.random.default_rng(seed)

    age = rng.integers(18, 80, n).astype(float)
    income = rng.lognormal(11, 0.8, n)
    device = rng.choice(["mobile", "desktop", "tablet", ""], n)
    weight = rng.normal(180, 30, n)
    weight[:3] = [900.0, 5.0, 1200.0]

    logit = -0.5 + 0.04 * (age - 45) + 0.6 * (np.log(income) - 11) + 0.8 * (device == "desktop")
    converted = (rng.random(n) < 1 / (1 + np.exp(-logit))).astype(float)

    n_labeled = int(n * labeled_frac)
    conversion = np.where(np.arange(n) < n_labeled, converted, np.nan)
    buyer = np.where(np.arange(n) < n_labeled, "b1", rng.choice(["b2", "b3"], n))

    age[5] = np.nan
    income[7] = np.nan

    sparse = np.full(n, np.nan, dtype=object)
    sparse[:10] = "yes"

    return pd.DataFrame({
        "call_id": [f"c{i}" for i in range(n)],
        "phone_hash": [f"h{i}" for i in range(n)],
        "buyer_id": buyer,
        "seller_id": rng.choice(["s1", "s2"], n),
        "source_id": rng.choice(["src1", "src2", "src3"], n),
        "call_time": pd.date_range("2024-01-01", periods=n, freq="h").astype(str),
        "call_duration": rng.integers(30, 900, n).astype(float),
        "conversion": conversion,
        "country": "US",
        "product_line": "health",
        "device": device,
        "browser": rng.choice(["chrome", "safari", "firefox"], n),
        "connection_type": rng.choice(["wifi", "cellular", ""], n),
        "age": age,
        "household_income": income,
        "household_size": rng.integers(1, 7, n).astype(float),
        "gender": rng.choice(["M", "F", ""], n),
        "weight": weight,
        "height": rng.normal(67, 4, n),
        "bmi": rng.normal(27, 5, n),
        "coverage_type": rng.choice(["individual", "family"], n),
        "company": rng.choice(["acme", "globex", ""], n),
        "currently_insured": rng.choice(["Yes", "No", ""], n),
        "state": rng.choice(np.array(["CA", "TX", "NY", None], dtype=object), n),
        "marital_status": rng.choice(["single", "married"], n),
        "occupation": sparse,
        "medical_condition": sparse.copy(),
        "expectant_parent": sparse.copy(),
    })


def write_input_tables(directory, n: int = 300, seed: int = 0) -> pd.DataFrame:
    """Split a synthetic dataset into the four input CSVs under directory.

    Returns the full synthetic frame (without season/source_type).
    """
    df = build_raw_calls(n=n, seed=seed)
    calls = df[CALL_COLUMNS]
    half = n // 2
    calls.iloc[:half].to_csv(os.path.join(directory, "calls_period_a.csv"), index=False, na_rep="NA")
    calls.iloc[half:].to_csv(os.path.join(directory, "calls_period_b.csv"), index=False, na_rep="NA")
    pd.DataFrame({
        "source_id": ["src1", "src2", "src3"],
        "source_type": ["search", "social", "affiliate"],
    }).to_csv(os.path.join(directory, "sources.csv"), index=False)
    df[USER_COLUMNS].to_csv(os.path.join(directory, "user_provided.csv"), index=False, na_rep="NA")
    return df


@pytest.fixture
def raw_calls():
    """Merged-shape synthetic call dataset (300 rows, 210 labeled)."""
    df = build_raw_calls()
    df["season"] = np.where(np.arange(len(df)) % 2 == 0, "period A", "period B")
    df["source_type"] = df["source_id"].map({"src1": "search", "src2": "social", "src3": "affiliate"})
    return df


@pytest.fixture
def input_dir(tmp_path):
    """Directory holding the four input CSVs."""
    write_input_tables(str(tmp_path))
    return tmp_path


@pytest.fixture(scope="session")
def shared_input_dir(tmp_path_factory):
    """Read-only input CSVs shared by the slower end-to-end tests."""
    path = tmp_path_factory.mktemp("inputs")
    write_input_tables(str(path))
    return path
