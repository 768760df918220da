"""Profile the merged call dataset against the column treatment table.

Prints missingness, cardinality and outlier counts per column, flagging
columns whose data suggests a different treatment than the one assigned.

Usage:
    PYTHONPATH=src python scripts/ops/profile_columns.py --data-dir storage/raw
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

import pandas as pd

from callconv.data import CallDataLoader, profile_columns


def main():
    parser = argparse.ArgumentParser(description="Profile input columns")
    parser.add_argument("--data-dir", type=Path, default=None, help="Directory with the input CSVs")
    parser.add_argument("--out", type=Path, default=None, help="Optional CSV path for the profile")
    args = parser.parse_args()

    df = CallDataLoader(args.data_dir).load()
    profile = profile_columns(df)

    with pd.option_context("display.max_rows", None, "display.width", 120):
        print(profile.to_string())

    flagged = profile[(profile["suggested"] != "") & (profile["suggested"] != profile["treatment"])]
    if not flagged.empty:
        print(f"\n{len(flagged)} columns where the data suggests another treatment:")
        print(flagged[["missing_frac", "n_unique", "treatment", "suggested"]].to_string())

    if args.out:
        profile.to_csv(args.out)
        print(f"\nProfile saved to {args.out}")
    return 0


if __name__ == "__main__":
    exit(main())
