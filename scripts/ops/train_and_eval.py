"""Training + evaluation pipeline runner.

Orchestrates the complete workflow:
1. Load and merge the four input tables
2. Clean and encode
3. Stratified split + upsample training rows
4. Train logistic regression, pruned tree and random forest
5. Evaluate on the test partition
6. Score every call and save results

Usage:
    PYTHONPATH=src python scripts/ops/train_and_eval.py --data-dir storage/raw
"""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from callconv.config import DECISION_THRESHOLD, RANDOM_SEED, TEST_SIZE
from callconv.models.registry import MODEL_NAMES
from callconv.pipeline.runner import Pipeline


def main():
    """Run full training + evaluation pipeline."""
    parser = argparse.ArgumentParser(
        description="Train and evaluate call conversion classifiers"
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory with the four input CSVs (default: CALLCONV_DATA_DIR or storage/raw)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=RANDOM_SEED,
        help="Random seed for split, upsampling, bootstrap and CV",
    )
    parser.add_argument(
        "--test-size",
        type=float,
        default=TEST_SIZE,
        help="Fraction of labeled rows held out for testing",
    )
    parser.add_argument(
        "--threshold",
        type=float,
        default=DECISION_THRESHOLD,
        help="Probability cut-off for accuracy / confusion matrix",
    )
    parser.add_argument(
        "--models",
        nargs="+",
        default=MODEL_NAMES,
        choices=MODEL_NAMES,
        help="Classifiers to train",
    )
    parser.add_argument(
        "--models-dir",
        type=Path,
        default=None,
        help="Where fitted models and report.json are written",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Where scored_calls.csv is written",
    )
    parser.add_argument(
        "--skip-score",
        action="store_true",
        help="Skip scoring the full dataset after evaluation",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    print("\n" + "=" * 70)
    print("CALL CONVERSION TRAINING + EVALUATION PIPELINE")
    print("=" * 70)

    pipeline = Pipeline(
        data_dir=args.data_dir,
        seed=args.seed,
        test_size=args.test_size,
        threshold=args.threshold,
        model_names=args.models,
        models_dir=args.models_dir,
        output_dir=args.output_dir,
    )

    print("\n[1/6] GATHERING DATA")
    print("-" * 70)
    pipeline.gather_data()

    print("\n[2/6] CLEANING + ENCODING")
    print("-" * 70)
    pipeline.clean()
    pipeline.encode()

    print("\n[3/6] SPLITTING DATA")
    print("-" * 70)
    pipeline.split()

    print("\n[4/6] TRAINING")
    print("-" * 70)
    pipeline.train()
    if not pipeline.models:
        print("Every classifier failed; nothing to evaluate.")
        return 1

    print("\n[5/6] EVALUATION")
    print("-" * 70)
    pipeline.evaluate()

    if not args.skip_score:
        print("\n[6/6] SCORING ALL CALLS")
        print("-" * 70)
        pipeline.score_all()
    else:
        print("\n[6/6] SCORING SKIPPED")

    pipeline.save_artifacts()

    print("\n" + "=" * 70)
    print("PIPELINE COMPLETE")
    print("=" * 70)
    print(f"Models: {pipeline.models_dir}")
    if pipeline.failures:
        print(f"Failed models: {sorted(pipeline.failures)}")
    for name, m in pipeline.metrics.items():
        print(f"{name:9s} accuracy={m.accuracy:.3f} auc={m.auc:.3f}")

    return 0


if __name__ == "__main__":
    exit(main())
