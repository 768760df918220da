"""Call conversion pipeline.

End-to-end pipeline that orchestrates:
1. Data gathering (CallDataLoader)
2. Cleaning (Cleaner)
3. Encoding (FeatureEncoder)
4. Stratified split + training-only upsampling (DatasetBuilder)
5. Classifier training (Trainer)
6. Evaluation on the test partition (Evaluator)
7. Scoring of the entire dataset, labeled and unlabeled
8. Artifact saving

The stage order clean -> encode -> split -> balance is load-bearing: the
encoder is fitted once so every partition shares its columns, and
upsampling only ever sees training rows.

Usage:
    from callconv.pipeline import Pipeline

    # Full pipeline
    Pipeline.run()

    # Or step by step
    pipeline = Pipeline()
    pipeline.gather_data()
    pipeline.clean()
    pipeline.encode()
    pipeline.split()
    pipeline.train()
    pipeline.evaluate()
    pipeline.score_all()
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional, Sequence, Union

import numpy as np
import pandas as pd

from callconv.analysis import (
    AVERAGE_COLUMN,
    add_buckets,
    add_likelihood_columns,
    likelihood_column,
    segment_report,
)
from callconv.config import (
    COMBINE_MEMBERS,
    DATA_DIR,
    DECISION_THRESHOLD,
    LABEL_COLUMN,
    MODELS_DIR,
    OUTPUT_DIR,
    RANDOM_SEED,
    TEST_SIZE,
)
from callconv.data import CallDataLoader
from callconv.features import Cleaner, FeatureEncoder
from callconv.models import ConversionModel, DatasetBuilder, Datasets, ModelFitError
from callconv.models.registry import MODEL_NAMES
from callconv.pipeline.evaluator import ClassificationMetrics, Evaluator
from callconv.pipeline.trainer import Trainer

logger = logging.getLogger(__name__)


class Pipeline:
    """End-to-end call conversion pipeline."""

    def __init__(
        self,
        data_dir: Optional[Union[str, Path]] = None,
        seed: int = RANDOM_SEED,
        test_size: float = TEST_SIZE,
        threshold: float = DECISION_THRESHOLD,
        model_names: Sequence[str] = MODEL_NAMES,
        combine_members: Sequence[str] = COMBINE_MEMBERS,
        models_dir: Optional[Union[str, Path]] = None,
        output_dir: Optional[Union[str, Path]] = None,
    ):
        """Initialize pipeline.

        Args:
            data_dir: Directory with the four input CSVs.
            seed: Single seed for split, upsampling, bootstrap and CV folds.
            test_size: Held-out fraction of labeled rows.
            threshold: Probability cut-off for accuracy/confusion matrix.
            model_names: Classifiers to train and compare.
            combine_members: Classifiers averaged into the final likelihood.
            models_dir: Where fitted models are saved.
            output_dir: Where the scored dataset and report are saved.
        """
        self.data_dir = Path(data_dir) if data_dir is not None else DATA_DIR
        self.seed = seed
        self.test_size = test_size
        self.threshold = threshold
        self.model_names = list(model_names)
        self.combine_members = list(combine_members)
        self.models_dir = Path(models_dir) if models_dir is not None else MODELS_DIR
        self.output_dir = Path(output_dir) if output_dir is not None else OUTPUT_DIR

        # State
        self.raw_df: Optional[pd.DataFrame] = None
        self.clean_df: Optional[pd.DataFrame] = None
        self.encoded_df: Optional[pd.DataFrame] = None
        self.datasets: Optional[Datasets] = None
        self.encoder: Optional[FeatureEncoder] = None
        self.models: Dict[str, ConversionModel] = {}
        self.failures: Dict[str, str] = {}
        self.metrics: Dict[str, ClassificationMetrics] = {}
        self.scored_df: Optional[pd.DataFrame] = None

    def gather_data(self) -> pd.DataFrame:
        """Step 1: Load and merge the four input tables."""
        loader = CallDataLoader(self.data_dir)
        print(f"Data directory: {loader.data_dir}")

        self.raw_df = loader.load()
        n_labeled = int(self.raw_df[LABEL_COLUMN].notna().sum()) if LABEL_COLUMN in self.raw_df else 0
        print(f"Gathered {len(self.raw_df):,} calls, {n_labeled:,} labeled")
        return self.raw_df

    def clean(self) -> pd.DataFrame:
        """Step 2: Drop, blank-to-NA, impute and cap. raw_df keeps every column."""
        if self.raw_df is None:
            raise ValueError("Call gather_data() first")

        cleaner = Cleaner()
        self.clean_df = cleaner.clean(self.raw_df)
        print(f"Cleaned: {self.clean_df.shape[1]} columns kept, {len(cleaner.dropped_)} dropped")
        return self.clean_df

    def encode(self) -> pd.DataFrame:
        """Step 3: Log, standardize and one-hot encode the full dataset."""
        if self.clean_df is None:
            raise ValueError("Call clean() first")

        self.encoder = FeatureEncoder().fit(self.clean_df)
        self.encoded_df = self.encoder.transform(self.clean_df)
        print(f"Encoded {len(self.encoded_df):,} rows into {len(self.encoder.feature_columns)} features")
        return self.encoded_df

    def split(self) -> Datasets:
        """Step 4: Stratified split of labeled rows, then upsample train."""
        if self.encoded_df is None:
            raise ValueError("Call encode() first")

        builder = DatasetBuilder(test_size=self.test_size, seed=self.seed)
        self.datasets = builder.build(self.encoded_df)
        self.datasets.print_summary()
        return self.datasets

    def train(self) -> Dict[str, ConversionModel]:
        """Step 5: Fit every classifier; failures are recorded, not raised."""
        if self.datasets is None:
            raise ValueError("Call split() first")

        train = self.datasets.train
        trainer = Trainer(seed=self.seed)
        self.models, self.failures = trainer.fit_all(
            train[self.datasets.feature_cols],
            train[LABEL_COLUMN],
            names=self.model_names,
        )
        for name, reason in self.failures.items():
            print(f"  {name} FAILED: {reason}")
        return self.models

    def evaluate(self) -> Dict[str, ClassificationMetrics]:
        """Step 6: Accuracy, ROC and AUC per fitted model on the test partition."""
        if self.datasets is None:
            raise ValueError("Call split() first")
        if not self.models:
            raise ValueError("Call train() first (no fitted models)")

        test = self.datasets.test
        X_test = test[self.datasets.feature_cols]
        evaluator = Evaluator(threshold=self.threshold)

        self.metrics = {}
        for name, model in self.models.items():
            try:
                proba = Trainer.predict_proba(model, X_test)
            except ModelFitError as e:
                logger.error(f"{name} failed on test partition: {e}")
                self.failures[name] = str(e)
                continue
            self.metrics[name] = evaluator.evaluate(name, test[LABEL_COLUMN], proba)

        print("\nEvaluation:")
        print(Evaluator.compare(self.metrics).to_string(index=False))
        return self.metrics

    def score_all(self) -> pd.DataFrame:
        """Step 7: Likelihood for every call (labeled or not), plus buckets."""
        if self.encoded_df is None or self.datasets is None:
            raise ValueError("Call split() first")
        if not self.models:
            raise ValueError("Call train() first (no fitted models)")

        X_all = self.encoded_df[self.datasets.feature_cols]
        predictions: Dict[str, np.ndarray] = {}
        for name in self.combine_members:
            model = self.models.get(name)
            if model is None:
                continue
            try:
                predictions[name] = Trainer.predict_proba(model, X_all)
            except ModelFitError as e:
                logger.error(f"{name} failed scoring the full dataset: {e}")
                self.failures[name] = str(e)

        if predictions:
            scored = add_likelihood_columns(self.raw_df, predictions, self.combine_members)
        else:
            logger.warning(
                f"No combination member {self.combine_members} fitted; "
                f"{AVERAGE_COLUMN} left empty"
            )
            scored = self.raw_df.copy()
            for name in self.combine_members:
                scored[likelihood_column(name)] = np.nan
            scored[AVERAGE_COLUMN] = np.nan
        self.scored_df = add_buckets(scored)
        print(f"Scored {len(self.scored_df):,} calls with {sorted(predictions)}")
        return self.scored_df

    def segment_report(self) -> Dict[str, pd.DataFrame]:
        """Likelihood distribution per caller segment (requires score_all())."""
        if self.scored_df is None:
            raise ValueError("Call score_all() first")
        return segment_report(self.scored_df)

    def save_artifacts(self) -> None:
        """Step 8: Save fitted models, evaluation report and scored dataset."""
        for name, model in self.models.items():
            path = model.save(self.models_dir)
            logger.info(f"Saved {name} to {path}")

        Evaluator.save_results(self.metrics, self.models_dir / "report.json", self.failures)

        if self.scored_df is not None:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            out_path = self.output_dir / "scored_calls.csv"
            self.scored_df.to_csv(out_path, index=False)
            print(f"Scored dataset saved to {out_path}")

    @classmethod
    def run(cls, **kwargs) -> "Pipeline":
        """Run full pipeline end-to-end.

        Args:
            **kwargs: Passed to Pipeline().
        """
        pipeline = cls(**kwargs)
        pipeline.gather_data()
        pipeline.clean()
        pipeline.encode()
        pipeline.split()
        pipeline.train()
        pipeline.evaluate()
        pipeline.score_all()
        pipeline.save_artifacts()
        print("\nPipeline complete!")
        return pipeline
