"""Tests for the Cleaner treatments."""

import numpy as np
import pandas as pd
import pytest

from callconv.features import Cleaner, blank_to_na, cap_outliers, impute_mean, iqr_bounds


class TestBlankToNa:
    """Tests for blank_to_na()."""

    def test_blanks_become_na(self):
        df = pd.DataFrame({"gender": ["F", "", "M"], "state": ["", "CA", "TX"]})
        result = blank_to_na(df, ["gender"])
        assert result["gender"].isna().tolist() == [False, True, False]
        # Columns not listed keep their blanks
        assert result["state"].iloc[0] == ""

    def test_idempotent(self):
        df = pd.DataFrame({"gender": ["F", "", None, "M"]})
        once = blank_to_na(df, ["gender"])
        twice = blank_to_na(once, ["gender"])
        pd.testing.assert_frame_equal(once, twice)

    def test_input_not_modified(self):
        df = pd.DataFrame({"gender": ["", "F"]})
        blank_to_na(df, ["gender"])
        assert df["gender"].iloc[0] == ""

    def test_missing_column_ignored(self):
        df = pd.DataFrame({"age": [30.0]})
        pd.testing.assert_frame_equal(blank_to_na(df, ["gender"]), df)


class TestOutlierCapping:
    """Tests for iqr_bounds() and cap_outliers()."""

    def test_bounds_are_tukey_fences(self):
        series = pd.Series([1.0, 2.0, 3.0, 4.0, 5.0], name="bmi")
        # q1 = 2, q3 = 4, IQR = 2
        assert iqr_bounds(series) == (-1.0, 7.0)

    def test_values_projected_onto_fences(self):
        df = pd.DataFrame({"weight": [1.0, 2.0, 3.0, 4.0, 5.0, 100.0, -50.0]})
        lower, upper = iqr_bounds(df["weight"])
        capped = cap_outliers(df, {"weight": (lower, upper)})
        assert capped["weight"].max() == upper
        assert capped["weight"].min() == lower
        assert len(capped) == len(df)

    def test_in_range_values_unchanged(self):
        df = pd.DataFrame({"weight": [150.0, 160.0, 170.0, 180.0, 900.0]})
        capped = cap_outliers(df, {"weight": iqr_bounds(df["weight"])})
        assert capped["weight"].iloc[:4].tolist() == [150.0, 160.0, 170.0, 180.0]

    def test_na_stays_na(self):
        df = pd.DataFrame({"height": [60.0, np.nan, 70.0]})
        capped = cap_outliers(df, {"height": (65.0, 68.0)})
        assert pd.isna(capped["height"].iloc[1])
        assert capped["height"].iloc[0] == 65.0

    def test_no_observed_values_raises(self):
        with pytest.raises(ValueError, match="no observed values"):
            iqr_bounds(pd.Series([np.nan, np.nan], name="bmi"))


class TestImputeMean:
    """Tests for impute_mean()."""

    def test_fills_with_given_mean(self):
        df = pd.DataFrame({"age": [20.0, np.nan, 40.0]})
        result = impute_mean(df, {"age": 30.0})
        assert result["age"].tolist() == [20.0, 30.0, 40.0]

    def test_observed_values_unchanged(self):
        df = pd.DataFrame({"age": [20.0, 40.0]})
        pd.testing.assert_frame_equal(impute_mean(df, {"age": 99.0}), df)


class TestCleaner:
    """Tests for the Cleaner fit/transform flow."""

    def test_drops_constant_and_sparse_columns(self, raw_calls):
        cleaner = Cleaner()
        result = cleaner.clean(raw_calls)
        for col in ["country", "product_line", "occupation", "medical_condition", "expectant_parent"]:
            assert col not in result.columns
        assert set(cleaner.dropped_) == {
            "country", "product_line", "occupation", "medical_condition", "expectant_parent",
        }

    def test_no_blanks_left_in_blank_to_na_columns(self, raw_calls):
        result = Cleaner().clean(raw_calls)
        for col in ["gender", "device", "connection_type", "company", "currently_insured"]:
            assert not (result[col] == "").any()
            assert result[col].isna().any()

    def test_imputed_columns_complete(self, raw_calls):
        cleaner = Cleaner()
        result = cleaner.clean(raw_calls)
        for col in ["age", "household_income", "household_size"]:
            assert result[col].notna().all()
        assert cleaner.means_["age"] == pytest.approx(raw_calls["age"].mean())
        assert result.loc[5, "age"] == pytest.approx(raw_calls["age"].mean())

    def test_outliers_capped_not_dropped(self, raw_calls):
        cleaner = Cleaner()
        result = cleaner.clean(raw_calls)
        lower, upper = cleaner.bounds_["weight"]
        assert len(result) == len(raw_calls)
        assert result["weight"].between(lower, upper).all()
        assert result.loc[0, "weight"] == upper
        assert result.loc[1, "weight"] == lower

    def test_metadata_and_label_pass_through(self, raw_calls):
        result = Cleaner().clean(raw_calls)
        pd.testing.assert_series_equal(result["call_id"], raw_calls["call_id"])
        pd.testing.assert_series_equal(result["conversion"], raw_calls["conversion"])

    def test_input_not_modified(self, raw_calls):
        before = raw_calls.copy()
        Cleaner().clean(raw_calls)
        pd.testing.assert_frame_equal(raw_calls, before)

    def test_fitted_statistics_applied_to_other_frame(self, raw_calls):
        cleaner = Cleaner().fit(raw_calls.iloc[:150])
        other = raw_calls.iloc[150:].copy()
        other.loc[other.index[0], "age"] = np.nan
        result = cleaner.transform(other)
        assert result["age"].iloc[0] == pytest.approx(cleaner.means_["age"])

    def test_all_missing_imputed_column_raises(self, raw_calls):
        raw_calls["household_size"] = np.nan
        with pytest.raises(ValueError, match="household_size"):
            Cleaner().fit(raw_calls)
