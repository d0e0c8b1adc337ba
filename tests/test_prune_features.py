import numpy as np
import pandas as pd
import pytest

from exercise_quality.prune_features import (
    ColumnSelection,
    correlated_columns,
    fit_selection,
    high_missingness,
    irrelevant_columns,
    max_abs_correlation,
    missing_fraction,
    near_zero_variance,
    nzv_metrics,
)


# ---------- near-zero variance ----------

def test_nzv_flags_constant_and_rare_value_columns():
    df = pd.DataFrame({
        "constant": [3.0] * 100,
        "rare": [0] * 97 + [1] * 3,         # freq ratio 32.3, 2% unique
        "binary": [0] * 50 + [1] * 50,      # freq ratio 1
        "varied": np.arange(100.0),
    })

    assert near_zero_variance(df) == ["constant", "rare"]


def test_nzv_metrics_values():
    df = pd.DataFrame({"x": [1, 1, 1, 2, np.nan]})
    m = nzv_metrics(df).loc["x"]

    assert m["freq_ratio"] == pytest.approx(3.0)
    assert m["percent_unique"] == pytest.approx(40.0)
    assert not m["zero_var"]


def test_nzv_all_missing_column_is_zero_variance():
    df = pd.DataFrame({"empty": [np.nan] * 10, "x": np.arange(10.0)})
    assert near_zero_variance(df) == ["empty"]


def test_nzv_is_idempotent(sensor_table):
    features = sensor_table.drop(columns=["classe"])
    first = near_zero_variance(features)
    filtered = features.drop(columns=first)

    assert first == ["constant"]
    assert near_zero_variance(filtered) == []


# ---------- manual list ----------

def test_irrelevant_columns_skips_absent_names():
    df = pd.DataFrame({"user_name": ["a"], "num_window": [1], "roll_belt": [1.0]})
    assert irrelevant_columns(df, ["X", "user_name", "num_window"]) == ["user_name", "num_window"]


# ---------- missingness ----------

def test_high_missingness_threshold_is_inclusive():
    df = pd.DataFrame({
        "at_20": [np.nan] * 2 + [1.0] * 8,
        "below": [np.nan] + [1.0] * 9,
        "full": [1.0] * 10,
    })
    assert high_missingness(df, threshold=0.20) == ["at_20"]


def test_missingness_bound_after_filter(sensor_table):
    dropped = high_missingness(sensor_table)
    remaining = sensor_table.drop(columns=dropped)

    assert dropped == ["gappy"]
    assert (missing_fraction(remaining) < 0.20).all()


# ---------- correlation ----------

def test_correlated_pair_drops_one(sensor_table):
    features = sensor_table.drop(columns=["classe", "constant", "gappy"])
    dropped = correlated_columns(features)

    assert len(dropped) == 1
    assert dropped[0] in ("corr_a", "corr_b")


def test_correlated_group_keeps_single_member():
    rng = np.random.default_rng(7)
    base = rng.normal(size=200)
    df = pd.DataFrame({
        "a": base,
        "b": base + 0.05 * rng.normal(size=200),
        "c": base + 0.05 * rng.normal(size=200),
        "d": rng.normal(size=200),
    })

    dropped = correlated_columns(df, cutoff=0.90)
    remaining = df.drop(columns=dropped)

    assert len(dropped) == 2
    assert "d" in remaining.columns
    assert max_abs_correlation(remaining) < 0.90


def test_correlation_ignores_non_numeric_columns():
    df = pd.DataFrame({
        "x": np.arange(10.0),
        "y": np.arange(10.0) * 2,
        "name": list("abcdefghij"),
    })
    assert correlated_columns(df) in (["x"], ["y"])


def test_correlation_bound_after_filter(sensor_table):
    features = sensor_table.drop(columns=["classe"])
    remaining = features.drop(columns=correlated_columns(features))
    corr = remaining.select_dtypes(include="number").corr().abs().to_numpy(copy=True)
    np.fill_diagonal(corr, 0.0)

    assert np.nanmax(corr) < 0.90
    assert max_abs_correlation(remaining) < 0.90


# ---------- selection ----------

def test_fit_selection_drops_exactly_the_expected_columns(sensor_table):
    selection = fit_selection(sensor_table)

    assert selection.dropped["near_zero_variance"] == ["constant"]
    assert selection.dropped["irrelevant"] == []
    assert selection.dropped["missingness"] == ["gappy"]
    assert len(selection.dropped["correlation"]) == 1
    assert sorted(selection.dropped_columns) == sorted(
        ["constant", "gappy"] + selection.dropped["correlation"]
    )
    kept_pair = {"corr_a", "corr_b"} - set(selection.dropped["correlation"])
    assert selection.features == ["f1", "f2", "f3", "f4", "f5"] + sorted(kept_pair)


def test_apply_replays_by_name_regardless_of_column_order(sensor_table):
    selection = fit_selection(sensor_table)
    shuffled = sensor_table[sensor_table.columns[::-1]]

    out = selection.apply(shuffled)

    assert list(out.columns) == selection.features + ["classe"]


def test_apply_without_label_keeps_only_features(sensor_table):
    selection = fit_selection(sensor_table)
    out = selection.apply(sensor_table.drop(columns=["classe"]))

    assert list(out.columns) == selection.features


def test_apply_raises_on_missing_column(sensor_table):
    selection = ColumnSelection(features=["f1", "not_there"])

    with pytest.raises(KeyError, match="not_there"):
        selection.apply(sensor_table)
