"""
Feature pruning for the sensor tables.

Every filter is computed on the working-training subset only. The result is a
ColumnSelection that is replayed by column name on the testing subset and on
the validation table, so the three feature matrices always line up.
"""

import logging
from dataclasses import dataclass, field

import numpy as np
import pandas as pd

from .config import (
    CORRELATION_CUTOFF,
    FREQ_CUT,
    IRRELEVANT_COLS,
    LABEL_COL,
    MISSING_THRESHOLD,
    UNIQUE_CUT,
)

logger = logging.getLogger(__name__)


@dataclass
class ColumnSelection:
    """Kept feature names plus which filter dropped what."""
    features: list
    label: str = LABEL_COL
    dropped: dict = field(default_factory=dict)

    @property
    def dropped_columns(self):
        return [c for cols in self.dropped.values() for c in cols]

    def apply(self, table):
        """
        Select the kept features (and the label, when the table has one) by name.

        Raises:
            KeyError: a kept feature is not a column of `table`
        """
        missing = [c for c in self.features if c not in table.columns]
        if missing:
            raise KeyError(f"Columns missing from table: {missing}")

        cols = list(self.features)
        if self.label in table.columns:
            cols.append(self.label)
        return table[cols].copy()


# ---------- near-zero variance ----------

def nzv_metrics(df, freq_cut=FREQ_CUT, unique_cut=UNIQUE_CUT):
    """Frequency ratio, percent unique and the resulting flags for every column."""
    n_rows = len(df)
    rows = []
    for col in df.columns:
        counts = df[col].value_counts(dropna=True)
        n_distinct = len(counts)

        if n_distinct <= 1:
            freq_ratio = 0.0
        else:
            freq_ratio = float(counts.iloc[0] / counts.iloc[1])
        percent_unique = 100.0 * n_distinct / n_rows if n_rows else 0.0
        zero_var = n_distinct <= 1

        rows.append({
            "column": col,
            "freq_ratio": freq_ratio,
            "percent_unique": percent_unique,
            "zero_var": zero_var,
            "nzv": bool((freq_ratio > freq_cut and percent_unique <= unique_cut) or zero_var),
        })

    return pd.DataFrame(rows, columns=["column", "freq_ratio", "percent_unique", "zero_var", "nzv"]).set_index("column")


def near_zero_variance(df, freq_cut=FREQ_CUT, unique_cut=UNIQUE_CUT):
    """Names of the near-zero-variance columns, in column order."""
    metrics = nzv_metrics(df, freq_cut=freq_cut, unique_cut=unique_cut)
    return list(metrics.index[metrics["nzv"]])


# ---------- manual list ----------

def irrelevant_columns(df, names=IRRELEVANT_COLS):
    present = [c for c in names if c in df.columns]
    absent = [c for c in names if c not in df.columns]
    if absent:
        logger.debug(f"Irrelevant columns not in table, skipped: {absent}")
    return present


# ---------- missingness ----------

def missing_fraction(df):
    return df.isna().mean()


def high_missingness(df, threshold=MISSING_THRESHOLD):
    """Columns whose missing fraction is >= threshold."""
    frac = missing_fraction(df)
    return list(frac.index[frac >= threshold])


# ---------- correlation redundancy ----------

def abs_correlation(df):
    """Absolute Pearson correlation of the numeric columns, diagonal zeroed."""
    numeric = df.select_dtypes(include="number")
    corr = numeric.corr().abs().fillna(0.0)   # constant columns have no defined r
    values = corr.to_numpy(copy=True)
    np.fill_diagonal(values, 0.0)
    return pd.DataFrame(values, index=corr.index, columns=corr.columns)


def max_abs_correlation(df):
    """Largest |r| between two numeric columns, 0 when there is no pair."""
    corr = abs_correlation(df)
    return float(corr.to_numpy().max()) if corr.size else 0.0


def correlated_columns(df, cutoff=CORRELATION_CUTOFF):
    """
    Drop, one at a time, the column with the highest mean absolute correlation
    among the columns of any pair at or above `cutoff`, until no such pair is left.
    """
    corr = abs_correlation(df)
    remaining = list(corr.columns)
    dropped = []

    while len(remaining) > 1:
        sub = corr.loc[remaining, remaining]
        flagged = sub.columns[(sub >= cutoff).any(axis=0)]
        if len(flagged) == 0:
            break

        mean_corr = sub.sum(axis=0) / (len(remaining) - 1)
        worst = mean_corr[flagged].idxmax()
        logger.debug(f"Dropping {worst} (mean |r| = {mean_corr[worst]:.3f})")
        dropped.append(worst)
        remaining.remove(worst)

    return dropped


# ---------- full pipeline ----------

def fit_selection(
    train,
    label=LABEL_COL,
    irrelevant=IRRELEVANT_COLS,
    freq_cut=FREQ_CUT,
    unique_cut=UNIQUE_CUT,
    missing_threshold=MISSING_THRESHOLD,
    correlation_cutoff=CORRELATION_CUTOFF,
):
    """Run the four filters on the training subset and return the selection."""
    features = train.drop(columns=[label])
    dropped = {}

    steps = [
        ("near_zero_variance", lambda f: near_zero_variance(f, freq_cut, unique_cut)),
        ("irrelevant", lambda f: irrelevant_columns(f, irrelevant)),
        ("missingness", lambda f: high_missingness(f, missing_threshold)),
        ("correlation", lambda f: correlated_columns(f, correlation_cutoff)),
    ]
    for name, step in steps:
        cols = step(features)
        dropped[name] = cols
        features = features.drop(columns=cols)
        logger.info(f"{name}: dropped {len(cols)} columns, {features.shape[1]} remain")

    return ColumnSelection(features=list(features.columns), label=label, dropped=dropped)
