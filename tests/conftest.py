import matplotlib
import numpy as np
import pandas as pd
import pytest

matplotlib.use("Agg")

CLASSES = ["A", "B", "C", "D"]


def make_sensor_table(n_rows=100, seed=0, with_label=True, extra_cols=False, gappy_fraction=0.25):
    """
    Synthetic sensor table: five informative columns, one constant column,
    one column with 25% missing readings (by default) and a pair correlated at ~0.95.
    """
    rng = np.random.default_rng(seed)
    labels = np.array(CLASSES * (n_rows // len(CLASSES)))
    shift = np.searchsorted(CLASSES, labels).astype(float)

    df = pd.DataFrame({f"f{i}": rng.normal(size=n_rows) + shift * (i % 2) for i in range(1, 6)})
    df["constant"] = 1.0

    gappy = rng.normal(size=n_rows)
    gappy[rng.choice(n_rows, size=int(n_rows * gappy_fraction), replace=False)] = np.nan
    df["gappy"] = gappy

    a = rng.normal(size=n_rows)
    df["corr_a"] = a
    df["corr_b"] = 0.95 * a + np.sqrt(1 - 0.95 ** 2) * rng.normal(size=n_rows)

    if extra_cols:
        df.insert(0, "user_name", rng.choice(["adelmo", "carlitos", "pedro"], size=n_rows))
    if with_label:
        df["classe"] = labels
    return df


@pytest.fixture
def sensor_table():
    return make_sensor_table()


@pytest.fixture
def csv_files(tmp_path):
    training = make_sensor_table(n_rows=200, seed=1, extra_cols=True, gappy_fraction=0.4)
    validation = make_sensor_table(n_rows=20, seed=2, with_label=False, extra_cols=True)
    validation["problem_id"] = range(1, 21)

    train_path = tmp_path / "training.csv"
    valid_path = tmp_path / "validation.csv"
    training.to_csv(train_path)        # keeps the row index as a leading column
    validation.to_csv(valid_path)
    return train_path, valid_path
