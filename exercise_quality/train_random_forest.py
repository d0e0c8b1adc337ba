# train_random_forest.py
import logging
import time

import pandas as pd
from sklearn.ensemble import RandomForestClassifier
from sklearn.pipeline import Pipeline

from .config import LABEL_COL, N_ESTIMATORS, RANDOM_SEED
from .preprocessing import build_preprocessor, split_xy

logger = logging.getLogger(__name__)


def fit_random_forest(train, label=LABEL_COL, n_estimators=N_ESTIMATORS, seed=RANDOM_SEED, n_jobs=-1):
    """Fit a random forest on the pruned training subset."""
    X, y = split_xy(train, label)

    model = Pipeline([
        ("prep", build_preprocessor(X)),
        ("forest", RandomForestClassifier(
            n_estimators = n_estimators,
            max_depth = None,
            random_state = seed,
            n_jobs = n_jobs
        )),
    ])

    start = time.perf_counter()
    model.fit(X, y)
    logger.info(f"Random forest ({n_estimators} trees) fitted in {time.perf_counter() - start:.2f}s")
    return model


def feature_importance(model, top=None):
    """Impurity-based importances of a fitted forest pipeline, largest first."""
    names = model.named_steps["prep"].get_feature_names_out()
    forest = model.named_steps["forest"]
    imp = pd.Series(forest.feature_importances_, index=names).sort_values(ascending=False)
    # ColumnTransformer prefixes the transformer name ("num__roll_belt")
    imp.index = [n.split("__", 1)[-1] for n in imp.index]
    return imp.head(top) if top else imp
