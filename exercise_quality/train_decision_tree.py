# train_decision_tree.py
import logging
import time

from sklearn.pipeline import Pipeline
from sklearn.tree import DecisionTreeClassifier

from .config import LABEL_COL, RANDOM_SEED, TREE_MAX_DEPTH
from .preprocessing import build_preprocessor, split_xy

logger = logging.getLogger(__name__)


def fit_decision_tree(train, label=LABEL_COL, max_depth=TREE_MAX_DEPTH, seed=RANDOM_SEED):
    """Fit a single decision tree on the pruned training subset."""
    X, y = split_xy(train, label)

    model = Pipeline([
        ("prep", build_preprocessor(X)),
        ("tree", DecisionTreeClassifier(
            max_depth = max_depth,
            random_state = seed
        )),
    ])

    start = time.perf_counter()
    model.fit(X, y)
    tree = model.named_steps["tree"]
    logger.info(
        f"Decision tree fitted in {time.perf_counter() - start:.2f}s "
        f"(depth {tree.get_depth()}, {tree.get_n_leaves()} leaves)"
    )
    return model
