# split_data.py
import logging

from sklearn.model_selection import train_test_split

from .config import LABEL_COL, RANDOM_SEED, TRAIN_FRACTION

logger = logging.getLogger(__name__)


def split_training(df, label=LABEL_COL, train_fraction=TRAIN_FRACTION, seed=RANDOM_SEED):
    """
    Stratified split of the training table into a working-training and a
    held-out-testing subset. Row membership only depends on the seed.
    """
    train, test = train_test_split(
        df,
        train_size = train_fraction,
        random_state = seed,
        stratify = df[label]
    )
    logger.info(f"Split {len(df)} rows -> {len(train)} training / {len(test)} testing (seed={seed})")
    return train, test
