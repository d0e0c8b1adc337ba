# load_data.py
import logging

import pandas as pd

from .config import LABEL_COL, NA_VALUES

logger = logging.getLogger(__name__)


def load_table(path):
    """Read one sensor CSV, treating every NA spelling of the export as missing."""
    df = pd.read_csv(path, na_values=NA_VALUES, keep_default_na=True, low_memory=False)
    logger.info(f"Loaded {path}: {df.shape[0]} rows x {df.shape[1]} columns")
    return df


def load_datasets(training_path, validation_path, label=LABEL_COL):
    """
    Load the training and validation tables.

    Returns:
        (training, validation) DataFrames

    Raises:
        ValueError: the training file has no label column
    """
    training = load_table(training_path)
    if label not in training.columns:
        raise ValueError(f"Missing label column in training CSV: {label}")

    validation = load_table(validation_path)
    classes = sorted(training[label].dropna().unique())
    logger.info(f"Label '{label}' has {len(classes)} classes: {classes}")
    return training, validation
