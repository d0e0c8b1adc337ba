"""
Exercise quality report

Modules:
    load_data - read the training / validation sensor CSVs
    split_data - stratified train/test split
    prune_features - column filters and their replay by name
    train_decision_tree, train_random_forest - scikit-learn model fitters
    evaluate - confusion matrices and accuracy on the held-out subset
    validate - predictions for the validation table
    run_report - the end-to-end report
"""

from .prune_features import ColumnSelection, fit_selection
from .run_report import run

__all__ = [
    'ColumnSelection',
    'fit_selection',
    'run',
]
