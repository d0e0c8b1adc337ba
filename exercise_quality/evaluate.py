"""
Out-of-sample evaluation of the fitted models on the held-out testing subset.

All metrics come from sklearn.metrics; the accuracy interval is the exact
binomial (Clopper-Pearson) interval from scipy.
"""

import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd
from scipy.stats import binomtest
from sklearn.metrics import (
    accuracy_score,
    classification_report,
    cohen_kappa_score,
    confusion_matrix,
    multilabel_confusion_matrix,
    recall_score,
)

from .config import LABEL_COL
from .preprocessing import split_xy

logger = logging.getLogger(__name__)


@dataclass
class EvaluationReport:
    name: str
    n: int
    accuracy: float
    accuracy_ci: tuple
    kappa: float
    labels: list
    confusion: pd.DataFrame     # rows = actual, columns = predicted
    per_class: pd.DataFrame     # sensitivity / specificity per label
    text: str

    @property
    def error(self):
        """Estimated out-of-sample error."""
        return 1.0 - self.accuracy


def classification_metrics(y_true, y_pred, name="model"):
    y_true = np.asarray(y_true)
    y_pred = np.asarray(y_pred)
    labels = sorted(set(y_true) | set(y_pred))

    n = len(y_true)
    accuracy = accuracy_score(y_true, y_pred)
    correct = int((y_true == y_pred).sum())
    ci = binomtest(correct, n).proportion_ci(confidence_level=0.95)

    cm = confusion_matrix(y_true, y_pred, labels=labels)
    confusion = pd.DataFrame(
        cm,
        index=pd.Index(labels, name="actual"),
        columns=pd.Index(labels, name="predicted"),
    )

    # one-vs-rest matrices: [[tn, fp], [fn, tp]] per label
    mcm = multilabel_confusion_matrix(y_true, y_pred, labels=labels)
    tn, fp = mcm[:, 0, 0], mcm[:, 0, 1]
    with np.errstate(divide="ignore", invalid="ignore"):
        specificity = np.where(tn + fp > 0, tn / (tn + fp), 0.0)
    sensitivity = recall_score(y_true, y_pred, labels=labels, average=None, zero_division=0)
    per_class = pd.DataFrame(
        {"sensitivity": sensitivity, "specificity": specificity},
        index=pd.Index(labels, name="class"),
    )

    return EvaluationReport(
        name=name,
        n=n,
        accuracy=float(accuracy),
        accuracy_ci=(float(ci.low), float(ci.high)),
        kappa=float(cohen_kappa_score(y_true, y_pred)),
        labels=labels,
        confusion=confusion,
        per_class=per_class,
        text=classification_report(y_true, y_pred, labels=labels, zero_division=0),
    )


def evaluate(model, test, label=LABEL_COL, name="model"):
    """Predict the pruned testing subset and score the predictions."""
    X, y = split_xy(test, label)
    y_pred = model.predict(X)
    report = classification_metrics(y, y_pred, name=name)
    logger.info(f"{name}: accuracy {report.accuracy:.4f} on {report.n} held-out rows")
    return report


def compare_models(reports):
    """Name of the most accurate model; ties go to the one listed last."""
    best = reports[0]
    for report in reports[1:]:
        if report.accuracy >= best.accuracy:
            best = report
    return best.name


def format_report(report):
    lo, hi = report.accuracy_ci
    lines = [
        f"=== {report.name.upper()} ===",
        "Confusion matrix:",
        report.confusion.to_string(),
        "",
        f"Accuracy : {report.accuracy:.4f}   95% CI: ({lo:.4f}, {hi:.4f})",
        f"Kappa    : {report.kappa:.4f}",
        f"Out-of-sample error: {report.error:.4f}",
        "",
        report.per_class.round(4).to_string(),
        "",
        report.text,
    ]
    return "\n".join(lines)
