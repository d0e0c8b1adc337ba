# plots.py
import os

import matplotlib.pyplot as plt
import seaborn as sns
from sklearn.tree import plot_tree


def _save(fig, path):
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    fig.tight_layout()
    fig.savefig(path, dpi=120)
    plt.close(fig)
    return path


def plot_correlation_heatmap(features, path):
    """Signed correlation of the numeric features kept after pruning."""
    corr = features.select_dtypes(include="number").corr()
    size = max(6, 0.25 * len(corr))
    fig, ax = plt.subplots(figsize=(size, size))
    sns.heatmap(corr, cmap="coolwarm", center=0, vmin=-1, vmax=1, square=True, ax=ax)
    ax.set_title("Feature correlation")
    return _save(fig, path)


def plot_decision_tree(model, path, max_depth=3):
    tree = model.named_steps["tree"]
    names = [n.split("__", 1)[-1] for n in model.named_steps["prep"].get_feature_names_out()]
    fig, ax = plt.subplots(figsize=(20, 10))
    plot_tree(
        tree,
        feature_names=names,
        class_names=[str(c) for c in tree.classes_],
        filled=True,
        max_depth=max_depth,
        fontsize=7,
        ax=ax,
    )
    ax.set_title("Decision tree")
    return _save(fig, path)


def plot_confusion_matrix(report, path):
    fig, ax = plt.subplots(figsize=(6, 5))
    sns.heatmap(report.confusion, annot=True, fmt="d", cmap="Blues", ax=ax)
    ax.set_title(f"{report.name} (accuracy {report.accuracy:.3f})")
    return _save(fig, path)


def plot_feature_importance(importances, path):
    fig, ax = plt.subplots(figsize=(8, max(3, 0.35 * len(importances))))
    importances[::-1].plot.barh(ax=ax)
    ax.set_xlabel("Mean decrease in impurity")
    ax.set_title("Random forest feature importance")
    ax.grid(True, alpha=0.3)
    return _save(fig, path)
