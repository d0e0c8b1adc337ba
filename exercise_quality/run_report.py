# ===============================
# Exercise Quality Report
# ===============================

import logging
import os
from dataclasses import dataclass, field

import joblib
import matplotlib
import pandas as pd

from .config import LOG_LEVEL, load_config
from .evaluate import compare_models, evaluate, format_report
from .load_data import load_datasets
from .prune_features import fit_selection, max_abs_correlation
from .split_data import split_training
from .train_decision_tree import fit_decision_tree
from .train_random_forest import feature_importance, fit_random_forest
from .validate import predict_validation

logger = logging.getLogger(__name__)

TREE = "decision_tree"
FOREST = "random_forest"


@dataclass
class ReportResult:
    selection: object
    models: dict
    reports: dict
    best: str
    predictions: pd.DataFrame
    importances: pd.Series
    max_correlation: float
    artifacts: list = field(default_factory=list)


def run(config=None):
    config = config or load_config()
    out = config.output_dir
    os.makedirs(out, exist_ok=True)

    # -------------------------------
    # 1. LOAD
    # -------------------------------
    training, validation = load_datasets(config.training_csv, config.validation_csv, config.label)

    # -------------------------------
    # 2. SPLIT
    # -------------------------------
    train, test = split_training(
        training,
        label=config.label,
        train_fraction=config.train_fraction,
        seed=config.seed,
    )

    # -------------------------------
    # 3. PRUNE FEATURES
    # -------------------------------
    selection = fit_selection(
        train,
        label=config.label,
        irrelevant=config.irrelevant,
        freq_cut=config.freq_cut,
        unique_cut=config.unique_cut,
        missing_threshold=config.missing_threshold,
        correlation_cutoff=config.correlation_cutoff,
    )
    train = selection.apply(train)
    test = selection.apply(test)

    # -------------------------------
    # 4. FIT
    # -------------------------------
    models = {
        TREE: fit_decision_tree(train, config.label, max_depth=config.tree_max_depth, seed=config.seed),
        FOREST: fit_random_forest(train, config.label, n_estimators=config.n_estimators, seed=config.seed),
    }

    # -------------------------------
    # 5. EVALUATE
    # -------------------------------
    reports = {name: evaluate(model, test, config.label, name=name) for name, model in models.items()}
    best = compare_models([reports[TREE], reports[FOREST]])
    logger.info(f"Best model on the testing subset: {best}")

    # -------------------------------
    # 6. VALIDATE
    # -------------------------------
    predictions = predict_validation(models[best], selection, validation)

    # -------------------------------
    # 7. SAVE
    # -------------------------------
    features = train.drop(columns=[config.label])
    result = ReportResult(
        selection=selection,
        models=models,
        reports=reports,
        best=best,
        predictions=predictions,
        importances=feature_importance(models[FOREST], top=config.top_features),
        max_correlation=max_abs_correlation(features),
    )

    for name, model in models.items():
        path = os.path.join(out, f"{name}_model.pkl")
        joblib.dump(model, path)
        result.artifacts.append(path)

    pred_path = os.path.join(out, "validation_predictions.csv")
    predictions.to_csv(pred_path, index=False)
    result.artifacts.append(pred_path)

    if config.save_plots:
        from .plots import (
            plot_confusion_matrix,
            plot_correlation_heatmap,
            plot_decision_tree,
            plot_feature_importance,
        )

        result.artifacts += [
            plot_correlation_heatmap(features, os.path.join(out, "correlation_heatmap.png")),
            plot_decision_tree(models[TREE], os.path.join(out, "decision_tree.png")),
            plot_feature_importance(result.importances, os.path.join(out, "feature_importance.png")),
        ]
        for name, report in reports.items():
            result.artifacts.append(
                plot_confusion_matrix(report, os.path.join(out, f"{name}_confusion.png"))
            )

    logger.info(f"Wrote {len(result.artifacts)} artifacts to {out}")
    return result


def format_result(result):
    sel = result.selection
    lines = ["=== FEATURE PRUNING ==="]
    for step, cols in sel.dropped.items():
        lines.append(f"{step:<20} dropped {len(cols):>3}")
    lines.append(f"{'kept':<20} {len(sel.features):>11}")
    lines.append(f"max |r| among kept numeric features: {result.max_correlation:.3f}")
    lines.append("")

    for report in result.reports.values():
        lines.append(format_report(report))

    lines.append("=== MODEL COMPARISON ===")
    for name, report in result.reports.items():
        lines.append(f"{name:<15} accuracy {report.accuracy:.4f}  error {report.error:.4f}")
    lines.append(f"-> using {result.best} for the validation set")
    lines.append("")

    lines.append("=== TOP RANDOM FOREST FEATURES ===")
    for name, value in result.importances.items():
        lines.append(f"  {name:<25} {value:.4f}")
    lines.append("")

    lines.append("=== VALIDATION PREDICTIONS ===")
    lines.append(result.predictions.to_string(index=False))
    return "\n".join(lines)


def main():
    matplotlib.use("Agg")
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        result = run()
    except Exception:
        logger.exception("Report pipeline failed")
        raise

    print(format_result(result))
    print("\nDone.")


if __name__ == "__main__":
    main()
