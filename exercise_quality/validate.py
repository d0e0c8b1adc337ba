# validate.py
import logging

import pandas as pd

logger = logging.getLogger(__name__)

ID_COL = "problem_id"


def predict_validation(model, selection, validation, id_col=ID_COL):
    """Predicted label for every validation row, keyed by problem id."""
    X = selection.apply(validation)
    if selection.label in X.columns:
        X = X.drop(columns=[selection.label])

    preds = model.predict(X)

    if id_col in validation.columns:
        ids = validation[id_col].to_numpy()
    else:
        ids = range(1, len(validation) + 1)

    out = pd.DataFrame({id_col: ids, "prediction": preds})
    logger.info(f"Predicted {len(out)} validation rows")
    return out
