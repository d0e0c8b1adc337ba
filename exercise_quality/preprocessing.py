# preprocessing.py
from sklearn.compose import ColumnTransformer
from sklearn.impute import SimpleImputer
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import FunctionTransformer, OneHotEncoder


def split_xy(table, label):
    """Feature frame and label series of a pruned table."""
    return table.drop(columns=[label]), table[label]


def as_object(X):
    """bool and category columns go through the imputer as plain objects."""
    return X.astype(object)


def build_preprocessor(X):
    """
    Imputation for the numeric columns, imputation + one-hot for the rest.
    The few NA readings left after pruning are filled from the training medians.
    """
    numeric_cols = list(X.select_dtypes(include="number").columns)
    other_cols = [c for c in X.columns if c not in numeric_cols]

    if not numeric_cols and not other_cols:
        raise ValueError("No feature columns left to fit on")

    transformers = []
    if numeric_cols:
        transformers.append(("num", SimpleImputer(strategy="median"), numeric_cols))
    if other_cols:
        transformers.append((
            "cat",
            Pipeline([
                ("as_object", FunctionTransformer(as_object, feature_names_out="one-to-one")),
                ("impute", SimpleImputer(strategy="most_frequent")),
                ("onehot", OneHotEncoder(handle_unknown="ignore")),
            ]),
            other_cols,
        ))
    return ColumnTransformer(transformers)
