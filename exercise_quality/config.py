# config.py
import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

# ---------- CONFIG ----------
TRAINING_CSV   = os.getenv("TRAINING_CSV", "data/pml-training.csv")
VALIDATION_CSV = os.getenv("VALIDATION_CSV", "data/pml-testing.csv")
OUTPUT_DIR     = os.getenv("OUTPUT_DIR", "output")

LABEL_COL = os.getenv("LABEL_COL", "classe")

RANDOM_SEED    = int(os.getenv("RANDOM_SEED", "1234"))
TRAIN_FRACTION = float(os.getenv("TRAIN_FRACTION", "0.7"))

MISSING_THRESHOLD  = float(os.getenv("MISSING_THRESHOLD", "0.20"))  # drop at >= 20% NA
CORRELATION_CUTOFF = float(os.getenv("CORRELATION_CUTOFF", "0.90"))
FREQ_CUT           = float(os.getenv("FREQ_CUT", str(95 / 5)))
UNIQUE_CUT         = float(os.getenv("UNIQUE_CUT", "10"))

N_ESTIMATORS   = int(os.getenv("N_ESTIMATORS", "200"))
TREE_MAX_DEPTH = int(os.getenv("TREE_MAX_DEPTH")) if os.getenv("TREE_MAX_DEPTH") else None

TOP_FEATURES = int(os.getenv("TOP_FEATURES", "10"))
SAVE_PLOTS   = os.getenv("SAVE_PLOTS", "true").lower() in ("1", "true", "yes")
LOG_LEVEL    = os.getenv("LOG_LEVEL", "INFO").upper()

# row index, subject and timestamp columns carry no signal about the movement
IRRELEVANT_COLS = [
    "X",
    "Unnamed: 0",
    "user_name",
    "raw_timestamp_part_1",
    "raw_timestamp_part_2",
    "cvtd_timestamp",
    "new_window",
    "num_window",
    "problem_id",
]

# the raw sensor export writes missing readings three different ways
NA_VALUES = ["NA", "", "#DIV/0!"]
# =============================


@dataclass
class PipelineConfig:
    training_csv: str = TRAINING_CSV
    validation_csv: str = VALIDATION_CSV
    output_dir: str = OUTPUT_DIR
    label: str = LABEL_COL
    seed: int = RANDOM_SEED
    train_fraction: float = TRAIN_FRACTION
    missing_threshold: float = MISSING_THRESHOLD
    correlation_cutoff: float = CORRELATION_CUTOFF
    freq_cut: float = FREQ_CUT
    unique_cut: float = UNIQUE_CUT
    n_estimators: int = N_ESTIMATORS
    tree_max_depth: Optional[int] = TREE_MAX_DEPTH
    top_features: int = TOP_FEATURES
    save_plots: bool = SAVE_PLOTS
    irrelevant: list = field(default_factory=lambda: list(IRRELEVANT_COLS))


def load_config(**overrides):
    """Build a PipelineConfig from the module constants, with keyword overrides."""
    return PipelineConfig(**overrides)
