import pandas as pd

from mrp_core.app_logging import get_logger
from .specs import DATASET_SPECS

logger = get_logger(__name__)

QUANTITY_COLUMNS = ("qty_on_hand", "qty_per_unit")


def validate_df(df: pd.DataFrame, dataset_name: str) -> None:
    if dataset_name not in DATASET_SPECS:
        raise ValueError(f"Unknown dataset: {dataset_name}")

    required_cols = set(DATASET_SPECS[dataset_name])
    missing = required_cols - set(df.columns)

    if missing:
        raise ValueError(
            f"{dataset_name} missing columns: {sorted(missing)}"
        )

    if df.empty:
        raise ValueError(f"{dataset_name} is empty")

    # soft checks
    for col in QUANTITY_COLUMNS:
        if col in df.columns:
            if (pd.to_numeric(df[col], errors="coerce") < 0).any():
                logger.warning(
                    "negative quantity detected",
                    extra={"dataset": dataset_name, "column": col},
                )
