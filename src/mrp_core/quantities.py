import math
from typing import Any, Mapping, Optional, Tuple

import pandas as pd

from data_contracts.models import BomLineContract

ITEM_KEYS = ("component_item_id", "item_id", "itemId")
QTY_KEYS = ("qty_per_unit", "qty", "quantity")
SCRAP_KEYS = ("scrap_pct", "scrap")


def parse_quantity(value: Any) -> Optional[float]:
    """Finite float for numeric input, None for anything else."""
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None

    try:
        number = pd.to_numeric(value, errors="coerce")
    except (TypeError, ValueError):
        return None

    if not pd.api.types.is_scalar(number) or pd.isna(number):
        return None

    number = float(number)
    return number if math.isfinite(number) else None


def to_quantity(value: Any) -> float:
    """
    Normalize user or mock input to a float quantity.
    Missing, non-numeric, NaN and infinite values become 0.0.
    """
    number = parse_quantity(value)
    return 0.0 if number is None else number


def _first(row: Mapping, keys) -> Any:
    for key in keys:
        if key in row and row[key] is not None:
            return row[key]
    return None


def bom_line_fields(line: Any) -> Tuple[str, float]:
    """(component item id, qty per unit) from a contract or a raw mapping."""
    if isinstance(line, BomLineContract):
        return line.component_item_id, float(line.qty_per_unit)

    if isinstance(line, Mapping):
        item_id = _first(line, ITEM_KEYS)
        return ("" if item_id is None else str(item_id)), to_quantity(_first(line, QTY_KEYS))

    return "", 0.0


def bom_line_scrap_pct(line: Any) -> float:
    """Scrap % of a BOM line, 0 when missing or negative."""
    if isinstance(line, BomLineContract):
        return float(line.scrap_pct)
    if isinstance(line, Mapping):
        return max(0.0, to_quantity(_first(line, SCRAP_KEYS)))
    return 0.0


def clamp_pct(value: Any) -> float:
    return max(0.0, min(100.0, to_quantity(value)))
