import pandas as pd

from data_contracts.models import AllocationResultContract
from mrp_core.inventory.fefo_allocator import allocation_frame


def buildable_frame(buildable: dict) -> pd.DataFrame:
    """Per-component 'buildable now' table with the limiting rows flagged."""
    limiting = list(buildable.get("limiting_item_ids") or [])
    rows = buildable.get("per_component") or []

    df = pd.DataFrame(rows, columns=["item_id", "qty_per_unit", "available_qty", "max_units"])
    df["limiting"] = df["item_id"].isin(limiting)
    return df


def allocation_table(availability: dict) -> pd.DataFrame:
    """One row per lot allocation, plus a shortage row per short component."""
    results = [
        AllocationResultContract.model_validate(r)
        for r in availability.get("results") or []
    ]
    return allocation_frame(results)


def shortage_summary(availability: dict) -> pd.DataFrame:
    rows = [
        {
            "item_id": r["item_id"],
            "required_qty": r["required_qty"],
            "shortage_qty": r["shortage_qty"],
        }
        for r in availability.get("results") or []
        if r.get("shortage_qty", 0) > 0
    ]
    return pd.DataFrame(rows, columns=["item_id", "required_qty", "shortage_qty"])
