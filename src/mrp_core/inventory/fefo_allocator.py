from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

import pandas as pd

from data_contracts.models import (
    AllocationContract,
    AllocationResultContract,
    LotContract,
    RequirementContract,
)
from mrp_core.app_logging import get_logger
from mrp_core.config import PlanningPolicy, default_policy
from mrp_core.quantities import to_quantity

logger = get_logger(__name__)

LOT_COLUMNS = ["lot_id", "item_id", "qty_on_hand", "expiry_date"]

LotsInput = Optional[Union[pd.DataFrame, Iterable[Any]]]


def lots_frame(lots: LotsInput) -> pd.DataFrame:
    """
    Lot snapshot as a typed frame. The index keeps input order,
    which is what breaks expiry ties.
    """
    if isinstance(lots, pd.DataFrame):
        df = lots.copy()
        for col in LOT_COLUMNS:
            if col not in df.columns:
                df[col] = None
    else:
        records = [
            lot.model_dump() if isinstance(lot, LotContract) else dict(lot)
            for lot in (lots or [])
        ]
        df = pd.DataFrame(records, columns=LOT_COLUMNS)

    df = df[LOT_COLUMNS].reset_index(drop=True)

    # Ensure proper types (expiry may mix "2025-01-01" and "2025-01-01T00:00:00")
    df["expiry_date"] = pd.to_datetime(df["expiry_date"], format="ISO8601", errors="coerce")
    df["qty_on_hand"] = (
        pd.to_numeric(df["qty_on_hand"], errors="coerce").fillna(0.0).astype(float).clip(lower=0)
    )
    df["item_id"] = df["item_id"].astype(str)
    df["lot_id"] = df["lot_id"].astype(str)
    return df


def _requirement_fields(req: Any) -> Tuple[str, float]:
    if isinstance(req, RequirementContract):
        return req.item_id, to_quantity(req.required_qty)
    if isinstance(req, Mapping):
        item_id = req.get("item_id", req.get("itemId", ""))
        required = req.get("required_qty", req.get("required"))
        return ("" if item_id is None else str(item_id)), to_quantity(required)
    return "", 0.0


class FEFOAllocator:
    """
    First-Expire, First-Out allocation logic.

    Plans only: the caller's lots are never modified. Within one run a lot's
    remaining quantity is shared by every requirement for its item, so a lot
    is never planned past its on-hand quantity.
    """

    def __init__(self, policy: Optional[PlanningPolicy] = None):
        self.policy = policy or default_policy()

    def allocate(
        self,
        requirements: Optional[Iterable[Any]],
        lots: LotsInput,
    ) -> List[AllocationResultContract]:
        df = lots_frame(lots)
        remaining_by_lot = df["qty_on_hand"].to_dict()

        results = []
        for req in requirements or []:
            item_id, required_qty = _requirement_fields(req)
            results.append(
                self._allocate_item(df, remaining_by_lot, item_id, required_qty)
            )

        logger.debug(
            "fefo run complete",
            extra={
                "requirements": len(results),
                "shortages": sum(1 for r in results if r.has_shortage),
            },
        )
        return results

    def _allocate_item(
        self,
        df: pd.DataFrame,
        remaining_by_lot: dict,
        item_id: str,
        required_qty: float,
    ) -> AllocationResultContract:
        if required_qty <= 0:
            return AllocationResultContract(item_id=item_id, required_qty=required_qty)

        # FEFO: earliest expiry first, stable on ties, undated lots last
        item_lots = df[df["item_id"] == item_id].sort_values(
            "expiry_date", kind="mergesort", na_position="last"
        )

        remaining_qty = required_qty
        allocations = []

        for idx, row in item_lots.iterrows():
            if remaining_qty <= 0:
                break

            available = remaining_by_lot[idx]
            if available <= 0:
                continue

            take_qty = min(available, remaining_qty)

            allocations.append(AllocationContract(
                lot_id=row["lot_id"],
                item_id=item_id,
                expiry_date=(
                    row["expiry_date"].date()
                    if pd.notnull(row["expiry_date"])
                    else None
                ),
                allocated_qty=take_qty,
            ))

            remaining_by_lot[idx] = available - take_qty
            remaining_qty -= take_qty

        shortage_qty = remaining_qty if remaining_qty > self.policy.qty_tolerance else 0.0

        return AllocationResultContract(
            item_id=item_id,
            required_qty=required_qty,
            allocations=allocations,
            shortage_qty=shortage_qty,
        )


def allocate(
    requirements: Optional[Iterable[Any]],
    lots: LotsInput,
) -> List[AllocationResultContract]:
    return FEFOAllocator().allocate(requirements, lots)


def allocation_frame(results: Iterable[AllocationResultContract]) -> pd.DataFrame:
    """Flat export: one row per allocation plus one UNFULFILLED row per shortage."""
    rows = []
    for result in results:
        for a in result.allocations:
            rows.append({
                "item_id": result.item_id,
                "lot_id": a.lot_id,
                "expiry_date": a.expiry_date.isoformat() if a.expiry_date else None,
                "allocated_qty": a.allocated_qty,
                "status": "ALLOCATED",
            })

        if result.has_shortage:
            rows.append({
                "item_id": result.item_id,
                "lot_id": "UNFULFILLED",
                "expiry_date": None,
                "allocated_qty": result.shortage_qty,
                "status": "INSUFFICIENT_STOCK",
            })

    return pd.DataFrame(
        rows, columns=["item_id", "lot_id", "expiry_date", "allocated_qty", "status"]
    )
