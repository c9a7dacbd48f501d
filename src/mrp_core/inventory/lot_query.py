from datetime import date
from typing import Iterable, List, Optional

from data_contracts.models import LotContract

SORT_KEYS = ("expiry_date", "lot_id", "qty_on_hand")


def _sort_value(lot: LotContract, key: str):
    if key == "expiry_date":
        # undated lots sort after every dated lot
        return (lot.expiry_date is None, lot.expiry_date or date.max)
    if key == "lot_id":
        return lot.lot_id.casefold()
    return lot.qty_on_hand


def filter_lots(
    lots: Iterable[LotContract],
    item_id: Optional[str] = None,
    query: Optional[str] = None,
    expiry_from: Optional[date] = None,
    expiry_to: Optional[date] = None,
    sort_key: str = "expiry_date",
    descending: bool = False,
) -> List[LotContract]:
    """
    Lots list filtering: lot id search, inclusive expiry range, FEFO by default.
    """
    if sort_key not in SORT_KEYS:
        raise ValueError(f"Unknown sort key: {sort_key}")

    rows = list(lots)

    if item_id:
        rows = [r for r in rows if r.item_id == item_id]

    if query:
        q = query.casefold()
        rows = [r for r in rows if q in r.lot_id.casefold()]

    if expiry_from or expiry_to:
        def in_range(lot: LotContract) -> bool:
            if lot.expiry_date is None:
                return False
            if expiry_from and lot.expiry_date < expiry_from:
                return False
            if expiry_to and lot.expiry_date > expiry_to:
                return False
            return True

        rows = [r for r in rows if in_range(r)]

    return sorted(rows, key=lambda r: _sort_value(r, sort_key), reverse=descending)
