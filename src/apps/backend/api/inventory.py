from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from apps.backend.deps import get_inventory_repo
from data_contracts.models import LotContract
from mrp_core.inventory.lot_query import filter_lots
from repositories.base import InventoryRepository

router = APIRouter(tags=["Inventory"])


@router.get("/{item_id}/lots", response_model=List[LotContract])
def item_lots(
    item_id: str,
    query: Optional[str] = None,
    expiry_from: Optional[date] = None,
    expiry_to: Optional[date] = None,
    sort: str = "expiry_date",
    descending: bool = False,
    inventory: InventoryRepository = Depends(get_inventory_repo),
):
    try:
        return filter_lots(
            inventory.get_lots(item_id),
            query=query,
            expiry_from=expiry_from,
            expiry_to=expiry_to,
            sort_key=sort,
            descending=descending,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

