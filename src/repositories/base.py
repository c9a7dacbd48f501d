from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import pandas as pd

from data_contracts.models import (
    BillOfMaterialsContract,
    ItemContract,
    LotContract,
)


def lot_from_record(row: Dict[str, Any]) -> LotContract:
    """Build a lot contract from a tabular row (CSV, duckdb, mock dict)."""
    expiry = pd.to_datetime(row.get("expiry_date"), errors="coerce")
    return LotContract(
        lot_id=str(row["lot_id"]),
        item_id=str(row["item_id"]),
        qty_on_hand=float(row["qty_on_hand"]),
        expiry_date=None if pd.isna(expiry) else expiry.date(),
    )


class InventoryRepository(ABC):

    @abstractmethod
    def list_lots(self) -> List[LotContract]:
        pass

    @abstractmethod
    def get_lots(self, item_id: str) -> List[LotContract]:
        pass


class MasterDataRepository(ABC):

    @abstractmethod
    def list_items(self) -> List[ItemContract]:
        pass

    @abstractmethod
    def get_item(self, item_id: str) -> Optional[ItemContract]:
        pass

    @abstractmethod
    def get_bom(self, parent_item_id: str) -> Optional[BillOfMaterialsContract]:
        pass
