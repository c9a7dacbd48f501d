import duckdb
from pathlib import Path
from typing import List, Optional

from data_contracts.models import LotContract
from mrp_core.config import LOTS_PATH
from repositories.base import InventoryRepository, lot_from_record


class LotRepository(InventoryRepository):
    """
    Reads lot-level inventory from Delta Lake
    One row = item-lot
    """

    def __init__(self, lots_path: Optional[Path] = None):
        self.lots_path = Path(lots_path or LOTS_PATH)
        self.con = duckdb.connect()

    def _query(self, where: str = "", params: Optional[list] = None) -> List[LotContract]:
        query = f"""
        SELECT
            lot_id,
            item_id,
            qty_on_hand,
            expiry_date
        FROM delta_scan('{self.lots_path.as_posix()}')
        {where}
        """
        df = self.con.execute(query, params or []).df()
        return [lot_from_record(row) for row in df.to_dict(orient="records")]

    def list_lots(self) -> List[LotContract]:
        return self._query()

    def get_lots(self, item_id: str) -> List[LotContract]:
        return self._query("WHERE item_id = ?", [item_id])
