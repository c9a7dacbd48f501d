import pandas as pd
from pathlib import Path
from typing import Dict, List, Optional

from data_contracts.validate import validate_df
from data_contracts.models import (
    BillOfMaterialsContract,
    BomLineContract,
    ItemContract,
    LotContract,
)
from mrp_core.config import DATA_DIR
from repositories.base import InventoryRepository, MasterDataRepository, lot_from_record


class CSVInventoryRepository(InventoryRepository):

    def __init__(self, data_dir: Optional[Path] = None):
        data_dir = Path(data_dir or DATA_DIR)
        self.lots_df = pd.read_csv(data_dir / "lots.csv", dtype={"lot_id": str, "item_id": str})

        validate_df(self.lots_df, "lots")

        self.lots = [lot_from_record(row) for row in self.lots_df.to_dict(orient="records")]

    def list_lots(self) -> List[LotContract]:
        return list(self.lots)

    def get_lots(self, item_id: str) -> List[LotContract]:
        return [lot for lot in self.lots if lot.item_id == item_id]


class CSVMasterDataRepository(MasterDataRepository):

    def __init__(self, data_dir: Optional[Path] = None):
        data_dir = Path(data_dir or DATA_DIR)
        self.items_df = pd.read_csv(data_dir / "items.csv", dtype={"item_id": str})
        self.bom_df = pd.read_csv(
            data_dir / "bom_lines.csv",
            dtype={"parent_item_id": str, "component_item_id": str},
        )

        validate_df(self.items_df, "items")
        validate_df(self.bom_df, "bom_lines")

        items_df = self.items_df.copy()
        if "unit_cost" in items_df.columns:
            items_df["unit_cost"] = items_df["unit_cost"].fillna(0.0)
        items_df["status"] = items_df["status"].astype(str).str.strip().str.lower()

        self.items: Dict[str, ItemContract] = {
            row["item_id"]: ItemContract(**row)
            for row in items_df.to_dict(orient="records")
        }

        bom_df = self.bom_df.copy()
        if "scrap_pct" not in bom_df.columns:
            bom_df["scrap_pct"] = 0.0
        bom_df["scrap_pct"] = pd.to_numeric(bom_df["scrap_pct"], errors="coerce").fillna(0.0)

        # groupby keeps file order of lines within each parent
        self.boms: Dict[str, BillOfMaterialsContract] = {}
        for parent, lines in bom_df.groupby("parent_item_id", sort=False):
            self.boms[parent] = BillOfMaterialsContract(
                parent_item_id=parent,
                lines=[
                    BomLineContract(
                        component_item_id=row["component_item_id"],
                        qty_per_unit=float(row["qty_per_unit"]),
                        scrap_pct=float(row["scrap_pct"]),
                    )
                    for row in lines.to_dict(orient="records")
                ],
            )

    def list_items(self) -> List[ItemContract]:
        return list(self.items.values())

    def get_item(self, item_id: str) -> Optional[ItemContract]:
        return self.items.get(item_id)

    def get_bom(self, parent_item_id: str) -> Optional[BillOfMaterialsContract]:
        return self.boms.get(parent_item_id)
