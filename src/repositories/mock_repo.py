from typing import Dict, List, Optional

from data_contracts.models import (
    BillOfMaterialsContract,
    BomLineContract,
    ItemContract,
    LotContract,
)
from repositories.base import InventoryRepository, MasterDataRepository, lot_from_record

# -------------------------------------------------
# Mock item master / BOM index / lot snapshot
# -------------------------------------------------
MOCK_ITEMS = [
    {"item_id": "ITM-001", "item_name": "Warm Yellow LED", "uom": "pcs", "status": "active", "unit_cost": 0.12},
    {"item_id": "ITM-002", "item_name": "Large Widget", "uom": "pcs", "status": "active", "unit_cost": 9.5},
    {"item_id": "ITM-003", "item_name": "Plastic Case", "uom": "pcs", "status": "active", "unit_cost": 1.2},
    {"item_id": "ITM-004", "item_name": "Lion Bracket", "uom": "pcs", "status": "active", "unit_cost": 2.1},
    {"item_id": "ITM-005", "item_name": "Chain Bracket", "uom": "pcs", "status": "active", "unit_cost": 1.85},
    {"item_id": "ITM-006", "item_name": "Front Assembly", "uom": "ea", "status": "active", "unit_cost": 0.0},
    {"item_id": "ITM-007", "item_name": "Steel Frame", "uom": "pcs", "status": "active", "unit_cost": 7.2},
    {"item_id": "ITM-008", "item_name": "Blue Paint (RAL5010)", "uom": "L", "status": "hold", "unit_cost": 14.0},
    {"item_id": "ITM-009", "item_name": "Screws M3×8", "uom": "ea", "status": "active", "unit_cost": 0.03},
    {"item_id": "ITM-010", "item_name": "Assembly Kit 10", "uom": "kit", "status": "discontinued", "unit_cost": 0.0},
]

# finished good -> ordered component lines
MOCK_BOMS: Dict[str, List[dict]] = {
    "ITM-006": [
        {"component_item_id": "ITM-005", "qty_per_unit": 2},  # Chain Bracket
        {"component_item_id": "ITM-004", "qty_per_unit": 1},  # Lion Bracket
        {"component_item_id": "ITM-003", "qty_per_unit": 1},  # Plastic Case
        {"component_item_id": "ITM-009", "qty_per_unit": 8, "scrap_pct": 5},  # Screws
    ],
    "ITM-002": [
        {"component_item_id": "ITM-007", "qty_per_unit": 1},
        {"component_item_id": "ITM-009", "qty_per_unit": 6},
    ],
}

MOCK_LOTS = [
    {"lot_id": "PC-2025-01", "item_id": "ITM-003", "qty_on_hand": 60, "expiry_date": "2025-10-01"},
    {"lot_id": "PC-2025-02", "item_id": "ITM-003", "qty_on_hand": 100, "expiry_date": "2026-01-15"},
    {"lot_id": "LB-2025-01", "item_id": "ITM-004", "qty_on_hand": 25, "expiry_date": "2025-09-10"},
    {"lot_id": "LB-2026-01", "item_id": "ITM-004", "qty_on_hand": 40, "expiry_date": "2026-05-30"},
    {"lot_id": "CB-2025-01", "item_id": "ITM-005", "qty_on_hand": 10, "expiry_date": "2025-08-31"},
    {"lot_id": "CB-2025-02", "item_id": "ITM-005", "qty_on_hand": 35, "expiry_date": "2025-12-05"},
    {"lot_id": "SF-2025-01", "item_id": "ITM-007", "qty_on_hand": 5, "expiry_date": "2027-01-01"},
    {"lot_id": "SC-2025-01", "item_id": "ITM-009", "qty_on_hand": 200, "expiry_date": "2026-12-31"},
]


class MockMasterDataRepository(MasterDataRepository):

    def __init__(self, items: Optional[List[dict]] = None, boms: Optional[Dict[str, List[dict]]] = None):
        self.items = {
            row["item_id"]: ItemContract(**row)
            for row in (MOCK_ITEMS if items is None else items)
        }
        self.boms = {
            parent: BillOfMaterialsContract(
                parent_item_id=parent,
                lines=[BomLineContract(**line) for line in lines],
            )
            for parent, lines in (MOCK_BOMS if boms is None else boms).items()
        }

    def list_items(self) -> List[ItemContract]:
        return list(self.items.values())

    def get_item(self, item_id: str) -> Optional[ItemContract]:
        return self.items.get(item_id)

    def get_bom(self, parent_item_id: str) -> Optional[BillOfMaterialsContract]:
        return self.boms.get(parent_item_id)


class MockInventoryRepository(InventoryRepository):

    def __init__(self, lots: Optional[List[dict]] = None):
        self.lots = [lot_from_record(row) for row in (MOCK_LOTS if lots is None else lots)]

    def list_lots(self) -> List[LotContract]:
        return list(self.lots)

    def get_lots(self, item_id: str) -> List[LotContract]:
        return [lot for lot in self.lots if lot.item_id == item_id]
