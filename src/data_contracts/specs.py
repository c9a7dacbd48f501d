from typing import Dict, List

DATASET_SPECS: Dict[str, List[str]] = {

    "items": [
        "item_id",
        "item_name",
        "uom",
        "status",
    ],

    "bom_lines": [
        "parent_item_id",
        "component_item_id",
        "qty_per_unit",
    ],

    "lots": [
        "lot_id",
        "item_id",
        "qty_on_hand",
        "expiry_date",
    ],
}
