import math
from typing import Any

from data_contracts.models import BuildableContract, ComponentAvailabilityContract
from mrp_core.inventory.fefo_allocator import LotsInput, lots_frame
from mrp_core.planning.requirements import BomInput, bom_lines
from mrp_core.quantities import bom_line_fields


class BuildableEstimator:
    """
    Max finished-good units buildable from raw on-hand lot totals.
    Ignores reservations: it answers "what could we build right now".
    """

    def estimate(self, bom: BomInput, lots: LotsInput) -> BuildableContract:
        lines = bom_lines(bom)
        if not lines:
            return BuildableContract(max_units=0)

        df = lots_frame(lots)
        totals = df.groupby("item_id")["qty_on_hand"].sum().to_dict()

        details = []
        for line in lines:
            item_id, per_unit = bom_line_fields(line)
            available = float(totals.get(item_id, 0.0))
            max_units = math.floor(available / per_unit) if per_unit > 0 else math.inf
            details.append(ComponentAvailabilityContract(
                item_id=item_id,
                qty_per_unit=per_unit,
                available_qty=available,
                max_units=max_units,
            ))

        overall = min(d.max_units for d in details)
        if math.isinf(overall):
            return BuildableContract(max_units=0, per_component=details)

        limiting = [d.item_id for d in details if d.max_units == overall]

        return BuildableContract(
            max_units=int(overall),
            limiting_item_ids=limiting,
            per_component=details,
        )


def max_buildable(bom: BomInput, lots: LotsInput) -> BuildableContract:
    return BuildableEstimator().estimate(bom, lots)
