from typing import Any, Mapping, Optional

from data_contracts.models import ComponentCostContract, CostRollupContract
from mrp_core.config import PlanningPolicy, default_policy
from mrp_core.planning.requirements import BomInput, bom_lines
from mrp_core.quantities import bom_line_fields, bom_line_scrap_pct, clamp_pct, to_quantity


class CostRollup:
    """
    Material cost of a BOM per finished unit, per release batch and per
    net good unit.

    Scrap % inflates each component's need; yield % shrinks the good
    output of a batch. Neither affects requirement derivation or the
    buildable-now estimate, which stay on the plain per-unit quantity.
    """

    def __init__(self, policy: Optional[PlanningPolicy] = None):
        self.policy = policy or default_policy()

    def rollup(
        self,
        parent_item_id: str,
        bom: BomInput,
        unit_costs: Mapping[str, float],
        release_qty: Any = None,
        yield_pct: Any = None,
    ) -> CostRollupContract:
        release = max(0.0, to_quantity(
            self.policy.default_release_qty if release_qty is None else release_qty
        ))
        yield_ = clamp_pct(self.policy.default_yield_pct if yield_pct is None else yield_pct)

        lines = []
        for line in bom_lines(bom):
            item_id, per_unit = bom_line_fields(line)
            scrap_pct = bom_line_scrap_pct(line)
            cost = float(unit_costs.get(item_id, 0.0) or 0.0)

            per_unit_need = per_unit * (1 + scrap_pct / 100)
            per_batch_need = per_unit_need * release
            lines.append(ComponentCostContract(
                item_id=item_id,
                qty_per_unit=per_unit,
                scrap_pct=scrap_pct,
                per_unit_need=per_unit_need,
                per_batch_need=per_batch_need,
                unit_cost=cost * per_unit_need,
                batch_cost=cost * per_batch_need,
            ))

        cost_per_batch = sum(l.batch_cost for l in lines)
        good_units = release * yield_ / 100

        return CostRollupContract(
            parent_item_id=parent_item_id,
            release_qty=release,
            yield_pct=yield_,
            lines=lines,
            cost_per_unit=sum(l.unit_cost for l in lines),
            cost_per_batch=cost_per_batch,
            good_units_per_batch=good_units,
            cost_per_net_unit=cost_per_batch / good_units if good_units > 0 else 0.0,
        )
