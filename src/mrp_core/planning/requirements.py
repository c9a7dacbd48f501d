from typing import Any, Iterable, List, Optional, Union

from data_contracts.models import BillOfMaterialsContract, RequirementContract
from mrp_core.quantities import bom_line_fields, to_quantity

BomInput = Optional[Union[BillOfMaterialsContract, Iterable[Any]]]


def bom_lines(bom: BomInput) -> List[Any]:
    """Lines of a BOM contract or line list; None gives an empty list."""
    if bom is None:
        return []
    if isinstance(bom, BillOfMaterialsContract):
        return list(bom.lines)
    try:
        return list(bom)
    except TypeError:
        return []


class RequirementDeriver:
    """
    Explodes a BOM into component requirements for a build quantity.
    One requirement per BOM line, in BOM order, no rounding.
    """

    def derive(self, bom: BomInput, build_qty: Any) -> List[RequirementContract]:
        qty = to_quantity(build_qty)

        requirements = []
        for line in bom_lines(bom):
            item_id, per_unit = bom_line_fields(line)
            requirements.append(RequirementContract(
                item_id=item_id,
                required_qty=per_unit * qty,
                qty_per_unit=per_unit,
            ))

        return requirements


def derive_requirements(bom: BomInput, build_qty: Any) -> List[RequirementContract]:
    return RequirementDeriver().derive(bom, build_qty)
