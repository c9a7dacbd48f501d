from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from apps.backend.deps import get_inventory_repo, get_master_repo, get_work_order_service
from data_contracts.models import (
    BillOfMaterialsContract,
    BuildableContract,
    CostRollupContract,
    RequirementContract,
)
from mrp_core.planning.buildable import max_buildable
from mrp_core.planning.requirements import derive_requirements
from mrp_core.work_orders.service import WorkOrderService
from repositories.base import InventoryRepository, MasterDataRepository

router = APIRouter(tags=["BOMs"])


def _bom_or_404(repo: MasterDataRepository, parent_item_id: str) -> BillOfMaterialsContract:
    bom = repo.get_bom(parent_item_id)
    if bom is None:
        raise HTTPException(status_code=404, detail=f"No BOM for item: {parent_item_id}")
    return bom


@router.get("/{parent_item_id}", response_model=BillOfMaterialsContract)
def get_bom(parent_item_id: str, repo: MasterDataRepository = Depends(get_master_repo)):
    return _bom_or_404(repo, parent_item_id)


@router.get("/{parent_item_id}/requirements", response_model=List[RequirementContract])
def bom_requirements(
    parent_item_id: str,
    quantity: Optional[str] = None,
    repo: MasterDataRepository = Depends(get_master_repo),
):
    """
    Component requirements for a build quantity.
    Unparseable quantities are treated as 0.
    """
    return derive_requirements(_bom_or_404(repo, parent_item_id), quantity)


@router.get("/{parent_item_id}/buildable", response_model=BuildableContract)
def bom_buildable(
    parent_item_id: str,
    repo: MasterDataRepository = Depends(get_master_repo),
    inventory: InventoryRepository = Depends(get_inventory_repo),
):
    return max_buildable(_bom_or_404(repo, parent_item_id), inventory.list_lots())


@router.get("/{parent_item_id}/cost", response_model=CostRollupContract)
def bom_cost(
    parent_item_id: str,
    release_qty: Optional[float] = None,
    yield_pct: Optional[float] = None,
    repo: MasterDataRepository = Depends(get_master_repo),
    service: WorkOrderService = Depends(get_work_order_service),
):
    """Scrap-adjusted material cost per unit, per batch and per net good unit."""
    _bom_or_404(repo, parent_item_id)
    return service.cost_rollup(parent_item_id, release_qty=release_qty, yield_pct=yield_pct)
