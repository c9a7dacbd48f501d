from fastapi import APIRouter, Depends, HTTPException

from apps.backend.deps import get_master_repo, get_work_order_service
from apps.backend.schemas.requests import AvailabilityRequest, AvailabilityResponse
from mrp_core.work_orders.service import WorkOrderService
from repositories.base import MasterDataRepository

router = APIRouter(tags=["Availability"])


@router.post("/check", response_model=AvailabilityResponse)
def check_availability(
    request: AvailabilityRequest,
    repo: MasterDataRepository = Depends(get_master_repo),
    service: WorkOrderService = Depends(get_work_order_service),
):
    """
    Check & Reserve preview: BOM x quantity -> FEFO allocation plan.
    Nothing is reserved; the plan is recomputed on every call.
    """
    if repo.get_bom(request.parent_item_id) is None:
        raise HTTPException(status_code=404, detail=f"No BOM for item: {request.parent_item_id}")

    results = service.plan_availability(request.parent_item_id, request.quantity)

    return AvailabilityResponse(
        parent_item_id=request.parent_item_id,
        results=results,
        has_shortage=any(r.has_shortage for r in results),
    )
