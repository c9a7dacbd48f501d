from fastapi import APIRouter, Depends, HTTPException

from apps.backend.deps import get_work_order_service
from apps.backend.schemas.requests import (
    CloseRequest,
    PurchaseOrderRequest,
    ReserveRequest,
    ValidationResponse,
)
from data_contracts.models import WorkOrderDraft
from mrp_core.errors import WorkOrderStateError, WorkOrderValidationError
from mrp_core.work_orders.service import WorkOrderService

router = APIRouter(tags=["Work Orders"])


def _raise_http(e: Exception):
    if isinstance(e, WorkOrderValidationError):
        raise HTTPException(status_code=400, detail={"message": str(e), "errors": e.errors})
    raise HTTPException(status_code=409, detail=str(e))


@router.post("/new", response_model=WorkOrderDraft)
def new_work_order(service: WorkOrderService = Depends(get_work_order_service)):
    return service.new_draft()


@router.post("/validate", response_model=ValidationResponse)
def validate_work_order(
    draft: WorkOrderDraft,
    service: WorkOrderService = Depends(get_work_order_service),
):
    errors = service.validate(draft)
    return ValidationResponse(valid=not errors, errors=errors)


@router.post("/reserve", response_model=WorkOrderDraft)
def reserve_lots(
    request: ReserveRequest,
    service: WorkOrderService = Depends(get_work_order_service),
):
    return service.reserve(request.draft, request.results)


@router.post("/purchase-order", response_model=WorkOrderDraft)
def create_purchase_order(
    request: PurchaseOrderRequest,
    service: WorkOrderService = Depends(get_work_order_service),
):
    lines = request.lines or service.shortage_lines(
        request.draft.last_availability_result or []
    )
    try:
        return service.create_purchase_order(
            request.draft, lines, vendor=request.vendor, expected_date=request.expected_date
        )
    except WorkOrderValidationError as e:
        _raise_http(e)


@router.post("/release", response_model=WorkOrderDraft)
def release_work_order(
    draft: WorkOrderDraft,
    service: WorkOrderService = Depends(get_work_order_service),
):
    try:
        return service.release(draft)
    except (WorkOrderValidationError, WorkOrderStateError) as e:
        _raise_http(e)


@router.post("/close", response_model=WorkOrderDraft)
def close_work_order(
    request: CloseRequest,
    service: WorkOrderService = Depends(get_work_order_service),
):
    try:
        return service.close(request.draft, request.good, request.scrap, request.rework)
    except (WorkOrderValidationError, WorkOrderStateError) as e:
        _raise_http(e)
