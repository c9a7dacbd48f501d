# apps/backend/schemas/requests.py

from datetime import date
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from data_contracts.models import (
    AllocationResultContract,
    PurchaseOrderLineContract,
    WorkOrderDraft,
)


class AvailabilityRequest(BaseModel):
    parent_item_id: str
    quantity: Union[str, float, None] = None

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "parent_item_id": "ITM-006",
            "quantity": 20,
        }
    })


class AvailabilityResponse(BaseModel):
    parent_item_id: str
    results: List[AllocationResultContract]
    has_shortage: bool


class ReserveRequest(BaseModel):
    draft: WorkOrderDraft
    results: List[AllocationResultContract]


class PurchaseOrderRequest(BaseModel):
    draft: WorkOrderDraft
    # empty -> lines are built from the draft's last availability shortages
    lines: List[PurchaseOrderLineContract] = Field(default_factory=list)
    vendor: Optional[str] = None
    expected_date: Optional[date] = None


class CloseRequest(BaseModel):
    draft: WorkOrderDraft
    good: Union[str, float, None] = None
    scrap: Union[str, float, None] = None
    rework: Union[str, float, None] = None


class ValidationResponse(BaseModel):
    valid: bool
    errors: List[str]
