from pydantic import BaseModel, Field, computed_field
from typing import Optional, List, Union
from datetime import date
from enum import Enum


# =========================
# ENUMS (shared, canonical)
# =========================

class ItemStatus(str, Enum):
    active = "active"
    hold = "hold"
    discontinued = "discontinued"


class WorkOrderStatus(str, Enum):
    draft = "Draft"
    released = "Released"
    in_progress = "In Progress"
    completed = "Completed"


class Priority(str, Enum):
    low = "Low"
    medium = "Medium"
    high = "High"


# =========================
# MASTER DATA CONTRACTS
# =========================

class ItemContract(BaseModel):
    item_id: str = Field(min_length=1)
    item_name: str
    uom: str
    status: ItemStatus = ItemStatus.active
    unit_cost: float = Field(default=0.0, ge=0)


class BomLineContract(BaseModel):
    component_item_id: str = Field(min_length=1)
    qty_per_unit: float = Field(gt=0)
    scrap_pct: float = Field(default=0.0, ge=0)  # expected loss, costing only


class BillOfMaterialsContract(BaseModel):
    parent_item_id: str = Field(min_length=1)
    lines: List[BomLineContract] = Field(default_factory=list)

    def component_ids(self) -> List[str]:
        return [line.component_item_id for line in self.lines]


# =========================
# LOT & INVENTORY
# =========================

class LotContract(BaseModel):
    lot_id: str = Field(min_length=1)
    item_id: str = Field(min_length=1)
    qty_on_hand: float = Field(ge=0)
    expiry_date: Optional[date] = None


# =========================
# PLANNING RESULTS
# =========================

class RequirementContract(BaseModel):
    item_id: str
    required_qty: float
    qty_per_unit: float = 0.0


class AllocationContract(BaseModel):
    lot_id: str
    item_id: str
    expiry_date: Optional[date]
    allocated_qty: float = Field(gt=0)


class AllocationResultContract(BaseModel):
    item_id: str
    required_qty: float
    allocations: List[AllocationContract] = Field(default_factory=list)
    shortage_qty: float = Field(default=0.0, ge=0)

    @computed_field
    @property
    def allocated_qty(self) -> float:
        return sum(a.allocated_qty for a in self.allocations)

    @computed_field
    @property
    def has_shortage(self) -> bool:
        return self.shortage_qty > 0


class ComponentAvailabilityContract(BaseModel):
    item_id: str
    qty_per_unit: float
    available_qty: float
    max_units: float  # inf when the line has no positive per-unit quantity


class BuildableContract(BaseModel):
    max_units: int
    limiting_item_ids: List[str] = Field(default_factory=list)
    per_component: List[ComponentAvailabilityContract] = Field(default_factory=list)


class ComponentCostContract(BaseModel):
    item_id: str
    qty_per_unit: float
    scrap_pct: float = 0.0
    per_unit_need: float
    per_batch_need: float
    unit_cost: float
    batch_cost: float


class CostRollupContract(BaseModel):
    parent_item_id: str
    release_qty: float
    yield_pct: float
    lines: List[ComponentCostContract] = Field(default_factory=list)
    cost_per_unit: float = 0.0
    cost_per_batch: float = 0.0
    good_units_per_batch: float = 0.0
    cost_per_net_unit: float = 0.0


# =========================
# WORK ORDER STATE
# =========================

class OperationContract(BaseModel):
    step: str = ""
    workstation: str = ""
    setup_min: float = 0.0
    run_min_per: float = 0.0
    notes: str = ""


class PurchaseOrderLineContract(BaseModel):
    item_id: str
    qty: float = Field(gt=0)
    uom: str = ""
    notes: str = ""


class PurchaseOrderContract(BaseModel):
    po_id: str
    vendor: str
    expected_date: date
    lines: List[PurchaseOrderLineContract] = Field(default_factory=list)


class CloseResultContract(BaseModel):
    good: float = Field(ge=0)
    scrap: float = Field(ge=0)
    rework: float = Field(ge=0)
    yield_pct: float = 0.0


class WorkOrderDraft(BaseModel):
    """
    Serializable state of one work order while it is being planned.
    Planning functions never mutate it; the service returns updated copies.
    """

    wo_id: str
    parent_item_id: str = ""
    quantity: Union[str, float, None] = ""  # raw user input, normalized when used
    status: WorkOrderStatus = WorkOrderStatus.draft
    priority: Priority = Priority.medium
    start_date: Optional[date] = None
    due_date: Optional[date] = None
    assignee: str = ""
    notes: str = ""
    operations: List[OperationContract] = Field(default_factory=list)

    reserved_lots: List[AllocationContract] = Field(default_factory=list)
    availability_checked: bool = False
    last_availability_result: Optional[List[AllocationResultContract]] = None
    created_pos: List[PurchaseOrderContract] = Field(default_factory=list)
    close_result: Optional[CloseResultContract] = None
