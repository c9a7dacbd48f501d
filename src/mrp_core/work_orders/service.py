import itertools
from datetime import date, timedelta
from typing import Any, List, Optional

from data_contracts.models import (
    AllocationResultContract,
    BuildableContract,
    CloseResultContract,
    CostRollupContract,
    OperationContract,
    PurchaseOrderContract,
    PurchaseOrderLineContract,
    RequirementContract,
    WorkOrderDraft,
    WorkOrderStatus,
)
from mrp_core.app_logging import get_logger
from mrp_core.config import PlanningPolicy, default_policy
from mrp_core.errors import WorkOrderStateError, WorkOrderValidationError
from mrp_core.inventory.fefo_allocator import FEFOAllocator
from mrp_core.inventory.ledger import InventoryLedger
from mrp_core.planning.buildable import BuildableEstimator
from mrp_core.planning.costing import CostRollup
from mrp_core.planning.requirements import RequirementDeriver
from mrp_core.quantities import parse_quantity, to_quantity
from repositories.base import InventoryRepository, MasterDataRepository

logger = get_logger(__name__)

# header fields whose change invalidates any availability check
PLANNING_FIELDS = {"parent_item_id", "quantity"}
CLOSABLE_STATUSES = {WorkOrderStatus.released, WorkOrderStatus.in_progress}


class WorkOrderService:
    """
    Work order planning workflow:
    draft -> check availability (derive + FEFO) -> reserve / raise PO -> release -> close.

    Drafts are immutable from the service's point of view; every operation
    returns an updated copy.
    """

    def __init__(
        self,
        master_repo: MasterDataRepository,
        inventory_repo: InventoryRepository,
        policy: Optional[PlanningPolicy] = None,
    ):
        self.master_repo = master_repo
        self.inventory_repo = inventory_repo
        self.policy = policy or default_policy()

        self.deriver = RequirementDeriver()
        self.allocator = FEFOAllocator(self.policy)
        self.estimator = BuildableEstimator()
        self.costing = CostRollup(self.policy)

        self._wo_numbers = itertools.count(self.policy.first_work_order_no)
        self._po_numbers = itertools.count(self.policy.first_purchase_order_no)

    # ------------------------
    # Draft lifecycle
    # ------------------------

    def new_draft(self, today: Optional[date] = None) -> WorkOrderDraft:
        today = today or date.today()
        return WorkOrderDraft(
            wo_id=f"WO-{next(self._wo_numbers):04d}",
            start_date=today,
            due_date=today + timedelta(days=self.policy.default_lead_days),
            operations=[
                OperationContract(step="10", workstation="Assembly", setup_min=15, run_min_per=1.5)
            ],
        )

    def update(self, draft: WorkOrderDraft, **changes: Any) -> WorkOrderDraft:
        updated = WorkOrderDraft.model_validate({**draft.model_dump(), **changes})

        if any(
            field in changes and changes[field] != getattr(draft, field)
            for field in PLANNING_FIELDS
        ):
            updated = updated.model_copy(update={
                "reserved_lots": [],
                "availability_checked": False,
                "last_availability_result": None,
            })

        return updated

    def validate(self, draft: WorkOrderDraft) -> List[str]:
        errors = []
        qty = to_quantity(draft.quantity)

        if not draft.wo_id:
            errors.append("WO ID is required.")
        if not draft.parent_item_id:
            errors.append("Parent Item is required.")
        if qty <= 0:
            errors.append("Quantity must be > 0.")
        if draft.start_date and draft.due_date and draft.start_date > draft.due_date:
            errors.append("Due date must be after start date.")

        for idx, op in enumerate(draft.operations, start=1):
            if not op.step:
                errors.append(f"Operation row {idx}: Step is required.")
            if not op.workstation:
                errors.append(f"Operation row {idx}: Workstation is required.")
            if op.setup_min < 0:
                errors.append(f"Operation row {idx}: Setup cannot be negative.")
            if op.run_min_per < 0:
                errors.append(f"Operation row {idx}: Run per unit cannot be negative.")

        return errors

    # ------------------------
    # Derived figures
    # ------------------------

    def requirements(self, draft: WorkOrderDraft) -> List[RequirementContract]:
        bom = self.master_repo.get_bom(draft.parent_item_id) if draft.parent_item_id else None
        return self.deriver.derive(bom, draft.quantity)

    def buildable(self, draft: WorkOrderDraft) -> BuildableContract:
        bom = self.master_repo.get_bom(draft.parent_item_id) if draft.parent_item_id else None
        return self.estimator.estimate(bom, self.inventory_repo.list_lots())

    def material_cost(self, draft: WorkOrderDraft) -> float:
        total = 0.0
        for req in self.requirements(draft):
            item = self.master_repo.get_item(req.item_id)
            if item:
                total += item.unit_cost * req.required_qty
        return total

    def runtime_minutes(self, draft: WorkOrderDraft) -> float:
        qty = to_quantity(draft.quantity)
        return sum(op.setup_min + op.run_min_per * qty for op in draft.operations)

    def cost_rollup(
        self,
        parent_item_id: str,
        release_qty: Any = None,
        yield_pct: Any = None,
    ) -> CostRollupContract:
        unit_costs = {item.item_id: item.unit_cost for item in self.master_repo.list_items()}
        return self.costing.rollup(
            parent_item_id,
            self.master_repo.get_bom(parent_item_id),
            unit_costs,
            release_qty=release_qty,
            yield_pct=yield_pct,
        )

    # ------------------------
    # Availability & reservation
    # ------------------------

    def plan_availability(self, parent_item_id: str, quantity: Any) -> List[AllocationResultContract]:
        """BOM x quantity -> FEFO plan against the current lot snapshot. Reserves nothing."""
        bom = self.master_repo.get_bom(parent_item_id) if parent_item_id else None
        return self.allocator.allocate(
            self.deriver.derive(bom, quantity), self.inventory_repo.list_lots()
        )

    def check_availability(self, draft: WorkOrderDraft) -> List[AllocationResultContract]:
        if not draft.parent_item_id or to_quantity(draft.quantity) <= 0:
            raise WorkOrderValidationError(
                ["Select a BOM and enter Quantity to check availability."]
            )

        results = self.plan_availability(draft.parent_item_id, draft.quantity)

        logger.info(
            "availability checked",
            extra={
                "wo_id": draft.wo_id,
                "parent_item_id": draft.parent_item_id,
                "shortages": [r.item_id for r in results if r.has_shortage],
            },
        )
        return results

    def reserve(
        self,
        draft: WorkOrderDraft,
        results: List[AllocationResultContract],
    ) -> WorkOrderDraft:
        reserved = [a for r in results for a in r.allocations]
        return draft.model_copy(update={
            "reserved_lots": reserved,
            "availability_checked": True,
            "last_availability_result": list(results),
        })

    def commit_reservation(self, draft: WorkOrderDraft, ledger: InventoryLedger) -> int:
        """Apply the draft's last availability plan to the ledger, all lines or none."""
        if not draft.availability_checked or draft.last_availability_result is None:
            raise WorkOrderStateError("Run FEFO availability before committing a reservation.")
        return ledger.commit(draft.last_availability_result)

    # ------------------------
    # Purchasing
    # ------------------------

    def shortage_lines(
        self,
        results: List[AllocationResultContract],
    ) -> List[PurchaseOrderLineContract]:
        lines = []
        for r in results:
            if not r.has_shortage:
                continue
            item = self.master_repo.get_item(r.item_id)
            lines.append(PurchaseOrderLineContract(
                item_id=r.item_id,
                qty=r.shortage_qty,
                uom=item.uom if item else "",
                notes="For WO shortage",
            ))
        return lines

    def create_purchase_order(
        self,
        draft: WorkOrderDraft,
        lines: List[PurchaseOrderLineContract],
        vendor: Optional[str] = None,
        expected_date: Optional[date] = None,
    ) -> WorkOrderDraft:
        if not lines:
            raise WorkOrderValidationError(["Purchase order needs at least one line."])

        po = PurchaseOrderContract(
            po_id=f"PO-{next(self._po_numbers):04d}",
            vendor=vendor or self.policy.default_vendor,
            expected_date=expected_date or date.today() + timedelta(days=self.policy.po_expected_days),
            lines=lines,
        )

        logger.info(
            "purchase order created",
            extra={"wo_id": draft.wo_id, "po_id": po.po_id, "lines": len(lines)},
        )
        return draft.model_copy(update={"created_pos": [*draft.created_pos, po]})

    # ------------------------
    # Release & close
    # ------------------------

    def release(self, draft: WorkOrderDraft) -> WorkOrderDraft:
        errors = self.validate(draft)
        if errors:
            raise WorkOrderValidationError(errors, "Resolve errors before release.")

        if not draft.availability_checked:
            raise WorkOrderStateError("Run FEFO availability before release.")

        shortage_still = any(r.has_shortage for r in draft.last_availability_result or [])
        if shortage_still and not draft.created_pos:
            raise WorkOrderStateError("Create a PO for deficits before release.")

        logger.info("work order released", extra={"wo_id": draft.wo_id})
        return draft.model_copy(update={"status": WorkOrderStatus.released})

    def close(self, draft: WorkOrderDraft, good: Any, scrap: Any, rework: Any) -> WorkOrderDraft:
        if draft.status not in CLOSABLE_STATUSES:
            raise WorkOrderStateError("Close is available when WO is Released or In Progress.")

        raw = [good, scrap, rework]
        if any(v is None or (isinstance(v, str) and not v.strip()) for v in raw):
            raise WorkOrderValidationError(["All fields are required."])

        values = [parse_quantity(v) for v in raw]
        if any(x is None or x < 0 for x in values):
            raise WorkOrderValidationError(["Quantities must be non-negative numbers."])

        planned = to_quantity(draft.quantity)
        g, s, r = values
        if abs(g + s + r - planned) > self.policy.qty_tolerance:
            raise WorkOrderValidationError(["Good + Scrap + Rework must equal planned Quantity."])

        yield_pct = round(g / planned * 100, 1) if planned > 0 else 0.0
        result = CloseResultContract(good=g, scrap=s, rework=r, yield_pct=yield_pct)

        logger.info(
            "work order completed",
            extra={"wo_id": draft.wo_id, "good": g, "scrap": s, "rework": r, "yield_pct": yield_pct},
        )
        return draft.model_copy(update={
            "status": WorkOrderStatus.completed,
            "close_result": result,
        })
