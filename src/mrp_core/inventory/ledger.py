import threading
from collections import OrderedDict
from typing import Dict, Iterable, List, Optional, Tuple

from data_contracts.models import AllocationResultContract, LotContract
from mrp_core.app_logging import get_logger
from mrp_core.config import PlanningPolicy, default_policy
from mrp_core.errors import ReservationConflictError

logger = get_logger(__name__)


class InventoryLedger:
    """
    In-memory on-hand store that FEFO plans are committed against.

    Plans are computed from a snapshot; `commit` re-checks every lot at commit
    time and applies all allocations or none. Callers that pass the snapshot
    version get a conflict if anything was committed since they planned.
    """

    def __init__(self, lots: Iterable[LotContract], policy: Optional[PlanningPolicy] = None):
        self.policy = policy or default_policy()
        self._lots: "OrderedDict[Tuple[str, str], LotContract]" = OrderedDict(
            ((lot.item_id, lot.lot_id), lot) for lot in lots
        )
        self._version = 0
        self._lock = threading.Lock()

    @property
    def version(self) -> int:
        return self._version

    def snapshot(self) -> Tuple[List[LotContract], int]:
        with self._lock:
            return [lot.model_copy() for lot in self._lots.values()], self._version

    def on_hand(self, item_id: str, lot_id: str) -> float:
        lot = self._lots.get((item_id, lot_id))
        return lot.qty_on_hand if lot else 0.0

    def commit(
        self,
        results: Iterable[AllocationResultContract],
        expected_version: Optional[int] = None,
    ) -> int:
        """Decrement on-hand for every planned allocation. Returns the new version."""
        needed: Dict[Tuple[str, str], float] = {}
        for result in results:
            for a in result.allocations:
                key = (a.item_id, a.lot_id)
                needed[key] = needed.get(key, 0.0) + a.allocated_qty

        with self._lock:
            if expected_version is not None and expected_version != self._version:
                raise ReservationConflictError(
                    f"Inventory changed since plan (version {expected_version} -> {self._version})"
                )

            short = [
                lot_id for (item_id, lot_id), qty in needed.items()
                if self.on_hand(item_id, lot_id) + self.policy.qty_tolerance < qty
            ]
            if short:
                raise ReservationConflictError(
                    f"Insufficient quantity in lot(s): {', '.join(short)}",
                    lot_ids=short,
                )

            for (item_id, lot_id), qty in needed.items():
                lot = self._lots[(item_id, lot_id)]
                self._lots[(item_id, lot_id)] = lot.model_copy(
                    update={"qty_on_hand": max(0.0, lot.qty_on_hand - qty)}
                )

            self._version += 1

        logger.info(
            "reservation committed",
            extra={"lots": len(needed), "version": self._version},
        )
        return self._version
