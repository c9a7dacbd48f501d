from typing import List, Optional


class PlanningError(ValueError):
    """Base class for work order / reservation workflow errors."""


class WorkOrderValidationError(PlanningError):

    def __init__(self, errors: List[str], message: Optional[str] = None):
        self.errors = list(errors)
        super().__init__(message or "; ".join(self.errors))


class WorkOrderStateError(PlanningError):
    pass


class ReservationConflictError(PlanningError):

    def __init__(self, message: str, lot_ids: Optional[List[str]] = None):
        self.lot_ids = list(lot_ids or [])
        super().__init__(message)
