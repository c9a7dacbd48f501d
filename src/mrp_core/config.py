import os
from dataclasses import dataclass
from pathlib import Path

# ---------------------------------------------
# Resolve project root (robust across OS & CWD)
# ---------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parents[2]

DATA_BACKEND = os.getenv("DATA_BACKEND", "mock")
DATA_DIR = Path(os.getenv("DATA_DIR", PROJECT_ROOT / "data" / "curated"))
LOTS_PATH = Path(
    os.getenv("LOTS_PATH", PROJECT_ROOT / "data" / "lakehouse" / "inventory" / "lots")
)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
API_BASE = os.getenv("API_BASE", "http://127.0.0.1:8000")


@dataclass
class PlanningPolicy:
    # Document numbering
    first_work_order_no: int = 1011
    first_purchase_order_no: int = 5001

    # Work order defaults
    default_lead_days: int = 3
    default_vendor: str = "Preferred Supplier Ltd."
    po_expected_days: int = 7

    # BOM cost rollup defaults (units per batch, finished-good yield %)
    default_release_qty: float = 1000
    default_yield_pct: float = 95.0

    # Float comparison slack for quantity sums
    qty_tolerance: float = 1e-9


def default_policy() -> PlanningPolicy:
    return PlanningPolicy()
