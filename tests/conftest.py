from datetime import date

import pytest

from data_contracts.models import BomLineContract, LotContract
from repositories.mock_repo import MockInventoryRepository, MockMasterDataRepository
from mrp_core.work_orders.service import WorkOrderService


def lot(lot_id, item_id, qty, expiry):
    return LotContract(
        lot_id=lot_id,
        item_id=item_id,
        qty_on_hand=qty,
        expiry_date=date.fromisoformat(expiry) if expiry else None,
    )


@pytest.fixture
def c1_lots():
    return [
        lot("L1", "C1", 10, "2025-01-01"),
        lot("L2", "C1", 15, "2025-06-01"),
    ]


@pytest.fixture
def c1_bom():
    return [BomLineContract(component_item_id="C1", qty_per_unit=2)]


@pytest.fixture
def master_repo():
    return MockMasterDataRepository()


@pytest.fixture
def inventory_repo():
    return MockInventoryRepository()


@pytest.fixture
def service(master_repo, inventory_repo):
    return WorkOrderService(master_repo, inventory_repo)
