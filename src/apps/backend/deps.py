# path: src/apps/backend/deps.py

from functools import lru_cache

from mrp_core.work_orders.service import WorkOrderService
from repositories.base import InventoryRepository, MasterDataRepository
from repositories.factory import get_inventory_repository, get_master_data_repository


@lru_cache(maxsize=1)
def _master_repo_singleton() -> MasterDataRepository:
    return get_master_data_repository()


@lru_cache(maxsize=1)
def _inventory_repo_singleton() -> InventoryRepository:
    return get_inventory_repository()


@lru_cache(maxsize=1)
def _service_singleton() -> WorkOrderService:
    # one instance so WO / PO numbering keeps counting across requests
    return WorkOrderService(_master_repo_singleton(), _inventory_repo_singleton())


def get_master_repo() -> MasterDataRepository:
    return _master_repo_singleton()


def get_inventory_repo() -> InventoryRepository:
    return _inventory_repo_singleton()


def get_work_order_service() -> WorkOrderService:
    return _service_singleton()
