from mrp_core.config import DATA_BACKEND
from repositories.base import InventoryRepository, MasterDataRepository
from repositories.csv_repo import CSVInventoryRepository, CSVMasterDataRepository
from repositories.mock_repo import MockInventoryRepository, MockMasterDataRepository


def get_inventory_repository(backend: str = DATA_BACKEND) -> InventoryRepository:
    if backend == "mock":
        return MockInventoryRepository()
    if backend == "csv":
        return CSVInventoryRepository()
    if backend == "delta":
        from mrp_core.inventory.lot_repository import LotRepository
        return LotRepository()
    raise NotImplementedError(f"Inventory backend '{backend}' not implemented")


def get_master_data_repository(backend: str = DATA_BACKEND) -> MasterDataRepository:
    if backend in ("mock", "delta"):
        return MockMasterDataRepository()
    if backend == "csv":
        return CSVMasterDataRepository()
    raise NotImplementedError(f"Master data backend '{backend}' not implemented")
