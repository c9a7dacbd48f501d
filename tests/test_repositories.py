"""Repositories, data contracts and dataset validation."""

import logging
from datetime import date

import pandas as pd
import pytest
from pydantic import ValidationError

from data_contracts.models import BomLineContract, ItemStatus, LotContract
from data_contracts.validate import validate_df
from repositories.csv_repo import CSVInventoryRepository, CSVMasterDataRepository
from repositories.factory import get_inventory_repository, get_master_data_repository
from repositories.mock_repo import MockInventoryRepository, MockMasterDataRepository


@pytest.fixture
def data_dir(tmp_path):
    pd.DataFrame([
        {"item_id": "FG-1", "item_name": "Gizmo", "uom": "ea", "status": "Active", "unit_cost": None},
        {"item_id": "C-1", "item_name": "Bolt", "uom": "pcs", "status": "Hold", "unit_cost": 0.5},
        {"item_id": "C-2", "item_name": "Nut", "uom": "pcs", "status": "active", "unit_cost": 0.2},
    ]).to_csv(tmp_path / "items.csv", index=False)

    pd.DataFrame([
        {"parent_item_id": "FG-1", "component_item_id": "C-2", "qty_per_unit": 4},
        {"parent_item_id": "FG-1", "component_item_id": "C-1", "qty_per_unit": 2},
    ]).to_csv(tmp_path / "bom_lines.csv", index=False)

    pd.DataFrame([
        {"lot_id": "001", "item_id": "C-1", "qty_on_hand": 10, "expiry_date": "2026-01-01"},
        {"lot_id": "002", "item_id": "C-2", "qty_on_hand": 40, "expiry_date": None},
    ]).to_csv(tmp_path / "lots.csv", index=False)

    return tmp_path


class TestContracts:

    def test_negative_lot_quantity_rejected(self):
        with pytest.raises(ValidationError):
            LotContract(lot_id="L1", item_id="C1", qty_on_hand=-1)

    def test_empty_identifiers_rejected(self):
        with pytest.raises(ValidationError):
            LotContract(lot_id="", item_id="C1", qty_on_hand=1)

    def test_bom_line_quantity_must_be_positive(self):
        with pytest.raises(ValidationError):
            BomLineContract(component_item_id="C1", qty_per_unit=0)


class TestValidateDf:

    def test_unknown_dataset(self):
        with pytest.raises(ValueError):
            validate_df(pd.DataFrame({"a": [1]}), "widgets")

    def test_missing_columns(self):
        with pytest.raises(ValueError, match="missing columns"):
            validate_df(pd.DataFrame({"lot_id": ["L1"]}), "lots")

    def test_empty_frame(self):
        df = pd.DataFrame(columns=["lot_id", "item_id", "qty_on_hand", "expiry_date"])
        with pytest.raises(ValueError, match="empty"):
            validate_df(df, "lots")

    def test_negative_quantity_only_warns(self, caplog):
        df = pd.DataFrame([{"lot_id": "L1", "item_id": "C1", "qty_on_hand": -3, "expiry_date": None}])
        with caplog.at_level(logging.WARNING):
            validate_df(df, "lots")
        assert "negative quantity detected" in caplog.text


class TestMockRepositories:

    def test_items_and_boms(self):
        repo = MockMasterDataRepository()
        assert len(repo.list_items()) == 10
        assert repo.get_item("ITM-008").status == ItemStatus.hold
        assert repo.get_bom("ITM-006").component_ids() == ["ITM-005", "ITM-004", "ITM-003", "ITM-009"]
        assert repo.get_bom("ITM-001") is None

    def test_lots(self):
        repo = MockInventoryRepository()
        assert len(repo.list_lots()) == 8
        lots = repo.get_lots("ITM-003")
        assert [l.lot_id for l in lots] == ["PC-2025-01", "PC-2025-02"]
        assert lots[0].expiry_date == date(2025, 10, 1)


class TestCSVRepositories:

    def test_master_data(self, data_dir):
        repo = CSVMasterDataRepository(data_dir)

        assert repo.get_item("FG-1").unit_cost == 0.0
        assert repo.get_item("C-1").status == ItemStatus.hold
        bom = repo.get_bom("FG-1")
        assert [(l.component_item_id, l.qty_per_unit) for l in bom.lines] == [("C-2", 4), ("C-1", 2)]

    def test_optional_scrap_column(self, data_dir):
        assert [l.scrap_pct for l in CSVMasterDataRepository(data_dir).get_bom("FG-1").lines] == [0, 0]

        pd.DataFrame([
            {"parent_item_id": "FG-1", "component_item_id": "C-2", "qty_per_unit": 4, "scrap_pct": 2.5},
            {"parent_item_id": "FG-1", "component_item_id": "C-1", "qty_per_unit": 2, "scrap_pct": None},
        ]).to_csv(data_dir / "bom_lines.csv", index=False)

        lines = CSVMasterDataRepository(data_dir).get_bom("FG-1").lines
        assert [l.scrap_pct for l in lines] == [2.5, 0]

    def test_lots(self, data_dir):
        repo = CSVInventoryRepository(data_dir)

        lots = repo.list_lots()
        assert [l.lot_id for l in lots] == ["001", "002"]
        assert lots[0].expiry_date == date(2026, 1, 1)
        assert lots[1].expiry_date is None
        assert [l.lot_id for l in repo.get_lots("C-2")] == ["002"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            CSVInventoryRepository(tmp_path)


class TestDeltaLotRepository:

    def test_reads_delta_table(self, tmp_path):
        duckdb = pytest.importorskip("duckdb")
        deltalake = pytest.importorskip("deltalake")
        from mrp_core.inventory.lot_repository import LotRepository

        df = pd.DataFrame([
            {"lot_id": "A", "item_id": "C1", "qty_on_hand": 5.0, "expiry_date": date(2026, 1, 1)},
            {"lot_id": "B", "item_id": "C2", "qty_on_hand": 7.0, "expiry_date": date(2026, 2, 1)},
        ])
        deltalake.write_deltalake((tmp_path / "lots").as_posix(), df)

        repo = LotRepository(tmp_path / "lots")
        try:
            lots = repo.get_lots("C2")
        except duckdb.Error as e:
            pytest.skip(f"duckdb delta extension unavailable: {e}")

        assert [(l.lot_id, l.qty_on_hand, l.expiry_date) for l in lots] == [("B", 7.0, date(2026, 2, 1))]


class TestFactory:

    def test_mock_backend(self):
        assert isinstance(get_inventory_repository("mock"), MockInventoryRepository)
        assert isinstance(get_master_data_repository("mock"), MockMasterDataRepository)

    def test_unknown_backend(self):
        with pytest.raises(NotImplementedError):
            get_inventory_repository("postgres")
        with pytest.raises(NotImplementedError):
            get_master_data_repository("postgres")
