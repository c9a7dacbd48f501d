"""Lot listing and reservation ledger."""

from datetime import date

import pytest

from mrp_core.errors import ReservationConflictError
from mrp_core.inventory.fefo_allocator import allocate
from mrp_core.inventory.ledger import InventoryLedger
from mrp_core.inventory.lot_query import filter_lots
from mrp_core.planning.requirements import derive_requirements
from repositories.mock_repo import MockInventoryRepository

from conftest import lot


@pytest.fixture
def catalog():
    return MockInventoryRepository().list_lots()


class TestFilterLots:

    def test_fefo_default_sort(self, catalog):
        lots = filter_lots(catalog, item_id="ITM-004")
        assert [l.lot_id for l in lots] == ["LB-2025-01", "LB-2026-01"]

    def test_descending(self, catalog):
        lots = filter_lots(catalog, item_id="ITM-004", descending=True)
        assert [l.lot_id for l in lots] == ["LB-2026-01", "LB-2025-01"]

    def test_search_is_case_insensitive(self, catalog):
        lots = filter_lots(catalog, query="pc-2025-02")
        assert [l.lot_id for l in lots] == ["PC-2025-02"]

    def test_expiry_range_is_inclusive(self, catalog):
        lots = filter_lots(
            catalog,
            expiry_from=date(2025, 9, 10),
            expiry_to=date(2025, 12, 5),
        )
        assert [l.lot_id for l in lots] == ["LB-2025-01", "PC-2025-01", "CB-2025-02"]

    def test_range_excludes_undated_lots(self):
        lots = [lot("A", "C1", 1, None), lot("B", "C1", 1, "2025-05-05")]
        assert [l.lot_id for l in filter_lots(lots, expiry_to=date(2026, 1, 1))] == ["B"]

    def test_sort_by_quantity(self, catalog):
        lots = filter_lots(catalog, item_id="ITM-005", sort_key="qty_on_hand", descending=True)
        assert [l.qty_on_hand for l in lots] == [35, 10]

    def test_unknown_sort_key(self, catalog):
        with pytest.raises(ValueError):
            filter_lots(catalog, sort_key="colour")


class TestInventoryLedger:

    def test_commit_decrements_on_hand(self, catalog):
        ledger = InventoryLedger(catalog)
        lots, version = ledger.snapshot()
        results = allocate(derive_requirements([{"itemId": "ITM-005", "qty": 1}], 15), lots)

        new_version = ledger.commit(results, expected_version=version)

        assert new_version == version + 1
        assert ledger.on_hand("ITM-005", "CB-2025-01") == 0
        assert ledger.on_hand("ITM-005", "CB-2025-02") == 30

    def test_commit_with_shortage_commits_planned_part(self, catalog):
        ledger = InventoryLedger(catalog)
        lots, _ = ledger.snapshot()
        results = allocate(derive_requirements([{"itemId": "ITM-007", "qty": 1}], 8), lots)
        assert results[0].shortage_qty == 3

        ledger.commit(results)
        assert ledger.on_hand("ITM-007", "SF-2025-01") == 0

    def test_stale_plan_is_rejected(self, catalog):
        ledger = InventoryLedger(catalog)
        lots, version = ledger.snapshot()
        results = allocate(derive_requirements([{"itemId": "ITM-009", "qty": 1}], 150), lots)

        ledger.commit(results, expected_version=version)
        with pytest.raises(ReservationConflictError):
            ledger.commit(results, expected_version=version)

    def test_all_or_nothing(self, catalog):
        ledger = InventoryLedger(catalog)
        lots, _ = ledger.snapshot()
        first = allocate(derive_requirements([{"itemId": "ITM-009", "qty": 1}], 150), lots)
        second = allocate(
            derive_requirements([{"itemId": "ITM-003", "qty": 1}, {"itemId": "ITM-009", "qty": 1}], 100),
            lots,
        )

        ledger.commit(first)
        with pytest.raises(ReservationConflictError) as exc:
            ledger.commit(second)

        assert exc.value.lot_ids == ["SC-2025-01"]
        # ITM-003 line was not applied either
        assert ledger.on_hand("ITM-003", "PC-2025-01") == 60
        assert ledger.on_hand("ITM-009", "SC-2025-01") == 50

    def test_snapshot_is_a_copy(self, catalog):
        ledger = InventoryLedger(catalog)
        lots, _ = ledger.snapshot()
        lots[0].qty_on_hand = 0
        assert ledger.on_hand(lots[0].item_id, lots[0].lot_id) == catalog[0].qty_on_hand
