"""Unit tests for the InventoryLedger domain service."""

import threading

import pytest

from litdist.domain.exceptions import (
    InsufficientReservedStockError,
    InsufficientStockError,
    InvalidReleaseError,
    ValidationError,
)
from litdist.domain.model.inventory import InventoryRecord
from litdist.domain.service.inventory_ledger import InventoryLedger
from litdist.domain.service.locking import KeyedLocks
from tests.fakes import FakeInventoryRepository


def _ledger(*specs: tuple[str, str, int, int]) -> tuple[InventoryLedger, FakeInventoryRepository]:
    """Build a ledger over (org, literature, quantity, reserved) records."""
    repo = FakeInventoryRepository(
        [InventoryRecord(org, lit, quantity=qty, reserved_quantity=res) for org, lit, qty, res in specs]
    )
    return InventoryLedger(repo, KeyedLocks()), repo


def _counts(repo: FakeInventoryRepository, org: str, lit: str) -> tuple[int, int]:
    record = repo.get(org, lit)
    return (record.quantity, record.reserved_quantity)


class TestSingleRecord:

    def test_get_or_create_creates_empty_record(self):
        ledger, repo = _ledger()
        record = ledger.get_or_create("1", "A")
        assert (record.quantity, record.reserved_quantity) == (0, 0)
        assert repo.get("1", "A") is not None

    def test_reserve_persists(self):
        ledger, repo = _ledger(("1", "A", 10, 0))
        ledger.reserve("1", "A", 4)
        assert _counts(repo, "1", "A") == (10, 4)

    def test_reserve_unknown_record_has_no_stock(self):
        ledger, repo = _ledger()
        with pytest.raises(InsufficientStockError):
            ledger.reserve("1", "A", 1)
        assert repo.get("1", "A") is None

    def test_release_clamps_and_warns(self, caplog):
        ledger, repo = _ledger(("1", "A", 10, 3))
        with caplog.at_level("WARNING", logger="litdist"):
            assert ledger.release("1", "A", 5) == 3
        assert _counts(repo, "1", "A") == (10, 0)
        assert "clamped" in caplog.text

    def test_strict_release_raises(self):
        ledger, repo = _ledger(("1", "A", 10, 3))
        with pytest.raises(InvalidReleaseError):
            ledger.release("1", "A", 5, strict=True)
        assert _counts(repo, "1", "A") == (10, 3)

    def test_adjust_creates_record_on_first_delivery(self):
        ledger, repo = _ledger()
        ledger.adjust("4", "A", 7)
        assert _counts(repo, "4", "A") == (7, 0)


class TestTransfer:

    def test_moves_stock(self):
        ledger, repo = _ledger(("1", "A", 10, 0))
        ledger.transfer("1", "3", "A", 4)
        assert _counts(repo, "1", "A") == (6, 0)
        assert _counts(repo, "3", "A") == (4, 0)

    def test_reserved_stock_is_not_transferable(self):
        ledger, repo = _ledger(("1", "A", 10, 8))
        with pytest.raises(InsufficientStockError):
            ledger.transfer("1", "3", "A", 3)
        assert _counts(repo, "1", "A") == (10, 8)
        assert repo.get("3", "A") is None

    def test_same_organization_rejected(self):
        ledger, _ = _ledger(("1", "A", 10, 0))
        with pytest.raises(ValidationError, match="same organization"):
            ledger.transfer("1", "1", "A", 1)


class TestBatch:

    def test_reserve_all(self):
        ledger, repo = _ledger(("1", "A", 10, 0), ("1", "B", 5, 0))
        ledger.reserve_all([("1", "A", 2), ("1", "B", 5)])
        assert _counts(repo, "1", "A") == (10, 2)
        assert _counts(repo, "1", "B") == (5, 5)

    def test_reserve_all_is_all_or_nothing(self):
        ledger, repo = _ledger(("1", "A", 10, 0), ("1", "B", 5, 0))
        with pytest.raises(InsufficientStockError, match="literature 'B'"):
            ledger.reserve_all([("1", "A", 2), ("1", "B", 6)])
        assert _counts(repo, "1", "A") == (10, 0)
        assert _counts(repo, "1", "B") == (5, 0)

    def test_reserve_all_checks_combined_demand(self):
        ledger, repo = _ledger(("1", "A", 5, 0))
        with pytest.raises(InsufficientStockError, match="need 6"):
            ledger.reserve_all([("1", "A", 3), ("1", "A", 3)])
        assert _counts(repo, "1", "A") == (5, 0)

    def test_release_all_without_reservation_is_noop(self):
        ledger, repo = _ledger(("1", "A", 5, 0))
        assert ledger.release_all([("1", "A", 3), ("1", "B", 1)]) == 0
        assert repo.get("1", "B") is None

    def test_consume_all_requires_reservation(self):
        ledger, repo = _ledger(("1", "A", 10, 2), ("1", "B", 10, 5))
        with pytest.raises(InsufficientReservedStockError):
            ledger.consume_all([("1", "B", 5), ("1", "A", 3)])
        assert _counts(repo, "1", "A") == (10, 2)
        assert _counts(repo, "1", "B") == (10, 5)

    def test_atomic_restores_on_error(self):
        ledger, repo = _ledger(("1", "A", 10, 0))
        with pytest.raises(RuntimeError):
            with ledger.atomic([("1", "A"), ("2", "A")]):
                ledger.adjust("1", "A", -4)
                ledger.adjust("2", "A", 4)
                raise RuntimeError("boom")
        assert _counts(repo, "1", "A") == (10, 0)
        assert repo.get("2", "A") is None


class TestQueries:

    def test_low_stock(self):
        ledger, _ = _ledger(("1", "A", 10, 5), ("1", "B", 50, 0), ("3", "A", 2, 0))
        assert {r.key for r in ledger.low_stock(5)} == {("1", "A"), ("3", "A")}
        assert {r.key for r in ledger.low_stock(5, "3")} == {("3", "A")}


class TestConcurrency:

    def test_parallel_reservations_never_oversell(self):
        ledger, repo = _ledger(("1", "A", 10, 0))
        outcomes: list[str] = []
        start = threading.Barrier(20)

        def worker() -> None:
            start.wait()
            try:
                ledger.reserve("1", "A", 1)
                outcomes.append("ok")
            except InsufficientStockError:
                outcomes.append("refused")

        threads = [threading.Thread(target=worker) for _ in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert outcomes.count("ok") == 10
        assert outcomes.count("refused") == 10
        assert _counts(repo, "1", "A") == (10, 10)
