"""Tests for manual inventory use cases: adjust, transfer, reserve, release, reverse."""

import pytest

from litdist.application.adjust_inventory import AdjustInventoryHandler
from litdist.application.list_transactions import ListTransactionsHandler
from litdist.application.manage_reservations import (
    ReleaseInventoryHandler,
    ReserveInventoryHandler,
)
from litdist.application.reverse_transaction import ReverseTransactionHandler
from litdist.application.show_inventory import ShowInventoryHandler
from litdist.application.transfer_inventory import TransferInventoryHandler
from litdist.domain.exceptions import (
    InsufficientStockError,
    InvalidReleaseError,
    NegativeStockError,
    PermissionDeniedError,
    ValidationError,
)
from litdist.domain.model.actor import Actor, UserRole
from litdist.domain.model.inventory import InventoryRecord
from litdist.domain.model.transaction import TransactionType
from litdist.domain.service.inventory_ledger import InventoryLedger
from litdist.domain.service.locking import KeyedLocks
from litdist.domain.service.transaction_ledger import TransactionLedger
from tests.fakes import (
    FakeInventoryRepository,
    FakeLiteratureRepository,
    FakeOrganizationRepository,
    FakeTransactionRepository,
    UnwritableTransactionRepository,
    sample_literature,
    sample_organizations,
)

REGION_USER = Actor("rita", UserRole.REGION, "1")
ADMIN = Actor("root", UserRole.ADMIN)


class Services:

    def __init__(self, *records: InventoryRecord, transaction_repo=None) -> None:
        self.inventory_repo = FakeInventoryRepository(list(records))
        self.inventory = InventoryLedger(self.inventory_repo, KeyedLocks())
        self.transactions = TransactionLedger(transaction_repo or FakeTransactionRepository())
        self.organizations = FakeOrganizationRepository(sample_organizations())
        self.literature = FakeLiteratureRepository(sample_literature())

    def adjust(self, actor, org, lit, delta, reason="recount", notes=None):
        handler = AdjustInventoryHandler(
            self.organizations, self.literature, self.inventory, self.transactions
        )
        return handler.handle(actor, org, lit, delta, reason, notes)

    def transfer(self, actor, src, dst, lit, qty):
        handler = TransferInventoryHandler(
            self.organizations, self.literature, self.inventory, self.transactions
        )
        return handler.handle(actor, src, dst, lit, qty)


class TestAdjust:

    def test_adjust_records_entry(self):
        svc = Services()
        record = svc.adjust(REGION_USER, "1", "A", 50, reason="initial stock", notes="box 1")
        assert record.quantity == 50
        [entry] = svc.transactions.find()
        assert entry.type == TransactionType.ADJUSTMENT
        assert entry.signed_quantity == 50
        assert entry.notes == "initial stock: box 1"

    def test_negative_adjust(self):
        svc = Services(InventoryRecord("1", "A", quantity=10))
        svc.adjust(REGION_USER, "1", "A", -4)
        assert svc.transactions.find()[0].signed_quantity == -4

    def test_cannot_go_below_reserved(self):
        svc = Services(InventoryRecord("1", "A", quantity=10, reserved_quantity=8))
        with pytest.raises(NegativeStockError):
            svc.adjust(REGION_USER, "1", "A", -3)
        assert svc.transactions.find() == []

    def test_reason_required(self):
        with pytest.raises(ValidationError, match="reason is required"):
            Services().adjust(REGION_USER, "1", "A", 5, reason=" ")

    def test_other_organization_rejected(self):
        with pytest.raises(PermissionDeniedError):
            Services().adjust(REGION_USER, "2", "A", 5)

    def test_group_cannot_adjust(self):
        with pytest.raises(PermissionDeniedError):
            Services().adjust(Actor("gena", UserRole.GROUP, "4"), "4", "A", 5)

    def test_failed_ledger_write_leaves_stock_unchanged(self):
        svc = Services(
            InventoryRecord("1", "A", quantity=10),
            transaction_repo=UnwritableTransactionRepository(),
        )
        with pytest.raises(OSError):
            svc.adjust(REGION_USER, "1", "A", -4)
        assert svc.inventory_repo.get("1", "A").quantity == 10


class TestTransfer:

    def test_records_pair(self):
        svc = Services(InventoryRecord("1", "A", quantity=10))
        svc.transfer(REGION_USER, "1", "2", "A", 4)
        lines = ShowInventoryHandler(svc.inventory_repo).handle(literature_id="A")
        assert [(line.organization_id, line.quantity) for line in lines] == [("1", 6), ("2", 4)]
        types = sorted(e.type.value for e in svc.transactions.find())
        assert types == ["INCOMING", "OUTGOING"]

    def test_insufficient(self):
        svc = Services(InventoryRecord("1", "A", quantity=3))
        with pytest.raises(InsufficientStockError):
            svc.transfer(REGION_USER, "1", "2", "A", 4)
        assert svc.transactions.find() == []

    def test_failed_ledger_write_undoes_both_sides(self):
        svc = Services(
            InventoryRecord("1", "A", quantity=10),
            transaction_repo=UnwritableTransactionRepository(),
        )
        with pytest.raises(OSError):
            svc.transfer(REGION_USER, "1", "2", "A", 4)
        assert svc.inventory_repo.get("1", "A").quantity == 10
        assert svc.inventory_repo.get("2", "A") is None


class TestReservations:

    def test_reserve_and_release(self):
        svc = Services(InventoryRecord("1", "A", quantity=10))
        record = ReserveInventoryHandler(svc.inventory).handle(REGION_USER, "1", "A", 6)
        assert record.available_quantity == 4
        assert ReleaseInventoryHandler(svc.inventory).handle(REGION_USER, "1", "A", 10) == 6

    def test_strict_release(self):
        svc = Services(InventoryRecord("1", "A", quantity=10, reserved_quantity=2))
        with pytest.raises(InvalidReleaseError):
            ReleaseInventoryHandler(svc.inventory).handle(REGION_USER, "1", "A", 3, strict=True)


class TestReverse:

    def test_reverse_adjustment_restores_stock(self):
        svc = Services(InventoryRecord("1", "A", quantity=10))
        svc.adjust(REGION_USER, "1", "A", 5)
        [entry] = svc.transactions.find()

        dto = ReverseTransactionHandler(svc.inventory, svc.transactions).handle(REGION_USER, entry.id, "typo")

        assert dto.quantity == -5
        assert dto.reverses_id == entry.id
        assert svc.inventory_repo.get("1", "A").quantity == 10

    def test_failed_reversal_keeps_ledger_and_stock(self):
        svc = Services(InventoryRecord("1", "A", quantity=0))
        svc.adjust(REGION_USER, "1", "A", 5)
        ReserveInventoryHandler(svc.inventory).handle(REGION_USER, "1", "A", 5)
        [entry] = svc.transactions.find()

        with pytest.raises(NegativeStockError):
            ReverseTransactionHandler(svc.inventory, svc.transactions).handle(REGION_USER, entry.id)

        assert len(svc.transactions.find()) == 1
        assert svc.inventory_repo.get("1", "A").quantity == 5


class TestListTransactions:

    def test_requires_report_permission(self):
        svc = Services()
        with pytest.raises(PermissionDeniedError):
            ListTransactionsHandler(svc.transactions).handle(Actor("gena", UserRole.GROUP, "4"))

    def test_filter_by_type(self):
        svc = Services(InventoryRecord("1", "A", quantity=10))
        svc.transfer(REGION_USER, "1", "2", "A", 4)
        dtos = ListTransactionsHandler(svc.transactions).handle(ADMIN, type="outgoing")
        assert [(d.type, d.quantity) for d in dtos] == [("OUTGOING", -4)]
