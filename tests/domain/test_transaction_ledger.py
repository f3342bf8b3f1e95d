"""Unit tests for the TransactionLedger domain service."""

from datetime import datetime, timedelta, timezone

import pytest

from litdist.domain.exceptions import NotFoundError, ValidationError
from litdist.domain.model.transaction import TransactionType
from litdist.domain.model.value_objects import Money
from litdist.domain.service.transaction_ledger import TransactionLedger
from tests.fakes import FakeTransactionRepository

T0 = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


def _ledger() -> TransactionLedger:
    ticks = iter(T0 + timedelta(minutes=i) for i in range(1000))
    return TransactionLedger(FakeTransactionRepository(), clock=lambda: next(ticks))


class TestRecord:

    def test_assigns_ids_and_timestamps(self):
        ledger = _ledger()
        first = ledger.record(TransactionType.INCOMING, "1", "A", 5)
        second = ledger.record(TransactionType.OUTGOING, "1", "A", 2)
        assert (first.id, second.id) == (1, 2)
        assert first.created_at == T0

    def test_prepare_writes_nothing_until_appended(self):
        ledger = _ledger()
        drafts = [
            ledger.prepare(TransactionType.OUTGOING, "3", "A", 2, counterparty_organization_id="4"),
            ledger.prepare(TransactionType.OUTGOING, "3", "B", 1, counterparty_organization_id="4"),
        ]
        assert all(d.id is None for d in drafts)
        assert ledger.find() == []

        stored = ledger.append(drafts)
        assert [e.id for e in stored] == [1, 2]
        assert len(ledger.find(organization_id="4")) == 2

    def test_signed_quantities(self):
        ledger = _ledger()
        assert ledger.record(TransactionType.INCOMING, "1", "A", 5).signed_quantity == 5
        assert ledger.record(TransactionType.OUTGOING, "1", "A", 5).signed_quantity == -5
        assert ledger.record(TransactionType.ADJUSTMENT, "1", "A", 5, decrease=True).signed_quantity == -5

    def test_total_amount(self):
        entry = _ledger().record(TransactionType.INCOMING, "1", "A", 3, unit_price=Money.of("20"))
        assert entry.total_amount == Money.of("60")

    @pytest.mark.parametrize("qty", [0, -1])
    def test_non_positive_quantity_rejected(self, qty):
        with pytest.raises(ValidationError, match="must be positive"):
            _ledger().record(TransactionType.INCOMING, "1", "A", qty)

    def test_decrease_only_for_adjustments(self):
        with pytest.raises(ValidationError, match="Only adjustments"):
            _ledger().record(TransactionType.INCOMING, "1", "A", 1, decrease=True)

    def test_invalid_type_rejected(self):
        with pytest.raises(ValidationError, match="Invalid transaction type"):
            _ledger().record("GIFT", "1", "A", 1)  # type: ignore[arg-type]


class TestFind:

    def test_newest_first_and_counterparty_match(self):
        ledger = _ledger()
        ledger.record(TransactionType.OUTGOING, "1", "A", 2, counterparty_organization_id="3")
        ledger.record(TransactionType.INCOMING, "3", "A", 2, counterparty_organization_id="1")
        ledger.record(TransactionType.ADJUSTMENT, "2", "B", 1)

        assert [e.id for e in ledger.find(organization_id="3")] == [2, 1]
        assert [e.id for e in ledger.find(literature_id="B")] == [3]
        assert [e.id for e in ledger.find(type=TransactionType.OUTGOING)] == [1]

    def test_date_range(self):
        ledger = _ledger()
        for _ in range(3):
            ledger.record(TransactionType.INCOMING, "1", "A", 1)
        found = ledger.find(date_from=T0 + timedelta(minutes=1), date_to=T0 + timedelta(minutes=1))
        assert [e.id for e in found] == [2]

    def test_movement_summary(self):
        ledger = _ledger()
        ledger.record(TransactionType.INCOMING, "1", "A", 5)
        ledger.record(TransactionType.OUTGOING, "1", "A", 2)
        ledger.record(TransactionType.ADJUSTMENT, "1", "A", 1, decrease=True)
        totals = {t.type: (t.count, t.quantity) for t in ledger.movement_summary(organization_id="1")}
        assert totals[TransactionType.INCOMING] == (1, 5)
        assert totals[TransactionType.OUTGOING] == (1, -2)
        assert totals[TransactionType.ADJUSTMENT] == (1, -1)


class TestReverse:

    def test_reversal_offsets_adjustment(self):
        ledger = _ledger()
        original = ledger.record(TransactionType.ADJUSTMENT, "1", "A", 4, notes="count")
        reversal = ledger.reverse(original.id, notes="typo")
        assert reversal.type == TransactionType.ADJUSTMENT
        assert reversal.signed_quantity == -4
        assert reversal.reverses_id == original.id
        assert reversal.notes == f"Reversal of transaction #{original.id}: typo"
        # history is kept
        assert len(ledger.find()) == 2

    def test_cannot_reverse_twice(self):
        ledger = _ledger()
        original = ledger.record(TransactionType.ADJUSTMENT, "1", "A", 4)
        ledger.reverse(original.id)
        with pytest.raises(ValidationError, match="already reversed"):
            ledger.reverse(original.id)

    def test_cannot_reverse_a_reversal(self):
        ledger = _ledger()
        original = ledger.record(TransactionType.ADJUSTMENT, "1", "A", 4)
        reversal = ledger.reverse(original.id)
        with pytest.raises(ValidationError, match="reversal entry"):
            ledger.reverse(reversal.id)

    def test_order_linked_entry_rejected(self):
        ledger = _ledger()
        entry = ledger.record(TransactionType.OUTGOING, "1", "A", 4, order_id=7)
        with pytest.raises(ValidationError, match="linked to an order"):
            ledger.reverse(entry.id)

    def test_transfer_entry_rejected(self):
        ledger = _ledger()
        entry = ledger.record(TransactionType.INCOMING, "1", "A", 4)
        with pytest.raises(ValidationError, match="Cannot reverse INCOMING"):
            ledger.reverse(entry.id)

    def test_unknown_entry(self):
        with pytest.raises(NotFoundError):
            _ledger().reverse(42)
