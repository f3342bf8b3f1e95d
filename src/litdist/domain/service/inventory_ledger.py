"""Domain service: Inventory Ledger.

Owns every change to inventory counts. Each operation loads, checks and
saves a record while holding the per-key lock, so two callers can never
both pass the availability check on the same stock.

Multi-record operations (order reservations, transfers) run inside
``atomic()``: the touched records are snapshotted first and written back
if anything fails, so an order is never left partially reserved.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from contextlib import contextmanager
from dataclasses import replace
from typing import Iterable, Iterator

from litdist.domain.exceptions import (
    InsufficientReservedStockError,
    InsufficientStockError,
    ValidationError,
)
from litdist.domain.model.inventory import InventoryKey, InventoryRecord
from litdist.domain.repository.inventory_repository import InventoryRepository
from litdist.domain.service.locking import KeyedLocks, default_locks

logger = logging.getLogger(__name__)

# (organization_id, literature_id, quantity)
StockLine = tuple[str, str, int]


class InventoryLedger:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        locks: KeyedLocks | None = None,
    ) -> None:
        self._inventory_repo = inventory_repo
        self._locks = locks or default_locks()

    @property
    def locks(self) -> KeyedLocks:
        return self._locks

    # --- Critical section -----------------------------------------------------

    @contextmanager
    def atomic(self, keys: Iterable[InventoryKey]) -> Iterator[None]:
        """Lock *keys* and undo every change to them if the block raises."""
        keys = set(keys)
        with self._locks.acquire(keys):
            snapshots = {key: self._snapshot(key) for key in keys}
            try:
                yield
            except BaseException:
                self._restore(snapshots)
                raise

    # --- Single-record operations ---------------------------------------------

    def get_or_create(self, organization_id: str, literature_id: str) -> InventoryRecord:
        """Return the record, creating an empty one on first reference."""
        with self.atomic([(organization_id, literature_id)]):
            record = self._inventory_repo.get(organization_id, literature_id)
            if record is None:
                record = InventoryRecord(organization_id, literature_id)
                self._inventory_repo.save(record)
            return record

    def reserve(self, organization_id: str, literature_id: str, quantity: int) -> InventoryRecord:
        with self.atomic([(organization_id, literature_id)]):
            record = self._load(organization_id, literature_id)
            record.reserve(quantity)
            self._inventory_repo.save(record)
        logger.info(
            "Reserved %d of %s at %s (available %d)",
            quantity, literature_id, organization_id, record.available_quantity,
        )
        return record

    def release(
        self,
        organization_id: str,
        literature_id: str,
        quantity: int,
        strict: bool = False,
    ) -> int:
        """Release a reservation and return the amount actually released.

        Over-release is clamped to what is reserved and logged; with
        *strict* it raises ``InvalidReleaseError`` instead.
        """
        with self.atomic([(organization_id, literature_id)]):
            record = self._load(organization_id, literature_id)
            released = record.release(quantity, strict=strict)
            self._inventory_repo.save(record)
        if released < quantity:
            logger.warning(
                "Release of %d of %s at %s clamped to %d reserved",
                quantity, literature_id, organization_id, released,
            )
        return released

    def consume(self, organization_id: str, literature_id: str, quantity: int) -> InventoryRecord:
        with self.atomic([(organization_id, literature_id)]):
            record = self._load(organization_id, literature_id)
            record.consume(quantity)
            self._inventory_repo.save(record)
        return record

    def adjust(self, organization_id: str, literature_id: str, delta: int) -> InventoryRecord:
        with self.atomic([(organization_id, literature_id)]):
            record = self._load(organization_id, literature_id)
            record.adjust(delta)
            self._inventory_repo.save(record)
        logger.info(
            "Adjusted %s at %s by %+d (on hand %d)",
            literature_id, organization_id, delta, record.quantity,
        )
        return record

    def transfer(
        self,
        from_organization_id: str,
        to_organization_id: str,
        literature_id: str,
        quantity: int,
    ) -> tuple[InventoryRecord, InventoryRecord]:
        """Move on-hand stock between organizations as one unit of work.

        Reserved stock stays put: asking for more than is available raises
        ``InsufficientStockError`` before either side is adjusted.
        """
        if quantity <= 0:
            raise ValidationError("Transfer quantity must be positive")
        if from_organization_id == to_organization_id:
            raise ValidationError("Cannot transfer stock to the same organization")

        keys = [(from_organization_id, literature_id), (to_organization_id, literature_id)]
        with self.atomic(keys):
            source = self._load(from_organization_id, literature_id)
            if source.available_quantity < quantity:
                raise InsufficientStockError(
                    f"Insufficient stock of literature '{literature_id}' at "
                    f"'{from_organization_id}' (need {quantity}, "
                    f"have {source.available_quantity} available)"
                )
            source = self.adjust(from_organization_id, literature_id, -quantity)
            target = self.adjust(to_organization_id, literature_id, quantity)
        logger.info(
            "Transferred %d of %s from %s to %s",
            quantity, literature_id, from_organization_id, to_organization_id,
        )
        return source, target

    # --- Batch operations (all-or-nothing) ------------------------------------

    def reserve_all(self, lines: Iterable[StockLine]) -> None:
        """Reserve every line or none of them.

        Phase 1 checks the combined demand per record before anything is
        mutated; phase 2 reserves and saves.
        """
        demand = self._demand(lines)
        with self.atomic(demand):
            records = {key: self._load(*key) for key in demand}
            for key, qty in demand.items():
                if qty > records[key].available_quantity:
                    raise InsufficientStockError(
                        f"Insufficient stock of literature '{key[1]}' at '{key[0]}' "
                        f"(need {qty}, have {records[key].available_quantity} available)"
                    )
            for key, qty in demand.items():
                records[key].reserve(qty)
                self._inventory_repo.save(records[key])

    def release_all(self, lines: Iterable[StockLine]) -> int:
        """Release every line, clamping each to what is reserved.

        Returns the total quantity released; releasing an order that holds
        no reservation is a no-op.
        """
        demand = self._demand(lines)
        released = 0
        with self.atomic(demand):
            for (org_id, lit_id), qty in demand.items():
                record = self._inventory_repo.get(org_id, lit_id)
                if record is None or record.reserved_quantity == 0:
                    continue
                released += self.release(org_id, lit_id, qty)
        return released

    def consume_all(self, lines: Iterable[StockLine]) -> None:
        demand = self._demand(lines)
        with self.atomic(demand):
            records = {key: self._load(*key) for key in demand}
            for key, qty in demand.items():
                if qty > records[key].reserved_quantity:
                    raise InsufficientReservedStockError(
                        f"Cannot consume {qty} of literature '{key[1]}' at '{key[0]}' "
                        f"- only {records[key].reserved_quantity} currently reserved"
                    )
            for key, qty in demand.items():
                records[key].consume(qty)
                self._inventory_repo.save(records[key])

    # --- Queries --------------------------------------------------------------

    def records(self, organization_id: str | None = None) -> list[InventoryRecord]:
        if organization_id is None:
            return self._inventory_repo.list_all()
        return self._inventory_repo.list_by_organization(organization_id)

    def low_stock(self, threshold: int, organization_id: str | None = None) -> list[InventoryRecord]:
        return [r for r in self.records(organization_id) if r.available_quantity <= threshold]

    # --- Internal helpers -----------------------------------------------------

    def _load(self, organization_id: str, literature_id: str) -> InventoryRecord:
        record = self._inventory_repo.get(organization_id, literature_id)
        if record is None:
            record = InventoryRecord(organization_id, literature_id)
        return record

    def _snapshot(self, key: InventoryKey) -> InventoryRecord | None:
        record = self._inventory_repo.get(*key)
        return replace(record) if record is not None else None

    def _restore(self, snapshots: dict[InventoryKey, InventoryRecord | None]) -> None:
        for key, snapshot in snapshots.items():
            if snapshot is None:
                self._inventory_repo.delete(*key)
            else:
                self._inventory_repo.save(snapshot)

    @staticmethod
    def _demand(lines: Iterable[StockLine]) -> dict[InventoryKey, int]:
        demand: dict[InventoryKey, int] = defaultdict(int)
        for org_id, lit_id, qty in lines:
            if qty <= 0:
                raise ValidationError("Quantity must be positive")
            demand[(org_id, lit_id)] += qty
        return dict(demand)
