"""Abstract repository for the append-only transaction ledger.

No update or delete: entries are history.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from litdist.domain.model.transaction import Transaction


class TransactionRepository(ABC):

    @abstractmethod
    def get_by_id(self, transaction_id: int) -> Transaction | None:
        """Return an entry by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Transaction]:
        """Return every entry in insertion order."""

    @abstractmethod
    def add(self, transaction: Transaction) -> Transaction:
        """Append one unsaved entry and return it with its assigned ID."""

    @abstractmethod
    def add_all(self, transactions: list[Transaction]) -> list[Transaction]:
        """Append unsaved entries in one write, assigning consecutive IDs.

        ID allocation and the write happen under the same lock, so concurrent
        writers never hand out the same ID. Raises ValidationError if an
        entry already carries an ID.
        """
