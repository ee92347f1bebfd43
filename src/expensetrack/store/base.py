"""Abstract transaction store interface."""

from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional

# Import entities directly to avoid circular import through domain services
from expensetrack.domain.entities import Business, Transaction

TRANSACTION_FIELDS = frozenset(
    {
        "date",
        "description",
        "amount",
        "category",
        "card_member",
        "account_number",
        "business_id",
    }
)


class TransactionStore(ABC):
    """Owned collection of transactions and businesses.

    Reads return whole-collection snapshots of frozen entities. The only
    write paths are replacing the transaction batch, partial updates by ID,
    and adding or removing businesses.
    """

    @abstractmethod
    def connect(self) -> None:
        """Open the store."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Release the store."""
        pass

    # Transaction operations
    @abstractmethod
    def list_transactions(self) -> list[Transaction]:
        """List all transactions in import order."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def replace_transactions(self, transactions: Iterable[Transaction]) -> None:
        """Replace the whole transaction batch in one step."""
        pass

    @abstractmethod
    def update_transaction(self, transaction_id: int, **updates: Any) -> Transaction:
        """Apply a partial update to one transaction. Returns the new snapshot."""
        pass

    @abstractmethod
    def update_transactions(self, transaction_ids: Iterable[int], **updates: Any) -> int:
        """Apply the same partial update to several transactions at once.

        Returns the number of transactions updated.
        """
        pass

    # Business operations
    @abstractmethod
    def list_businesses(self) -> list[Business]:
        """List businesses in creation order."""
        pass

    @abstractmethod
    def get_business(self, business_id: str) -> Optional[Business]:
        """Get business by ID."""
        pass

    @abstractmethod
    def add_business(self, business: Business) -> None:
        """Add a business."""
        pass

    @abstractmethod
    def remove_business(self, business_id: str) -> int:
        """Remove a business.

        Transactions assigned to it have their business reset to unset.
        Returns the number of transactions that were unassigned.
        """
        pass
