"""Transaction domain service."""

import math
from typing import Any, Optional

from expensetrack.domain import errors
from expensetrack.domain.entities import ALL_BUSINESSES, Transaction
from expensetrack.logging_setup import get_logger
from expensetrack.store.base import TransactionStore

logger = get_logger(__name__)

SORT_KEYS = (
    "id",
    "date",
    "description",
    "amount",
    "category",
    "card_member",
    "account_number",
    "business_id",
)


def _sort_value(value: Any) -> tuple:
    """Sort key that puts missing and NaN values first."""
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return (0, 0)
    return (1, value)


class TransactionService:
    """Service for browsing and editing transactions."""

    def __init__(self, store: TransactionStore):
        """Initialize transaction service.

        Args:
            store: Transaction store
        """
        self.store = store

    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.store.get_transaction(transaction_id)

    def list_transactions(
        self,
        search: Optional[str] = None,
        sort_key: str = "date",
        descending: bool = True,
        business_id: str = ALL_BUSINESSES,
    ) -> list[Transaction]:
        """List transactions for the transactions table.

        Args:
            search: Optional case-insensitive text matched against
                description or category
            sort_key: Transaction field to sort by
            descending: Sort direction
            business_id: Business to show, or "all"

        Returns:
            List of transaction entities

        Raises:
            ValidationError: If sort_key is not a transaction field
        """
        if sort_key not in SORT_KEYS:
            raise errors.ValidationError(
                f"Cannot sort by '{sort_key}'. Supported keys: {', '.join(SORT_KEYS)}"
            )

        transactions = sorted(
            self.store.list_transactions(),
            key=lambda txn: _sort_value(getattr(txn, sort_key)),
            reverse=descending,
        )

        needle = search.lower() if search else ""
        return [
            txn
            for txn in transactions
            if (
                needle in (txn.description or "").lower()
                or needle in txn.category.lower()
            )
            and (business_id == ALL_BUSINESSES or txn.business_id == business_id)
        ]

    def assign_business(self, transaction_id: int, business_id: Optional[str]) -> Transaction:
        """Assign a transaction to a business, or unassign it with None.

        Raises:
            NotFoundError: If the transaction or business doesn't exist
        """
        if business_id is not None and self.store.get_business(business_id) is None:
            raise errors.NotFoundError(errors.business_not_found(business_id))

        updated = self.store.update_transaction(transaction_id, business_id=business_id)
        logger.info("Transaction %d assigned to business %s", transaction_id, business_id)
        return updated
