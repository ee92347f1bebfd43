"""Business domain service."""

import time
from typing import Callable, Optional

from expensetrack.domain import errors
from expensetrack.domain.entities import Business
from expensetrack.logging_setup import get_logger
from expensetrack.store.base import TransactionStore

logger = get_logger(__name__)


def _millis() -> int:
    return time.time_ns() // 1_000_000


class BusinessService:
    """Service for managing businesses."""

    def __init__(self, store: TransactionStore, clock: Callable[[], int] = _millis):
        """Initialize business service.

        Args:
            store: Transaction store
            clock: Source of millisecond timestamps for new business IDs
        """
        self.store = store
        self.clock = clock

    def list_businesses(self) -> list[Business]:
        """List all businesses, default business first."""
        return self.store.list_businesses()

    def get_business(self, business_id: str) -> Optional[Business]:
        """Get business by ID."""
        return self.store.get_business(business_id)

    def add_business(self, name: str) -> Business:
        """Create a business.

        The ID is the creation time in milliseconds. If that ID is taken,
        the next free millisecond is used.

        Args:
            name: Business name (surrounding whitespace is dropped)

        Returns:
            The new Business

        Raises:
            ValidationError: If name is empty
        """
        name = (name or "").strip()
        if not name:
            raise errors.ValidationError("Business name cannot be empty")

        stamp = self.clock()
        while self.store.get_business(str(stamp)) is not None:
            stamp += 1

        business = Business(id=str(stamp), name=name)
        self.store.add_business(business)
        logger.info("Added business '%s' (ID: %s)", business.name, business.id)
        return business

    def remove_business(self, business_id: str) -> int:
        """Remove a business.

        Transactions assigned to the business become unassigned.

        Returns:
            Number of transactions that were unassigned

        Raises:
            NotFoundError: If the business doesn't exist
        """
        unassigned = self.store.remove_business(business_id)
        logger.info(
            "Removed business %s, unassigned %d transaction%s",
            business_id,
            unassigned,
            "s" if unassigned != 1 else "",
        )
        return unassigned
