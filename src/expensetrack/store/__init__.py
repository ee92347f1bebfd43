"""Store layer for expensetrack application."""

from expensetrack.store.base import TransactionStore
from expensetrack.store.factories import create_memory_store

__all__ = ["TransactionStore", "create_memory_store"]
