"""Store factory functions."""

from expensetrack.store.sqlalchemy_store import SQLAlchemyStore


def create_memory_store() -> SQLAlchemyStore:
    """Create a fresh, isolated in-memory store.

    The store starts with no transactions and the default business.

    Returns:
        SQLAlchemyStore backed by a private in-memory SQLite database
    """
    store = SQLAlchemyStore()
    store.connect()
    return store
