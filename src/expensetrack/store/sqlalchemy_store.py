"""SQLAlchemy implementation of the transaction store."""

from typing import Any, Iterable, Optional

from sqlalchemy.orm import Session

from expensetrack.domain import errors
from expensetrack.domain.entities import (
    Business as DomainBusiness,
    Transaction as DomainTransaction,
    DEFAULT_BUSINESS_ID,
    DEFAULT_BUSINESS_NAME,
)
from expensetrack.logging_setup import get_logger
from expensetrack.store.base import TransactionStore, TRANSACTION_FIELDS
from expensetrack.store.mappers import (
    amount_to_column,
    business_to_domain,
    transaction_to_domain,
    transaction_to_orm,
)
from expensetrack.store.models import (
    Business,
    Transaction,
    IN_MEMORY_URL,
    create_db_engine,
    create_session_factory,
)

logger = get_logger(__name__)


def _column_updates(updates: dict[str, Any]) -> dict[str, Any]:
    """Validate update keys and convert values to column values."""
    unknown = sorted(set(updates) - TRANSACTION_FIELDS)
    if unknown:
        raise errors.ValidationError(errors.unknown_transaction_fields(unknown))
    if "category" in updates and updates["category"] is None:
        raise errors.ValidationError("Category cannot be empty")

    values = dict(updates)
    if "amount" in values:
        values["amount"] = amount_to_column(values["amount"])
    return values


class SQLAlchemyStore(TransactionStore):
    """SQLAlchemy-based implementation of TransactionStore.

    Defaults to a private in-memory SQLite database, so every instance is
    isolated and nothing outlives the process.
    """

    def __init__(self, database_url: str = IN_MEMORY_URL):
        """Initialize SQLAlchemy store.

        Args:
            database_url: SQLAlchemy database URL (defaults to in-memory SQLite)
        """
        self.database_url = database_url
        self.engine = create_db_engine(database_url)
        self.session_factory = create_session_factory(self.engine)
        self._session: Optional[Session] = None
        self._seed_default_business()

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def _seed_default_business(self) -> None:
        session = self._get_session()
        if session.query(Business).filter(Business.id == DEFAULT_BUSINESS_ID).first() is None:
            session.add(Business(id=DEFAULT_BUSINESS_ID, name=DEFAULT_BUSINESS_NAME))
            session.commit()

    def connect(self) -> None:
        """Open the store."""
        # Sessions are created lazily, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Release the store and its database connection.

        An in-memory database is gone once its engine is disposed.
        """
        if self._session is not None:
            self._session.close()
            self._session = None
        self.engine.dispose()

    # Transaction operations
    def list_transactions(self) -> list[DomainTransaction]:
        """List all transactions in import order."""
        session = self._get_session()
        transactions = session.query(Transaction).order_by(Transaction.id).all()
        return [transaction_to_domain(txn) for txn in transactions]

    def get_transaction(self, transaction_id: int) -> Optional[DomainTransaction]:
        """Get transaction by ID."""
        session = self._get_session()
        txn = session.query(Transaction).filter(Transaction.id == transaction_id).first()
        if txn is None:
            return None
        return transaction_to_domain(txn)

    def replace_transactions(self, transactions: Iterable[DomainTransaction]) -> None:
        """Replace the whole transaction batch in one commit."""
        session = self._get_session()
        rows = [transaction_to_orm(txn) for txn in transactions]
        try:
            for existing in session.query(Transaction).all():
                session.delete(existing)
            # Flush deletes first so reused IDs don't collide in the identity map
            session.flush()
            session.add_all(rows)
            session.commit()
        except Exception:
            session.rollback()
            raise
        logger.debug("Replaced transaction batch with %d rows", len(rows))

    def update_transaction(self, transaction_id: int, **updates: Any) -> DomainTransaction:
        """Apply a partial update to one transaction."""
        values = _column_updates(updates)
        session = self._get_session()
        txn = session.query(Transaction).filter(Transaction.id == transaction_id).first()
        if txn is None:
            raise errors.NotFoundError(errors.transaction_not_found(transaction_id))

        for field, value in values.items():
            setattr(txn, field, value)
        session.commit()
        return transaction_to_domain(txn)

    def update_transactions(self, transaction_ids: Iterable[int], **updates: Any) -> int:
        """Apply the same partial update to several transactions in one commit."""
        values = _column_updates(updates)
        ids = set(transaction_ids)
        if not ids:
            return 0

        session = self._get_session()
        transactions = session.query(Transaction).filter(Transaction.id.in_(ids)).all()
        for txn in transactions:
            for field, value in values.items():
                setattr(txn, field, value)
        session.commit()
        return len(transactions)

    # Business operations
    def list_businesses(self) -> list[DomainBusiness]:
        """List businesses in creation order."""
        session = self._get_session()
        businesses = session.query(Business).order_by(Business.position).all()
        return [business_to_domain(b) for b in businesses]

    def get_business(self, business_id: str) -> Optional[DomainBusiness]:
        """Get business by ID."""
        session = self._get_session()
        business = session.query(Business).filter(Business.id == business_id).first()
        if business is None:
            return None
        return business_to_domain(business)

    def add_business(self, business: DomainBusiness) -> None:
        """Add a business."""
        session = self._get_session()
        existing = session.query(Business).filter(Business.id == business.id).first()
        if existing is not None:
            raise errors.ConflictError(errors.duplicate_business_id(business.id))

        session.add(Business(id=business.id, name=business.name))
        session.commit()

    def remove_business(self, business_id: str) -> int:
        """Remove a business and unassign its transactions in one commit."""
        session = self._get_session()
        business = session.query(Business).filter(Business.id == business_id).first()
        if business is None:
            raise errors.NotFoundError(errors.business_not_found(business_id))

        assigned = (
            session.query(Transaction).filter(Transaction.business_id == business_id).all()
        )
        for txn in assigned:
            txn.business_id = None
        session.delete(business)
        session.commit()
        return len(assigned)
