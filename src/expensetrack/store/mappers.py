"""Mapper functions to convert between domain entities and SQLAlchemy models."""

import math

from expensetrack.domain import entities as domain
from expensetrack.store.models import (
    Business as ORMBusiness,
    Transaction as ORMTransaction,
)


def amount_to_column(amount: float):
    """Convert a domain amount to its column value (NaN becomes NULL)."""
    if amount is None or math.isnan(amount):
        return None
    return amount


def amount_from_column(value) -> float:
    """Convert a column value back to a domain amount (NULL becomes NaN)."""
    return math.nan if value is None else float(value)


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        date=orm_transaction.date,
        description=orm_transaction.description,
        amount=amount_from_column(orm_transaction.amount),
        category=orm_transaction.category,
        card_member=orm_transaction.card_member,
        account_number=orm_transaction.account_number,
        business_id=orm_transaction.business_id,
    )


def transaction_to_orm(transaction: domain.Transaction) -> ORMTransaction:
    """Convert domain Transaction entity to a new SQLAlchemy Transaction model."""
    return ORMTransaction(
        id=transaction.id,
        date=transaction.date,
        description=transaction.description,
        amount=amount_to_column(transaction.amount),
        category=transaction.category,
        card_member=transaction.card_member,
        account_number=transaction.account_number,
        business_id=transaction.business_id,
    )


def business_to_domain(orm_business: ORMBusiness) -> domain.Business:
    """Convert SQLAlchemy Business model to domain Business entity."""
    return domain.Business(id=orm_business.id, name=orm_business.name)
