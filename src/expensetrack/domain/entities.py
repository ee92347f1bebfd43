"""Domain model entities for expensetrack.

These are pure data classes representing business concepts, independent of
the store schema. Snapshots handed out by the store are frozen; edits always
go back through the store's mutation operations.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

UNCATEGORIZED = "Uncategorized"
ALL_BUSINESSES = "all"
DEFAULT_BUSINESS_ID = "default"
DEFAULT_BUSINESS_NAME = "Default Business"


class Timeframe(str, Enum):
    """Analytics window ending now."""

    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class TransactionCountScope(str, Enum):
    """Which list the transaction count statistic is taken from."""

    ALL = "all"
    FILTERED = "filtered"


@dataclass(frozen=True)
class Transaction:
    """Imported card transaction.

    ``amount`` is signed: positive is an expense, negative is income. It may
    be NaN when the CSV cell was not numeric.
    """

    id: int
    date: Optional[str]
    description: Optional[str]
    amount: float
    category: str = UNCATEGORIZED
    card_member: Optional[str] = None
    account_number: Optional[str] = None
    business_id: Optional[str] = None


@dataclass(frozen=True)
class Business:
    """Business that transactions can be assigned to."""

    id: str
    name: str


@dataclass(frozen=True)
class Suggestion:
    """Category candidate with a confidence in [0, 1]."""

    category: str
    confidence: float


@dataclass(frozen=True)
class Bucket:
    """Named aggregate value for charts."""

    name: str
    value: float


@dataclass(frozen=True)
class ImportResult:
    """Outcome of installing an imported CSV batch."""

    imported: int
    transactions: tuple[Transaction, ...]


@dataclass(frozen=True)
class RecategorizationProposal:
    """Other transactions that could take the category just chosen."""

    category: str
    source_id: int
    suggested_category: str
    candidate_ids: tuple[int, ...]


@dataclass(frozen=True)
class CategoryEditOutcome:
    """Result of a full category edit."""

    transaction: Transaction
    proposal: Optional[RecategorizationProposal] = None
    applied: int = 0


@dataclass(frozen=True)
class AnalyticsReport:
    """Aggregates behind the analytics view."""

    timeframe: Timeframe
    business_id: str
    cutoff: datetime
    expense_by_category: tuple[Bucket, ...]
    income_vs_expense: tuple[Bucket, ...]
    total_expenses: float
    largest_category: Bucket
    transaction_count: int
    filtered_transaction_count: int
