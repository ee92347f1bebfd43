"""Domain layer for expensetrack application.

Services are imported from their own modules; this package only exposes the
entities so that the store layer can import them without a cycle.
"""

from expensetrack.domain.entities import (
    Business,
    Bucket,
    Suggestion,
    Timeframe,
    Transaction,
    TransactionCountScope,
)

__all__ = [
    "Business",
    "Bucket",
    "Suggestion",
    "Timeframe",
    "Transaction",
    "TransactionCountScope",
]
