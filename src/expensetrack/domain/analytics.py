"""Analytics aggregation domain service."""

from datetime import datetime
from typing import Optional, Sequence, Union

from expensetrack.domain.entities import (
    ALL_BUSINESSES,
    AnalyticsReport,
    Bucket,
    Timeframe,
    Transaction,
    TransactionCountScope,
)
from expensetrack.logging_setup import get_logger
from expensetrack.store.base import TransactionStore
from expensetrack.utils.date_parser import parse_timestamp, timeframe_cutoff

logger = get_logger(__name__)

NO_CATEGORY = Bucket(name="N/A", value=0)


class AnalyticsService:
    """Service for the aggregates behind the analytics view.

    Every report is a full recompute from a store snapshot; nothing is
    cached between calls.
    """

    def __init__(self, store: TransactionStore):
        """Initialize analytics service.

        Args:
            store: Transaction store
        """
        self.store = store

    def build_report(
        self,
        timeframe: Union[Timeframe, str] = Timeframe.MONTH,
        business_id: str = ALL_BUSINESSES,
        now: Optional[datetime] = None,
        count_scope: Union[TransactionCountScope, str] = TransactionCountScope.ALL,
    ) -> AnalyticsReport:
        """Build the analytics report.

        Args:
            timeframe: Window ending now (week, month or year)
            business_id: Business to include, or "all"
            now: Reference instant (defaults to the current local time)
            count_scope: Whether transaction_count covers every transaction
                or only the filtered ones

        Returns:
            AnalyticsReport

        Raises:
            ValueError: If timeframe or count_scope is not recognized
        """
        timeframe = Timeframe(timeframe)
        count_scope = TransactionCountScope(count_scope)
        if now is None:
            now = datetime.now()

        transactions = self.store.list_transactions()
        cutoff = timeframe_cutoff(timeframe, now)
        filtered = self.filter_transactions(transactions, timeframe, business_id, now)

        expense_by_category = self.expenses_by_category(filtered)
        income_vs_expense = self.income_vs_expense(filtered)

        if count_scope is TransactionCountScope.ALL:
            transaction_count = len(transactions)
        else:
            transaction_count = len(filtered)

        logger.debug(
            "Analytics for %s/%s: %d of %d transactions",
            timeframe.value,
            business_id,
            len(filtered),
            len(transactions),
        )

        return AnalyticsReport(
            timeframe=timeframe,
            business_id=business_id,
            cutoff=cutoff,
            expense_by_category=tuple(expense_by_category),
            income_vs_expense=tuple(income_vs_expense),
            total_expenses=self.total_expenses(expense_by_category),
            largest_category=self.largest_category(expense_by_category),
            transaction_count=transaction_count,
            filtered_transaction_count=len(filtered),
        )

    def filter_transactions(
        self,
        transactions: Sequence[Transaction],
        timeframe: Union[Timeframe, str],
        business_id: str = ALL_BUSINESSES,
        now: Optional[datetime] = None,
    ) -> list[Transaction]:
        """Keep transactions on or after the timeframe cutoff for a business.

        Transactions whose date is missing or unparseable are dropped.
        """
        cutoff = timeframe_cutoff(Timeframe(timeframe), now)

        def in_window(txn: Transaction) -> bool:
            try:
                return parse_timestamp(txn.date) >= cutoff
            except ValueError:
                return False

        return [
            txn
            for txn in transactions
            if in_window(txn)
            and (business_id == ALL_BUSINESSES or txn.business_id == business_id)
        ]

    def expenses_by_category(self, transactions: Sequence[Transaction]) -> list[Bucket]:
        """Sum positive amounts per category, in first-occurrence order."""
        totals: dict[str, float] = {}
        for txn in transactions:
            if txn.amount > 0:
                totals[txn.category] = totals.get(txn.category, 0) + txn.amount
        return [Bucket(name=name, value=value) for name, value in totals.items()]

    def income_vs_expense(self, transactions: Sequence[Transaction]) -> list[Bucket]:
        """Split amounts into Income (negatives, as magnitudes) and Expense.

        Amounts that are not negative, NaN included, count as expense.
        """
        income = 0.0
        expense = 0.0
        for txn in transactions:
            if txn.amount < 0:
                income += abs(txn.amount)
            else:
                expense += txn.amount
        return [Bucket(name="Income", value=income), Bucket(name="Expense", value=expense)]

    def total_expenses(self, buckets: Sequence[Bucket]) -> float:
        """Sum bucket values."""
        return sum((bucket.value for bucket in buckets), 0.0)

    def largest_category(self, buckets: Sequence[Bucket]) -> Bucket:
        """Return the bucket with the largest value.

        The first maximum wins ties; no buckets gives the N/A sentinel.
        """
        largest = NO_CATEGORY
        for bucket in buckets:
            if bucket.value > largest.value:
                largest = bucket
        return largest
