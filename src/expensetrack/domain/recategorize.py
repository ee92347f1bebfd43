"""Category edit propagation.

Editing a transaction's category happens in two phases. The direct edit is
applied synchronously and is never undone. The suggestion service is then
consulted and, when it disagrees with the user's choice, other transactions
with a matching description are offered as a batch to move to the same
category. Abandoning or cancelling the second phase leaves the first intact.
"""

import inspect
from typing import Awaitable, Callable, Optional, Union

from expensetrack.domain import errors
from expensetrack.domain.entities import (
    CategoryEditOutcome,
    RecategorizationProposal,
    Transaction,
)
from expensetrack.domain.suggestion import SuggestionService
from expensetrack.logging_setup import get_logger
from expensetrack.store.base import TransactionStore

logger = get_logger(__name__)

ConfirmCallback = Callable[
    [RecategorizationProposal], Union[bool, Awaitable[bool]]
]


def find_similar_transactions(
    transactions: list[Transaction], source: Transaction, category: str
) -> list[Transaction]:
    """Find other transactions that could take the same category.

    A transaction matches when its description contains the source
    description (case-insensitive) and its category differs from the new
    one. A source without a description matches nothing.
    """
    if not source.description:
        return []

    needle = source.description.lower()
    return [
        txn
        for txn in transactions
        if txn.id != source.id
        and needle in (txn.description or "").lower()
        and txn.category != category
    ]


class RecategorizationService:
    """Service for category edits and the similar-transaction flow."""

    def __init__(self, store: TransactionStore, suggestion_service: SuggestionService):
        """Initialize recategorization service.

        Args:
            store: Transaction store
            suggestion_service: Source of category suggestions
        """
        self.store = store
        self.suggestion_service = suggestion_service

    def set_category(self, transaction_id: int, category: str) -> Transaction:
        """Set one transaction's category immediately.

        Raises:
            ValidationError: If category is empty
            NotFoundError: If the transaction doesn't exist
        """
        if not category or not category.strip():
            raise errors.ValidationError("Category cannot be empty")

        updated = self.store.update_transaction(transaction_id, category=category)
        logger.info("Transaction %d categorized as '%s'", transaction_id, category)
        return updated

    async def propose(
        self, transaction_id: int, category: str
    ) -> Optional[RecategorizationProposal]:
        """Build a batch recategorization proposal, if one applies.

        Args:
            transaction_id: Transaction the user just edited
            category: Category the user chose

        Returns:
            Proposal listing the candidate transaction IDs, or None when the
            suggestion agrees with the user or nothing else matches

        Raises:
            NotFoundError: If the transaction doesn't exist
        """
        source = self.store.get_transaction(transaction_id)
        if source is None:
            raise errors.NotFoundError(errors.transaction_not_found(transaction_id))

        suggestions = await self.suggestion_service.get_suggestions(
            source.description or "", source.amount
        )
        suggested = suggestions[0].category if suggestions else None
        if suggested is None or suggested == category:
            return None

        # Re-read after the await; the store may have changed meanwhile
        similar = find_similar_transactions(self.store.list_transactions(), source, category)
        if not similar:
            return None

        proposal = RecategorizationProposal(
            category=category,
            source_id=transaction_id,
            suggested_category=suggested,
            candidate_ids=tuple(txn.id for txn in similar),
        )
        logger.info(
            "Proposing %d similar transaction(s) for '%s'",
            len(proposal.candidate_ids),
            category,
        )
        return proposal

    def apply(self, proposal: RecategorizationProposal) -> int:
        """Move every candidate in a proposal to its category in one update.

        Returns:
            Number of transactions updated
        """
        count = self.store.update_transactions(
            proposal.candidate_ids, category=proposal.category
        )
        logger.info("Recategorized %d similar transaction(s) as '%s'", count, proposal.category)
        return count

    async def edit_category(
        self,
        transaction_id: int,
        category: str,
        confirm: Optional[ConfirmCallback] = None,
    ) -> CategoryEditOutcome:
        """Run the full two-phase category edit.

        Args:
            transaction_id: Transaction being edited
            category: New category
            confirm: Called with the proposal, if any; a truthy result
                (or awaited result) applies it. Without a callback the
                proposal is returned unapplied.

        Returns:
            CategoryEditOutcome
        """
        transaction = self.set_category(transaction_id, category)

        proposal = await self.propose(transaction_id, category)
        if proposal is None or confirm is None:
            return CategoryEditOutcome(transaction=transaction, proposal=proposal)

        accepted = confirm(proposal)
        if inspect.isawaitable(accepted):
            accepted = await accepted
        if not accepted:
            logger.debug("Proposal for '%s' declined", category)
            return CategoryEditOutcome(transaction=transaction, proposal=proposal)

        applied = self.apply(proposal)
        return CategoryEditOutcome(transaction=transaction, proposal=proposal, applied=applied)
