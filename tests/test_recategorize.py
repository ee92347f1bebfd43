"""Tests for category edits and the similar-transaction proposal flow."""

import asyncio

import pytest

from expensetrack.domain.entities import RecategorizationProposal
from expensetrack.domain.errors import NotFoundError, ValidationError
from expensetrack.domain.recategorize import (
    RecategorizationService,
    find_similar_transactions,
)
from expensetrack.domain.suggestion import SuggestionService


@pytest.fixture
def aws_batch(store, make_transaction):
    store.replace_transactions(
        [
            make_transaction(0, 100.0, description="AWS"),
            make_transaction(1, 20.0, description="aws marketplace"),
            make_transaction(2, 30.0, description="Monthly AWS invoice"),
            make_transaction(3, 5.0, description="Coffee"),
            make_transaction(4, 7.0, description="AWS support", category="Finance"),
        ]
    )


def test_set_category_updates_only_target(store, recategorization_service, aws_batch):
    updated = recategorization_service.set_category(0, "Finance")

    assert updated.category == "Finance"
    assert [t.category for t in store.list_transactions()] == [
        "Finance",
        "Uncategorized",
        "Uncategorized",
        "Uncategorized",
        "Finance",
    ]


def test_set_category_missing_transaction(recategorization_service):
    with pytest.raises(NotFoundError):
        recategorization_service.set_category(99, "Finance")


@pytest.mark.parametrize("category", ["", "   "])
def test_set_category_rejects_empty(recategorization_service, aws_batch, category):
    with pytest.raises(ValidationError):
        recategorization_service.set_category(0, category)


def test_propose_when_suggestion_disagrees(recategorization_service, aws_batch):
    proposal = asyncio.run(recategorization_service.propose(0, "Finance"))

    assert proposal == RecategorizationProposal(
        category="Finance",
        source_id=0,
        suggested_category="Hosting",
        candidate_ids=(1, 2),
    )


def test_propose_none_when_suggestion_agrees(recategorization_service, aws_batch):
    assert asyncio.run(recategorization_service.propose(0, "Hosting")) is None


def test_propose_none_without_similar_transactions(recategorization_service, aws_batch):
    assert asyncio.run(recategorization_service.propose(3, "Finance")) is None


def test_propose_missing_transaction(recategorization_service):
    with pytest.raises(NotFoundError):
        asyncio.run(recategorization_service.propose(7, "Finance"))


def test_apply_updates_all_candidates(store, recategorization_service, aws_batch):
    proposal = asyncio.run(recategorization_service.propose(0, "Finance"))

    assert recategorization_service.apply(proposal) == 2
    assert store.get_transaction(1).category == "Finance"
    assert store.get_transaction(2).category == "Finance"
    assert store.get_transaction(3).category == "Uncategorized"


def test_edit_category_without_confirm_returns_proposal(store, recategorization_service, aws_batch):
    outcome = asyncio.run(recategorization_service.edit_category(0, "Finance"))

    assert outcome.transaction.category == "Finance"
    assert outcome.proposal.candidate_ids == (1, 2)
    assert outcome.applied == 0
    assert store.get_transaction(1).category == "Uncategorized"


def test_edit_category_confirmed(store, recategorization_service, aws_batch):
    seen = []

    def confirm(proposal):
        seen.append(proposal)
        return True

    outcome = asyncio.run(recategorization_service.edit_category(0, "Finance", confirm=confirm))

    assert len(seen) == 1
    assert outcome.applied == 2
    assert [t.category for t in store.list_transactions()][:3] == ["Finance"] * 3


def test_edit_category_declined_keeps_direct_edit(store, recategorization_service, aws_batch):
    outcome = asyncio.run(
        recategorization_service.edit_category(0, "Finance", confirm=lambda proposal: False)
    )

    assert outcome.applied == 0
    assert store.get_transaction(0).category == "Finance"
    assert store.get_transaction(1).category == "Uncategorized"


def test_edit_category_accepts_async_confirm(store, recategorization_service, aws_batch):
    async def confirm(proposal):
        return True

    outcome = asyncio.run(recategorization_service.edit_category(0, "Finance", confirm=confirm))

    assert outcome.applied == 2


def test_edit_category_confirm_not_called_when_suggestion_agrees(
    store, recategorization_service, aws_batch
):
    def confirm(proposal):
        raise AssertionError("should not be asked")

    outcome = asyncio.run(recategorization_service.edit_category(0, "Hosting", confirm=confirm))

    assert outcome.proposal is None
    assert store.get_transaction(0).category == "Hosting"


def test_cancelled_proposal_keeps_direct_edit(store, aws_batch):
    service = RecategorizationService(store, SuggestionService(latency=10))

    async def run():
        task = asyncio.create_task(service.edit_category(0, "Finance", confirm=lambda p: True))
        await asyncio.sleep(0.01)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    asyncio.run(run())

    assert store.get_transaction(0).category == "Finance"
    assert store.get_transaction(1).category == "Uncategorized"


def test_find_similar_excludes_source_and_matching_category(make_transaction):
    source = make_transaction(0, 1.0, description="Uber")
    others = [
        source,
        make_transaction(1, 1.0, description="UBER TRIP"),
        make_transaction(2, 1.0, description="uber eats", category="Travel"),
        make_transaction(3, 1.0, description="Lyft"),
        make_transaction(4, 1.0, description=None),
    ]

    similar = find_similar_transactions(others, source, "Travel")

    assert [t.id for t in similar] == [1]


def test_find_similar_with_empty_description_matches_nothing(make_transaction):
    source = make_transaction(0, 1.0, description="")
    others = [source, make_transaction(1, 1.0, description="Anything")]

    assert find_similar_transactions(others, source, "Other") == []
