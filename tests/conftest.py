"""Shared pytest fixtures for expensetrack tests."""

import logging
from datetime import datetime
from pathlib import Path

import pytest

from expensetrack.store.factories import create_memory_store
from expensetrack.domain.analytics import AnalyticsService
from expensetrack.domain.business import BusinessService
from expensetrack.domain.csv_import import CSVImportService
from expensetrack.domain.entities import Transaction
from expensetrack.domain.recategorize import RecategorizationService
from expensetrack.domain.suggestion import SuggestionService
from expensetrack.domain.transaction import TransactionService

CSV_HEADER = "Date,Receipt,Description,Card Member,Account #,Amount\n"


@pytest.fixture
def store():
    """Create an isolated in-memory store."""
    store = create_memory_store()
    yield store
    store.disconnect()


@pytest.fixture
def import_service(store):
    """Create a CSVImportService on the test store."""
    return CSVImportService(store)


@pytest.fixture
def suggestion_service():
    """Create a SuggestionService without latency."""
    return SuggestionService(latency=0)


@pytest.fixture
def recategorization_service(store, suggestion_service):
    """Create a RecategorizationService on the test store."""
    return RecategorizationService(store, suggestion_service)


@pytest.fixture
def analytics_service(store):
    """Create an AnalyticsService on the test store."""
    return AnalyticsService(store)


@pytest.fixture
def transaction_service(store):
    """Create a TransactionService on the test store."""
    return TransactionService(store)


@pytest.fixture
def business_service(store):
    """Create a BusinessService with a fixed clock."""
    return BusinessService(store, clock=lambda: 1700000000000)


@pytest.fixture
def now():
    """Fixed reference instant for timeframe tests."""
    return datetime(2024, 3, 31, 12, 0, 0)


@pytest.fixture
def make_transaction():
    """Build a Transaction with sensible defaults."""

    def _make(id, amount, date="2024-03-30", description="Vendor", **kwargs):
        return Transaction(id=id, date=date, description=description, amount=amount, **kwargs)

    return _make


@pytest.fixture
def sample_transactions(store, import_service, fixtures_dir):
    """Import the sample CSV into the store and return the batch."""
    return import_service.import_file(fixtures_dir / "sample_transactions.csv").transactions


@pytest.fixture
def write_csv(tmp_path):
    """Write CSV rows (without header) to a temp file and return its path."""

    def _write(*rows: str, name: str = "transactions.csv") -> Path:
        path = tmp_path / name
        path.write_text(CSV_HEADER + "".join(f"{row}\n" for row in rows), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def detach_log_handlers():
    """Drop handlers a test installed so later tests never log to a closed stream."""
    yield
    logger = logging.getLogger("expensetrack")
    for handler in list(logger.handlers):
        if isinstance(handler, logging.StreamHandler):
            logger.removeHandler(handler)
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
