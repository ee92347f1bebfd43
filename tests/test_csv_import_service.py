"""Domain tests for CSV import service."""

import math

import pytest

from expensetrack.domain.csv_import import CSVImportService
from expensetrack.domain.entities import Transaction
from expensetrack.domain.errors import CSVParseError, NotFoundError, ValidationError

from conftest import CSV_HEADER


def test_import_file_result_contract(store, import_service, fixtures_dir):
    """Import returns the installed batch."""
    result = import_service.import_file(fixtures_dir / "sample_transactions.csv")

    assert result.imported == 5
    assert len(result.transactions) == 5
    assert list(result.transactions) == store.list_transactions()


def test_import_assigns_ids_in_row_order_and_default_category(import_service, fixtures_dir):
    result = import_service.import_file(str(fixtures_dir / "sample_transactions.csv"))

    assert [t.id for t in result.transactions] == [0, 1, 2, 3, 4]
    assert all(t.category == "Uncategorized" for t in result.transactions)
    assert all(t.business_id is None for t in result.transactions)


def test_import_maps_columns_by_position(import_service, fixtures_dir):
    result = import_service.import_file(fixtures_dir / "sample_transactions.csv")

    assert result.transactions[0] == Transaction(
        id=0,
        date="2024-01-15",
        description="AWS EMEA Services",
        amount=120.50,
        category="Uncategorized",
        card_member="JANE DOE",
        account_number="-41007",
        business_id=None,
    )
    assert result.transactions[2].amount == -1500.00


def test_parse_csv_header_only(import_service):
    assert import_service.parse_csv(CSV_HEADER) == []


def test_parse_csv_empty_text(import_service):
    assert import_service.parse_csv("") == []


def test_parse_csv_skips_blank_lines(import_service):
    text = CSV_HEADER + "2024-01-01,,A,M,1,5\n\n2024-01-02,,B,M,1,6\n\n"

    transactions = import_service.parse_csv(text)

    assert [(t.id, t.description) for t in transactions] == [(0, "A"), (1, "B")]


def test_parse_csv_short_rows_leave_fields_unset(import_service):
    transactions = import_service.parse_csv(CSV_HEADER + "2024-01-01,,Only description\n")

    txn = transactions[0]
    assert txn.description == "Only description"
    assert txn.card_member is None
    assert txn.account_number is None
    assert math.isnan(txn.amount)


def test_parse_csv_non_numeric_amount_is_nan_not_error(import_service):
    transactions = import_service.parse_csv(CSV_HEADER + "2024-01-01,,Fee,M,1,abc\n")

    assert math.isnan(transactions[0].amount)


def test_parse_csv_quoted_fields(import_service):
    text = CSV_HEADER + '2024-01-01,,"Coffee, Tea & Co",M,1,"4.50"\n'

    transactions = import_service.parse_csv(text)

    assert transactions[0].description == "Coffee, Tea & Co"
    assert transactions[0].amount == 4.50


def test_import_replaces_previous_batch(store, import_service):
    import_service.import_text(CSV_HEADER + "2024-01-01,,A,M,1,5\n2024-01-02,,B,M,1,6\n")
    import_service.import_text(CSV_HEADER + "2024-02-01,,C,M,1,7\n")

    transactions = store.list_transactions()
    assert [(t.id, t.description) for t in transactions] == [(0, "C")]


def test_import_discards_previous_edits(store, import_service):
    import_service.import_text(CSV_HEADER + "2024-01-01,,A,M,1,5\n")
    store.update_transaction(0, category="Hosting")

    import_service.import_text(CSV_HEADER + "2024-01-01,,A,M,1,5\n")

    assert store.get_transaction(0).category == "Uncategorized"


def test_malformed_csv_raises_and_keeps_previous_batch(store, import_service, fixtures_dir):
    import_service.import_file(fixtures_dir / "sample_transactions.csv")
    before = store.list_transactions()

    with pytest.raises(CSVParseError) as excinfo:
        import_service.import_file(fixtures_dir / "malformed.csv")

    assert str(excinfo.value).startswith("Error parsing CSV:")
    assert store.list_transactions() == before


def test_parse_error_is_a_validation_error(import_service):
    with pytest.raises(ValidationError):
        import_service.import_text(CSV_HEADER + '2024-01-01,,"bad"quote,M,1,5\n')


def test_import_bytes_strips_bom(store, import_service):
    data = ("\ufeff" + CSV_HEADER + "2024-01-01,,A,M,1,5\n").encode("utf-8")

    result = import_service.import_bytes(data)

    assert result.imported == 1
    assert store.get_transaction(0).date == "2024-01-01"


def test_import_bytes_invalid_utf8(store, import_service):
    import_service.import_text(CSV_HEADER + "2024-01-01,,A,M,1,5\n")

    with pytest.raises(CSVParseError):
        import_service.import_bytes(b"Date,x\n\xff\xfe\xfa,1\n")

    assert len(store.list_transactions()) == 1


@pytest.mark.parametrize("path", [None, ""])
def test_import_without_file_is_validation_error(store, import_service, path):
    with pytest.raises(ValidationError) as excinfo:
        import_service.import_file(path)

    assert str(excinfo.value) == "Please select a file to import."
    assert store.list_transactions() == []


def test_import_missing_file_raises(import_service, tmp_path):
    with pytest.raises(NotFoundError):
        import_service.import_file(tmp_path / "missing.csv")


def test_services_share_store(store, fixtures_dir):
    """A second service instance sees what the first imported."""
    CSVImportService(store).import_file(fixtures_dir / "sample_transactions.csv")

    assert len(CSVImportService(store).store.list_transactions()) == 5
