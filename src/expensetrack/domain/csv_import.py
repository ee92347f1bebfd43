"""CSV import domain service."""

import csv
import io
from pathlib import Path
from typing import Optional, Union

from expensetrack.domain import errors
from expensetrack.domain.entities import ImportResult, Transaction, UNCATEGORIZED
from expensetrack.logging_setup import get_logger
from expensetrack.store.base import TransactionStore
from expensetrack.utils.amount_parser import parse_amount

logger = get_logger(__name__)

# Positional layout of a card statement export
DATE_COLUMN = 0
DESCRIPTION_COLUMN = 2
CARD_MEMBER_COLUMN = 3
ACCOUNT_NUMBER_COLUMN = 4
AMOUNT_COLUMN = 5


def _cell(row: list[str], index: int) -> Optional[str]:
    """Return the cell at index, or None when the row is too short."""
    return row[index] if index < len(row) else None


class CSVImportService:
    """Service for importing CSV files into the store."""

    def __init__(self, store: TransactionStore):
        """Initialize CSV import service.

        Args:
            store: Store that receives imported batches
        """
        self.store = store

    def parse_csv(self, text: str) -> list[Transaction]:
        """Parse CSV text into transaction records.

        The first row is a header and is discarded. Blank lines are
        skipped. Remaining rows are read by column position; short rows
        leave the missing fields unset. Each record gets its zero-based data
        row index as ID and the default category.

        Args:
            text: CSV text

        Returns:
            Transactions in row order

        Raises:
            CSVParseError: If the CSV framing is malformed
        """
        reader = csv.reader(io.StringIO(text, newline=""), strict=True)
        try:
            rows = [row for row in reader if row]
        except csv.Error as e:
            raise errors.CSVParseError(errors.csv_parse_failed(f"line {reader.line_num}: {e}"))

        transactions = []
        for index, row in enumerate(rows[1:]):
            transactions.append(
                Transaction(
                    id=index,
                    date=_cell(row, DATE_COLUMN),
                    description=_cell(row, DESCRIPTION_COLUMN),
                    card_member=_cell(row, CARD_MEMBER_COLUMN),
                    account_number=_cell(row, ACCOUNT_NUMBER_COLUMN),
                    amount=parse_amount(_cell(row, AMOUNT_COLUMN)),
                    category=UNCATEGORIZED,
                )
            )
        return transactions

    def import_text(self, text: str) -> ImportResult:
        """Parse CSV text and replace the store's transactions with it.

        Parsing completes before the store is touched, so a parse failure
        leaves the previous batch in place.

        Args:
            text: CSV text

        Returns:
            ImportResult with the installed batch

        Raises:
            CSVParseError: If the CSV framing is malformed
        """
        try:
            transactions = self.parse_csv(text)
        except errors.CSVParseError as e:
            logger.warning("CSV import rejected: %s", e)
            raise

        self.store.replace_transactions(transactions)
        logger.info("Imported %d transactions", len(transactions))
        return ImportResult(imported=len(transactions), transactions=tuple(transactions))

    def import_bytes(self, data: bytes) -> ImportResult:
        """Decode UTF-8 CSV bytes (BOM tolerated) and import them.

        Raises:
            CSVParseError: If the data is not UTF-8 or the framing is malformed
        """
        try:
            text = data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            logger.warning("CSV import rejected: %s", e)
            raise errors.CSVParseError(errors.csv_parse_failed(str(e)))
        return self.import_text(text)

    def import_file(self, csv_file_path: Optional[Union[str, Path]]) -> ImportResult:
        """Import transactions from a CSV file.

        Args:
            csv_file_path: Path to CSV file, or None when no file was chosen

        Returns:
            ImportResult with the installed batch

        Raises:
            ValidationError: If no file was given
            NotFoundError: If the file doesn't exist
            CSVParseError: If the file can't be parsed
        """
        if csv_file_path is None or str(csv_file_path).strip() == "":
            raise errors.ValidationError(errors.missing_import_file())

        csv_path = Path(csv_file_path)
        if not csv_path.is_file():
            raise errors.NotFoundError(f"CSV file not found: {csv_file_path}")

        return self.import_bytes(csv_path.read_bytes())
