import logging
from typing import Dict, Iterable, Mapping, Optional

from errors import ExchangeError, ParseError
from exchange import Exchange
from models import AccountSnapshot
from parsing import parse_row, read_rows

logger = logging.getLogger(__name__)


class ProcessingStats:
    """Counters for a single run."""

    def __init__(self):
        self.applied = 0
        self.rejected = 0
        self.malformed = 0

    def record_applied(self):
        self.applied += 1

    def record_rejected(self):
        self.rejected += 1

    def record_malformed(self):
        self.malformed += 1


class PaymentsEngine:
    """
    Feeds input rows through an Exchange, one at a time and in order.

    Malformed rows and rejected transactions are logged and skipped; they
    never stop the run.
    """

    def __init__(self, exchange: Optional[Exchange] = None):
        self._exchange = exchange if exchange is not None else Exchange()
        self._stats = ProcessingStats()

    @property
    def exchange(self) -> Exchange:
        return self._exchange

    @property
    def stats(self) -> ProcessingStats:
        return self._stats

    def process_file(self, filepath: str) -> Dict[int, AccountSnapshot]:
        """Process a CSV file and return the final account states."""
        logger.info(f"Processing {filepath}")
        with open(filepath, "r", newline="", encoding="utf-8-sig") as f:
            self.process_rows(read_rows(f))

        logger.info(
            f"Applied: {self._stats.applied}, "
            f"Rejected: {self._stats.rejected}, "
            f"Malformed: {self._stats.malformed}"
        )
        return {account.client: account for account in self._exchange.accounts()}

    def process_rows(self, rows: Iterable[Mapping[str, Optional[str]]]) -> None:
        for row_number, row in enumerate(rows, start=1):
            self.process_row(row, row_number)

    def process_row(self, row: Mapping[str, Optional[str]], row_number: Optional[int] = None) -> bool:
        """Parse and apply one row. Returns True if the transaction was applied."""
        try:
            record = parse_row(row)
        except ParseError as e:
            self._stats.record_malformed()
            logger.warning(f"Skipping malformed row {row_number} {dict(row)}: {e}")
            return False

        try:
            self._exchange.apply(record)
        except ExchangeError as e:
            self._stats.record_rejected()
            logger.warning(f"Transaction rejected {record}: {e}")
            return False

        self._stats.record_applied()
        logger.debug(f"Applied {record}")
        return True
