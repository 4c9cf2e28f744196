import csv
import logging
import sys

from amount import format_amount
from config import Settings
from engine import PaymentsEngine
from errors import MalformedHeader
from exchange import Exchange
from models import AccountSnapshot

logger = logging.getLogger(__name__)

EXIT_NO_FILE = 1
EXIT_INVALID = 2

HEADER = "client,available,held,total,locked"


def format_account(account: AccountSnapshot) -> str:
    return (
        f"{account.client},"
        f"{format_amount(account.available)},"
        f"{format_amount(account.held)},"
        f"{format_amount(account.total)},"
        f"{str(account.locked).lower()}"
    )


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    if len(argv) != 1:
        print("Usage: payments-engine <transactions.csv> > accounts.csv", file=sys.stderr)
        return EXIT_NO_FILE

    engine = PaymentsEngine(Exchange(dispute_withdrawals=settings.dispute_withdrawals))
    try:
        accounts = engine.process_file(argv[0])
    except (OSError, UnicodeDecodeError, csv.Error, MalformedHeader) as e:
        logger.error(f"Cannot handle input file: {e}")
        return EXIT_INVALID

    print(HEADER)
    for account in accounts.values():
        print(format_account(account))
    return 0


if __name__ == "__main__":
    sys.exit(main())
