import csv
from typing import Dict, Iterable, Iterator, Mapping, Optional, assert_never

from amount import parse_amount
from errors import MalformedHeader, MalformedId, MissingAmount, UnexpectedAmount, UnknownType
from models import (
    MAX_CLIENT_ID,
    MAX_TX_ID,
    Chargeback,
    Deposit,
    Dispute,
    Resolve,
    TransactionRecord,
    TransactionType,
    Withdrawal,
)

REQUIRED_FIELDS = ("type", "client", "tx")

# Accepted spellings beyond the TransactionType values
TYPE_ALIASES = {
    "withdraw": TransactionType.WITHDRAWAL,
}


def read_rows(lines: Iterable[str]) -> Iterator[Dict[str, Optional[str]]]:
    """
    Read CSV rows as dicts keyed by the stripped header names.

    Blank lines and lines starting with '#' are skipped. Missing trailing
    cells come back as None. An empty input yields nothing; a header without
    the type, client and tx columns raises MalformedHeader.
    """
    content = (line for line in lines if line.strip() and not line.lstrip().startswith("#"))
    # quotes are literal characters
    reader = csv.DictReader(content, skipinitialspace=True, quoting=csv.QUOTE_NONE)
    if reader.fieldnames is None:
        return
    header = {name.strip() for name in reader.fieldnames}
    missing = [name for name in REQUIRED_FIELDS if name not in header]
    if missing:
        raise MalformedHeader(missing)

    for row in reader:
        yield {k.strip(): v for k, v in row.items() if k is not None}


def parse_row(row: Mapping[str, Optional[str]]) -> TransactionRecord:
    """
    Turn one raw row into a transaction record.

    Only the row's structure is checked here. Whether the record can be
    applied is decided by the exchange.

    Raises:
        UnknownType, MissingAmount, MalformedAmount, MalformedId
    """
    transaction_type = parse_type(row.get("type"))
    client = parse_id("client", row.get("client"), MAX_CLIENT_ID)
    tx = parse_id("tx", row.get("tx"), MAX_TX_ID)

    amount_str = _clean(row.get("amount"))
    if transaction_type.has_amount and amount_str is None:
        raise MissingAmount(transaction_type.value)
    if not transaction_type.has_amount and amount_str is not None:
        raise UnexpectedAmount(transaction_type.value, amount_str)

    match transaction_type:
        case TransactionType.DEPOSIT:
            return Deposit(client=client, tx=tx, amount=parse_amount(amount_str))
        case TransactionType.WITHDRAWAL:
            return Withdrawal(client=client, tx=tx, amount=parse_amount(amount_str))
        case TransactionType.DISPUTE:
            return Dispute(client=client, tx=tx)
        case TransactionType.RESOLVE:
            return Resolve(client=client, tx=tx)
        case TransactionType.CHARGEBACK:
            return Chargeback(client=client, tx=tx)
        case _:
            assert_never(transaction_type)


def parse_type(value: Optional[str]) -> TransactionType:
    text = _clean(value)
    if text is None:
        raise UnknownType(value)
    text = text.lower()
    if text in TYPE_ALIASES:
        return TYPE_ALIASES[text]
    try:
        return TransactionType(text)
    except ValueError:
        raise UnknownType(value) from None


def parse_id(field: str, value: Optional[str], maximum: int) -> int:
    text = _clean(value)
    if text is None:
        raise MalformedId(field, value, "missing")
    if not text.isascii() or not text.isdigit():
        raise MalformedId(field, value)
    number = int(text)
    if number > maximum:
        raise MalformedId(field, value, f"exceeds {maximum}")
    return number


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None
