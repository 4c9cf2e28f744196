from decimal import Decimal
from typing import Optional


class PaymentsError(Exception):
    """Base class for every error raised by the payments core."""


# Structural errors: raised while turning a raw row into a record.

class ParseError(PaymentsError):
    pass


class UnknownType(ParseError):
    def __init__(self, value: Optional[str]):
        self.value = value
        super().__init__(f"unknown transaction type {value!r}")


class MissingAmount(ParseError):
    def __init__(self, transaction_type: str):
        self.transaction_type = transaction_type
        super().__init__(f"{transaction_type} requires an amount")


class MalformedAmount(ParseError):
    def __init__(self, value: Optional[str], reason: str = "not a valid amount"):
        self.value = value
        self.reason = reason
        super().__init__(f"malformed amount {value!r}: {reason}")


class UnexpectedAmount(MalformedAmount):
    def __init__(self, transaction_type: str, value: str):
        self.transaction_type = transaction_type
        super().__init__(value, f"{transaction_type} does not take an amount")


class MalformedHeader(ParseError):
    def __init__(self, missing):
        self.missing = tuple(missing)
        super().__init__(f"input header is missing columns: {', '.join(self.missing)}")


class MalformedId(ParseError):
    def __init__(self, field: str, value: Optional[str], reason: str = "not a valid id"):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"malformed {field} id {value!r}: {reason}")


# Business-rule errors: raised by the exchange when a record cannot be applied.

class ExchangeError(PaymentsError):
    def __init__(self, message: str, client: Optional[int], tx: Optional[int] = None):
        self.client = client
        self.tx = tx
        super().__init__(message)


class AccountLocked(ExchangeError):
    def __init__(self, client: int, tx: Optional[int] = None):
        super().__init__(f"client {client} is locked", client, tx)


class InsufficientFunds(ExchangeError):
    def __init__(self, client: int, tx: Optional[int], available: Decimal, required: Decimal):
        self.available = available
        self.required = required
        super().__init__(
            f"client {client} has insufficient funds: available {available}, required {required}",
            client,
            tx,
        )


class DuplicateTransaction(ExchangeError):
    def __init__(self, client: int, tx: int):
        super().__init__(f"tx {tx} already exists", client, tx)


class UnknownTransaction(ExchangeError):
    def __init__(self, client: Optional[int], tx: int):
        super().__init__(f"tx {tx} does not exist", client, tx)


class ClientMismatch(ExchangeError):
    def __init__(self, client: int, tx: int, owner: int):
        self.owner = owner
        super().__init__(f"tx {tx} belongs to client {owner}, not client {client}", client, tx)


class AlreadyDisputed(ExchangeError):
    def __init__(self, client: int, tx: int):
        super().__init__(f"tx {tx} is already disputed", client, tx)


class NotDisputed(ExchangeError):
    def __init__(self, client: int, tx: int):
        super().__init__(f"tx {tx} is not under dispute", client, tx)


class NotDisputable(ExchangeError):
    def __init__(self, client: int, tx: int, kind: str):
        self.kind = kind
        super().__init__(f"tx {tx} is a {kind} and cannot be disputed", client, tx)


class TransactionClosed(ExchangeError):
    def __init__(self, client: int, tx: int):
        super().__init__(f"tx {tx} has been charged back", client, tx)
