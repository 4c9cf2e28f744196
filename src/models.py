from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Union

MAX_CLIENT_ID = 2**16 - 1
MAX_TX_ID = 2**32 - 1


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"

    @property
    def has_amount(self) -> bool:
        return self in (TransactionType.DEPOSIT, TransactionType.WITHDRAWAL)


def _check_amount(amount: Decimal) -> None:
    if not isinstance(amount, Decimal):
        raise ValueError(f"amount must be Decimal, got {type(amount).__name__}")
    if not amount.is_finite() or amount < 0:
        raise ValueError(f"amount must be a finite non-negative value, got {amount}")


@dataclass(frozen=True)
class Deposit:
    client: int
    tx: int
    amount: Decimal

    transaction_type = TransactionType.DEPOSIT

    def __post_init__(self):
        _check_amount(self.amount)


@dataclass(frozen=True)
class Withdrawal:
    client: int
    tx: int
    amount: Decimal

    transaction_type = TransactionType.WITHDRAWAL

    def __post_init__(self):
        _check_amount(self.amount)


@dataclass(frozen=True)
class Dispute:
    client: int
    tx: int

    transaction_type = TransactionType.DISPUTE


@dataclass(frozen=True)
class Resolve:
    client: int
    tx: int

    transaction_type = TransactionType.RESOLVE


@dataclass(frozen=True)
class Chargeback:
    client: int
    tx: int

    transaction_type = TransactionType.CHARGEBACK


TransactionRecord = Union[Deposit, Withdrawal, Dispute, Resolve, Chargeback]


@dataclass(frozen=True)
class AccountSnapshot:
    """Read-only view of an account, as reported at the end of a run."""

    client: int
    available: Decimal
    held: Decimal
    total: Decimal
    locked: bool
