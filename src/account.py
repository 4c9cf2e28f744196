from decimal import Decimal
from typing import Optional

from amount import ZERO, add, subtract
from errors import AccountLocked, InsufficientFunds
from models import AccountSnapshot


class Account:
    """
    Balance state of a single client.

    An account is either unlocked or locked. Locked is terminal: every
    transition raises AccountLocked and leaves the balances untouched.
    Balances are only written through _commit, which enforces that neither
    available nor held ever goes negative. A transition that raises has not
    mutated anything.
    """

    __slots__ = ("_client", "_available", "_held", "_locked")

    def __init__(self, client: int):
        self._client = client
        self._available = ZERO
        self._held = ZERO
        self._locked = False

    @property
    def client(self) -> int:
        return self._client

    @property
    def available(self) -> Decimal:
        return self._available

    @property
    def held(self) -> Decimal:
        return self._held

    @property
    def total(self) -> Decimal:
        return add(self._available, self._held)

    @property
    def locked(self) -> bool:
        return self._locked

    def ensure_unlocked(self, tx: Optional[int] = None) -> None:
        if self._locked:
            raise AccountLocked(self._client, tx)

    def deposit(self, amount: Decimal, tx: Optional[int] = None) -> None:
        self._commit(add(self._available, amount), self._held, tx)

    def withdraw(self, amount: Decimal, tx: Optional[int] = None) -> None:
        self._commit(subtract(self._available, amount), self._held, tx)

    def hold(self, amount: Decimal, tx: Optional[int] = None) -> None:
        """Move funds from available to held for a dispute."""
        self._commit(subtract(self._available, amount), add(self._held, amount), tx)

    def release(self, amount: Decimal, tx: Optional[int] = None) -> None:
        """Move held funds back to available once a dispute is resolved."""
        self._commit(add(self._available, amount), subtract(self._held, amount), tx)

    def chargeback(self, amount: Decimal, tx: Optional[int] = None) -> None:
        """Remove held funds and lock the account."""
        self._commit(self._available, subtract(self._held, amount), tx)
        self._locked = True

    def snapshot(self) -> AccountSnapshot:
        return AccountSnapshot(
            client=self._client,
            available=self._available,
            held=self._held,
            total=self.total,
            locked=self._locked,
        )

    def _commit(self, available: Decimal, held: Decimal, tx: Optional[int]) -> None:
        self.ensure_unlocked(tx)
        if available < 0:
            raise InsufficientFunds(self._client, tx, self._available, subtract(self._available, available))
        if held < 0:
            raise InsufficientFunds(self._client, tx, self._held, subtract(self._held, held))
        self._available = available
        self._held = held

    def __repr__(self) -> str:
        return f"Account(client={self._client}, available={self._available}, held={self._held}, locked={self._locked})"
