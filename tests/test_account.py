import sys
import os
from decimal import Decimal

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from account import Account
from errors import AccountLocked, InsufficientFunds


def funded(amount="100"):
    account = Account(1)
    account.deposit(Decimal(amount))
    return account


class TestAccount:
    def test_default_values(self):
        account = Account(client=1)
        assert account.client == 1
        assert account.available == Decimal("0")
        assert account.held == Decimal("0")
        assert account.total == Decimal("0")
        assert account.locked is False

    def test_balances_read_only(self):
        account = Account(1)
        with pytest.raises(AttributeError):
            account.available = Decimal("1000")

    def test_deposit(self):
        account = funded("100")
        assert account.available == Decimal("100")
        assert account.total == Decimal("100")

    def test_withdraw(self):
        account = funded("100")
        account.withdraw(Decimal("60"))
        assert account.available == Decimal("40")

    def test_withdraw_exact_balance(self):
        account = funded("100")
        account.withdraw(Decimal("100"))
        assert account.available == Decimal("0")

    def test_withdraw_insufficient_funds(self):
        account = funded("50")
        with pytest.raises(InsufficientFunds) as excinfo:
            account.withdraw(Decimal("100"), tx=2)
        assert excinfo.value.available == Decimal("50")
        assert excinfo.value.required == Decimal("100")
        assert excinfo.value.tx == 2
        assert account.available == Decimal("50")

    def test_hold_and_release(self):
        account = funded("100")
        account.hold(Decimal("30"))
        assert account.available == Decimal("70")
        assert account.held == Decimal("30")
        assert account.total == Decimal("100")

        account.release(Decimal("30"))
        assert account.available == Decimal("100")
        assert account.held == Decimal("0")

    def test_hold_beyond_available_rejected(self):
        account = funded("20")
        with pytest.raises(InsufficientFunds):
            account.hold(Decimal("30"))
        assert account.available == Decimal("20")
        assert account.held == Decimal("0")

    def test_release_beyond_held_rejected(self):
        account = funded("20")
        account.hold(Decimal("10"))
        with pytest.raises(InsufficientFunds):
            account.release(Decimal("11"))
        assert account.held == Decimal("10")

    def test_chargeback_locks(self):
        account = funded("100")
        account.hold(Decimal("40"))
        account.chargeback(Decimal("40"))

        assert account.available == Decimal("60")
        assert account.held == Decimal("0")
        assert account.total == Decimal("60")
        assert account.locked is True

    def test_failed_chargeback_does_not_lock(self):
        account = funded("100")
        with pytest.raises(InsufficientFunds):
            account.chargeback(Decimal("1"))
        assert account.locked is False

    def test_locked_is_terminal(self):
        account = funded("100")
        account.hold(Decimal("50"))
        account.chargeback(Decimal("50"))
        before = account.snapshot()

        for operation in (account.deposit, account.withdraw, account.hold, account.release, account.chargeback):
            with pytest.raises(AccountLocked):
                operation(Decimal("1"))

        with pytest.raises(AccountLocked):
            account.ensure_unlocked()
        assert account.snapshot() == before

    def test_snapshot(self):
        account = funded("10")
        account.hold(Decimal("4"))
        snapshot = account.snapshot()

        assert snapshot.client == 1
        assert snapshot.available == Decimal("6")
        assert snapshot.held == Decimal("4")
        assert snapshot.total == Decimal("10")
        assert snapshot.locked is False
