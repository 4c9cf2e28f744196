from typing import Dict, Iterator, Optional, assert_never

from account import Account
from ledger import LedgerHistory
from models import (
    AccountSnapshot,
    Chargeback,
    Deposit,
    Dispute,
    Resolve,
    TransactionRecord,
    TransactionType,
    Withdrawal,
)


class Exchange:
    """
    Applies transaction records to client accounts.

    Records must be applied in arrival order. Each apply either succeeds
    completely or raises an ExchangeError without changing any state, so a
    caller may stop at any record boundary. Rejections are raised, never
    logged; deciding what to do with them is up to the caller.

    The account for a record's client is created before validation, so every
    client named by a record shows up in accounts() even if all of its
    records were rejected.
    """

    # TODO: state is owned by a single thread. Sharding accounts by client id
    # would be needed to apply records from several writers concurrently.

    def __init__(self, dispute_withdrawals: bool = False):
        self._accounts: Dict[int, Account] = {}
        self._ledger = LedgerHistory(dispute_withdrawals=dispute_withdrawals)

    def __len__(self) -> int:
        return len(self._accounts)

    def apply(self, record: TransactionRecord) -> None:
        account = self._get_or_create_account(record.client)
        account.ensure_unlocked(record.tx)

        match record:
            case Deposit():
                self._handle_deposit(account, record)
            case Withdrawal():
                self._handle_withdrawal(account, record)
            case Dispute():
                self._handle_dispute(account, record)
            case Resolve():
                self._handle_resolve(account, record)
            case Chargeback():
                self._handle_chargeback(account, record)
            case _:
                assert_never(record)

    def accounts(self) -> Iterator[AccountSnapshot]:
        """Yield a snapshot of every known account, ordered by client id."""
        for client in sorted(self._accounts):
            yield self._accounts[client].snapshot()

    def get_account(self, client: int) -> Optional[AccountSnapshot]:
        account = self._accounts.get(client)
        if account is None:
            return None
        return account.snapshot()

    def _get_or_create_account(self, client: int) -> Account:
        account = self._accounts.get(client)
        if account is None:
            account = self._accounts[client] = Account(client)
        return account

    def _handle_deposit(self, account: Account, record: Deposit) -> None:
        self._ledger.ensure_new(record.tx, record.client)
        account.deposit(record.amount, record.tx)
        self._ledger.record(record.tx, record.client, record.amount, TransactionType.DEPOSIT)

    def _handle_withdrawal(self, account: Account, record: Withdrawal) -> None:
        self._ledger.ensure_new(record.tx, record.client)
        account.withdraw(record.amount, record.tx)
        self._ledger.record(record.tx, record.client, record.amount, TransactionType.WITHDRAWAL)

    def _handle_dispute(self, account: Account, record: Dispute) -> None:
        entry = self._ledger.check_dispute(record.tx, record.client)
        account.hold(entry.amount, record.tx)
        self._ledger.mark_disputed(record.tx, record.client)

    def _handle_resolve(self, account: Account, record: Resolve) -> None:
        entry = self._ledger.check_settlement(record.tx, record.client)
        account.release(entry.amount, record.tx)
        self._ledger.mark_resolved(record.tx, record.client)

    def _handle_chargeback(self, account: Account, record: Chargeback) -> None:
        entry = self._ledger.check_settlement(record.tx, record.client)
        account.chargeback(entry.amount, record.tx)
        self._ledger.mark_chargedback(record.tx, record.client)
