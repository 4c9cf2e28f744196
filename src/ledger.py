from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Dict, FrozenSet, Optional

from errors import (
    AlreadyDisputed,
    ClientMismatch,
    DuplicateTransaction,
    NotDisputable,
    NotDisputed,
    TransactionClosed,
    UnknownTransaction,
)
from models import TransactionType


class DisputeStatus(Enum):
    NORMAL = "normal"
    DISPUTED = "disputed"
    CHARGED_BACK = "charged_back"


@dataclass
class LedgerEntry:
    tx: int
    client: int
    amount: Decimal
    kind: TransactionType
    status: DisputeStatus = DisputeStatus.NORMAL


class LedgerHistory:
    """
    Accepted deposits and withdrawals keyed by transaction id.

    Entries are never removed; only their dispute status changes:

        NORMAL --dispute--> DISPUTED --resolve--> NORMAL
                            DISPUTED --chargeback--> CHARGED_BACK

    The check_* methods validate a transition without performing it, so a
    caller can validate every participant before mutating any of them.
    """

    def __init__(self, dispute_withdrawals: bool = False):
        self._entries: Dict[int, LedgerEntry] = {}
        disputable = {TransactionType.DEPOSIT}
        if dispute_withdrawals:
            disputable.add(TransactionType.WITHDRAWAL)
        self._disputable: FrozenSet[TransactionType] = frozenset(disputable)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, tx: int) -> bool:
        return tx in self._entries

    def ensure_new(self, tx: int, client: int) -> None:
        if tx in self._entries:
            raise DuplicateTransaction(client, tx)

    def record(self, tx: int, client: int, amount: Decimal, kind: TransactionType) -> LedgerEntry:
        """Store an accepted deposit or withdrawal."""
        self.ensure_new(tx, client)
        entry = LedgerEntry(tx=tx, client=client, amount=amount, kind=kind)
        self._entries[tx] = entry
        return entry

    def lookup(self, tx: int, client: Optional[int] = None) -> LedgerEntry:
        """Return the entry for tx; client is only used to report a miss."""
        entry = self._entries.get(tx)
        if entry is None:
            raise UnknownTransaction(client, tx)
        return entry

    def check_dispute(self, tx: int, client: int) -> LedgerEntry:
        entry = self._owned_entry(tx, client)
        if entry.kind not in self._disputable:
            raise NotDisputable(client, tx, entry.kind.value)
        if entry.status is DisputeStatus.DISPUTED:
            raise AlreadyDisputed(client, tx)
        if entry.status is DisputeStatus.CHARGED_BACK:
            raise TransactionClosed(client, tx)
        return entry

    def check_settlement(self, tx: int, client: int) -> LedgerEntry:
        """Validate a resolve or chargeback: the entry must be under dispute."""
        entry = self._owned_entry(tx, client)
        if entry.status is not DisputeStatus.DISPUTED:
            raise NotDisputed(client, tx)
        return entry

    def mark_disputed(self, tx: int, client: int) -> LedgerEntry:
        entry = self.check_dispute(tx, client)
        entry.status = DisputeStatus.DISPUTED
        return entry

    def mark_resolved(self, tx: int, client: int) -> LedgerEntry:
        entry = self.check_settlement(tx, client)
        entry.status = DisputeStatus.NORMAL
        return entry

    def mark_chargedback(self, tx: int, client: int) -> LedgerEntry:
        entry = self.check_settlement(tx, client)
        entry.status = DisputeStatus.CHARGED_BACK
        return entry

    def _owned_entry(self, tx: int, client: int) -> LedgerEntry:
        entry = self.lookup(tx, client)
        if entry.client != client:
            raise ClientMismatch(client, tx, entry.client)
        return entry
