"""Transactions over the bank's queries, including the money transfer."""

import sqlite3
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Tuple

from .models import Account, Entry, Transfer
from .queries import Queries


@dataclass(frozen=True)
class TransferTxResult:
    """Everything a transfer transaction created or changed."""

    transfer: Transfer
    from_account: Account
    to_account: Account
    from_entry: Entry
    to_entry: Entry

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-ready mapping of the result."""
        return {
            "transfer": self.transfer.to_dict(),
            "from_account": self.from_account.to_dict(),
            "to_account": self.to_account.to_dict(),
            "from_entry": self.from_entry.to_dict(),
            "to_entry": self.to_entry.to_dict(),
        }


def _add_money(
    queries: Queries,
    account_id1: int,
    amount1: int,
    account_id2: int,
    amount2: int,
) -> Tuple[Account, Account]:
    account1 = queries.add_account_balance(account_id1, amount1)
    account2 = queries.add_account_balance(account_id2, amount2)
    return account1, account2


class Store(Queries):
    """All queries, plus transactions that group several of them."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        # Transactions are begun and ended explicitly by this class.
        connection.isolation_level = None
        super().__init__(connection)
        self._connection = connection
        self._lock = threading.Lock()

    @contextmanager
    def transaction(self) -> Iterator[Queries]:
        """Run the block in a database transaction.

        Yields queries bound to the transaction. It is committed when the
        block ends normally and rolled back when the block raises.
        """
        with self._lock:
            self._connection.execute("BEGIN IMMEDIATE")
            try:
                yield Queries(self._connection)
            except BaseException as err:
                try:
                    self._connection.execute("ROLLBACK")
                except sqlite3.Error as rb_err:
                    raise RuntimeError(f"tx err: {err} rb err: {rb_err}") from err
                raise
            self._connection.execute("COMMIT")

    def transfer_tx(
        self, from_account_id: int, to_account_id: int, amount: int
    ) -> TransferTxResult:
        """Move ``amount`` from one account to another in one transaction.

        Creates the transfer record and an entry for each account, then
        updates both balances, always locking the lower account id first.
        """
        with self.transaction() as q:
            transfer = q.create_transfer(from_account_id, to_account_id, amount)
            from_entry = q.create_entry(from_account_id, -amount)
            to_entry = q.create_entry(to_account_id, amount)

            if from_account_id < to_account_id:
                from_account, to_account = _add_money(
                    q, from_account_id, -amount, to_account_id, amount
                )
            else:
                to_account, from_account = _add_money(
                    q, to_account_id, amount, from_account_id, -amount
                )

        return TransferTxResult(
            transfer=transfer,
            from_account=from_account,
            to_account=to_account,
            from_entry=from_entry,
            to_entry=to_entry,
        )