"""Typed queries over the accounts, entries and transfers tables."""

import sqlite3
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional, Sequence, TypeVar

from .models import Account, Entry, Transfer

T = TypeVar("T")

_SCHEMA = """
PRAGMA foreign_keys = ON;

CREATE TABLE IF NOT EXISTS accounts (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    owner TEXT NOT NULL,
    balance INTEGER NOT NULL,
    currency TEXT NOT NULL,
    created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS entries (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    account_id INTEGER NOT NULL REFERENCES accounts (id),
    amount INTEGER NOT NULL,
    created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS transfers (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    from_account_id INTEGER NOT NULL REFERENCES accounts (id),
    to_account_id INTEGER NOT NULL REFERENCES accounts (id),
    amount INTEGER NOT NULL,
    created_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS accounts_owner_idx ON accounts (owner);
CREATE INDEX IF NOT EXISTS entries_account_id_idx ON entries (account_id);
CREATE INDEX IF NOT EXISTS transfers_from_account_id_idx ON transfers (from_account_id);
CREATE INDEX IF NOT EXISTS transfers_to_account_id_idx ON transfers (to_account_id);
CREATE INDEX IF NOT EXISTS transfers_accounts_idx ON transfers (from_account_id, to_account_id);
"""

_ACCOUNT_COLUMNS = "id, owner, balance, currency, created_at"
_ENTRY_COLUMNS = "id, account_id, amount, created_at"
_TRANSFER_COLUMNS = "id, from_account_id, to_account_id, amount, created_at"


class RecordNotFoundError(LookupError):
    """Raised when a query that returns one row finds none."""


def init_schema(connection: sqlite3.Connection) -> None:
    """Create the bank's tables and indexes if they do not exist yet."""
    connection.executescript(_SCHEMA)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _account(row: Sequence[Any]) -> Account:
    id_, owner, balance, currency, created_at = row
    return Account(id_, owner, balance, currency, datetime.fromisoformat(created_at))


def _entry(row: Sequence[Any]) -> Entry:
    id_, account_id, amount, created_at = row
    return Entry(id_, account_id, amount, datetime.fromisoformat(created_at))


def _transfer(row: Sequence[Any]) -> Transfer:
    id_, from_id, to_id, amount, created_at = row
    return Transfer(id_, from_id, to_id, amount, datetime.fromisoformat(created_at))


class Queries:
    """Query methods bound to a connection or an open transaction."""

    def __init__(self, db: sqlite3.Connection) -> None:
        self._db = db

    def _one(
        self, sql: str, params: Sequence[Any], build: Callable[[Sequence[Any]], T], what: str
    ) -> T:
        row: Optional[Sequence[Any]] = self._db.execute(sql, params).fetchone()
        if row is None:
            raise RecordNotFoundError(f"{what} not found")
        return build(row)

    # accounts

    def add_account_balance(self, account_id: int, amount: int) -> Account:
        """Add ``amount`` to an account's balance and return the account."""
        cursor = self._db.execute(
            "UPDATE accounts SET balance = balance + ? WHERE id = ?",
            (amount, account_id),
        )
        if cursor.rowcount == 0:
            raise RecordNotFoundError(f"account {account_id} not found")
        return self.get_account(account_id)

    def create_account(self, owner: str, balance: int, currency: str) -> Account:
        """Insert a new account and return it."""
        cursor = self._db.execute(
            "INSERT INTO accounts (owner, balance, currency, created_at) VALUES (?, ?, ?, ?)",
            (owner, balance, currency, _now()),
        )
        return self.get_account(cursor.lastrowid)

    def delete_account(self, account_id: int) -> None:
        """Delete an account; deleting a missing account is not an error."""
        self._db.execute("DELETE FROM accounts WHERE id = ?", (account_id,))

    def get_account(self, account_id: int) -> Account:
        """Return the account with ``account_id``."""
        return self._one(
            f"SELECT {_ACCOUNT_COLUMNS} FROM accounts WHERE id = ? LIMIT 1",
            (account_id,),
            _account,
            f"account {account_id}",
        )

    def get_account_for_update(self, account_id: int) -> Account:
        """Return an account that is about to be changed in this transaction."""
        return self.get_account(account_id)

    def list_accounts(self, limit: int, offset: int) -> List[Account]:
        """Return a page of accounts ordered by id."""
        rows = self._db.execute(
            f"SELECT {_ACCOUNT_COLUMNS} FROM accounts ORDER BY id LIMIT ? OFFSET ?",
            (limit, offset),
        ).fetchall()
        return [_account(row) for row in rows]

    def update_account(self, account_id: int, balance: int) -> Account:
        """Set an account's balance and return the account."""
        cursor = self._db.execute(
            "UPDATE accounts SET balance = ? WHERE id = ?", (balance, account_id)
        )
        if cursor.rowcount == 0:
            raise RecordNotFoundError(f"account {account_id} not found")
        return self.get_account(account_id)

    # entries and transfers

    def create_entry(self, account_id: int, amount: int) -> Entry:
        """Record a change of ``amount`` to an account and return the entry."""
        cursor = self._db.execute(
            "INSERT INTO entries (account_id, amount, created_at) VALUES (?, ?, ?)",
            (account_id, amount, _now()),
        )
        return self.get_entry(cursor.lastrowid)

    def create_transfer(
        self, from_account_id: int, to_account_id: int, amount: int
    ) -> Transfer:
        """Record a transfer between two accounts and return it."""
        cursor = self._db.execute(
            "INSERT INTO transfers (from_account_id, to_account_id, amount, created_at) "
            "VALUES (?, ?, ?, ?)",
            (from_account_id, to_account_id, amount, _now()),
        )
        return self.get_transfer(cursor.lastrowid)

    def get_entry(self, entry_id: int) -> Entry:
        """Return the entry with ``entry_id``."""
        return self._one(
            f"SELECT {_ENTRY_COLUMNS} FROM entries WHERE id = ?",
            (entry_id,),
            _entry,
            f"entry {entry_id}",
        )

    def get_transfer(self, transfer_id: int) -> Transfer:
        """Return the transfer with ``transfer_id``."""
        return self._one(
            f"SELECT {_TRANSFER_COLUMNS} FROM transfers WHERE id = ?",
            (transfer_id,),
            _transfer,
            f"transfer {transfer_id}",
        )