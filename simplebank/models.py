"""Records stored by the bank: accounts, ledger entries and transfers."""

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Dict


def _serialise(record: Any) -> Dict[str, Any]:
    data = asdict(record)
    data["created_at"] = record.created_at.isoformat()
    return data


@dataclass(frozen=True)
class Account:
    """A bank account holding a balance in one currency."""

    id: int
    owner: str
    balance: int
    currency: str
    created_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-ready mapping of the account."""
        return _serialise(self)


@dataclass(frozen=True)
class Entry:
    """A change to one account's balance; the amount may be negative."""

    id: int
    account_id: int
    amount: int
    created_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-ready mapping of the entry."""
        return _serialise(self)


@dataclass(frozen=True)
class Transfer:
    """A movement of a positive amount from one account to another."""

    id: int
    from_account_id: int
    to_account_id: int
    amount: int
    created_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-ready mapping of the transfer."""
        return _serialise(self)