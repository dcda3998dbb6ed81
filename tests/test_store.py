import sqlite3
from concurrent.futures import ThreadPoolExecutor

import pytest

from simplebank.models import Account
from simplebank.queries import Queries, init_schema
from simplebank.random_utils import random_currency, random_money, random_owner
from simplebank.store import Store


@pytest.fixture
def store():
    connection = sqlite3.connect(":memory:", check_same_thread=False)
    init_schema(connection)
    yield Store(connection)
    connection.close()


def create_random_account(store: Store) -> Account:
    owner, balance, currency = random_owner(), random_money(), random_currency()
    account = store.create_account(owner, balance, currency)
    assert account.owner == owner
    assert account.balance == balance
    assert account.currency == currency
    assert account.id != 0
    assert account.created_at is not None
    return account


def test_transfer_tx(store):
    account1 = create_random_account(store)
    account2 = create_random_account(store)

    n = 5
    amount = 10

    with ThreadPoolExecutor(max_workers=n) as pool:
        futures = [
            pool.submit(store.transfer_tx, account1.id, account2.id, amount)
            for _ in range(n)
        ]
        results = [future.result() for future in futures]

    existed = set()
    for result in results:
        transfer = result.transfer
        assert transfer.from_account_id == account1.id
        assert transfer.to_account_id == account2.id
        assert transfer.amount == amount
        assert transfer.id != 0
        assert store.get_transfer(transfer.id) == transfer

        from_entry = result.from_entry
        assert from_entry.account_id == account1.id
        assert from_entry.amount == -amount
        assert from_entry.id != 0
        assert store.get_entry(from_entry.id) == from_entry

        to_entry = result.to_entry
        assert to_entry.account_id == account2.id
        assert to_entry.amount == amount
        assert to_entry.id != 0
        assert store.get_entry(to_entry.id) == to_entry

        from_account = result.from_account
        assert from_account.id == account1.id
        to_account = result.to_account
        assert to_account.id == account2.id

        diff1 = account1.balance - from_account.balance
        diff2 = to_account.balance - account2.balance
        assert diff1 == diff2
        assert diff1 > 0
        assert diff1 % amount == 0

        k = diff1 // amount
        assert 1 <= k <= n
        assert k not in existed
        existed.add(k)

    updated1 = store.get_account(account1.id)
    updated2 = store.get_account(account2.id)
    assert updated1.balance == account1.balance - n * amount
    assert updated2.balance == account2.balance + n * amount


def test_transfer_tx_deadlock(store):
    account1 = create_random_account(store)
    account2 = create_random_account(store)

    n = 10
    amount = 10

    directions = [
        (account2.id, account1.id) if i % 2 == 1 else (account1.id, account2.id)
        for i in range(n)
    ]
    with ThreadPoolExecutor(max_workers=n) as pool:
        futures = [
            pool.submit(store.transfer_tx, from_id, to_id, amount)
            for from_id, to_id in directions
        ]
        results = [future.result() for future in futures]

    assert len(results) == n
    for (from_id, to_id), result in zip(directions, results):
        assert result.transfer.from_account_id == from_id
        assert result.transfer.to_account_id == to_id
        assert result.transfer.amount == amount

    assert store.get_account(account1.id).balance == account1.balance
    assert store.get_account(account2.id).balance == account2.balance


def test_transfer_tx_reverse_direction_assigns_accounts(store):
    account1 = create_random_account(store)
    account2 = create_random_account(store)

    result = store.transfer_tx(account2.id, account1.id, 7)

    assert result.from_account.id == account2.id
    assert result.to_account.id == account1.id
    assert result.from_account.balance == account2.balance - 7
    assert result.to_account.balance == account1.balance + 7


def test_transfer_tx_to_missing_account_rolls_back(store):
    account = create_random_account(store)

    with pytest.raises(sqlite3.IntegrityError):
        store.transfer_tx(account.id, account.id + 1000, 10)

    assert store.get_account(account.id).balance == account.balance
    assert store.list_accounts(10, 0) == [store.get_account(account.id)]
    count = store._connection.execute("SELECT COUNT(*) FROM transfers").fetchone()[0]
    assert count == 0


def test_transaction_commits_on_success(store):
    with store.transaction() as q:
        assert isinstance(q, Queries)
        created = q.create_account("alice", 50, "USD")

    assert store.get_account(created.id) == created


def test_transaction_rolls_back_on_error(store):
    account = create_random_account(store)

    with pytest.raises(KeyError):
        with store.transaction() as q:
            q.update_account(account.id, account.balance + 500)
            raise KeyError("stop")

    assert store.get_account(account.id).balance == account.balance


def test_transfer_result_to_dict(store):
    account1 = create_random_account(store)
    account2 = create_random_account(store)

    result = store.transfer_tx(account1.id, account2.id, 3)
    data = result.to_dict()

    assert data["transfer"] == result.transfer.to_dict()
    assert data["from_account"]["id"] == account1.id
    assert data["to_account"]["id"] == account2.id
    assert data["from_entry"]["amount"] == -3
    assert data["to_entry"]["amount"] == 3