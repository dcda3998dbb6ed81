# simplebank

A small banking library. It keeps accounts with a balance and a currency in
an SQLite database, records every movement of money as an entry, and moves
money between two accounts as a single transaction. A Flask application
serves the accounts over a JSON HTTP API.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Storage

```python
import sqlite3

from simplebank.queries import init_schema
from simplebank.store import Store

connection = sqlite3.connect("simplebank.db")
init_schema(connection)

store = Store(connection)
alice = store.create_account("alice", 100, "USD")
bob = store.create_account("bob", 50, "USD")

result = store.transfer_tx(alice.id, bob.id, 10)
print(result.from_account.balance, result.to_account.balance)  # 90 60
```

`init_schema` creates the `accounts`, `entries` and `transfers` tables and
their indexes if they do not exist yet.

`Store.transfer_tx` creates the transfer record, one entry for each side
(negative for the sender, positive for the receiver) and updates both
balances, all in one transaction, always updating the lower account id
first. If any step fails, nothing is kept. The returned `TransferTxResult`
holds the transfer, both entries and both updated accounts, and
`to_dict()` turns it into a JSON-ready mapping.

For work of your own that must succeed or fail as a whole, use
`Store.transaction()` as a context manager. It yields a `Queries` object
bound to the open transaction, commits on normal exit and rolls back if an
exception escapes. `Store` takes over transaction control of the
connection it is given.

`Queries` (which `Store` extends) covers the individual operations:
`create_account`, `get_account`, `get_account_for_update`,
`list_accounts`, `update_account`, `add_account_balance`,
`delete_account`, `create_entry`, `get_entry`, `create_transfer` and
`get_transfer`. A lookup or update that finds nothing raises
`RecordNotFoundError`. The records are the frozen dataclasses `Account`,
`Entry` and `Transfer` in `simplebank.models`, each with a `to_dict()`
method that gives `created_at` as an ISO 8601 string.

## HTTP API

```python
from simplebank.api import Server

server = Server(store)
server.start("127.0.0.1:8080")
```

`Server.start` takes `host:port` or `:port` (which listens on `0.0.0.0`).
Given an empty address it listens on the port in the `PORT` environment
variable, or 8080. The Flask application itself is `server.app`.

### Create an account

`POST /accounts` with a JSON body:

```json
{"owner": "alice", "currency": "USD"}
```

A new account always starts with a balance of 0. The reply is the account:

```json
{"id": 1, "owner": "alice", "balance": 0, "currency": "USD", "created_at": "..."}
```

### Fetch an account

`GET /accounts/<id>`. The id must be an integer of 1 or more. An unknown id
gets `404 Not Found`.

### List accounts

`GET /accounts?page_id=1&page_size=5`. `page_id` must be at least 1 and
`page_size` between 5 and 10. Accounts come back ordered by id.

Invalid input is answered with `400 Bad Request`, database failures with
`500 Internal Server Error`. Every error body has the form
`{"error": "<message>"}`, as built by `simplebank.api.error_response`.

## Configuration

`simplebank.config.load_config(path)` reads a file named `app.env` from the
directory `path` and returns a `Config` with `db_driver`, `db_source` and
`server_address`, taken from the keys `DB_DRIVER`, `DB_SOURCE` and
`SERVER_ADDRESS`. A non-empty environment variable overrides a key that the
file defines. A missing file raises `FileNotFoundError`.

```
DB_DRIVER=sqlite3
DB_SOURCE=simplebank.db
SERVER_ADDRESS=0.0.0.0:8080
```

## Random values

`simplebank.random_utils` has helpers for tests and fixtures:
`random_int`, `random_string`, `random_owner` (six lowercase letters),
`random_money` (0 to 1000) and `random_currency` (EUR, USD or CAD).

## What this package does not do

There is no command that starts the service. Nothing in the package reads
the configuration, opens the database and starts the server for you: load
the `Config`, open the connection, call `init_schema`, build a `Store` and
a `Server` and call `start` yourself, as in the examples above. The
`DB_DRIVER` value is only read, never acted on; storage is always SQLite.