"""HTTP API for creating, fetching and listing accounts."""

import json
import logging
import os
import re
from typing import Any, Dict, Tuple

from flask import Flask, Response, jsonify, request

from .queries import RecordNotFoundError
from .store import Store

logger = logging.getLogger(__name__)

_INTEGER = re.compile(r"[+-]?\d+")
_INT32_RANGE = (-(2**31), 2**31 - 1)
_INT64_RANGE = (-(2**63), 2**63 - 1)


class _BindingError(ValueError):
    """A request parameter is missing or invalid."""


def error_response(err: BaseException) -> Dict[str, str]:
    """Return the JSON body that reports ``err``."""
    return {"error": str(err)}


def _parse_int(name: str, text: str, bounds: Tuple[int, int]) -> int:
    if not _INTEGER.fullmatch(text):
        raise _BindingError(f"{name}: invalid integer {text!r}")
    value = int(text)
    low, high = bounds
    if not low <= value <= high:
        raise _BindingError(f"{name}: value {text!r} out of range")
    return value


def _bind_int(
    name: str, text: Any, bounds: Tuple[int, int], minimum: int, maximum: Any = None
) -> int:
    if text is None or text == "":
        raise _BindingError(f"{name}: field is required")
    value = _parse_int(name, text, bounds)
    if value == 0:
        raise _BindingError(f"{name}: field is required")
    if value < minimum:
        raise _BindingError(f"{name}: must be at least {minimum}")
    if maximum is not None and value > maximum:
        raise _BindingError(f"{name}: must be at most {maximum}")
    return value


def _bind_create_account(raw: bytes) -> Tuple[str, str]:
    try:
        payload = json.loads(raw)
    except ValueError as err:
        raise _BindingError(f"invalid JSON body: {err}") from err
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise _BindingError("request body must be a JSON object")

    fields = {}
    for name in ("owner", "currency"):
        value = payload.get(name)
        if value is None:
            value = ""
        elif not isinstance(value, str):
            raise _BindingError(f"{name}: must be a string")
        fields[name] = value
    return fields["owner"], fields["currency"]


class Server:
    """Serves the account API over a store."""

    def __init__(self, store: Store) -> None:
        self.store = store
        self.app = Flask(__name__)
        self.app.add_url_rule(
            "/accounts", view_func=self.create_account, methods=["POST"]
        )
        self.app.add_url_rule(
            "/accounts/<account_id>", view_func=self.get_account, methods=["GET"]
        )
        self.app.add_url_rule(
            "/accounts", view_func=self.list_account, methods=["GET"]
        )

    def create_account(self) -> Tuple[Response, int]:
        """Create an account with a zero balance from the JSON body."""
        try:
            owner, currency = _bind_create_account(request.get_data())
        except _BindingError as err:
            return jsonify(error_response(err)), 400

        try:
            account = self.store.create_account(owner, 0, currency)
        except Exception as err:
            return jsonify(error_response(err)), 500

        return jsonify(account.to_dict()), 200

    def get_account(self, account_id: str) -> Tuple[Response, int]:
        """Return the account named in the path."""
        try:
            account_number = _bind_int("id", account_id, _INT64_RANGE, 1)
        except _BindingError as err:
            return jsonify(error_response(err)), 400

        try:
            account = self.store.get_account(account_number)
        except RecordNotFoundError as err:
            return jsonify(error_response(err)), 404
        except Exception as err:
            return jsonify(error_response(err)), 500

        return jsonify(account.to_dict()), 200

    def list_account(self) -> Tuple[Response, int]:
        """Return one page of accounts chosen by ``page_id`` and ``page_size``."""
        try:
            page_id = _bind_int(
                "page_id", request.args.get("page_id"), _INT32_RANGE, 1
            )
            page_size = _bind_int(
                "page_size", request.args.get("page_size"), _INT32_RANGE, 5, 10
            )
        except _BindingError as err:
            return jsonify(error_response(err)), 400

        limit, offset = page_size, (page_id - 1) * page_size
        logger.debug("listing accounts: limit=%d offset=%d", limit, offset)
        try:
            accounts = self.store.list_accounts(limit, offset)
        except Exception as err:
            return jsonify(error_response(err)), 500

        return jsonify([account.to_dict() for account in accounts]), 200

    def start(self, address: str) -> None:
        """Serve HTTP on ``address``, given as ``host:port`` or ``:port``."""
        if address:
            host, sep, port_text = address.rpartition(":")
            if not sep:
                raise ValueError(f"address {address!r} has no port")
        else:
            host, port_text = "", os.environ.get("PORT") or "8080"
        try:
            port = int(port_text)
        except ValueError as err:
            raise ValueError(f"invalid port in address {address!r}") from err
        self.app.run(host=host or "0.0.0.0", port=port, threaded=False)