"""Accounts, entries and money transfers in SQLite, with a JSON HTTP API."""

__version__ = "0.1.0"