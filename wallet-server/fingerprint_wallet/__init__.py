"""Fingerprint Wallet server: passkey login and a demo wallet ledger."""

__version__ = "0.1.0"
