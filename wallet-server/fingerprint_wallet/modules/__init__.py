"""Feature modules: passkey ceremonies, wallets and the transfer ledger."""
