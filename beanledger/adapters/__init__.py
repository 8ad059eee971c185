"""Command line adapters for the ledger."""
