"""Pure domain values and functions for the ledger kernel."""
