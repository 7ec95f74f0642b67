"""Catalog, stock engine and job ledger."""
