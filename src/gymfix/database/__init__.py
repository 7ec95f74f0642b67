"""Persisted collections and their models."""
