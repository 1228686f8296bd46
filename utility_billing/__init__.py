"""Utility billing ledger for water, gas and electric service."""

__version__ = "0.1.0"
