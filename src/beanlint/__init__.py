"""Consistency linter for directories of beancount ledgers."""

__version__ = "0.1.0"
