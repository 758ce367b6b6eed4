"""Operator dashboard client for the Wingo period totals service."""

__version__ = "0.1.0"
