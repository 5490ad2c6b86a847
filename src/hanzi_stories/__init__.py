"""Hanzi Stories: audit tooling for the hanzi mnemonic story outline."""

__version__ = "0.3.0"
