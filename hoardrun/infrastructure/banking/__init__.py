"""Repositories for accounts, transactions and savings."""
