"""Hoardrun: personal banking API with MTN Mobile Money payments and market data."""
