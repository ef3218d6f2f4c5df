"""Payments bounded context: MTN Mobile Money collections and transfers."""
