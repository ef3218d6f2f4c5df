"""Use cases for the market context."""
