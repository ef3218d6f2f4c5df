"""Use cases for the banking context."""
