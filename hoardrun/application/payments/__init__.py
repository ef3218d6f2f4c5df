"""Use cases for the payments context."""
