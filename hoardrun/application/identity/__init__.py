"""Use cases for the identity context."""
