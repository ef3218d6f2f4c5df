"""Adapters for the identity context: password hashing, JWTs, email and user storage."""
