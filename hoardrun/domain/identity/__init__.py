"""Identity bounded context: users, credentials and verification tokens."""
