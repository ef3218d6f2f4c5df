"""Database engine, table definitions and unit of work."""
