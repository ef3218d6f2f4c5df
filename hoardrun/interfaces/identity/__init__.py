"""HTTP interface for the identity context."""
