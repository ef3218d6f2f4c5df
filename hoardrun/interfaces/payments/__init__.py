"""HTTP interface for the payments context."""
