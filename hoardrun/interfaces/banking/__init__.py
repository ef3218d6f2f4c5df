"""HTTP interface for the banking context."""
