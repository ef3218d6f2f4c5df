"""HTTP interface for the market context."""
