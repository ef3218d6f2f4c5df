"""MTN MOMO, exchange rate and monitoring adapters."""
