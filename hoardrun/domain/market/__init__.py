"""Market bounded context: stock quotes and company data."""
