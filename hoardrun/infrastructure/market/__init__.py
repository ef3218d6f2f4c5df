"""Alpha Vantage market data adapter."""
