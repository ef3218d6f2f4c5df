"""
Domain-specific errors for the market bounded context.

These are mapped to HTTP responses at the interface layer.
No framework imports allowed.
"""


class MarketDomainError(Exception):
    """Base error for all market domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class InvalidSymbolError(MarketDomainError):
    def __init__(self, symbol: str) -> None:
        super().__init__(f"Invalid symbol: {symbol}")
        self.symbol = symbol


class InvalidIntervalError(MarketDomainError):
    def __init__(self, interval: str) -> None:
        super().__init__(f"Invalid interval: {interval}")
        self.interval = interval


class SymbolNotFoundError(MarketDomainError):
    """Raised when the provider knows nothing about a symbol."""

    def __init__(self, symbol: str) -> None:
        super().__init__(f"Symbol not found: {symbol}")
        self.symbol = symbol


class MarketRateLimitError(MarketDomainError):
    """Raised when the provider throttles our API key."""

    def __init__(self) -> None:
        super().__init__("Market data rate limit exceeded")


class MarketDataUnavailableError(MarketDomainError):
    """Raised when the provider fails for any other reason."""

    def __init__(self, reason: str = "") -> None:
        super().__init__("Failed to fetch market data")
        self.reason = reason
