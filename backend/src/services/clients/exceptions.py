"""Custom exceptions for downstream service clients."""


class ClientError(Exception):
    """Base exception for all client errors."""

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class ConnectionError(ClientError):
    """Raised when a network connection fails after all retries."""

    pass


class APIError(ClientError):
    """Raised when a downstream service returns a non-2xx response."""

    def __init__(self, message: str, status_code: int, body: str = "", *args, **kwargs):
        self.status_code = status_code
        self.body = body
        super().__init__(message, *args, **kwargs)


class RateLimitError(APIError):
    """Raised on a 429 response."""

    def __init__(self, message: str = "Rate limit exceeded"):
        super().__init__(message, status_code=429)


class NotFoundError(APIError):
    """Raised on a 404 response."""

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404)


class EmptyResponseError(ClientError):
    """Raised when a response that must carry a body has none."""

    pass
