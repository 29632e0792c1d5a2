"""Service-layer exceptions mapped to HTTP responses by the web app."""

from typing import List, Optional


class ServiceError(Exception):
    """Base exception for court list publishing errors."""

    def __init__(self, message: str, *args):
        self.message = message
        super().__init__(message, *args)


class BadRequestError(ServiceError):
    """Raised for missing or invalid request fields."""

    pass


class NotFoundError(ServiceError):
    """Raised when a status record does not exist."""

    pass


class SchemaValidationException(ServiceError):
    """Raised when a transformed document fails its JSON schema."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        self.errors = errors or []
        super().__init__(message)


class PdfGenerationError(ServiceError):
    """Raised when a PDF cannot be rendered for a court list."""

    pass
