"""
Clients module - async HTTP clients for the services court list publishing
depends on.
"""

from .client import Client
from .court_list_data import CourtListDataClient
from .document_generator import DocumentGeneratorClient
from .exceptions import (
    APIError,
    ClientError,
    ConnectionError,
    EmptyResponseError,
    NotFoundError,
    RateLimitError,
)
from .publication_hub import PublicationHubClient, PublicationMeta
from .reference_data import CourtCentreReference, ReferenceDataClient

__all__ = [
    "Client",
    "DocumentGeneratorClient",
    "CourtListDataClient",
    "PublicationHubClient",
    "PublicationMeta",
    "ReferenceDataClient",
    "CourtCentreReference",
    "APIError",
    "ClientError",
    "ConnectionError",
    "EmptyResponseError",
    "NotFoundError",
    "RateLimitError",
]
