"""
Court list documents - payload models, transformers and schema validation.
"""

from .documents import (
    CourtListDocument,
    OnlinePublicCourtListDocument,
    PublicCourtListDocument,
    StandardCourtListDocument,
)
from .fetcher import CourtListFetcher
from .payload import CourtListPayload
from .schema_validator import SchemaValidator
from .transformers import TransformerRegistry, transform

__all__ = [
    "CourtListDocument",
    "CourtListFetcher",
    "CourtListPayload",
    "OnlinePublicCourtListDocument",
    "PublicCourtListDocument",
    "SchemaValidator",
    "StandardCourtListDocument",
    "TransformerRegistry",
    "transform",
]
