"""
Court list document transformers, one per CourtListType.

Importing this package registers every variant with TransformerRegistry.
"""

from .base import TransformerRegistry, transform
from .online_public import transform_online_public
from .public import transform_public
from .standard import transform_standard

__all__ = [
    "TransformerRegistry",
    "transform",
    "transform_standard",
    "transform_public",
    "transform_online_public",
]
