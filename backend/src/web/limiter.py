"""
Rate Limiter - SlowAPI configuration for API rate limiting
"""
from __future__ import annotations

from slowapi import Limiter
from slowapi.util import get_remote_address

from .config import AppConfig


def create_limiter(app_config: AppConfig) -> Limiter:
    """Limiter applying app_config.rate_limit to every route."""
    return Limiter(
        key_func=get_remote_address,
        default_limits=[app_config.rate_limit],
        enabled=app_config.rate_limit_enabled,
    )

