"""Publish status state machine."""

from .publish_status_service import PublishStatusService

__all__ = ["PublishStatusService"]
