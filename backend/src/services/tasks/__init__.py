"""
Tasks module - triggering publish jobs.
"""

from .trigger import TaskTrigger

__all__ = ["TaskTrigger"]
