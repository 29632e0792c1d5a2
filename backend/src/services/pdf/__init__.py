"""PDF rendering for court lists."""

from .renderer import PdfRenderer, template_for

__all__ = ["PdfRenderer", "template_for"]
