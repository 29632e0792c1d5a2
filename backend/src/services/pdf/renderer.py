"""
PDF Renderer - picks the document generator template for a court list.
"""

from __future__ import annotations

import logging
from typing import Optional

from ...common.types import SYSTEM_USER_ID, CourtListType
from ..clients import ClientError, DocumentGeneratorClient
from ..courtlist.payload import CourtListPayload
from ..errors import PdfGenerationError

logger = logging.getLogger(__name__)

STANDARD_TEMPLATE = "BenchAndStandardCourtList"
ONLINE_PUBLIC_TEMPLATE = "OnlinePublicCourtList"
ONLINE_PUBLIC_WELSH_TEMPLATE = "OnlinePublicCourtListEnglishWelsh"


def template_for(court_list_type: CourtListType, is_welsh: Optional[bool] = False) -> str:
    """
    Raises:
        PdfGenerationError: For list types without a PDF template (PUBLIC)
    """
    if court_list_type == CourtListType.STANDARD:
        return STANDARD_TEMPLATE
    if court_list_type == CourtListType.ONLINE_PUBLIC:
        return ONLINE_PUBLIC_WELSH_TEMPLATE if is_welsh else ONLINE_PUBLIC_TEMPLATE
    raise PdfGenerationError(f"No template defined for court list type: {court_list_type.value}")


class PdfRenderer:
    """Renders a raw court list payload to PDF bytes."""

    def __init__(self, client: DocumentGeneratorClient, user_id: str = SYSTEM_USER_ID):
        self._client = client
        self._user_id = user_id

    async def render(self, payload: CourtListPayload, court_list_type: CourtListType) -> bytes:
        """
        Raises:
            PdfGenerationError: Unmapped list type or any generator failure
        """
        template = template_for(court_list_type, payload.is_welsh)
        logger.info("Rendering %s court list with template %s", court_list_type.value, template)
        try:
            return await self._client.render(template, payload.to_json_dict(), self._user_id)
        except ClientError as e:
            raise PdfGenerationError(f"PDF generation failed ({template}): {e.message}") from e
