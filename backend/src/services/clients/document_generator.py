"""Document generator client - renders templates to PDF bytes."""

import logging
from typing import Optional

from ...common.types import SYSTEM_USER_ID
from .client import Client, user_headers
from .exceptions import EmptyResponseError

logger = logging.getLogger(__name__)

RENDER_PATH = "/systemdocgenerator-command-api/command/api/rest/systemdocgenerator/render"
RENDER_CONTENT_TYPE = "application/vnd.systemdocgenerator.render+json"


class DocumentGeneratorClient(Client):
    async def render(
        self,
        template_name: str,
        template_payload: dict,
        user_id: Optional[str] = SYSTEM_USER_ID,
    ) -> bytes:
        """Render template_name with template_payload.

        Raises:
            EmptyResponseError: If the generator returns no bytes
            APIError: If the generator returns a non-2xx response
        """
        body = {
            "templateName": template_name,
            "templatePayload": template_payload,
            "conversionFormat": "pdf",
        }
        headers = {"Content-Type": RENDER_CONTENT_TYPE, **user_headers(user_id)}
        response = await self.post(self._config.get("path") or RENDER_PATH, json=body, headers=headers)
        if not response.content:
            raise EmptyResponseError(f"Document generator returned no content for {template_name}")
        logger.debug("Rendered %s: %d bytes", template_name, len(response.content))
        return response.content
