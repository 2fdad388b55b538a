import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)


class CrmError(Exception):
    """A Pipedrive call failed; `detail` holds the remote error text when given"""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class PipedriveClient:
    """Thin wrapper around the Pipedrive v1 REST endpoints we post to"""

    def __init__(self, client: httpx.AsyncClient, base_url: str, api_token: str):
        self.client = client
        self.base_url = base_url.rstrip("/")
        self.api_token = api_token

    async def _post(self, resource: str, payload: Dict[str, Any], fallback_error: str) -> Dict[str, Any]:
        try:
            response = await self.client.post(
                f"{self.base_url}/{resource}",
                params={"api_token": self.api_token},
                json=payload,
            )
        except httpx.HTTPError as e:
            logger.error(f"[CRM] POST /{resource} transport error: {str(e)}")
            raise CrmError(fallback_error) from e

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.is_error or not isinstance(body, dict):
            remote_error = body.get("error") if isinstance(body, dict) else None
            logger.error(f"[CRM] POST /{resource} failed with {response.status_code}: {remote_error or response.text[:200]}")
            raise CrmError(remote_error or fallback_error)

        return body.get("data") or {}

    async def create_person(self, name: str, email: str, phone: Optional[str]) -> Dict[str, Any]:
        return await self._post(
            "persons",
            {"name": name, "email": email, "phone": phone},
            "Failed to create person",
        )

    async def create_lead(self, title: str, person_id: Any, message_field: str, message: Optional[str]) -> Dict[str, Any]:
        return await self._post(
            "leads",
            {"title": title, "person_id": person_id, message_field: message},
            "Failed to create lead",
        )

    async def create_deal(self, title: str, person_id: Any) -> Dict[str, Any]:
        return await self._post(
            "deals",
            {"title": title, "person_id": person_id, "value": 0, "currency": "USD"},
            "Failed to create deal",
        )

    async def add_note(self, content: str, person_id: Any, deal_id: Any) -> Dict[str, Any]:
        return await self._post(
            "notes",
            {"content": content, "person_id": person_id, "deal_id": deal_id},
            "Failed to add note",
        )
