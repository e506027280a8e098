"""
QuickNotes Client — HTTP API Wrapper
======================================

What:  Async wrapper around the /api/notes endpoints.
How:   One shared httpx.AsyncClient; every call raises
       httpx.HTTPStatusError on a non-2xx answer and returns the decoded
       JSON otherwise. No retries, no explicit timeouts beyond httpx defaults.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:5000"
NOTES_PATH = "/api/notes"


class NotesAPI:
    """
    Client for the QuickNotes server.

    Pass an existing httpx.AsyncClient (e.g. one bound to an ASGI transport
    in tests), or let NotesAPI create and own one for `base_url`.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient(base_url=base_url)

    async def __aenter__(self) -> "NotesAPI":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def list_notes(self) -> List[Dict[str, Any]]:
        response = await self._client.get(NOTES_PATH)
        response.raise_for_status()
        return response.json()

    async def create_note(
        self, title: Optional[str] = None, content: Optional[str] = None
    ) -> Dict[str, Any]:
        response = await self._client.post(
            NOTES_PATH, json={"title": title, "content": content}
        )
        response.raise_for_status()
        return response.json()

    async def delete_note(self, note_id: str) -> Dict[str, Any]:
        response = await self._client.delete(f"{NOTES_PATH}/{note_id}")
        response.raise_for_status()
        return response.json()

    async def summarize(self, content: str) -> str:
        """Returns the `summary` field of the server's response."""
        response = await self._client.post(
            f"{NOTES_PATH}/summarize", json={"content": content}
        )
        response.raise_for_status()
        return response.json()["summary"]
