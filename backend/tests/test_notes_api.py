"""
QuickNotes Backend — Notes API Tests
======================================

What:  HTTP-level tests for /api/notes against a real (SQLite) store.
How:   httpx.AsyncClient over ASGITransport; the summarizer is patched.

What we test:
    ✅ Create / list / delete contract and status codes
    ✅ Newest-first ordering
    ✅ Not-found vs generic failure on delete
    ✅ Summarize success, missing key, provider failure
    ✅ Store failures map to 500 with the generic message
    ✅ Malformed bodies and unexpected errors keep the error shape and X-Request-ID
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient

from quicknotes.database import async_session_factory, get_db_session
from quicknotes.exceptions import SummarizationError
from quicknotes.main import app
from quicknotes.models.note import Note
from quicknotes.services.gemini_service import summarizer
from quicknotes.services.note_service import note_service


class TestNotesCrud:
    """Create, list and delete through the HTTP surface."""

    @pytest.mark.asyncio
    async def test_groceries_end_to_end(self, test_client):
        """create → list → delete → list empty → delete again is 404."""
        created = await test_client.post(
            "/api/notes", json={"title": "Groceries", "content": "milk, eggs, bread"}
        )
        assert created.status_code == 201
        note = created.json()
        assert note["title"] == "Groceries"
        assert note["content"] == "milk, eggs, bread"
        assert note["id"]
        assert "createdAt" in note and "updatedAt" in note

        listed = await test_client.get("/api/notes")
        assert listed.status_code == 200
        assert listed.json() == [note]

        deleted = await test_client.delete(f"/api/notes/{note['id']}")
        assert deleted.status_code == 200
        assert deleted.json() == {"message": "Note deleted successfully"}

        listed = await test_client.get("/api/notes")
        assert listed.json() == []

        again = await test_client.delete(f"/api/notes/{note['id']}")
        assert again.status_code == 404
        assert again.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_empty_note_rejected(self, test_client):
        response = await test_client.post("/api/notes", json={"title": "", "content": ""})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["message"] == "Note cannot be empty"

        # Nothing reached the store
        assert (await test_client.get("/api/notes")).json() == []

    @pytest.mark.asyncio
    async def test_missing_fields_rejected(self, test_client):
        response = await test_client.post("/api/notes", json={})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_content_only_note_accepted(self, test_client):
        response = await test_client.post("/api/notes", json={"content": "call mom"})

        assert response.status_code == 201
        assert response.json()["title"] is None

    @pytest.mark.asyncio
    async def test_repeated_creates_get_distinct_ids(self, test_client):
        ids = set()
        for i in range(3):
            response = await test_client.post("/api/notes", json={"title": f"note {i}"})
            ids.add(response.json()["id"])

        assert len(ids) == 3

        listed = (await test_client.get("/api/notes")).json()
        assert {n["id"] for n in listed} == ids
        created_at = [n["createdAt"] for n in listed]
        assert created_at == sorted(created_at, reverse=True)

    @pytest.mark.asyncio
    async def test_list_is_newest_first(self, test_client):
        base = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)
        async with async_session_factory() as session:
            for offset, title in [(0, "oldest"), (2, "newest"), (1, "middle")]:
                stamp = base + timedelta(minutes=offset)
                session.add(Note(title=title, created_at=stamp, updated_at=stamp))
            await session.commit()

        listed = (await test_client.get("/api/notes")).json()

        assert [n["title"] for n in listed] == ["newest", "middle", "oldest"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("note_id", [str(uuid4()), "not-a-real-id"])
    async def test_delete_never_issued_id_is_not_found(self, test_client, note_id):
        response = await test_client.delete(f"/api/notes/{note_id}")

        assert response.status_code == 404
        assert response.json()["message"] == "Note not found"

    @pytest.mark.asyncio
    async def test_store_failure_is_generic_500(self, test_client):
        broken = AsyncMock()
        broken.execute = AsyncMock(side_effect=RuntimeError("connection refused"))
        app.dependency_overrides[get_db_session] = lambda: broken

        response = await test_client.get("/api/notes")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "server_error"
        assert body["message"] == "Failed to fetch notes"
        assert "connection refused" not in response.text

    @pytest.mark.asyncio
    async def test_responses_carry_request_id(self, test_client):
        response = await test_client.get("/api/notes", headers={"X-Request-ID": "abc12345"})

        assert response.headers["X-Request-ID"] == "abc12345"

    @pytest.mark.asyncio
    async def test_unexpected_error_keeps_request_id_header(self, db_tables):
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            with patch.object(
                note_service, "list_notes", AsyncMock(side_effect=RuntimeError("boom"))
            ):
                response = await client.get(
                    "/api/notes", headers={"X-Request-ID": "req00042"}
                )

        assert response.status_code == 500
        assert response.headers["X-Request-ID"] == "req00042"
        body = response.json()
        assert body["error"] == "internal_server_error"
        assert body["request_id"] == "req00042"
        assert "boom" not in response.text

    @pytest.mark.asyncio
    async def test_mistyped_field_is_400_in_error_shape(self, test_client):
        response = await test_client.post("/api/notes", json={"title": 5})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["message"] == "Invalid request body"
        assert body["request_id"] == response.headers["X-Request-ID"]
        assert body["details"]["errors"][0]["field"] == "title"
        assert (await test_client.get("/api/notes")).json() == []


class TestSummarizeEndpoint:
    """POST /api/notes/summarize."""

    @pytest.mark.asyncio
    async def test_summarize_success(self, test_client):
        with patch.object(
            summarizer, "summarize", AsyncMock(return_value="A short shopping list.")
        ) as mock_summarize:
            response = await test_client.post(
                "/api/notes/summarize", json={"content": "milk, eggs, bread"}
            )

        assert response.status_code == 200
        assert response.json() == {"summary": "A short shopping list."}
        mock_summarize.assert_awaited_once_with("milk, eggs, bread")

    @pytest.mark.asyncio
    async def test_summarize_without_key_is_configuration_error(self, test_client):
        """The test environment has no GEMINI_API_KEY, so no call is attempted."""
        mock_model = MagicMock()
        mock_model.generate_content_async = AsyncMock()
        with patch.object(summarizer, "model", mock_model):
            response = await test_client.post(
                "/api/notes/summarize", json={"content": "text"}
            )

        assert response.status_code == 500
        assert response.json()["error"] == "configuration_error"
        assert response.json()["message"] == "AI API key is not configured."
        mock_model.generate_content_async.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_summarize_provider_failure(self, test_client):
        with patch.object(
            summarizer, "summarize", AsyncMock(side_effect=SummarizationError())
        ):
            response = await test_client.post(
                "/api/notes/summarize", json={"content": "text"}
            )

        assert response.status_code == 500
        assert response.json()["message"] == "Failed to generate summary."

    @pytest.mark.asyncio
    async def test_summarize_without_content_is_400(self, test_client):
        with patch.object(summarizer, "summarize", AsyncMock()) as mock_summarize:
            response = await test_client.post("/api/notes/summarize", json={})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["details"]["errors"] == [
            {"field": "content", "message": "Field required"}
        ]
        assert "detail" not in body
        mock_summarize.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_summarize_does_not_touch_store(self, test_client):
        with patch.object(summarizer, "summarize", AsyncMock(return_value="ok")):
            await test_client.post("/api/notes/summarize", json={"content": "text"})

        assert (await test_client.get("/api/notes")).json() == []
