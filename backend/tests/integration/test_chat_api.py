"""
Integration tests for the chat HTTP API.

The app runs with the in-memory session store and a scripted LLM provider.
"""

from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.api.deps import get_chat_session_repository, get_llm_provider
from app.core.exceptions import ExternalServiceError, ExternalServiceErrorKind
from app.infrastructure.local.in_memory_chat_session_repository import (
    InMemoryChatSessionRepository,
)
from main import create_app


@pytest.fixture
def repo():
    return InMemoryChatSessionRepository()


@pytest_asyncio.fixture
async def client(repo, llm_provider):
    app = create_app()
    app.state.knowledge = {"name": "Moshiur Rahman", "skills": ["React"]}
    app.dependency_overrides[get_chat_session_repository] = lambda: repo
    app.dependency_overrides[get_llm_provider] = lambda: llm_provider
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http:
        yield http


async def _create_chat(client, llm_provider, message="What skills does he have?"):
    llm_provider.queue("He is skilled in React and Node.js.", "Skills Overview")
    response = await client.post("/chats", json={"message": message, "mode": "moshiur"})
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateChat:
    @pytest.mark.asyncio
    async def test_create_returns_full_session(self, client, llm_provider):
        data = await _create_chat(client, llm_provider)

        assert data["title"] == "Skills Overview"
        assert data["mode"] == "moshiur"
        assert [m["sender"] for m in data["messages"]] == ["user", "assistant"]
        assert data["messages"][1]["text"] == "He is skilled in React and Node.js."
        system_prompt = llm_provider.calls[0]["messages"][0]["content"]
        assert '"React"' in system_prompt

    @pytest.mark.asyncio
    async def test_missing_message_is_400(self, client):
        response = await client.post("/chats", json={"mode": "general"})

        assert response.status_code == 400
        assert response.json()["message"] == "Message is required"

    @pytest.mark.asyncio
    async def test_too_long_message_is_400(self, client, repo):
        response = await client.post("/chats", json={"message": "x" * 1001, "mode": "general"})

        assert response.status_code == 400
        assert "too long" in response.json()["message"]
        assert await repo.count() == 0

    @pytest.mark.asyncio
    async def test_rate_limit_is_429(self, client, llm_provider, repo):
        llm_provider.queue(
            ExternalServiceError("Slow down", kind=ExternalServiceErrorKind.RATE_LIMITED)
        )

        response = await client.post("/chats", json={"message": "hi", "mode": "general"})

        assert response.status_code == 429
        assert response.json() == {"message": "Slow down"}
        assert await repo.count() == 0

    @pytest.mark.asyncio
    async def test_upstream_failure_is_500(self, client, llm_provider):
        llm_provider.queue(
            ExternalServiceError("Down", kind=ExternalServiceErrorKind.UPSTREAM_UNAVAILABLE)
        )

        response = await client.post("/chats", json={"message": "hi", "mode": "general"})

        assert response.status_code == 500
        assert response.json() == {"message": "Down"}


class TestChatLifecycle:
    @pytest.mark.asyncio
    async def test_append_get_and_list(self, client, llm_provider):
        chat = await _create_chat(client, llm_provider)
        llm_provider.queue("He enjoys photography on weekends.")

        appended = await client.post(
            f"/chats/{chat['id']}/messages",
            json={"message": "Hobbies?", "mode": "general"},
        )
        assert appended.status_code == 200
        assert appended.json()["answer"] == "He enjoys photography on weekends."
        assert len(appended.json()["messages"]) == 2

        fetched = await client.get(f"/chats/{chat['id']}")
        assert fetched.status_code == 200
        assert len(fetched.json()["messages"]) == 4
        assert fetched.json()["mode"] == "general"

        listing = await client.get("/chats", params={"search": "photography"})
        body = listing.json()
        assert body["total"] == 1
        assert body["items"][0]["id"] == chat["id"]
        assert body["items"][0]["message_count"] == 4

    @pytest.mark.asyncio
    async def test_list_paging_params(self, client, llm_provider):
        for _ in range(3):
            await _create_chat(client, llm_provider)

        response = await client.get("/chats", params={"limit": 2, "skip": 2})

        body = response.json()
        assert body["limit"] == 2
        assert body["skip"] == 2
        assert body["total"] == 3
        assert len(body["items"]) == 1

    @pytest.mark.asyncio
    async def test_invalid_limit_is_400(self, client):
        response = await client.get("/chats", params={"limit": 500})

        assert response.status_code == 400
        assert "message" in response.json()

    @pytest.mark.asyncio
    async def test_unknown_chat_is_404(self, client):
        assert (await client.get(f"/chats/{uuid4()}")).status_code == 404
        assert (await client.get("/chats/not-a-valid-id")).status_code == 404
        response = await client.post(
            f"/chats/{uuid4()}/messages", json={"message": "hi", "mode": "general"}
        )
        assert response.status_code == 404
        assert set(response.json()) == {"message"}

    @pytest.mark.asyncio
    async def test_delete_and_bulk_delete(self, client, llm_provider, repo):
        first = await _create_chat(client, llm_provider)
        second = await _create_chat(client, llm_provider)
        third = await _create_chat(client, llm_provider)

        deleted = await client.delete(f"/chats/{first['id']}")
        assert deleted.status_code == 200
        assert deleted.json() == {"message": "Chat deleted successfully"}
        assert (await client.delete(f"/chats/{first['id']}")).status_code == 404

        bulk = await client.request(
            "DELETE",
            "/chats",
            json={"chatIds": [second["id"], third["id"], first["id"], "junk"]},
        )
        assert bulk.status_code == 200
        assert bulk.json() == {
            "deleted_count": 2,
            "deleted_ids": [second["id"], third["id"]],
            "invalid_ids": ["junk"],
            "not_found_ids": [first["id"]],
        }
        assert await repo.count() == 0

    @pytest.mark.asyncio
    async def test_bulk_delete_empty_list_is_400(self, client):
        response = await client.request("DELETE", "/chats", json={"chat_ids": []})

        assert response.status_code == 400


class TestMisc:
    @pytest.mark.asyncio
    async def test_health_and_banner(self, client):
        health = await client.get("/health")
        banner = await client.get("/")

        assert health.json()["status"] == "healthy"
        assert "Portfolio Server is Live" in banner.text
