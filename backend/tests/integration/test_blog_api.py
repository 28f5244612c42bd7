"""End-to-end tests for the generation and blog endpoints."""

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from blog_api.application.interfaces import ChatProvider
from blog_api.application.services import ArticleService, TextGenerationService
from blog_api.domain.entities import ChatCompletionResult
from blog_api.domain.exceptions import ChatProviderError
from blog_api.infrastructure.dependencies import get_article_service
from blog_api.infrastructure.gemini import GeminiClient
from blog_api.infrastructure.repositories import InMemoryArticleRepository
from blog_api.main import app


class ScriptedChatProvider(ChatProvider):
    """Plays back a script of outputs; exceptions in the script are raised."""

    def __init__(self) -> None:
        self.script: list[str | Exception] = []
        self.calls = 0

    @property
    def provider_name(self) -> str:
        return "scripted"

    async def complete(self, messages, model, *, temperature=None, max_tokens=None):
        self.calls += 1
        result = self.script.pop(0) if self.script else "# Untitled\nBody"
        if isinstance(result, Exception):
            raise result
        return ChatCompletionResult(model=model, content=result, finish_reason="stop", provider="scripted")


@pytest.fixture
def provider() -> ScriptedChatProvider:
    return ScriptedChatProvider()


@pytest.fixture
def repository() -> InMemoryArticleRepository:
    return InMemoryArticleRepository()


@pytest_asyncio.fixture
async def client(provider: ScriptedChatProvider, repository: InMemoryArticleRepository):
    service = ArticleService(repository, TextGenerationService(provider, model="test-model"))
    app.dependency_overrides[get_article_service] = lambda: service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client
    app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_generate_articles_returns_created_articles(client, provider):
    provider.script = ["Body about A", "Body about B"]

    response = await client.post(
        "/api/generate-articles",
        json={"titles": [{"title": "Hello, World! 2024"}, {"title": "B", "details": "extra"}]},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["count"] == 2
    first, second = data["articles"]
    assert first["slug"] == "hello-world-2024"
    assert first["details"] == ""
    assert second["details"] == "extra"
    assert set(first) == {"id", "title", "content", "details", "createdAt", "slug"}


@pytest.mark.asyncio
async def test_generate_articles_requires_titles(client, provider):
    response = await client.post("/api/generate-articles", json={})

    assert response.status_code == 400
    assert response.json()["error"] == "Please provide an array of titles"
    assert provider.calls == 0


@pytest.mark.asyncio
async def test_generate_articles_rejects_non_list_titles(client):
    response = await client.post("/api/generate-articles", json={"titles": "not a list"})

    assert response.status_code == 400
    assert response.json()["error"] == "Please provide an array of titles"


@pytest.mark.asyncio
async def test_generate_articles_partial_failure_keeps_earlier_articles(client, provider, repository):
    provider.script = ["Body A", ChatProviderError("scripted", 500, "upstream exploded")]

    response = await client.post(
        "/api/generate-articles",
        json={"titles": [{"title": "A"}, {"title": "B"}]},
    )

    assert response.status_code == 500
    assert response.json() == {
        "error": "Failed to generate articles",
        "message": "upstream exploded",
    }
    stored = await repository.list_all()
    assert [a.title for a in stored] == ["A"]


@pytest.mark.asyncio
async def test_generate_single_derives_title(client, provider):
    provider.script = ["# Why Type Hints Matter\n\nBody"]

    response = await client.post("/api/generate-single", json={"prompt": "Type hints in Python"})

    assert response.status_code == 200
    article = response.json()["article"]
    assert article["title"] == "Why Type Hints Matter"
    assert article["slug"] == "why-type-hints-matter"
    assert article["details"] == "Type hints in Python"


@pytest.mark.asyncio
async def test_generate_single_failure_returns_500(client, provider):
    provider.script = [ChatProviderError("scripted", 403, "API key not valid")]

    response = await client.post("/api/generate-single", json={"prompt": "Anything"})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to generate article", "message": "API key not valid"}


@pytest.mark.asyncio
async def test_generate_single_requires_prompt(client):
    response = await client.post("/api/generate-single", json={})

    assert response.status_code == 400
    assert "error" in response.json()


@pytest.mark.asyncio
async def test_list_articles_newest_first_and_stable(client, provider):
    provider.script = ["1", "2", "3"]
    await client.post(
        "/api/generate-articles",
        json={"titles": [{"title": "A1"}, {"title": "A2"}, {"title": "A3"}]},
    )

    first = await client.get("/api/blog")
    second = await client.get("/api/blog")

    assert [a["title"] for a in first.json()["articles"]] == ["A3", "A2", "A1"]
    assert first.json() == second.json()


@pytest.mark.asyncio
async def test_get_article_by_slug(client, provider):
    provider.script = ["Body"]
    await client.post("/api/generate-articles", json={"titles": [{"title": "Deep Dive: GIL"}]})

    response = await client.get("/api/blog/deep-dive-gil")

    assert response.status_code == 200
    assert response.json()["article"]["title"] == "Deep Dive: GIL"


@pytest.mark.asyncio
async def test_get_unknown_slug_returns_404(client):
    response = await client.get("/api/blog/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"error": "Article not found"}


@pytest.mark.asyncio
async def test_delete_clears_all_articles(client, provider):
    provider.script = ["1", "2"]
    await client.post("/api/generate-articles", json={"titles": [{"title": "A"}, {"title": "B"}]})

    response = await client.delete("/api/blog")

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "All articles deleted"}
    assert (await client.get("/api/blog")).json() == {"articles": []}


@pytest.mark.asyncio
async def test_malformed_provider_body_returns_json_500(repository):
    gemini = GeminiClient(
        api_key="test-key",
        http_client=httpx.AsyncClient(
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json=["unexpected"]))
        ),
    )
    service = ArticleService(repository, TextGenerationService(gemini, model="gemini-2.5-flash"))
    app.dependency_overrides[get_article_service] = lambda: service
    try:
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as http_client:
            response = await http_client.post(
                "/api/generate-articles", json={"titles": [{"title": "A"}]}
            )
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Failed to generate articles"
    assert body["message"].startswith("Malformed provider response")
    assert await repository.count() == 0


@pytest.mark.asyncio
async def test_cors_preflight_allows_any_origin_with_credentials(client):
    response = await client.options(
        "/api/blog",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "DELETE",
            "Access-Control-Request-Headers": "Content-Type, Authorization",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:3000"
    assert response.headers["access-control-allow-credentials"] == "true"
    allowed_methods = {m.strip() for m in response.headers["access-control-allow-methods"].split(",")}
    assert {"GET", "POST", "DELETE", "OPTIONS"} <= allowed_methods
    allowed_headers = response.headers["access-control-allow-headers"].lower()
    assert "content-type" in allowed_headers
    assert "authorization" in allowed_headers


@pytest.mark.asyncio
async def test_cors_simple_request_allows_any_origin(client):
    response = await client.get("/api/blog", headers={"Origin": "http://example.com"})

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.headers["access-control-allow-credentials"] == "true"
