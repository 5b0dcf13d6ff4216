"""Route tests through ASGITransport with dependency overrides."""

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from blog.application.interfaces import BlobStore, EngagementRepository, IdentityProvider, UserRepository
from blog.application.services import (
    ArticleService,
    EngagementService,
    IdentitySessionManager,
    MediaService,
)
from blog.config import Settings
from blog.domain.entities import Comment, Role, SessionUser
from blog.domain.exceptions import BackendError, BackendErrorKind, ReadOnlyRepositoryError
from blog.infrastructure import dependencies as deps
from blog.infrastructure.container import BlogContainer
from blog.infrastructure.fallback import StaticArticleRepository
from blog.main import create_app
from blog.presentation.api.v1.errors import backend_http_error

READER = SessionUser(id="u-1", email="reader@example.com", name="Reader", username="reader", access_token="tok")
ADMIN = SessionUser(id="a-1", email="admin@example.com", name="Admin", username="admin", role=Role.ADMIN, access_token="tok")


class MemoryEngagement(EngagementRepository):
    def __init__(self):
        self.likes: set[tuple[int, str]] = set()
        self.comments: list[Comment] = []

    async def toggle_like_atomic(self, article_id, user_id):
        raise BackendError(BackendErrorKind.FUNCTION_NOT_FOUND, "missing")

    async def has_like(self, article_id, user_id):
        return (article_id, user_id) in self.likes

    async def add_like(self, article_id, user_id):
        self.likes.add((article_id, user_id))

    async def remove_like(self, article_id, user_id):
        self.likes.discard((article_id, user_id))

    async def increment_likes(self, article_id):
        return None

    async def decrement_likes(self, article_id):
        return None

    async def like_counters(self):
        return {1: 5}

    async def like_row_counts(self):
        return {}

    async def set_like_counter(self, article_id, likes):
        return None

    async def list_comments(self, article_id):
        return [c for c in self.comments if c.article_id == article_id]

    async def add_comment(self, article_id, user_id, text):
        comment = Comment(article_id=article_id, text=text, id=len(self.comments) + 1, author_name="Reader")
        self.comments.append(comment)
        return comment


class NullBlobStore(BlobStore):
    def __init__(self):
        self.calls = 0

    async def list_buckets(self):
        self.calls += 1
        return []

    async def upload(self, bucket, path, content, content_type):
        self.calls += 1

    async def remove(self, bucket, paths):
        self.calls += 1

    def public_url(self, bucket, path):
        return f"https://cdn.test/{bucket}/{path}"


class StubIdentity(IdentityProvider):
    async def sign_up(self, email, password, metadata, redirect_to=None):
        raise BackendError(BackendErrorKind.ALREADY_REGISTERED, "User already registered")

    async def sign_in(self, email, password):
        if password != "secret":
            raise BackendError(BackendErrorKind.INVALID_CREDENTIALS, "Invalid login credentials")
        return {
            "access_token": "tok",
            "refresh_token": "ref",
            "user": {"id": "u-1", "email": email, "user_metadata": {"name": "Reader"}},
        }

    async def sign_out(self, access_token):
        return None

    async def get_user(self, access_token):
        return {"id": "u-1", "email": "reader@example.com", "user_metadata": {"name": "Reader"}}

    async def update_user(self, access_token, metadata):
        return {}

    async def update_user_by_id(self, user_id, metadata):
        return {}


class NoUsers(UserRepository):
    async def get(self, user_id, access_token=None):
        return None

    async def update(self, user_id, fields, access_token=None):
        return None


@pytest.fixture
def blob_store() -> NullBlobStore:
    return NullBlobStore()


@pytest.fixture
def app(blob_store: NullBlobStore):
    app = create_app()
    articles = ArticleService(StaticArticleRepository())
    engagement = EngagementService(MemoryEngagement())

    async def article_service():
        yield articles

    async def engagement_service():
        yield engagement

    async def media_service():
        yield MediaService(blob_store)

    async def session_manager():
        yield IdentitySessionManager(StubIdentity(), NoUsers())

    app.dependency_overrides[deps.get_article_service] = article_service
    app.dependency_overrides[deps.get_engagement_service] = engagement_service
    app.dependency_overrides[deps.get_admin_engagement_service] = engagement_service
    app.dependency_overrides[deps.get_media_service] = media_service
    app.dependency_overrides[deps.get_session_manager] = session_manager
    app.dependency_overrides[deps.get_current_user] = lambda: None
    return app


@pytest_asyncio.fixture
async def client(app) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


def _sign_in_as(app, user: SessionUser | None) -> None:
    app.dependency_overrides[deps.get_current_user] = lambda: user


# ── Articles ──


@pytest.mark.asyncio
async def test_list_articles_paginates(client: AsyncClient):
    response = await client.get("/api/v1/articles", params={"page": 1, "page_size": 2, "category": "Cat"})
    assert response.status_code == 200
    data = response.json()
    assert len(data["items"]) == 2
    assert data["total_pages"] == 2
    assert data["has_more"] is True


@pytest.mark.asyncio
async def test_list_articles_rejects_page_zero(client: AsyncClient):
    response = await client.get("/api/v1/articles", params={"page": 0})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_search_and_get(client: AsyncClient):
    search = await client.get("/api/v1/articles/search", params={"q": "PURR"})
    assert search.status_code == 200
    assert {item["id"] for item in search.json()["items"]} >= {4}

    found = await client.get("/api/v1/articles/4")
    assert found.status_code == 200
    assert found.json()["category"] == "Cat"

    missing = await client.get("/api/v1/articles/999")
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_categories(client: AsyncClient):
    response = await client.get("/api/v1/categories")
    assert [c["name"] for c in response.json()] == ["Cat", "Inspiration", "General"]


@pytest.mark.asyncio
async def test_admin_routes_require_admin(app, client: AsyncClient):
    payload = {"title": "New", "content": "Body"}
    assert (await client.post("/api/v1/articles", json=payload)).status_code == 401

    _sign_in_as(app, READER)
    assert (await client.post("/api/v1/articles", json=payload)).status_code == 403


@pytest.mark.asyncio
async def test_admin_write_against_fallback_is_conflict(app, client: AsyncClient):
    _sign_in_as(app, ADMIN)
    response = await client.post("/api/v1/articles", json={"title": "New", "content": "Body"})
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_admin_write_through_container_fallback_is_conflict(app, client: AsyncClient):
    settings = Settings(supabase_url="", supabase_anon_key="", supabase_service_role_key="")
    container = BlogContainer.build(settings)
    await container.articles.probe()
    app.dependency_overrides[deps.get_container] = lambda: container
    app.dependency_overrides.pop(deps.get_article_service)
    _sign_in_as(app, ADMIN)

    try:
        response = await client.post("/api/v1/articles", json={"title": "New", "content": "Body"})
        assert response.status_code == 409
        assert (await client.get("/api/v1/articles/1")).status_code == 200
    finally:
        await container.aclose()


@pytest.mark.asyncio
async def test_oversized_upload_rejected(app, client: AsyncClient, blob_store: NullBlobStore):
    _sign_in_as(app, ADMIN)
    files = {"file": ("big.png", b"0" * (6 * 1024 * 1024), "image/png")}
    response = await client.post("/api/v1/articles/images", files=files)
    assert response.status_code == 422
    assert blob_store.calls == 0


@pytest.mark.asyncio
async def test_article_image_upload(app, client: AsyncClient):
    _sign_in_as(app, ADMIN)
    files = {"file": ("cover.jpg", b"jpeg-bytes", "image/jpeg")}
    response = await client.post("/api/v1/articles/images", files=files)
    assert response.status_code == 201
    assert response.json()["url"].startswith("https://cdn.test/thumbnails/thumbnail-pictures/")


# ── Engagement ──


@pytest.mark.asyncio
async def test_like_requires_login(client: AsyncClient):
    assert (await client.post("/api/v1/articles/1/like")).status_code == 401


@pytest.mark.asyncio
async def test_like_toggle_round_trip(app, client: AsyncClient):
    _sign_in_as(app, READER)

    liked = await client.post("/api/v1/articles/1/like")
    assert liked.json()["liked"] is True
    assert (await client.get("/api/v1/articles/1/like")).json()["liked"] is True

    unliked = await client.post("/api/v1/articles/1/like")
    assert unliked.json()["liked"] is False


@pytest.mark.asyncio
async def test_comments(app, client: AsyncClient):
    _sign_in_as(app, READER)

    blank = await client.post("/api/v1/articles/2/comments", json={"text": "  "})
    assert blank.status_code == 422

    created = await client.post("/api/v1/articles/2/comments", json={"text": "Lovely cats"})
    assert created.status_code == 201

    listed = await client.get("/api/v1/articles/2/comments")
    assert [c["text"] for c in listed.json()] == ["Lovely cats"]


@pytest.mark.asyncio
async def test_reconcile_is_admin_only(app, client: AsyncClient):
    _sign_in_as(app, READER)
    assert (await client.post("/api/v1/admin/likes/reconcile")).status_code == 403

    _sign_in_as(app, ADMIN)
    response = await client.post("/api/v1/admin/likes/reconcile")
    assert response.status_code == 200
    assert response.json() == {"corrected": 1}


# ── Auth ──


@pytest.mark.asyncio
async def test_login_success_and_failure(client: AsyncClient):
    ok = await client.post("/api/v1/auth/login", json={"email": "reader@example.com", "password": "secret"})
    assert ok.status_code == 200
    assert ok.json()["access_token"] == "tok"
    assert ok.json()["user"]["role"] == "user"

    bad = await client.post("/api/v1/auth/login", json={"email": "reader@example.com", "password": "nope"})
    assert bad.status_code == 401
    assert bad.json()["detail"] == "Invalid email or password."


@pytest.mark.asyncio
async def test_register_duplicate_email(client: AsyncClient):
    response = await client.post(
        "/api/v1/auth/register",
        json={"email": "reader@example.com", "password": "secret", "name": "R", "username": "r"},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "An account with this email already exists."


@pytest.mark.asyncio
async def test_me(app, client: AsyncClient):
    assert (await client.get("/api/v1/auth/me")).status_code == 401
    _sign_in_as(app, READER)
    assert (await client.get("/api/v1/auth/me")).json()["email"] == "reader@example.com"


# ── Errors ──


def test_backend_errors_map_to_http_statuses():
    too_large = backend_http_error(BackendError(BackendErrorKind.PAYLOAD_TOO_LARGE, "too big"))
    assert too_large.status_code == 413
    assert backend_http_error(BackendError(BackendErrorKind.NOT_CONFIGURED, "setup")).status_code == 503
    assert backend_http_error(ReadOnlyRepositoryError("read-only")).status_code == 409
