"""End-to-end API tests: back-office session, article writes and public reads."""

import io

import pytest
import pytest_asyncio
from httpx import AsyncClient
from PIL import Image

from newsroom.application.services import AuthService
from newsroom.domain.entities import Admin, AdminRole
from newsroom.infrastructure.database.repositories import (
    SQLAlchemyAdminRepository,
    SQLAlchemyLoginAttemptStore,
)

EMAIL = "editor@example.com"
PASSWORD = "s3cret-passphrase"


@pytest_asyncio.fixture
async def editor(session_factory, password_hasher) -> Admin:
    async with session_factory() as session:
        service = AuthService(
            SQLAlchemyAdminRepository(session),
            SQLAlchemyLoginAttemptStore(session),
            password_hasher,
        )
        admin = await service.bootstrap_admin("editor", EMAIL, PASSWORD, AdminRole.EDITOR)
        await session.commit()
    return admin


@pytest_asyncio.fixture
async def admin_client(client: AsyncClient, editor: Admin) -> AsyncClient:
    response = await client.post("/api/v1/admin/login", json={"email": EMAIL, "password": PASSWORD})
    assert response.status_code == 200
    return client


def png_bytes(size=(120, 80)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color=(10, 120, 200)).save(buffer, format="PNG")
    return buffer.getvalue()


async def create_tag(client: AsyncClient, name: str) -> int:
    response = await client.post("/api/v1/admin/tags", json={"name": name})
    assert response.status_code == 201
    return response.json()["id"]


# ── Authentication ──────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_admin_routes_require_a_session(client: AsyncClient):
    assert (await client.get("/api/v1/admin/articles")).status_code == 401
    assert (await client.get("/api/v1/admin/me")).status_code == 401
    assert (await client.get("/api/v1/admin/dashboard")).status_code == 401
    response = await client.post("/api/v1/admin/articles", data={"title": "Sneaky"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_login_me_and_logout(client: AsyncClient, editor: Admin):
    response = await client.post(
        "/api/v1/admin/login", json={"email": "  Editor@Example.com ", "password": PASSWORD}
    )
    assert response.status_code == 200
    assert response.json()["role"] == "editor"

    me = await client.get("/api/v1/admin/me")
    assert me.status_code == 200
    assert me.json()["email"] == EMAIL

    assert (await client.post("/api/v1/admin/logout")).status_code == 204
    assert (await client.get("/api/v1/admin/me")).status_code == 401


@pytest.mark.asyncio
async def test_wrong_password_is_rejected(client: AsyncClient, editor: Admin):
    response = await client.post("/api/v1/admin/login", json={"email": EMAIL, "password": "nope"})
    assert response.status_code == 401
    assert (await client.get("/api/v1/admin/me")).status_code == 401


@pytest.mark.asyncio
async def test_repeated_failures_lock_the_account(client: AsyncClient, editor: Admin):
    for _ in range(5):
        response = await client.post("/api/v1/admin/login", json={"email": EMAIL, "password": "nope"})
        assert response.status_code == 401

    locked = await client.post("/api/v1/admin/login", json={"email": EMAIL, "password": PASSWORD})

    assert locked.status_code == 429
    assert 0 < int(locked.headers["Retry-After"]) <= 15 * 60
    assert locked.json()["retry_after"] == int(locked.headers["Retry-After"])


# ── Article lifecycle ───────────────────────────────────────────────


@pytest.mark.asyncio
async def test_create_publish_and_read_article(admin_client: AsyncClient, editor: Admin):
    politics = await create_tag(admin_client, "Politics")
    economy = await create_tag(admin_client, "Economy")

    response = await admin_client.post(
        "/api/v1/admin/articles",
        data={
            "title": "Budget Day: What Changed?",
            "excerpt": "The headline numbers.",
            "body": "<p>" + "word " * 300 + "</p>",
            "status": "published",
            "tags": [str(politics), str(economy)],
        },
        files={"image": ("cover.png", png_bytes(), "image/png")},
    )
    assert response.status_code == 201
    created = response.json()
    assert created["slug"] == "budget-day-what-changed"
    assert created["status"] == "published"
    assert created["admin_id"] == editor.id
    assert created["reading_time"] == 2
    assert sorted(created["tag_ids"]) == sorted([politics, economy])
    assert created["featured_image"].startswith("/uploads/articles/")
    assert created["featured_image"].endswith(".png")

    public = await admin_client.get("/api/v1/articles/budget-day-what-changed")
    assert public.status_code == 200
    body = public.json()
    assert body["article"]["view_count"] == 1
    assert body["article"]["author"] == "editor"
    assert [t["name"] for t in body["article"]["tags"]] == ["Economy", "Politics"]
    assert body["seo"]["meta_description"] == "The headline numbers."
    assert body["seo"]["canonical_url"].endswith("/articles/budget-day-what-changed")

    listing = await admin_client.get("/api/v1/articles")
    assert [a["slug"] for a in listing.json()["items"]] == ["budget-day-what-changed"]


@pytest.mark.asyncio
async def test_drafts_stay_private(admin_client: AsyncClient):
    response = await admin_client.post("/api/v1/admin/articles", data={"title": "Work in progress"})
    assert response.status_code == 201
    draft = response.json()
    assert draft["status"] == "draft"
    assert draft["published_at"] is None

    assert (await admin_client.get(f"/api/v1/articles/{draft['slug']}")).status_code == 404
    assert (await admin_client.get("/api/v1/articles")).json()["total"] == 0

    admin_listing = await admin_client.get("/api/v1/admin/articles", params={"status": "draft"})
    assert [a["id"] for a in admin_listing.json()["items"]] == [draft["id"]]


@pytest.mark.asyncio
async def test_update_replaces_tags_and_keeps_image(admin_client: AsyncClient):
    first = await create_tag(admin_client, "First")
    second = await create_tag(admin_client, "Second")
    created = (
        await admin_client.post(
            "/api/v1/admin/articles",
            data={"title": "Original", "tags": [str(first)]},
            files={"image": ("cover.png", png_bytes(), "image/png")},
        )
    ).json()

    response = await admin_client.put(
        f"/api/v1/admin/articles/{created['id']}",
        data={"title": "Original", "slug": created["slug"], "body": "Edited.", "tags": [str(second)]},
    )

    assert response.status_code == 200
    updated = response.json()
    assert updated["slug"] == "original"
    assert updated["body"] == "Edited."
    assert updated["tag_ids"] == [second]
    assert updated["featured_image"] == created["featured_image"]


@pytest.mark.asyncio
async def test_same_title_gets_distinct_slugs(admin_client: AsyncClient):
    slugs = []
    for _ in range(2):
        response = await admin_client.post("/api/v1/admin/articles", data={"title": "Breaking"})
        slugs.append(response.json()["slug"])
    assert slugs == ["breaking", "breaking-1"]


@pytest.mark.asyncio
async def test_article_without_title_is_rejected(admin_client: AsyncClient):
    response = await admin_client.post("/api/v1/admin/articles", data={"body": "No headline"})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_zero_category_saves_uncategorised(admin_client: AsyncClient):
    response = await admin_client.post(
        "/api/v1/admin/articles", data={"title": "No category", "category_id": "0"}
    )

    assert response.status_code == 201
    assert response.json()["category_id"] is None


@pytest.mark.asyncio
async def test_delete_article(admin_client: AsyncClient):
    created = (await admin_client.post("/api/v1/admin/articles", data={"title": "Short-lived"})).json()

    assert (await admin_client.delete(f"/api/v1/admin/articles/{created['id']}")).status_code == 204
    assert (await admin_client.get(f"/api/v1/admin/articles/{created['id']}")).status_code == 404
    assert (await admin_client.delete(f"/api/v1/admin/articles/{created['id']}")).status_code == 404


# ── Taxonomy, search and dashboard ──────────────────────────────────


@pytest.mark.asyncio
async def test_category_archive_and_deletion(admin_client: AsyncClient):
    category = (await admin_client.post("/api/v1/admin/categories", json={"name": "World News"})).json()
    assert category["slug"] == "world-news"

    await admin_client.post(
        "/api/v1/admin/articles",
        data={"title": "Summit ends", "status": "published", "category_id": str(category["id"])},
    )

    archive = await admin_client.get("/api/v1/categories/world-news")
    assert archive.status_code == 200
    assert archive.json()["category"]["name"] == "World News"
    assert [a["slug"] for a in archive.json()["articles"]["items"]] == ["summit-ends"]

    assert (await admin_client.delete(f"/api/v1/admin/categories/{category['id']}")).status_code == 204
    assert (await admin_client.get("/api/v1/categories/world-news")).status_code == 404
    survivor = await admin_client.get("/api/v1/articles/summit-ends")
    assert survivor.status_code == 200
    assert survivor.json()["article"]["category_id"] is None


@pytest.mark.asyncio
async def test_search_finds_published_articles_only(admin_client: AsyncClient):
    await admin_client.post(
        "/api/v1/admin/articles", data={"title": "Harbour expansion approved", "status": "published"}
    )
    await admin_client.post("/api/v1/admin/articles", data={"title": "Harbour draft notes"})

    response = await admin_client.get("/api/v1/search", params={"q": "harbour"})
    assert response.status_code == 200
    assert [a["slug"] for a in response.json()["items"]] == ["harbour-expansion-approved"]

    empty = await admin_client.get("/api/v1/search", params={"q": "   "})
    assert empty.json()["total"] == 0


@pytest.mark.asyncio
async def test_dashboard_counts(admin_client: AsyncClient):
    await admin_client.post("/api/v1/admin/articles", data={"title": "Live", "status": "published"})
    await admin_client.post("/api/v1/admin/articles", data={"title": "Pending"})
    await admin_client.get("/api/v1/articles/live")

    response = await admin_client.get("/api/v1/admin/dashboard")
    assert response.status_code == 200
    stats = response.json()["stats"]
    assert (stats["published"], stats["draft"], stats["scheduled"]) == (1, 1, 0)
    assert stats["views"] == 1
    assert len(response.json()["recent"]) == 2


# ── Feeds ───────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_sitemap_lists_published_articles(admin_client: AsyncClient):
    await admin_client.post("/api/v1/admin/articles", data={"title": "On the record", "status": "published"})
    await admin_client.post("/api/v1/admin/articles", data={"title": "Off the record"})

    response = await admin_client.get("/sitemap.xml")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/xml")
    assert "/articles/on-the-record" in response.text
    assert "off-the-record" not in response.text


@pytest.mark.asyncio
async def test_robots_txt(client: AsyncClient):
    response = await client.get("/robots.txt")

    assert response.status_code == 200
    assert "Disallow: /admin/" in response.text
    assert "Sitemap: " in response.text
