"""In-memory fakes of the application ports, shared by the unit tests."""

import copy
from datetime import datetime, timezone

import pytest

from newsroom.application.interfaces import (
    AdminRepository,
    ArticleRepository,
    CategoryRepository,
    ImageStorage,
    ImageUpload,
    LoginAttemptStore,
    PasswordHasher,
    TagRepository,
)
from newsroom.domain.entities import (
    Admin,
    Article,
    ArticleStatus,
    Category,
    LoginAttempt,
    SitemapEntry,
    Tag,
    page_offset,
)
from newsroom.domain.exceptions import DuplicateEntityError

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class FakeTagRepository(TagRepository):
    def __init__(self):
        self._tags: dict[int, Tag] = {}
        self._next_id = 1

    def add(self, name: str, slug: str | None = None) -> Tag:
        tag = Tag(id=self._next_id, name=name, slug=slug or name.lower())
        self._tags[tag.id] = tag
        self._next_id += 1
        return tag

    async def get_all(self) -> list[Tag]:
        return sorted(self._tags.values(), key=lambda t: t.name)

    async def get_by_id(self, tag_id: int) -> Tag | None:
        return self._tags.get(tag_id)

    async def slug_exists(self, slug: str, exclude_id: int | None = None) -> bool:
        return any(t.slug == slug and t.id != exclude_id for t in self._tags.values())

    async def create(self, tag: Tag) -> Tag:
        if await self.slug_exists(tag.slug):
            raise DuplicateEntityError("Tag", "slug", tag.slug)
        tag.id = self._next_id
        self._next_id += 1
        self._tags[tag.id] = tag
        return tag

    async def delete(self, tag_id: int) -> bool:
        return self._tags.pop(tag_id, None) is not None

    async def count(self) -> int:
        return len(self._tags)


class FakeCategoryRepository(CategoryRepository):
    def __init__(self):
        self._categories: dict[int, Category] = {}
        self._next_id = 1

    def add(self, name: str, slug: str) -> Category:
        category = Category(id=self._next_id, name=name, slug=slug)
        self._categories[category.id] = category
        self._next_id += 1
        return category

    async def get_all(self) -> list[Category]:
        return sorted(self._categories.values(), key=lambda c: c.name)

    async def get_by_id(self, category_id: int) -> Category | None:
        return self._categories.get(category_id)

    async def get_by_slug(self, slug: str) -> Category | None:
        return next((c for c in self._categories.values() if c.slug == slug), None)

    async def slug_exists(self, slug: str, exclude_id: int | None = None) -> bool:
        return any(c.slug == slug and c.id != exclude_id for c in self._categories.values())

    async def create(self, category: Category) -> Category:
        if await self.slug_exists(category.slug):
            raise DuplicateEntityError("Category", "slug", category.slug)
        category.id = self._next_id
        self._next_id += 1
        self._categories[category.id] = category
        return category

    async def delete(self, category_id: int) -> bool:
        return self._categories.pop(category_id, None) is not None

    async def count(self) -> int:
        return len(self._categories)


class FakeArticleRepository(ArticleRepository):
    """Dict-backed article store that mirrors the SQL gate and tag semantics.

    ``steal_slugs`` simulates a concurrent writer: the first write that
    targets one of these slugs fails with a uniqueness violation.
    """

    def __init__(self, clock: FakeClock, tags: FakeTagRepository, categories: FakeCategoryRepository):
        self._articles: dict[int, Article] = {}
        self._tag_links: dict[int, list[int]] = {}
        self._next_id = 1
        self._clock = clock
        self._tags = tags
        self._categories = categories
        self.steal_slugs: set[str] = set()

    def _visible(self) -> list[Article]:
        return [a for a in self._articles.values() if a.is_publicly_visible(self._clock())]

    def _out(self, article: Article) -> Article:
        out = copy.deepcopy(article)
        category = self._categories._categories.get(article.category_id)
        out.category_name = category.name if category else None
        out.category_slug = category.slug if category else None
        out.tag_ids = list(self._tag_links.get(article.id, []))
        out.tags = sorted(
            (self._tags._tags[t] for t in out.tag_ids if t in self._tags._tags),
            key=lambda t: t.name,
        )
        return out

    def _check_slug(self, article: Article) -> None:
        if article.slug in self.steal_slugs:
            self.steal_slugs.discard(article.slug)
            raise DuplicateEntityError("Article", "slug", article.slug)
        if any(a.slug == article.slug and a.id != article.id for a in self._articles.values()):
            raise DuplicateEntityError("Article", "slug", article.slug)

    def _sync_tags(self, article_id: int, tag_ids: list[int] | None) -> None:
        if tag_ids is None:
            return
        known = [t for t in dict.fromkeys(tag_ids) if t in self._tags._tags]
        self._tag_links[article_id] = known

    # Public reads

    async def get_published(self, page: int, per_page: int) -> list[Article]:
        rows = sorted(self._visible(), key=lambda a: a.published_at, reverse=True)
        start = page_offset(page, per_page)
        return [self._out(a) for a in rows[start : start + per_page]]

    async def count_published(self) -> int:
        return len(self._visible())

    async def get_by_slug(self, slug: str) -> Article | None:
        for article in self._visible():
            if article.slug == slug:
                article.view_count += 1
                return self._out(article)
        return None

    async def get_by_category(self, category_slug: str, page: int, per_page: int) -> list[Article]:
        category = await self._categories.get_by_slug(category_slug)
        rows = [a for a in self._visible() if category and a.category_id == category.id]
        rows.sort(key=lambda a: a.published_at, reverse=True)
        start = page_offset(page, per_page)
        return [self._out(a) for a in rows[start : start + per_page]]

    async def count_by_category(self, category_slug: str) -> int:
        category = await self._categories.get_by_slug(category_slug)
        return len([a for a in self._visible() if category and a.category_id == category.id])

    def _matches(self, query: str) -> list[Article]:
        q = query.lower()
        return [a for a in self._visible() if q in f"{a.title} {a.excerpt or ''} {a.body}".lower()]

    async def search(self, query: str, page: int, per_page: int) -> list[Article]:
        start = page_offset(page, per_page)
        return [self._out(a) for a in self._matches(query)[start : start + per_page]]

    async def count_search(self, query: str) -> int:
        return len(self._matches(query))

    async def get_all_for_sitemap(self) -> list[SitemapEntry]:
        return [SitemapEntry(slug=a.slug, updated_at=a.updated_at) for a in self._visible()]

    async def get_tags_for_article(self, article_id: int) -> list[Tag]:
        article = self._articles.get(article_id)
        return self._out(article).tags if article else []

    # Admin reads

    async def admin_get_all(self, page: int, per_page: int, status: ArticleStatus | None = None) -> list[Article]:
        rows = [a for a in self._articles.values() if status is None or a.status is status]
        rows.sort(key=lambda a: (a.updated_at, a.id), reverse=True)
        start = page_offset(page, per_page)
        return [self._out(a) for a in rows[start : start + per_page]]

    async def count_admin(self, status: ArticleStatus | None = None) -> int:
        return len([a for a in self._articles.values() if status is None or a.status is status])

    async def admin_get_by_id(self, article_id: int) -> Article | None:
        article = self._articles.get(article_id)
        return self._out(article) if article else None

    async def slug_exists(self, slug: str, exclude_id: int | None = None) -> bool:
        return any(a.slug == slug and a.id != exclude_id for a in self._articles.values())

    async def count_by_status(self) -> dict[ArticleStatus, int]:
        counts = {s: 0 for s in ArticleStatus}
        for article in self._articles.values():
            counts[article.status] += 1
        return counts

    async def total_views(self) -> int:
        return sum(a.view_count for a in self._articles.values())

    # Writes

    async def create(self, article: Article, tag_ids: list[int] | None = None) -> Article:
        self._check_slug(article)
        stored = copy.deepcopy(article)
        stored.id = self._next_id
        self._next_id += 1
        self._articles[stored.id] = stored
        self._sync_tags(stored.id, tag_ids)
        return self._out(stored)

    async def update(self, article: Article, tag_ids: list[int] | None = None) -> Article:
        existing = self._articles[article.id]
        self._check_slug(article)
        stored = copy.deepcopy(article)
        stored.admin_id = existing.admin_id
        self._articles[stored.id] = stored
        self._sync_tags(stored.id, tag_ids)
        return self._out(stored)

    async def delete(self, article_id: int) -> bool:
        if self._articles.pop(article_id, None) is None:
            return False
        self._tag_links.pop(article_id, None)
        return True


class FakeImageStorage(ImageStorage):
    def __init__(self, result: str | None = "/uploads/articles/2024/06/fake.jpg"):
        self.result = result
        self.uploads: list[ImageUpload] = []
        self.discarded: list[str] = []

    async def store_image(self, upload: ImageUpload) -> str | None:
        self.uploads.append(upload)
        return self.result

    async def discard(self, public_path: str) -> bool:
        self.discarded.append(public_path)
        return True


class FakePasswordHasher(PasswordHasher):
    """Reversible 'hash' with a version marker so rehashing can be exercised."""

    def __init__(self, version: str = "v2"):
        self.version = version

    def hash(self, password: str) -> str:
        return f"{self.version}${password}"

    def verify(self, password: str, password_hash: str) -> bool:
        return password_hash.split("$", 1)[-1] == password

    def needs_rehash(self, password_hash: str) -> bool:
        return not password_hash.startswith(f"{self.version}$")


class FakeAdminRepository(AdminRepository):
    def __init__(self):
        self._admins: dict[int, Admin] = {}
        self._next_id = 1

    async def get_by_id(self, admin_id: int) -> Admin | None:
        return self._admins.get(admin_id)

    async def get_by_email(self, email: str) -> Admin | None:
        return next((a for a in self._admins.values() if a.email == email), None)

    async def create(self, admin: Admin) -> Admin:
        admin.id = self._next_id
        self._next_id += 1
        self._admins[admin.id] = admin
        return admin

    async def update_password(self, admin_id: int, password_hash: str) -> None:
        self._admins[admin_id].password_hash = password_hash


class FakeLoginAttemptStore(LoginAttemptStore):
    def __init__(self):
        self.attempts: dict[str, LoginAttempt] = {}

    async def get(self, identifier: str) -> LoginAttempt | None:
        attempt = self.attempts.get(identifier)
        return copy.copy(attempt) if attempt else None

    async def save(self, attempt: LoginAttempt) -> None:
        self.attempts[attempt.identifier] = copy.copy(attempt)

    async def clear(self, identifier: str) -> None:
        self.attempts.pop(identifier, None)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def tag_repo() -> FakeTagRepository:
    return FakeTagRepository()


@pytest.fixture
def category_repo() -> FakeCategoryRepository:
    return FakeCategoryRepository()


@pytest.fixture
def article_repo(clock, tag_repo, category_repo) -> FakeArticleRepository:
    return FakeArticleRepository(clock, tag_repo, category_repo)


@pytest.fixture
def image_storage() -> FakeImageStorage:
    return FakeImageStorage()


@pytest.fixture
def admin_repo() -> FakeAdminRepository:
    return FakeAdminRepository()


@pytest.fixture
def attempt_store() -> FakeLoginAttemptStore:
    return FakeLoginAttemptStore()


@pytest.fixture
def hasher() -> FakePasswordHasher:
    return FakePasswordHasher()
