"""Public read side: approved content, approved writers and products."""
from typing import Any, Dict, List, Optional, Tuple

from motor.motor_asyncio import AsyncIOMotorDatabase

from database.repositories.content_repo import ContentKind, ContentRepository, ContentStatus
from database.repositories.product_repo import ProductRepository
from database.repositories.profile_repo import ProfileRepository, ProfileStatus
from shared.exceptions import NotFound
from shared.utils import clean_content_font

HOME_ARTICLES_LIMIT = 20
TICKER_LIMIT = 3

Authored = Tuple[Dict[str, Any], Optional[Dict[str, Any]]]


class PublicCatalogService:
    """Everything here filters on approved status."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.content = {
            kind: ContentRepository(db, kind) for kind in ContentKind.ALL
        }
        self.profiles = ProfileRepository(db)
        self.products = ProductRepository(db)

    async def _with_authors(self, items: List[Dict[str, Any]]) -> List[Authored]:
        author_ids = list({item["author_id"] for item in items})
        authors = await self.profiles.get_profiles_by_ids(author_ids) if author_ids else {}
        return [(item, authors.get(item["author_id"])) for item in items]

    async def list_content(self, kind: str, limit: Optional[int] = None) -> List[Authored]:
        items = await self.content[kind].list_content(status=ContentStatus.APPROVED, limit=limit)
        return await self._with_authors(items)

    async def get_content(self, kind: str, content_id: str) -> Authored:
        """Open an approved item: the view counter goes up by one atomically."""
        item = await self.content[kind].increment_views(content_id)
        if not item:
            raise NotFound()
        item["content"] = clean_content_font(item.get("content"))
        author = await self.profiles.get_profile(item["author_id"])
        return item, author

    async def home(self) -> List[Authored]:
        return await self.list_content(ContentKind.ARTICLES, limit=HOME_ARTICLES_LIMIT)

    async def latest(self) -> List[Dict[str, Any]]:
        """Newest approved headlines for the ticker, articles then news."""
        entries = []
        for kind in ContentKind.ALL:
            for item, author in await self.list_content(kind, limit=TICKER_LIMIT):
                entries.append({
                    "kind": kind,
                    "id": item["_id"],
                    "title": item["title"],
                    "created_at": item["created_at"],
                    "linkedin_url": author.get("linkedin_url") if author else None,
                    "twitter_url": author.get("twitter_url") if author else None,
                })
        return entries

    async def list_writers(self) -> List[Dict[str, Any]]:
        return await self.profiles.list_approved()

    async def get_writer(self, profile_id: str) -> Dict[str, Any]:
        writer = await self.profiles.get_approved(profile_id)
        if not writer:
            raise NotFound("الكاتب غير موجود")

        work = {}
        for kind in ContentKind.ALL:
            items = await self.content[kind].list_content(
                status=ContentStatus.APPROVED, author_id=profile_id
            )
            work[kind] = [(item, writer) for item in items]
        return {"writer": writer, "articles": work[ContentKind.ARTICLES], "news": work[ContentKind.NEWS]}

    async def list_products(self) -> List[Dict[str, Any]]:
        return await self.products.list_products()

    async def get_product(self, product_id: str) -> Dict[str, Any]:
        product = await self.products.get_product(product_id)
        if not product:
            raise NotFound("المنتج غير موجود")

        articles = await self.content[ContentKind.ARTICLES].list_content(
            status=ContentStatus.APPROVED, product_id=product_id
        )
        return {"product": product, "articles": await self._with_authors(articles)}


class DashboardStatsService:
    """Counters for the admin dashboard."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.articles = ContentRepository(db, ContentKind.ARTICLES)
        self.news = ContentRepository(db, ContentKind.NEWS)
        self.profiles = ProfileRepository(db)

    async def admin_stats(self) -> Dict[str, int]:
        return {
            "articles": await self.articles.count(),
            "news": await self.news.count(),
            "writers": await self.profiles.count(ProfileStatus.APPROVED),
            "pending_articles": await self.articles.count(ContentStatus.PENDING),
            "pending_news": await self.news.count(ContentStatus.PENDING),
            "pending_writers": await self.profiles.count(ProfileStatus.PENDING),
        }
