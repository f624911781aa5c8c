"""Content repository for the articles and news collections."""
from typing import Optional, List, Dict, Any
from motor.motor_asyncio import AsyncIOMotorDatabase
from shared.utils import generate_content_id, get_utc_now


class ContentStatus:
    """Content moderation status constants."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    ALL = (PENDING, APPROVED, REJECTED)


class ContentKind:
    """Content collections sharing the moderation lifecycle."""
    ARTICLES = "articles"
    NEWS = "news"

    ALL = (ARTICLES, NEWS)


_ID_PREFIXES = {
    ContentKind.ARTICLES: "art",
    ContentKind.NEWS: "news",
}


class ContentRepository:
    """Repository for Article and News CRUD operations."""

    def __init__(self, db: AsyncIOMotorDatabase, kind: str = ContentKind.ARTICLES):
        if kind not in ContentKind.ALL:
            raise ValueError(f"Unknown content kind: {kind}")
        self.kind = kind
        self.collection = db[kind]

    @property
    def supports_products(self) -> bool:
        return self.kind == ContentKind.ARTICLES

    async def create_content(
        self,
        author_id: str,
        title: str,
        excerpt: str,
        cover_image_url: str,
        content: str = "",
        product_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """Create a new content record in the pending state."""
        now = get_utc_now()
        document = {
            "_id": generate_content_id(_ID_PREFIXES[self.kind]),
            "title": title,
            "excerpt": excerpt,
            "content": content,
            "cover_image_url": cover_image_url,
            "author_id": author_id,
            "views": 0,
            "status": ContentStatus.PENDING,
            "rejection_reason": None,
            "created_at": now,
            "updated_at": now,
        }
        if self.supports_products:
            document["product_id"] = product_id

        await self.collection.insert_one(document)
        return document

    async def get_content(self, content_id: str) -> Optional[Dict[str, Any]]:
        """Get a content item by ID."""
        return await self.collection.find_one({"_id": content_id})

    async def list_content(
        self,
        status: Optional[str] = None,
        author_id: Optional[str] = None,
        product_id: Optional[str] = None,
        limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """List content, newest first, with optional filters."""
        query: Dict[str, Any] = {}
        if status:
            query["status"] = status
        if author_id:
            query["author_id"] = author_id
        if product_id:
            query["product_id"] = product_id

        cursor = self.collection.find(query).sort("created_at", -1)
        if limit:
            cursor = cursor.limit(limit)
        return await cursor.to_list(length=limit)

    async def update_fields(self, content_id: str, fields: Dict[str, Any]) -> bool:
        """Update editable fields of a content item."""
        update = dict(fields)
        update["updated_at"] = get_utc_now()
        result = await self.collection.update_one(
            {"_id": content_id},
            {"$set": update}
        )
        return result.matched_count > 0

    async def set_status(
        self,
        content_id: str,
        status: str,
        rejection_reason: Optional[str] = None
    ) -> bool:
        """Write a new moderation status; the reason is cleared unless rejecting."""
        if status != ContentStatus.REJECTED:
            rejection_reason = None
        result = await self.collection.update_one(
            {"_id": content_id},
            {
                "$set": {
                    "status": status,
                    "rejection_reason": rejection_reason,
                    "updated_at": get_utc_now()
                }
            }
        )
        return result.matched_count > 0

    async def increment_views(self, content_id: str) -> Optional[Dict[str, Any]]:
        """Atomically bump the view counter of an approved item and return it."""
        return await self.collection.find_one_and_update(
            {"_id": content_id, "status": ContentStatus.APPROVED},
            {"$inc": {"views": 1}},
            return_document=True
        )

    async def delete_content(self, content_id: str) -> bool:
        """Hard-delete a content item."""
        result = await self.collection.delete_one({"_id": content_id})
        return result.deleted_count > 0

    async def find_by_author(self, author_id: str) -> List[Dict[str, Any]]:
        """Get every content item authored by a profile."""
        cursor = self.collection.find({"author_id": author_id})
        return await cursor.to_list(length=None)

    async def delete_by_author(self, author_id: str) -> int:
        """Delete every content item authored by a profile."""
        result = await self.collection.delete_many({"author_id": author_id})
        return result.deleted_count

    async def restore(self, documents: List[Dict[str, Any]]) -> None:
        """Re-insert previously deleted documents."""
        if documents:
            await self.collection.insert_many(documents)

    async def count(self, status: Optional[str] = None, author_id: Optional[str] = None) -> int:
        """Count content items with optional filters."""
        query: Dict[str, Any] = {}
        if status:
            query["status"] = status
        if author_id:
            query["author_id"] = author_id
        return await self.collection.count_documents(query)

    async def clear_product(self, product_id: str) -> int:
        """Detach content from a product that no longer exists."""
        result = await self.collection.update_many(
            {"product_id": product_id},
            {"$set": {"product_id": None, "updated_at": get_utc_now()}}
        )
        return result.modified_count
