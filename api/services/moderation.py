"""Writer submissions and admin moderation of articles and news."""
import logging
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from api.schemas.requests import ContentInput
from api.services.authorization import SessionContext
from api.services.lifecycle import (
    ContentAction,
    next_status,
    parse_status_filter,
    validate_rejection_reason,
)
from database.repositories.content_repo import ContentKind, ContentRepository, ContentStatus
from database.repositories.product_repo import ProductRepository
from database.repositories.profile_repo import ProfileRepository
from shared.exceptions import NotFound, PermissionDenied, ValidationError

logger = logging.getLogger(__name__)


CONTENT_LABELS = {
    ContentKind.ARTICLES: "المقال",
    ContentKind.NEWS: "الخبر",
}


class ContentModerationService:
    """Lifecycle operations for one content collection."""

    def __init__(self, db: AsyncIOMotorDatabase, kind: str):
        self.kind = kind
        self.label = CONTENT_LABELS[kind]
        self.repo = ContentRepository(db, kind)
        self.profiles = ProfileRepository(db)
        self.products = ProductRepository(db)

    async def _get_or_404(self, content_id: str) -> Dict[str, Any]:
        item = await self.repo.get_content(content_id)
        if not item:
            raise NotFound(f"{self.label} غير موجود")
        return item

    async def _get_own(self, session: SessionContext, content_id: str) -> Dict[str, Any]:
        item = await self._get_or_404(content_id)
        if item["author_id"] != session.profile_id:
            raise PermissionDenied()
        return item

    @staticmethod
    def _require_profile(session: SessionContext) -> str:
        if not session.profile_id:
            raise PermissionDenied("لا يوجد ملف شخصي مرتبط بهذا الحساب")
        return session.profile_id

    async def _validated_fields(self, data: ContentInput) -> Dict[str, Any]:
        """Check required fields before any write and return the stored fields."""
        if not data.title.strip() or not data.excerpt.strip() or not data.cover_image_url.strip():
            raise ValidationError("يرجى ملء جميع الحقول المطلوبة")

        fields = {
            "title": data.title,
            "excerpt": data.excerpt,
            "cover_image_url": data.cover_image_url,
            "content": data.content,
        }
        if self.repo.supports_products:
            if data.product_id and not await self.products.get_product(data.product_id):
                raise ValidationError("المنتج المحدد غير موجود")
            fields["product_id"] = data.product_id or None
        return fields

    async def attach_authors(self, items: List[Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
        """Look up the author profiles of a batch of content items."""
        author_ids = list({item["author_id"] for item in items})
        if not author_ids:
            return {}
        return await self.profiles.get_profiles_by_ids(author_ids)

    # Writer operations

    async def submit(self, session: SessionContext, data: ContentInput) -> Dict[str, Any]:
        """Create content owned by the caller, always in the pending state."""
        author_id = self._require_profile(session)
        fields = await self._validated_fields(data)

        item = await self.repo.create_content(author_id=author_id, **fields)
        logger.info(f"{self.kind} {item['_id']} submitted by profile {author_id}")
        return item

    async def update(self, session: SessionContext, content_id: str, data: ContentInput) -> Dict[str, Any]:
        """Edit own content; the edit goes back to review."""
        self._require_profile(session)
        item = await self._get_own(session, content_id)
        fields = await self._validated_fields(data)

        fields["status"] = next_status(item["status"], ContentAction.EDIT)
        fields["rejection_reason"] = None
        await self.repo.update_fields(content_id, fields)
        logger.info(f"{self.kind} {content_id} edited by author, back to {fields['status']}")
        return {**item, **fields}

    async def resubmit(self, session: SessionContext, content_id: str) -> Dict[str, Any]:
        """Send rejected own content back to review."""
        item = await self._get_own(session, content_id)
        status = next_status(item["status"], ContentAction.RESUBMIT)

        await self.repo.set_status(content_id, status)
        logger.info(f"{self.kind} {content_id} resubmitted")
        return {**item, "status": status, "rejection_reason": None}

    async def list_own(self, session: SessionContext) -> List[Dict[str, Any]]:
        profile_id = self._require_profile(session)
        return await self.repo.list_content(author_id=profile_id)

    async def get_own(self, session: SessionContext, content_id: str) -> Dict[str, Any]:
        return await self._get_own(session, content_id)

    async def count_own_by_status(self, session: SessionContext) -> Dict[str, int]:
        profile_id = self._require_profile(session)
        counts = {"total": await self.repo.count(author_id=profile_id)}
        for status in ContentStatus.ALL:
            counts[status] = await self.repo.count(status=status, author_id=profile_id)
        return counts

    async def delete(self, session: SessionContext, content_id: str) -> None:
        """Hard-delete content; allowed to its author and to admins."""
        item = await self._get_or_404(content_id)
        if not session.is_admin and item["author_id"] != session.profile_id:
            raise PermissionDenied()

        await self.repo.delete_content(content_id)
        logger.info(f"{self.kind} {content_id} deleted by account {session.account_id}")

    # Admin operations

    async def list_for_moderation(self, status_filter: Optional[str] = None) -> List[Dict[str, Any]]:
        """Every item regardless of status, newest first."""
        return await self.repo.list_content(status=parse_status_filter(status_filter))

    async def get_for_preview(self, content_id: str) -> Dict[str, Any]:
        return await self._get_or_404(content_id)

    async def approve(self, content_id: str) -> Dict[str, Any]:
        item = await self._get_or_404(content_id)
        status = next_status(item["status"], ContentAction.APPROVE)

        await self.repo.set_status(content_id, status)
        logger.info(f"{self.kind} {content_id} approved")
        return {**item, "status": status, "rejection_reason": None}

    async def reject(self, content_id: str, reason: Optional[str]) -> Dict[str, Any]:
        reason = validate_rejection_reason(reason)
        item = await self._get_or_404(content_id)
        status = next_status(item["status"], ContentAction.REJECT)

        await self.repo.set_status(content_id, status, rejection_reason=reason)
        logger.info(f"{self.kind} {content_id} rejected")
        return {**item, "status": status, "rejection_reason": reason}

    async def admin_edit(self, content_id: str, data: ContentInput) -> Dict[str, Any]:
        """Edit content fields without touching its moderation status."""
        item = await self._get_or_404(content_id)
        fields = await self._validated_fields(data)

        await self.repo.update_fields(content_id, fields)
        logger.info(f"{self.kind} {content_id} edited by admin")
        return {**item, **fields}
