"""Writer dashboard routes."""
from typing import List

from fastapi import APIRouter, Depends, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from api.dependencies import GUARD_RESPONSES, require_writer
from api.schemas.requests import ContentInput, ProfileUpdateRequest
from api.schemas.responses import (
    ContentActionResponse,
    ContentResponse,
    MessageResponse,
    ProfileResponse,
    WriterStatsResponse,
)
from api.services.authorization import SessionContext
from api.services.moderation import ContentModerationService
from database.connection import get_db
from database.repositories.content_repo import ContentKind
from database.repositories.profile_repo import ProfileRepository
from shared.exceptions import NotFound


router = APIRouter(prefix="/writer", tags=["writer"], responses=GUARD_RESPONSES)


def _register_content_routes(kind: str) -> None:

    def service(db: AsyncIOMotorDatabase) -> ContentModerationService:
        return ContentModerationService(db, kind)

    @router.get(f"/{kind}", response_model=List[ContentResponse], name=f"writer_list_{kind}")
    async def list_own(
        session: SessionContext = Depends(require_writer),
        db: AsyncIOMotorDatabase = Depends(get_db)
    ):
        """The caller's own items in every status, newest first."""
        items = await service(db).list_own(session)
        return [ContentResponse.from_document(item) for item in items]

    @router.post(
        f"/{kind}",
        response_model=ContentActionResponse,
        status_code=status.HTTP_201_CREATED,
        name=f"writer_submit_{kind}"
    )
    async def submit(
        request: ContentInput,
        session: SessionContext = Depends(require_writer),
        db: AsyncIOMotorDatabase = Depends(get_db)
    ):
        moderation = service(db)
        item = await moderation.submit(session, request)
        return ContentActionResponse(
            message=f"تم إضافة {moderation.label} بنجاح وسيتم مراجعته من قبل الإدارة",
            item=ContentResponse.from_document(item),
        )

    @router.get(f"/{kind}/{{content_id}}", response_model=ContentResponse, name=f"writer_get_{kind}")
    async def get_own(
        content_id: str,
        session: SessionContext = Depends(require_writer),
        db: AsyncIOMotorDatabase = Depends(get_db)
    ):
        return ContentResponse.from_document(await service(db).get_own(session, content_id))

    @router.put(f"/{kind}/{{content_id}}", response_model=ContentActionResponse, name=f"writer_update_{kind}")
    async def update(
        content_id: str,
        request: ContentInput,
        session: SessionContext = Depends(require_writer),
        db: AsyncIOMotorDatabase = Depends(get_db)
    ):
        moderation = service(db)
        item = await moderation.update(session, content_id, request)
        return ContentActionResponse(
            message=f"تم تحديث {moderation.label} بنجاح",
            item=ContentResponse.from_document(item),
        )

    @router.post(
        f"/{kind}/{{content_id}}/resubmit",
        response_model=ContentActionResponse,
        name=f"writer_resubmit_{kind}"
    )
    async def resubmit(
        content_id: str,
        session: SessionContext = Depends(require_writer),
        db: AsyncIOMotorDatabase = Depends(get_db)
    ):
        """Send a rejected item back to review."""
        moderation = service(db)
        item = await moderation.resubmit(session, content_id)
        return ContentActionResponse(
            message=f"تم إعادة إرسال {moderation.label} للمراجعة",
            item=ContentResponse.from_document(item),
        )

    @router.delete(f"/{kind}/{{content_id}}", response_model=MessageResponse, name=f"writer_delete_{kind}")
    async def delete(
        content_id: str,
        session: SessionContext = Depends(require_writer),
        db: AsyncIOMotorDatabase = Depends(get_db)
    ):
        moderation = service(db)
        await moderation.delete(session, content_id)
        return MessageResponse(message=f"تم حذف {moderation.label} بنجاح")


for _kind in ContentKind.ALL:
    _register_content_routes(_kind)


@router.get("/stats", response_model=WriterStatsResponse)
async def stats(
    session: SessionContext = Depends(require_writer),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """Per-status counts of the caller's own content."""
    return WriterStatsResponse(
        articles=await ContentModerationService(db, ContentKind.ARTICLES).count_own_by_status(session),
        news=await ContentModerationService(db, ContentKind.NEWS).count_own_by_status(session),
    )


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(session: SessionContext = Depends(require_writer)):
    if not session.profile:
        raise NotFound("الملف الشخصي غير موجود")
    return ProfileResponse.from_document(session.profile)


@router.put("/profile", response_model=ProfileResponse)
async def update_profile(
    request: ProfileUpdateRequest,
    session: SessionContext = Depends(require_writer),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """Edit the caller's own profile; moderation status is not editable."""
    profile = await ProfileRepository(db).update_by_user_id(
        session.account_id, request.model_dump(exclude_unset=True)
    )
    if not profile:
        raise NotFound("الملف الشخصي غير موجود")
    return ProfileResponse.from_document(profile)
