"""Admin routes for writer approval and account roles."""
from typing import List, Optional

import redis.asyncio as redis
from fastapi import APIRouter, Depends, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from api.dependencies import GUARD_RESPONSES, get_notifier, require_admin
from api.models import RoleEnum
from api.schemas.requests import PasswordResetRequest, RoleChangeRequest
from api.schemas.responses import (
    MessageResponse,
    ProfileResponse,
    UserWithRolesResponse,
    WriterActionResponse,
)
from api.services.auth import AuthService
from api.services.authorization import SessionContext
from api.services.notifications import NotificationSender
from api.services.users import UserAdminService
from api.services.writers import WriterModerationService
from database.connection import get_db, get_redis
from database.repositories.profile_repo import ProfileStatus


router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
    responses=GUARD_RESPONSES
)


def _writers(db, redis_client, notifier=None) -> WriterModerationService:
    return WriterModerationService(db, redis_client, notifier)


@router.get("/writers", response_model=List[ProfileResponse])
async def list_writers(
    status_filter: Optional[str] = Query(default="all", alias="status", description="all, pending, approved or rejected"),
    db: AsyncIOMotorDatabase = Depends(get_db),
    redis_client: redis.Redis = Depends(get_redis)
):
    profiles = await _writers(db, redis_client).list_writers(status_filter)
    return [ProfileResponse.from_document(p) for p in profiles]


@router.post("/writers/{profile_id}/approve", response_model=WriterActionResponse)
async def approve_writer(
    profile_id: str,
    site_url: Optional[str] = Query(default=None, description="Origin used in the welcome email"),
    db: AsyncIOMotorDatabase = Depends(get_db),
    redis_client: redis.Redis = Depends(get_redis),
    notifier: NotificationSender = Depends(get_notifier)
):
    """Approve, grant the writer role and send the welcome email."""
    result = await _writers(db, redis_client, notifier).approve_writer(profile_id, site_url)
    return WriterActionResponse(
        message="تم تحديث حالة الكاتب",
        profile_id=profile_id,
        status=ProfileStatus.APPROVED,
        warnings=result.warnings,
    )


@router.post("/writers/{profile_id}/reject", response_model=WriterActionResponse)
async def reject_writer(
    profile_id: str,
    db: AsyncIOMotorDatabase = Depends(get_db),
    redis_client: redis.Redis = Depends(get_redis)
):
    await _writers(db, redis_client).reject_writer(profile_id)
    return WriterActionResponse(
        message="تم تحديث حالة الكاتب",
        profile_id=profile_id,
        status=ProfileStatus.REJECTED,
    )


@router.delete("/writers/{profile_id}", response_model=WriterActionResponse)
async def delete_writer(
    profile_id: str,
    db: AsyncIOMotorDatabase = Depends(get_db),
    redis_client: redis.Redis = Depends(get_redis)
):
    """Delete the writer with their content, roles and account."""
    result = await _writers(db, redis_client).delete_writer(profile_id)
    return WriterActionResponse(
        message="تم حذف الكاتب وجميع محتوياته",
        profile_id=profile_id,
        warnings=result.warnings,
    )


@router.get("/users", response_model=List[UserWithRolesResponse])
async def list_users(db: AsyncIOMotorDatabase = Depends(get_db)):
    users = await UserAdminService(db).list_users()
    return [
        UserWithRolesResponse(profile=ProfileResponse.from_document(u["profile"]), roles=u["roles"])
        for u in users
    ]


@router.post("/users/{user_id}/roles", response_model=MessageResponse)
async def add_role(
    user_id: str,
    request: RoleChangeRequest,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    await UserAdminService(db).grant_role(user_id, request.role.value)
    return MessageResponse(message="تم إضافة الصلاحية بنجاح")


@router.delete("/users/{user_id}/roles/{role}", response_model=MessageResponse)
async def remove_role(
    user_id: str,
    role: RoleEnum,
    session: SessionContext = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    await UserAdminService(db).revoke_role(session, user_id, role.value)
    return MessageResponse(message="تم إزالة الصلاحية بنجاح")


@router.post("/users/password-reset", response_model=MessageResponse)
async def send_password_reset(
    request: PasswordResetRequest,
    db: AsyncIOMotorDatabase = Depends(get_db),
    redis_client: redis.Redis = Depends(get_redis),
    notifier: NotificationSender = Depends(get_notifier)
):
    """Email a password reset link to a user."""
    await AuthService(db, redis_client, notifier).request_password_reset(
        request.email, request.redirect_to
    )
    return MessageResponse(message="تم إرسال رابط إعادة تعيين كلمة المرور إلى البريد الإلكتروني")
