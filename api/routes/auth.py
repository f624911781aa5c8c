"""Authentication and session routes."""
from typing import List, Optional

import redis.asyncio as redis
from fastapi import APIRouter, Depends, Query, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from api.dependencies import (
    get_authorization_service,
    get_notifier,
    get_session_context,
    require_session,
)
from api.models import RoleEnum
from api.schemas.requests import (
    PasswordResetConfirmRequest,
    PasswordResetRequest,
    SignInRequest,
    WriterRegistrationRequest,
)
from api.schemas.responses import (
    GuardResponse,
    MessageResponse,
    NavigationLink,
    ProfileResponse,
    SessionResponse,
    SignUpResponse,
)
from api.services.auth import AuthService
from api.services.authorization import AuthorizationService, SessionContext
from api.services.notifications import NotificationSender
from database.connection import get_db, get_redis


router = APIRouter(prefix="/auth", tags=["auth"])


def _session_response(session: SessionContext) -> SessionResponse:
    return SessionResponse(
        token=session.token,
        account_id=session.account_id,
        email=session.email,
        roles=session.roles,
        profile=ProfileResponse.from_document(session.profile) if session.profile else None,
    )


@router.post("/signup", response_model=SignUpResponse, status_code=status.HTTP_201_CREATED)
async def sign_up(
    request: WriterRegistrationRequest,
    db: AsyncIOMotorDatabase = Depends(get_db),
    redis_client: redis.Redis = Depends(get_redis)
):
    """Register as a writer; the profile waits for admin approval."""
    created = await AuthService(db, redis_client).sign_up(request)
    return SignUpResponse(
        message="تم إرسال الطلب بنجاح، سيتم مراجعة طلبك وإرسال بيانات الدخول إلى بريدك الإلكتروني",
        account_id=created["account"]["_id"],
        profile_id=created["profile"]["_id"],
    )


@router.post("/signin", response_model=SessionResponse)
async def sign_in(
    request: SignInRequest,
    db: AsyncIOMotorDatabase = Depends(get_db),
    redis_client: redis.Redis = Depends(get_redis),
    authz: AuthorizationService = Depends(get_authorization_service)
):
    """Exchange credentials for a session token."""
    session = await AuthService(db, redis_client).sign_in(request.email, request.password)
    context = await authz.load_session(session["token"])
    return _session_response(context)


@router.post("/signout", response_model=MessageResponse)
async def sign_out(
    session: SessionContext = Depends(require_session),
    db: AsyncIOMotorDatabase = Depends(get_db),
    redis_client: redis.Redis = Depends(get_redis)
):
    await AuthService(db, redis_client).sign_out(session.token)
    return MessageResponse(message="تم تسجيل الخروج")


@router.get("/session", response_model=SessionResponse)
async def get_session(session: SessionContext = Depends(require_session)):
    """Current session with roles and profile."""
    return _session_response(session)


@router.get("/navigation", response_model=List[NavigationLink])
async def navigation(session: Optional[SessionContext] = Depends(get_session_context)):
    """Dashboard links for every role the caller holds."""
    return [NavigationLink(**link) for link in AuthorizationService.navigation(session)]


@router.get("/guard", response_model=GuardResponse)
async def guard(
    role: RoleEnum = Query(..., description="Role the dashboard area requires"),
    session: Optional[SessionContext] = Depends(get_session_context),
    authz: AuthorizationService = Depends(get_authorization_service)
):
    """Route guard decision for a dashboard subtree."""
    decision = await authz.guard(session, role.value)
    return GuardResponse(
        status=decision.status.value,
        redirect_to=decision.redirect_to,
        message=decision.message,
    )


@router.post("/password-reset", response_model=MessageResponse)
async def request_password_reset(
    request: PasswordResetRequest,
    db: AsyncIOMotorDatabase = Depends(get_db),
    redis_client: redis.Redis = Depends(get_redis),
    notifier: NotificationSender = Depends(get_notifier)
):
    await AuthService(db, redis_client, notifier).request_password_reset(
        request.email, request.redirect_to
    )
    return MessageResponse(message="تم إرسال رابط إعادة تعيين كلمة المرور إلى البريد الإلكتروني")


@router.post("/password-reset/confirm", response_model=MessageResponse)
async def confirm_password_reset(
    request: PasswordResetConfirmRequest,
    db: AsyncIOMotorDatabase = Depends(get_db),
    redis_client: redis.Redis = Depends(get_redis)
):
    await AuthService(db, redis_client).confirm_password_reset(request.token, request.password)
    return MessageResponse(message="تم تغيير كلمة المرور بنجاح")
