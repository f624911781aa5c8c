"""FastAPI dependencies for sessions, role guards and collaborators."""
from typing import Optional

import redis.asyncio as redis
from fastapi import Depends, Header
from motor.motor_asyncio import AsyncIOMotorDatabase

from api.schemas.responses import ErrorResponse
from api.services.authorization import AuthorizationService, SessionContext
from api.services.notifications import NotificationSender, build_sender
from api.services.storage import ImageStorage
from database.connection import get_db, get_redis
from database.repositories.role_repo import Role
from shared.exceptions import AuthenticationRequired, PermissionDenied


def bearer_token(authorization: Optional[str] = Header(default=None)) -> Optional[str]:
    """Extract the session token from an ``Authorization: Bearer`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    return token.strip()


async def get_authorization_service(
    db: AsyncIOMotorDatabase = Depends(get_db),
    redis_client: redis.Redis = Depends(get_redis)
) -> AuthorizationService:
    return AuthorizationService(db, redis_client)


async def get_session_context(
    token: Optional[str] = Depends(bearer_token),
    authz: AuthorizationService = Depends(get_authorization_service)
) -> Optional[SessionContext]:
    """The caller's session, or None for anonymous requests."""
    return await authz.load_session(token)


async def require_session(
    session: Optional[SessionContext] = Depends(get_session_context)
) -> SessionContext:
    if session is None:
        raise AuthenticationRequired(redirect_to="/auth")
    return session


def require_role(role: str):
    """Dependency that lets a request through only for accounts holding ``role``."""

    async def guard(
        session: Optional[SessionContext] = Depends(get_session_context),
        authz: AuthorizationService = Depends(get_authorization_service)
    ) -> SessionContext:
        decision = await authz.guard(session, role)
        if decision.authorized:
            return session
        if session is None:
            raise AuthenticationRequired(redirect_to=decision.redirect_to)
        raise PermissionDenied(decision.message, redirect_to=decision.redirect_to)

    return guard


require_admin = require_role(Role.ADMIN)
require_writer = require_role(Role.WRITER)


def get_notifier() -> NotificationSender:
    return build_sender()


def get_storage() -> ImageStorage:
    return ImageStorage()


GUARD_RESPONSES = {
    401: {"model": ErrorResponse, "description": "No session; redirect to sign-in"},
    403: {"model": ErrorResponse, "description": "Role missing; redirect home"},
}
