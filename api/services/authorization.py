"""Session context and role-based access checks."""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

import redis.asyncio as redis
from motor.motor_asyncio import AsyncIOMotorDatabase

from database.repositories.profile_repo import ProfileRepository
from database.repositories.role_repo import Role, RoleRepository
from database.repositories.session_repo import SessionRepository
from shared.exceptions import PermissionDenied

logger = logging.getLogger(__name__)


LOGIN_PATH = "/auth"
HOME_PATH = "/"
UNAUTHORIZED_MESSAGE = PermissionDenied.default_message

DASHBOARD_LINKS = {
    Role.ADMIN: {"path": "/admin", "label": "لوحة الإدارة"},
    Role.WRITER: {"path": "/writer", "label": "لوحة الكاتب"},
}


@dataclass
class SessionContext:
    """Identity of the caller, built once per request."""
    token: str
    account_id: str
    email: str
    roles: List[str] = field(default_factory=list)
    profile: Optional[Dict[str, Any]] = None

    @property
    def profile_id(self) -> Optional[str]:
        return self.profile["_id"] if self.profile else None

    def has_role(self, role: str) -> bool:
        return role in self.roles

    @property
    def is_admin(self) -> bool:
        return self.has_role(Role.ADMIN)

    @property
    def is_writer(self) -> bool:
        return self.has_role(Role.WRITER)


class GuardStatus(str, Enum):
    """Route guard outcome."""
    LOADING = "loading"
    AUTHORIZED = "authorized"
    REDIRECT = "redirect"


@dataclass
class GuardDecision:
    status: GuardStatus
    redirect_to: Optional[str] = None
    message: Optional[str] = None

    @property
    def authorized(self) -> bool:
        return self.status == GuardStatus.AUTHORIZED


class AuthorizationService:
    """Single place that resolves sessions and checks role grants."""

    def __init__(self, db: AsyncIOMotorDatabase, redis_client: redis.Redis):
        self.sessions = SessionRepository(redis_client)
        self.roles = RoleRepository(db)
        self.profiles = ProfileRepository(db)

    async def load_session(self, token: Optional[str]) -> Optional[SessionContext]:
        """Resolve a bearer token into a session context, or None."""
        if not token:
            return None

        session = await self.sessions.get_session(token)
        if not session:
            return None

        account_id = session["account_id"]
        return SessionContext(
            token=token,
            account_id=account_id,
            email=session["email"],
            roles=await self.roles.get_roles(account_id),
            profile=await self.profiles.get_by_user_id(account_id),
        )

    async def guard(self, session: Optional[SessionContext], required_role: str) -> GuardDecision:
        """
        Decide whether a dashboard subtree may render.

        The role relation is queried again on every call; no grant is cached
        beyond the request.
        """
        if session is None:
            return GuardDecision(GuardStatus.REDIRECT, redirect_to=LOGIN_PATH)

        if not await self.roles.has_role(session.account_id, required_role):
            logger.info(f"Account {session.account_id} denied {required_role} area")
            return GuardDecision(
                GuardStatus.REDIRECT,
                redirect_to=HOME_PATH,
                message=UNAUTHORIZED_MESSAGE,
            )

        return GuardDecision(GuardStatus.AUTHORIZED)

    @staticmethod
    def navigation(session: Optional[SessionContext]) -> List[Dict[str, str]]:
        """Dashboard links for every role the account holds."""
        if session is None:
            return []
        return [DASHBOARD_LINKS[role] for role in Role.ALL if session.has_role(role)]
