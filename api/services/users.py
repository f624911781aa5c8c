"""Admin management of accounts and their roles."""
import logging
from typing import Any, Dict, List

from motor.motor_asyncio import AsyncIOMotorDatabase

from api.services.authorization import SessionContext
from database.repositories.profile_repo import ProfileRepository
from database.repositories.role_repo import Role, RoleRepository
from shared.exceptions import DuplicateError, NotFound, ValidationError, is_duplicate_key_error

logger = logging.getLogger(__name__)


class UserAdminService:
    """Role grants made by administrators."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.profiles = ProfileRepository(db)
        self.roles = RoleRepository(db)

    async def list_users(self) -> List[Dict[str, Any]]:
        """Profiles newest first, each with the roles of its account."""
        profiles = await self.profiles.list_profiles()
        roles = await self.roles.get_roles_for_users([p["user_id"] for p in profiles])
        return [
            {"profile": profile, "roles": roles.get(profile["user_id"], [])}
            for profile in profiles
        ]

    async def _require_account(self, user_id: str) -> None:
        if not await self.profiles.get_by_user_id(user_id):
            raise NotFound("المستخدم غير موجود")

    async def grant_role(self, user_id: str, role: str) -> None:
        await self._require_account(user_id)
        try:
            await self.roles.add_role(user_id, role)
        except Exception as e:
            if is_duplicate_key_error(e):
                raise DuplicateError("المستخدم يملك هذه الصلاحية مسبقاً") from e
            raise
        logger.info(f"Role {role} granted to {user_id}")

    async def revoke_role(self, session: SessionContext, user_id: str, role: str) -> None:
        if user_id == session.account_id and role == Role.ADMIN:
            raise ValidationError("لا يمكنك إزالة صلاحية المدير من حسابك")

        removed = await self.roles.remove_role(user_id, role)
        if not removed:
            raise NotFound("المستخدم لا يملك هذه الصلاحية")
        logger.info(f"Role {role} revoked from {user_id}")
