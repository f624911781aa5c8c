"""One-time bootstrap of the default administrator."""
import logging
from typing import Any, Dict

from motor.motor_asyncio import AsyncIOMotorDatabase
from werkzeug.security import generate_password_hash

from database.repositories.account_repo import AccountRepository
from database.repositories.profile_repo import ProfileRepository, ProfileStatus
from database.repositories.role_repo import Role, RoleRepository
from shared.config import Settings, settings
from shared.exceptions import is_duplicate_key_error

logger = logging.getLogger(__name__)


class SetupService:
    """Creates the default admin account if it does not exist yet."""

    def __init__(self, db: AsyncIOMotorDatabase, config: Settings = settings):
        self.accounts = AccountRepository(db)
        self.profiles = ProfileRepository(db)
        self.roles = RoleRepository(db)
        self.config = config

    async def ensure_default_admin(self) -> Dict[str, Any]:
        existing = await self.accounts.get_by_email(self.config.default_admin_email)
        if existing:
            logger.info("Default admin already exists")
            return {"created": False, "message": "المستخدم المدير موجود مسبقاً"}

        account = await self.accounts.create_account(
            email=self.config.default_admin_email,
            password_hash=generate_password_hash(self.config.default_admin_password),
            name=self.config.default_admin_name,
        )
        await self.profiles.create_profile(
            user_id=account["_id"],
            name=self.config.default_admin_name,
            email=self.config.default_admin_email,
            status=ProfileStatus.APPROVED,
        )
        try:
            await self.roles.add_role(account["_id"], Role.ADMIN)
        except Exception as e:
            if not is_duplicate_key_error(e):
                raise

        logger.info(f"Default admin created: {account['_id']}")
        return {"created": True, "message": "تم إنشاء حساب المدير الافتراضي بنجاح"}
