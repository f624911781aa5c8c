"""Sign-up, sign-in, sessions and password resets."""
import logging
from typing import Any, Dict, Optional

import redis.asyncio as redis
from motor.motor_asyncio import AsyncIOMotorDatabase
from werkzeug.security import check_password_hash, generate_password_hash

from api.schemas.requests import WriterRegistrationRequest
from api.services.notifications import NotificationSender
from database.repositories.account_repo import AccountRepository
from database.repositories.profile_repo import ProfileRepository
from database.repositories.session_repo import SessionRepository
from shared.config import settings
from shared.exceptions import (
    DuplicateError,
    InvalidCredentials,
    NotificationError,
    ValidationError,
    is_duplicate_key_error,
)
from shared.utils import generate_password

logger = logging.getLogger(__name__)


class AuthService:
    """Account credentials and Redis-backed sessions."""

    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        redis_client: redis.Redis,
        notifier: Optional[NotificationSender] = None
    ):
        self.accounts = AccountRepository(db)
        self.profiles = ProfileRepository(db)
        self.sessions = SessionRepository(redis_client)
        self.notifier = notifier

    async def sign_up(self, registration: WriterRegistrationRequest) -> Dict[str, Any]:
        """
        Register a writer: an account plus a pending profile.

        Without a password a random one is set; the writer signs in after
        approval through a password reset.
        """
        password = registration.password or generate_password()

        try:
            account = await self.accounts.create_account(
                email=registration.email,
                password_hash=generate_password_hash(password),
                name=registration.name,
            )
        except Exception as e:
            if is_duplicate_key_error(e):
                raise DuplicateError("البريد الإلكتروني مسجل مسبقاً") from e
            raise

        try:
            profile = await self.profiles.create_profile(
                user_id=account["_id"],
                name=registration.name,
                email=registration.email,
                phone=registration.phone,
                bio=registration.bio,
                linkedin_url=registration.linkedin,
            )
        except Exception:
            # No account without a profile
            await self.accounts.delete_account(account["_id"])
            raise

        logger.info(f"Writer registration received for {account['email']}")
        return {"account": account, "profile": profile}

    async def sign_in(self, email: str, password: str) -> Dict[str, Any]:
        account = await self.accounts.get_by_email(email)
        if not account or not check_password_hash(account["password_hash"], password):
            raise InvalidCredentials()

        session = await self.sessions.create_session(account["_id"], account["email"])
        logger.info(f"Account {account['_id']} signed in")
        return session

    async def sign_out(self, token: str) -> bool:
        return await self.sessions.delete_session(token)

    async def request_password_reset(self, email: str, redirect_to: Optional[str] = None) -> None:
        """
        Email a reset link. Unknown addresses are accepted silently so the
        endpoint does not reveal which emails are registered.
        """
        account = await self.accounts.get_by_email(email)
        if not account:
            logger.info("Password reset requested for an unknown email")
            return

        if self.notifier is None:
            raise NotificationError()

        token = await self.sessions.create_reset_token(account["_id"])
        base = redirect_to or f"{settings.site_url.rstrip('/')}/auth"
        reset_url = f"{base}?reset_token={token}"
        await self.notifier.send_password_reset(account["email"], account.get("name", ""), reset_url)

    async def confirm_password_reset(self, token: str, password: str) -> None:
        account_id = await self.sessions.consume_reset_token(token)
        if not account_id:
            raise ValidationError("رابط إعادة التعيين غير صالح أو منتهي الصلاحية")

        await self.accounts.update_password(account_id, generate_password_hash(password))
        await self.sessions.delete_sessions_for_account(account_id)
        logger.info(f"Password reset for account {account_id}")
