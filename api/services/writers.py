"""Writer account moderation: approval, rejection and removal."""
import logging
from typing import Any, Dict, List, Optional

import redis.asyncio as redis
from motor.motor_asyncio import AsyncIOMotorDatabase

from api.services.lifecycle import parse_status_filter
from api.services.notifications import NotificationSender
from api.services.saga import Saga, SagaResult
from database.repositories.account_repo import AccountRepository
from database.repositories.content_repo import ContentKind, ContentRepository
from database.repositories.profile_repo import ProfileRepository, ProfileStatus
from database.repositories.role_repo import Role, RoleRepository
from database.repositories.session_repo import SessionRepository
from shared.exceptions import NotFound, is_duplicate_key_error

logger = logging.getLogger(__name__)


class WriterModerationService:
    """Multi-step writer workflows, each run as a compensating saga."""

    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        redis_client: redis.Redis,
        notifier: Optional[NotificationSender] = None
    ):
        self.profiles = ProfileRepository(db)
        self.roles = RoleRepository(db)
        self.accounts = AccountRepository(db)
        self.articles = ContentRepository(db, ContentKind.ARTICLES)
        self.news = ContentRepository(db, ContentKind.NEWS)
        self.sessions = SessionRepository(redis_client)
        self.notifier = notifier

    async def _get_profile(self, profile_id: str) -> Dict[str, Any]:
        profile = await self.profiles.get_profile(profile_id)
        if not profile:
            raise NotFound("الكاتب غير موجود")
        return profile

    async def list_writers(self, status_filter: Optional[str] = None) -> List[Dict[str, Any]]:
        """Profiles for moderation, newest first."""
        return await self.profiles.list_profiles(status=parse_status_filter(status_filter))

    async def grant_writer_role(self, user_id: str) -> bool:
        """Insert the writer role. Returns False when the account already had it."""
        try:
            await self.roles.add_role(user_id, Role.WRITER)
        except Exception as e:
            if is_duplicate_key_error(e):
                logger.info(f"Account {user_id} already holds the writer role")
                return False
            raise
        return True

    async def approve_writer(self, profile_id: str, site_url: Optional[str] = None) -> SagaResult:
        """
        Approve a writer profile.

        Steps: mark the profile approved, grant the writer role, send the
        welcome email. A failed role grant restores the previous status; a
        failed email is only reported as a warning.
        """
        profile = await self._get_profile(profile_id)
        user_id = profile["user_id"]
        previous_status = profile["status"]

        async def approve_profile():
            return await self.profiles.update_status(profile_id, ProfileStatus.APPROVED)

        async def restore_status(_):
            await self.profiles.update_status(profile_id, previous_status)

        async def grant_role():
            return await self.grant_writer_role(user_id)

        async def revoke_role(inserted: bool):
            if inserted:
                await self.roles.remove_role(user_id, Role.WRITER)

        async def send_welcome():
            await self.notifier.send_welcome(profile["email"], profile["name"], site_url)

        saga = (
            Saga("approve_writer")
            .step("approve_profile", approve_profile, restore_status)
            .step("grant_writer_role", grant_role, revoke_role)
            .step("send_welcome_email", send_welcome, critical=False)
        )
        result = await saga.run()
        logger.info(f"Writer {profile_id} approved")
        return result

    async def reject_writer(self, profile_id: str) -> None:
        """Mark a writer profile rejected; roles and email are untouched."""
        await self._get_profile(profile_id)
        await self.profiles.update_status(profile_id, ProfileStatus.REJECTED)
        logger.info(f"Writer {profile_id} rejected")

    async def delete_writer(self, profile_id: str) -> SagaResult:
        """
        Remove a writer with everything they own.

        Each step snapshots what it deletes so a later failure can put the
        rows back.
        """
        profile = await self._get_profile(profile_id)
        user_id = profile["user_id"]

        def delete_content(repo: ContentRepository):
            async def action():
                snapshot = await repo.find_by_author(profile_id)
                await repo.delete_by_author(profile_id)
                return snapshot
            return action

        async def delete_roles():
            snapshot = await self.roles.find_by_user(user_id)
            await self.roles.delete_by_user(user_id)
            return snapshot

        async def delete_profile():
            await self.profiles.delete_profile(profile_id)
            return profile

        async def delete_account():
            account = await self.accounts.get_account(user_id)
            if account:
                await self.accounts.delete_account(user_id)
            return account

        async def restore_account(account):
            if account:
                await self.accounts.restore(account)

        async def revoke_sessions():
            return await self.sessions.delete_sessions_for_account(user_id)

        saga = (
            Saga("delete_writer")
            .step("delete_articles", delete_content(self.articles), self.articles.restore)
            .step("delete_news", delete_content(self.news), self.news.restore)
            .step("delete_roles", delete_roles, self.roles.restore)
            .step("delete_profile", delete_profile, self.profiles.restore)
            .step("delete_account", delete_account, restore_account)
            .step("revoke_sessions", revoke_sessions, critical=False)
        )
        result = await saga.run()
        logger.info(f"Writer {profile_id} deleted with account {user_id}")
        return result
