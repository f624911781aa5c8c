"""Account, session and role administration tests."""
import pytest
from unittest.mock import AsyncMock, MagicMock
from werkzeug.security import generate_password_hash

from api.schemas.requests import WriterRegistrationRequest
from api.services.auth import AuthService
from api.services.users import UserAdminService
from shared.exceptions import (
    DuplicateError,
    InvalidCredentials,
    NotFound,
    NotificationError,
    ValidationError,
)
from tests.conftest import make_cursor


def registration(**overrides):
    data = {
        "name": "سارة أحمد",
        "email": "sara@example.com",
        "phone": "0501234567",
        "bio": "كاتبة",
        "linkedin": "https://linkedin.com/in/sara",
    }
    data.update(overrides)
    return WriterRegistrationRequest(**data)


class TestRegistrationSchema:
    """Tests for sign-up form validation."""

    def test_short_name_rejected(self):
        with pytest.raises(ValueError, match="3 أحرف"):
            registration(name="سا")

    def test_long_bio_rejected(self):
        with pytest.raises(ValueError):
            registration(bio="x" * 151)

    def test_linkedin_must_be_url(self):
        with pytest.raises(ValueError):
            registration(linkedin="linkedin.com/in/sara")

    @pytest.mark.parametrize("email", ["a@.com", "a@b.", "a@b..c", "x@@y.com", "<a>@b.c"])
    def test_malformed_email_rejected(self, email):
        with pytest.raises(ValueError):
            registration(email=email)

    def test_valid_email_accepted(self):
        assert registration(email="sara.ahmed@mail.example.org").email == "sara.ahmed@mail.example.org"

    def test_short_password_rejected(self):
        with pytest.raises(ValueError):
            registration(password="123")

    def test_password_is_optional(self):
        assert registration().password is None
        assert registration(password="secret1").password == "secret1"


class TestAuthService:
    """Tests for sign-up, sign-in and password resets."""

    @pytest.fixture
    def service(self, mock_mongo_db, mock_redis_client, mock_notifier):
        return AuthService(mock_mongo_db, mock_redis_client, mock_notifier)

    @pytest.mark.asyncio
    async def test_sign_up_creates_pending_profile(self, service, mock_mongo_db):
        created = await service.sign_up(registration())

        assert created["profile"]["status"] == "pending"
        assert created["profile"]["user_id"] == created["account"]["_id"]
        assert mock_mongo_db.accounts.insert_one.await_count == 1
        assert mock_mongo_db.profiles.insert_one.await_count == 1

    @pytest.mark.asyncio
    async def test_sign_up_duplicate_email(self, service, mock_mongo_db):
        mock_mongo_db.accounts.insert_one = AsyncMock(side_effect=Exception("E11000 duplicate key error"))

        with pytest.raises(DuplicateError):
            await service.sign_up(registration())

        mock_mongo_db.profiles.insert_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_sign_up_removes_account_when_profile_fails(self, service, mock_mongo_db):
        mock_mongo_db.profiles.insert_one = AsyncMock(side_effect=RuntimeError("write concern"))

        with pytest.raises(RuntimeError):
            await service.sign_up(registration())

        mock_mongo_db.accounts.delete_one.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_sign_in_wrong_password(self, service, mock_mongo_db):
        mock_mongo_db.accounts.find_one = AsyncMock(return_value={
            "_id": "acc_1", "email": "sara@example.com",
            "password_hash": generate_password_hash("correct-password"),
        })

        with pytest.raises(InvalidCredentials):
            await service.sign_in("sara@example.com", "wrong-password")

    @pytest.mark.asyncio
    async def test_sign_in_creates_session(self, service, mock_mongo_db, mock_redis_client):
        mock_mongo_db.accounts.find_one = AsyncMock(return_value={
            "_id": "acc_1", "email": "sara@example.com",
            "password_hash": generate_password_hash("correct-password"),
        })

        session = await service.sign_in("sara@example.com", "correct-password")

        assert session["account_id"] == "acc_1"
        assert session["token"]
        mock_redis_client.set.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_password_reset_for_unknown_email_is_silent(self, service, mock_notifier):
        await service.request_password_reset("nobody@example.com")

        mock_notifier.send_password_reset.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_password_reset_link_uses_redirect(self, service, mock_mongo_db, mock_notifier):
        mock_mongo_db.accounts.find_one = AsyncMock(return_value={
            "_id": "acc_1", "email": "sara@example.com", "name": "سارة",
        })

        await service.request_password_reset("sara@example.com", "https://almonhna.sa/auth")

        reset_url = mock_notifier.send_password_reset.call_args[0][2]
        assert reset_url.startswith("https://almonhna.sa/auth?reset_token=")

    @pytest.mark.asyncio
    async def test_password_reset_without_sender(self, mock_mongo_db, mock_redis_client):
        service = AuthService(mock_mongo_db, mock_redis_client)
        mock_mongo_db.accounts.find_one = AsyncMock(return_value={"_id": "acc_1", "email": "sara@example.com"})

        with pytest.raises(NotificationError):
            await service.request_password_reset("sara@example.com")

        mock_redis_client.set.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_confirm_with_invalid_token(self, service, mock_mongo_db):
        with pytest.raises(ValidationError):
            await service.confirm_password_reset("stale", "new-password")

        mock_mongo_db.accounts.update_one.assert_not_awaited()


class TestUserAdminService:
    """Tests for role grants by administrators."""

    @pytest.fixture
    def service(self, mock_mongo_db):
        return UserAdminService(mock_mongo_db)

    @pytest.mark.asyncio
    async def test_admin_cannot_drop_own_admin_role(self, service, admin_session, mock_mongo_db):
        with pytest.raises(ValidationError):
            await service.revoke_role(admin_session, admin_session.account_id, "admin")

        mock_mongo_db.user_roles.delete_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_revoke_role_not_held(self, service, admin_session, mock_mongo_db):
        mock_mongo_db.user_roles.delete_one = AsyncMock(return_value=MagicMock(deleted_count=0))

        with pytest.raises(NotFound):
            await service.revoke_role(admin_session, "acc_test001", "writer")

    @pytest.mark.asyncio
    async def test_grant_duplicate_role(self, service, mock_mongo_db, sample_profile):
        mock_mongo_db.profiles.find_one = AsyncMock(return_value=sample_profile)
        mock_mongo_db.user_roles.insert_one = AsyncMock(side_effect=Exception("E11000 duplicate key error"))

        with pytest.raises(DuplicateError):
            await service.grant_role(sample_profile["user_id"], "writer")

    @pytest.mark.asyncio
    async def test_list_users_attaches_roles(self, service, mock_mongo_db, sample_profile):
        mock_mongo_db.profiles.find = MagicMock(return_value=make_cursor([sample_profile]))
        service.roles.get_roles_for_users = AsyncMock(return_value={sample_profile["user_id"]: ["admin", "writer"]})

        users = await service.list_users()

        assert users == [{"profile": sample_profile, "roles": ["admin", "writer"]}]
