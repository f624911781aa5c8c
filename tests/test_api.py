"""API endpoint tests."""
import pytest
from httpx import AsyncClient, ASGITransport
from unittest.mock import AsyncMock

from api.dependencies import get_authorization_service, get_notifier
from api.main import app
from api.services.authorization import AuthorizationService
from database.connection import get_db, get_redis
from tests.conftest import make_cursor


@pytest.fixture
def authz(mock_mongo_db, mock_redis_client):
    """Real authorization service over the mocked stores."""
    return AuthorizationService(mock_mongo_db, mock_redis_client)


@pytest.fixture
def api(mock_mongo_db, mock_redis_client, authz):
    """Route dependencies wired to mocks."""
    app.dependency_overrides[get_db] = lambda: mock_mongo_db
    app.dependency_overrides[get_redis] = lambda: mock_redis_client
    app.dependency_overrides[get_authorization_service] = lambda: authz
    yield app
    app.dependency_overrides.clear()


def signed_in(authz, mock_mongo_db, session, has_role):
    authz.load_session = AsyncMock(return_value=session)
    mock_mongo_db.user_roles.count_documents = AsyncMock(return_value=1 if has_role else 0)
    return {"Authorization": f"Bearer {session.token}"}


def client(api):
    return AsyncClient(transport=ASGITransport(app=api), base_url="http://test")


class TestAdminGuard:
    """Tests for the admin area guard."""

    @pytest.mark.asyncio
    async def test_anonymous_redirected_to_login(self, api):
        async with client(api) as ac:
            response = await ac.get("/admin/stats")

        assert response.status_code == 401
        body = response.json()
        assert body["code"] == "AUTHENTICATION_REQUIRED"
        assert body["redirect_to"] == "/auth"

    @pytest.mark.asyncio
    async def test_writer_redirected_home_with_message(self, api, authz, mock_mongo_db, writer_session):
        headers = signed_in(authz, mock_mongo_db, writer_session, has_role=False)

        async with client(api) as ac:
            response = await ac.get("/admin/articles", headers=headers)

        assert response.status_code == 403
        body = response.json()
        assert body["redirect_to"] == "/"
        assert body["detail"] == "ليس لديك صلاحيات الوصول لهذه الصفحة"

    @pytest.mark.asyncio
    async def test_guard_endpoint_for_anonymous(self, api):
        async with client(api) as ac:
            response = await ac.get("/auth/guard", params={"role": "admin"})

        assert response.status_code == 200
        assert response.json()["status"] == "redirect"
        assert response.json()["redirect_to"] == "/auth"


class TestAdminModerationEndpoints:
    """Tests for approve/reject routes."""

    @pytest.mark.asyncio
    async def test_reject_with_empty_reason(self, api, authz, mock_mongo_db, admin_session, sample_article):
        headers = signed_in(authz, mock_mongo_db, admin_session, has_role=True)
        mock_mongo_db.articles.find_one = AsyncMock(return_value=sample_article)

        async with client(api) as ac:
            response = await ac.post(
                f"/admin/articles/{sample_article['_id']}/reject",
                json={"reason": ""},
                headers=headers
            )

        assert response.status_code == 400
        assert response.json()["detail"] == "يرجى كتابة سبب الرفض"
        mock_mongo_db.articles.update_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_approve_pending_news(self, api, authz, mock_mongo_db, admin_session, sample_article):
        headers = signed_in(authz, mock_mongo_db, admin_session, has_role=True)
        news = {**sample_article, "_id": "news_test001"}
        news.pop("product_id")
        mock_mongo_db.news.find_one = AsyncMock(return_value=news)

        async with client(api) as ac:
            response = await ac.post("/admin/news/news_test001/approve", headers=headers)

        assert response.status_code == 200
        assert response.json()["item"]["status"] == "approved"
        assert response.json()["item"]["rejection_reason"] is None

    @pytest.mark.asyncio
    async def test_writer_listing_does_not_need_mail_provider(self, api, authz, mock_mongo_db, admin_session, pending_profile):
        headers = signed_in(authz, mock_mongo_db, admin_session, has_role=True)
        mock_mongo_db.profiles.find.return_value = make_cursor([pending_profile])

        def unconfigured_provider():
            raise ValueError("Unknown email provider: none")

        api.dependency_overrides[get_notifier] = unconfigured_provider

        async with client(api) as ac:
            response = await ac.get("/admin/writers", params={"status": "pending"}, headers=headers)

        assert response.status_code == 200
        assert response.json()[0]["id"] == pending_profile["_id"]


class TestWriterEndpoints:
    """Tests for writer submissions."""

    @pytest.mark.asyncio
    async def test_submit_article_is_pending(self, api, authz, mock_mongo_db, writer_session):
        headers = signed_in(authz, mock_mongo_db, writer_session, has_role=True)
        payload = {
            "title": "عنوان",
            "excerpt": "ملخص",
            "cover_image_url": "/media/acc_test001/1.png",
            "status": "approved",
        }

        async with client(api) as ac:
            response = await ac.post("/writer/articles", json=payload, headers=headers)

        assert response.status_code == 201
        item = response.json()["item"]
        assert item["status"] == "pending"
        assert item["author_id"] == writer_session.profile_id

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", [None, "a", "   "])
    async def test_profile_update_refuses_invalid_name(self, api, authz, mock_mongo_db, writer_session, name):
        headers = signed_in(authz, mock_mongo_db, writer_session, has_role=True)

        async with client(api) as ac:
            response = await ac.put("/writer/profile", json={"name": name}, headers=headers)

        assert response.status_code == 422
        assert response.json()["detail"] == "الاسم يجب أن يحتوي على 3 أحرف على الأقل"
        mock_mongo_db.profiles.find_one_and_update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_profile_update_trims_name(self, api, authz, mock_mongo_db, writer_session, sample_profile):
        headers = signed_in(authz, mock_mongo_db, writer_session, has_role=True)
        mock_mongo_db.profiles.find_one_and_update = AsyncMock(return_value={**sample_profile, "name": "سارة علي"})

        async with client(api) as ac:
            response = await ac.put("/writer/profile", json={"name": "  سارة علي "}, headers=headers)

        assert response.status_code == 200
        assert response.json()["name"] == "سارة علي"
        update = mock_mongo_db.profiles.find_one_and_update.call_args[0][1]
        assert update["$set"]["name"] == "سارة علي"
        assert "bio" not in update["$set"]


class TestPublicEndpoints:
    """Tests for the public site."""

    @pytest.mark.asyncio
    async def test_writers_listing_hides_contact_details(self, api, mock_mongo_db, sample_profile):
        mock_mongo_db.profiles.find.return_value = make_cursor([sample_profile])

        async with client(api) as ac:
            response = await ac.get("/writers")

        assert response.status_code == 200
        writers = response.json()
        assert writers[0]["name"] == sample_profile["name"]
        assert "email" not in writers[0]
        assert "phone" not in writers[0]
        assert mock_mongo_db.profiles.find.call_args[0][0] == {"status": "approved"}

    @pytest.mark.asyncio
    async def test_signup_validation_message(self, api):
        payload = {"name": "سا", "email": "sara@example.com", "phone": "0501234567"}

        async with client(api) as ac:
            response = await ac.post("/auth/signup", json=payload)

        assert response.status_code == 422
        assert response.json()["detail"] == "الاسم يجب أن يحتوي على 3 أحرف على الأقل"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("email", ["a@.com", "x@@y.com", "<a>@b.c"])
    async def test_signup_rejects_malformed_email(self, api, mock_mongo_db, email):
        payload = {"name": "سارة أحمد", "email": email, "phone": "0501234567"}

        async with client(api) as ac:
            response = await ac.post("/auth/signup", json=payload)

        assert response.status_code == 422
        assert response.json()["detail"] == "البريد الإلكتروني غير صحيح"
        mock_mongo_db.accounts.insert_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_signup_rejects_short_password(self, api, mock_mongo_db):
        payload = {"name": "سارة أحمد", "email": "sara@example.com", "phone": "0501234567", "password": "123"}

        async with client(api) as ac:
            response = await ac.post("/auth/signup", json=payload)

        assert response.status_code == 422
        assert response.json()["detail"] == "كلمة المرور يجب أن تحتوي على 6 أحرف على الأقل"
        mock_mongo_db.accounts.insert_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_signin_rejects_malformed_email(self, api):
        async with client(api) as ac:
            response = await ac.post("/auth/signin", json={"email": "a@b..c", "password": "secret1"})

        assert response.status_code == 422
        assert response.json()["detail"] == "البريد الإلكتروني غير صحيح"

    @pytest.mark.asyncio
    async def test_health(self, api):
        async with client(api) as ac:
            response = await ac.get("/health")

        assert response.json() == {"status": "healthy"}
