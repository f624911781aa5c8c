"""Pytest configuration and fixtures."""
import pytest
from datetime import datetime, timezone
from unittest.mock import MagicMock, AsyncMock

from api.services.authorization import SessionContext


NOW = datetime(2024, 2, 4, 10, 30, tzinfo=timezone.utc)


def make_cursor(documents):
    """Mock a motor cursor supporting sort/limit chaining and to_list."""
    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.to_list = AsyncMock(return_value=documents)
    return cursor


@pytest.fixture
def mock_mongo_db():
    """Create mock MongoDB database."""
    db = MagicMock()

    # Mock collections
    for name in ("accounts", "profiles", "user_roles", "articles", "news", "products"):
        collection = MagicMock()
        collection.find_one = AsyncMock(return_value=None)
        collection.insert_one = AsyncMock()
        collection.update_one = AsyncMock(return_value=MagicMock(matched_count=1, modified_count=1))
        collection.update_many = AsyncMock(return_value=MagicMock(matched_count=0, modified_count=0))
        collection.delete_one = AsyncMock(return_value=MagicMock(deleted_count=1))
        collection.delete_many = AsyncMock(return_value=MagicMock(deleted_count=0))
        collection.insert_many = AsyncMock()
        collection.count_documents = AsyncMock(return_value=0)
        collection.find_one_and_update = AsyncMock(return_value=None)
        collection.find = MagicMock(return_value=make_cursor([]))
        setattr(db, name, collection)

    db.__getitem__.side_effect = lambda name: getattr(db, name)
    return db


@pytest.fixture
def mock_redis_client():
    """Create mock Redis client."""
    redis = AsyncMock()

    redis.get = AsyncMock(return_value=None)
    redis.set = AsyncMock(return_value=True)
    redis.delete = AsyncMock(return_value=1)
    redis.sadd = AsyncMock(return_value=1)
    redis.srem = AsyncMock(return_value=1)
    redis.smembers = AsyncMock(return_value=set())
    redis.expire = AsyncMock(return_value=True)

    return redis


@pytest.fixture
def mock_notifier():
    """Create mock email sender."""
    notifier = MagicMock()
    notifier.send_welcome = AsyncMock()
    notifier.send_password_reset = AsyncMock()
    return notifier


@pytest.fixture
def sample_profile():
    """Create sample writer profile."""
    return {
        "_id": "prof_test001",
        "user_id": "acc_test001",
        "name": "سارة أحمد",
        "email": "sara@example.com",
        "phone": "0501234567",
        "bio": "كاتبة في التقنية",
        "photo_url": None,
        "linkedin_url": "https://linkedin.com/in/sara",
        "twitter_url": None,
        "status": "approved",
        "created_at": NOW,
        "updated_at": NOW,
    }


@pytest.fixture
def pending_profile(sample_profile):
    """Create sample profile awaiting approval."""
    return {**sample_profile, "_id": "prof_test002", "user_id": "acc_test002", "status": "pending"}


@pytest.fixture
def sample_article():
    """Create sample pending article."""
    return {
        "_id": "art_test001",
        "title": "مستقبل الذكاء الاصطناعي",
        "excerpt": "نظرة على التحولات القادمة",
        "content": "<p>المحتوى</p>",
        "cover_image_url": "/media/acc_test001/1707042600000.png",
        "author_id": "prof_test001",
        "product_id": None,
        "views": 0,
        "status": "pending",
        "rejection_reason": None,
        "created_at": NOW,
        "updated_at": NOW,
    }


@pytest.fixture
def writer_session(sample_profile):
    """Session of an approved writer."""
    return SessionContext(
        token="tok_writer",
        account_id=sample_profile["user_id"],
        email=sample_profile["email"],
        roles=["writer"],
        profile=sample_profile,
    )


@pytest.fixture
def admin_session():
    """Session of an administrator without a writer profile."""
    return SessionContext(
        token="tok_admin",
        account_id="acc_admin001",
        email="admin@almonhna.sa",
        roles=["admin"],
        profile=None,
    )
