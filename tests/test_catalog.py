"""Public catalog tests."""
import pytest
from unittest.mock import AsyncMock

from api.services.catalog import PublicCatalogService
from database.repositories.content_repo import ContentKind, ContentStatus
from database.repositories.profile_repo import ProfileStatus
from shared.exceptions import NotFound
from tests.conftest import make_cursor


class TestPublicCatalog:
    """Tests for the approved-only read side."""

    @pytest.fixture
    def catalog(self, mock_mongo_db):
        return PublicCatalogService(mock_mongo_db)

    @pytest.mark.asyncio
    async def test_writers_listing_only_queries_approved(self, catalog, mock_mongo_db, sample_profile):
        mock_mongo_db.profiles.find = lambda query: make_cursor([sample_profile]) if query == {"status": ProfileStatus.APPROVED} else make_cursor([])

        writers = await catalog.list_writers()

        assert writers == [sample_profile]

    @pytest.mark.asyncio
    async def test_pending_writer_page_is_not_found(self, catalog, mock_mongo_db):
        mock_mongo_db.profiles.find_one = AsyncMock(return_value=None)

        with pytest.raises(NotFound):
            await catalog.get_writer("prof_test002")

        query = mock_mongo_db.profiles.find_one.call_args[0][0]
        assert query == {"_id": "prof_test002", "status": ProfileStatus.APPROVED}

    @pytest.mark.asyncio
    async def test_opening_item_increments_views_atomically(self, catalog, mock_mongo_db, sample_article, sample_profile):
        approved = {
            **sample_article,
            "status": ContentStatus.APPROVED,
            "views": 8,
            "content": '<p style="font-family: Arial; color: red">نص</p>',
        }
        mock_mongo_db.articles.find_one_and_update = AsyncMock(return_value=approved)
        mock_mongo_db.profiles.find_one = AsyncMock(return_value=sample_profile)

        item, author = await catalog.get_content(ContentKind.ARTICLES, approved["_id"])

        query, update = mock_mongo_db.articles.find_one_and_update.call_args[0]
        assert query == {"_id": approved["_id"], "status": ContentStatus.APPROVED}
        assert update == {"$inc": {"views": 1}}
        assert item["views"] == 8
        assert "font-family" not in item["content"]
        assert author == sample_profile

    @pytest.mark.asyncio
    async def test_pending_item_is_not_found(self, catalog, mock_mongo_db):
        mock_mongo_db.news.find_one_and_update = AsyncMock(return_value=None)

        with pytest.raises(NotFound):
            await catalog.get_content(ContentKind.NEWS, "news_pending")

    @pytest.mark.asyncio
    async def test_listing_filters_on_approved(self, catalog, mock_mongo_db, sample_article, sample_profile):
        approved = {**sample_article, "status": ContentStatus.APPROVED}
        mock_mongo_db.news.find = lambda query: make_cursor([approved])
        mock_mongo_db.profiles.find = lambda query: make_cursor([sample_profile])

        authored = await catalog.list_content(ContentKind.NEWS)

        assert authored == [(approved, sample_profile)]
