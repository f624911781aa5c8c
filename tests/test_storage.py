"""Image storage tests."""
import pytest

from api.services.storage import ImageStorage, allowed_file
from shared.config import Settings
from shared.exceptions import ValidationError


class TestImageStorage:
    """Tests for upload validation and paths."""

    @pytest.fixture
    def storage(self, tmp_path):
        return ImageStorage(Settings(upload_dir=str(tmp_path), media_url_prefix="/media/", max_upload_mb=1))

    def test_allowed_extensions(self):
        assert allowed_file("cover.PNG")
        assert not allowed_file("script.php")
        assert not allowed_file("noextension")

    @pytest.mark.asyncio
    async def test_image_stored_under_account_prefix(self, storage, tmp_path):
        stored = await storage.save_image("acc_test001", "cover.jpg", b"\xff\xd8\xff")

        assert stored["path"].startswith("acc_test001/")
        assert stored["path"].endswith(".jpg")
        assert stored["url"] == f"/media/{stored['path']}"
        assert (tmp_path / stored["path"]).read_bytes() == b"\xff\xd8\xff"

    @pytest.mark.asyncio
    async def test_rejects_unsupported_type(self, storage):
        with pytest.raises(ValidationError):
            await storage.save_image("acc_test001", "../../etc/passwd", b"root")

    @pytest.mark.asyncio
    async def test_rejects_oversized_image(self, storage):
        with pytest.raises(ValidationError):
            await storage.save_image("acc_test001", "big.png", b"0" * (1024 * 1024 + 1))

    @pytest.mark.asyncio
    async def test_arabic_filename_keeps_extension(self, storage, tmp_path):
        stored = await storage.save_image("acc_test001", "صورة الغلاف.png", b"\x89PNG")

        assert stored["path"].startswith("acc_test001/")
        assert stored["path"].endswith(".png")
        assert (tmp_path / stored["path"]).read_bytes() == b"\x89PNG"
