"""Image storage under a per-account path prefix."""
import asyncio
import logging
import time
from pathlib import Path
from typing import Dict

from werkzeug.utils import secure_filename

from shared.config import Settings, settings
from shared.exceptions import StorageError, ValidationError

logger = logging.getLogger(__name__)


ALLOWED_EXTENSIONS = {"png", "jpg", "jpeg", "gif", "webp"}


def allowed_file(filename: str) -> bool:
    return "." in filename and filename.rsplit(".", 1)[1].lower() in ALLOWED_EXTENSIONS


class ImageStorage:
    """Stores uploads on disk and hands back their public URL."""

    def __init__(self, config: Settings = settings):
        self.root = Path(config.upload_dir)
        self.url_prefix = config.media_url_prefix.rstrip("/")
        self.max_bytes = config.max_upload_mb * 1024 * 1024
        self.max_upload_mb = config.max_upload_mb

    def public_url(self, relative_path: str) -> str:
        return f"{self.url_prefix}/{relative_path}"

    async def save_image(self, account_id: str, filename: str, data: bytes) -> Dict[str, str]:
        """
        Validate and store an image as ``<account_id>/<millis>.<ext>``.

        Only the extension of the client filename is kept, so names in any
        script are accepted.
        """
        filename = filename or ""
        if not allowed_file(filename):
            raise ValidationError("نوع الملف غير مدعوم")
        if len(data) > self.max_bytes:
            raise ValidationError(
                f"حجم الصورة يجب أن يكون أقل من {self.max_upload_mb} ميجابايت"
            )

        ext = filename.rsplit(".", 1)[1].lower()
        relative_path = f"{secure_filename(account_id)}/{int(time.time() * 1000)}.{ext}"
        target = self.root / relative_path

        try:
            await asyncio.to_thread(self._write, target, data)
        except OSError as e:
            logger.error(f"Error uploading image: {e}")
            raise StorageError() from e

        logger.info(f"Image stored at {relative_path}")
        return {"path": relative_path, "url": self.public_url(relative_path)}

    @staticmethod
    def _write(target: Path, data: bytes) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
