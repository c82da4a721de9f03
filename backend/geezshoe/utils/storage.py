# backend/geezshoe/utils/storage.py
import logging
import re
import time
import uuid
from pathlib import Path
from typing import Iterable, List, Optional

from geezshoe.config import settings

logger = logging.getLogger(__name__)

PRODUCT_BUCKET = "product-images"
COMPANY_BUCKET = "company-ads"
ALLOWED_IMAGE_TYPES = {"image/jpeg": "jpg", "image/png": "png", "image/webp": "webp"}


def slugify(name: str) -> str:
    return re.sub(r"[^a-z0-9]", "-", (name or "").strip().lower()) or "item"


def unique_name(ext: str) -> str:
    # <timestamp>-<random>.<ext>, never reused
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}.{ext}"


class ObjectStorage:
    """Files grouped in buckets on disk, served under <base_url>/storage/<bucket>/<path>."""

    def __init__(self, root: str, base_url: str):
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")

    def _file(self, bucket: str, path: str) -> Path:
        target = (self.root / bucket / path).resolve()
        bucket_root = (self.root / bucket).resolve()
        if bucket_root not in target.parents:
            raise ValueError(f"Invalid object path: {path}")
        return target

    def upload(self, bucket: str, path: str, data: bytes) -> str:
        target = self._file(bucket, path)
        if target.exists():
            raise FileExistsError(f"Object already exists: {bucket}/{path}")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
        return path

    def get_public_url(self, bucket: str, path: str) -> str:
        return f"{self.base_url}/storage/{bucket}/{path}"

    def path_from_public_url(self, bucket: str, url: str) -> Optional[str]:
        marker = f"/storage/{bucket}/"
        if not url or marker not in url:
            return None
        return url.split(marker, 1)[1] or None

    def remove(self, bucket: str, paths: Iterable[str]) -> List[str]:
        removed = []
        for path in paths:
            target = self._file(bucket, path)
            if target.exists():
                target.unlink()
                removed.append(path)
        return removed

    def remove_public_urls(self, bucket: str, urls: Iterable[str]) -> None:
        """Best-effort delete of objects behind public URLs; failures are only logged."""
        for url in urls:
            path = self.path_from_public_url(bucket, url)
            if not path:
                continue
            try:
                self.remove(bucket, [path])
            except (OSError, ValueError) as e:
                logger.warning("Failed to delete image %s: %s", path, e)


storage = ObjectStorage(settings.STORAGE_DIR, settings.PUBLIC_BASE_URL)

def get_storage() -> ObjectStorage:
    return storage
