"""
Asset storage for uploaded post images.

Two interchangeable strategies share the ``store(data, original_name) -> url``
contract: LocalAssetStore writes into a directory served as static files,
RemoteAssetStore uploads to a Cloudinary-compatible image host. The strategy
is picked once at startup by ``build_asset_store``.
"""
import asyncio
import hashlib
import logging
import os
import tempfile
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional
from urllib.parse import quote

import httpx

from blogapi.core.config import Settings
from blogapi.core.errors import StorageError

logger = logging.getLogger(__name__)


class AssetStore(ABC):
    """Persists an uploaded binary and returns an absolute URL to it."""

    @abstractmethod
    async def store(self, data: bytes, original_name: str) -> str:
        """Store ``data`` and return its URL, or raise StorageError."""


class LocalAssetStore(AssetStore):
    """Writes uploads to ``upload_dir`` and builds URLs under the static mount."""

    def __init__(self, upload_dir: str, public_base_url: str, static_path: str = "/uploads"):
        self.upload_dir = Path(upload_dir)
        self.public_base_url = public_base_url.rstrip("/")
        self.static_path = "/" + static_path.strip("/")

    def generate_filename(self, original_name: str) -> str:
        # Millisecond prefix keeps repeated uploads of the same name apart
        return f"{int(time.time() * 1000)}-{Path(original_name).name}"

    def _write(self, filename: str, data: bytes) -> None:
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.upload_dir, prefix=".upload-")
        try:
            with os.fdopen(fd, "wb") as tmp:
                tmp.write(data)
            os.replace(tmp_path, self.upload_dir / filename)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    async def store(self, data: bytes, original_name: str) -> str:
        filename = self.generate_filename(original_name)
        try:
            await asyncio.to_thread(self._write, filename, data)
        except OSError as e:
            logger.error(f"Failed to write upload {filename}: {e}")
            raise StorageError(f"Could not store {original_name}") from e

        url = f"{self.public_base_url}{self.static_path}/{quote(filename)}"
        logger.info(f"Stored upload locally: {url}")
        return url


class RemoteAssetStore(AssetStore):
    """Uploads to a Cloudinary-compatible image host under a fixed folder."""

    def __init__(
        self,
        base_url: str,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        folder: str = "blog",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.upload_url = f"{base_url.rstrip('/')}/{cloud_name}/image/upload"
        self.api_key = api_key
        self.api_secret = api_secret
        self.folder = folder
        self.timeout = timeout
        self.transport = transport

    def sign(self, params: dict) -> str:
        """SHA-1 over the sorted ``key=value`` pairs followed by the secret."""
        to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params))
        return hashlib.sha1((to_sign + self.api_secret).encode()).hexdigest()

    async def store(self, data: bytes, original_name: str) -> str:
        params = {"folder": self.folder, "timestamp": str(int(time.time()))}
        form = {**params, "api_key": self.api_key, "signature": self.sign(params)}
        files = {"file": (Path(original_name).name, data)}

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.upload_url, data=form, files=files)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Image host rejected {original_name}: HTTP {e.response.status_code}")
            raise StorageError(f"Image host rejected {original_name}") from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Upload of {original_name} failed: {e}")
            raise StorageError(f"Could not upload {original_name}") from e

        url = None
        if isinstance(payload, dict):
            url = payload.get("secure_url") or payload.get("url")
        if not url:
            raise StorageError(f"Image host returned no URL for {original_name}")

        logger.info(f"Uploaded {original_name} to image host: {url}")
        return url


def build_asset_store(settings: Settings) -> AssetStore:
    """Create the asset store selected by ``settings.asset_storage``."""
    if settings.asset_storage == "local":
        return LocalAssetStore(
            upload_dir=settings.upload_dir,
            public_base_url=settings.public_base_url,
            static_path=settings.static_path,
        )

    if settings.asset_storage == "remote":
        missing = [
            name
            for name in ("asset_host_cloud_name", "asset_host_api_key", "asset_host_api_secret")
            if not getattr(settings, name)
        ]
        if missing:
            raise ValueError(f"Remote asset storage requires: {', '.join(missing)}")
        return RemoteAssetStore(
            base_url=settings.asset_host_url,
            cloud_name=settings.asset_host_cloud_name,
            api_key=settings.asset_host_api_key,
            api_secret=settings.asset_host_api_secret,
            folder=settings.asset_host_folder,
            timeout=settings.asset_host_timeout,
        )

    raise ValueError(f"Unknown asset storage strategy: {settings.asset_storage}")
