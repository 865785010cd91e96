"""
Tests for asset storage strategies.

Tests cover:
- Local disk writes and generated URLs
- Remote uploads against a mocked image host
- Strategy selection from settings
"""

import hashlib
from urllib.parse import urlparse

import httpx
import pytest

from blogapi.core.config import Settings
from blogapi.core.errors import StorageError
from blogapi.services.asset_store import (
    LocalAssetStore,
    RemoteAssetStore,
    build_asset_store,
)


class TestLocalAssetStore:
    @pytest.mark.asyncio
    async def test_writes_file_and_returns_absolute_url(self, tmp_path):
        store = LocalAssetStore(str(tmp_path), "http://localhost:3000/", "/uploads")

        url = await store.store(b"image-bytes", "a.png")

        parsed = urlparse(url)
        assert parsed.scheme == "http"
        assert parsed.netloc == "localhost:3000"
        assert parsed.path.startswith("/uploads/")
        filename = parsed.path.rsplit("/", 1)[1]
        prefix, original = filename.split("-", 1)
        assert prefix.isdigit()
        assert original == "a.png"
        assert (tmp_path / filename).read_bytes() == b"image-bytes"

    @pytest.mark.asyncio
    async def test_strips_directories_from_original_name(self, tmp_path):
        store = LocalAssetStore(str(tmp_path), "http://localhost:3000")

        url = await store.store(b"x", "../../etc/a.png")

        assert url.endswith("-a.png")
        assert len(list(tmp_path.iterdir())) == 1

    @pytest.mark.asyncio
    async def test_quotes_spaces_in_url(self, tmp_path):
        store = LocalAssetStore(str(tmp_path), "http://localhost:3000")
        url = await store.store(b"x", "my photo.png")
        assert "my%20photo.png" in url

    @pytest.mark.asyncio
    async def test_write_error_raises_storage_error(self, tmp_path):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")
        store = LocalAssetStore(str(blocker), "http://localhost:3000")

        with pytest.raises(StorageError):
            await store.store(b"x", "a.png")


def _remote_store(handler):
    return RemoteAssetStore(
        base_url="https://api.images.test/v1_1",
        cloud_name="demo",
        api_key="key",
        api_secret="secret",
        folder="blog",
        transport=httpx.MockTransport(handler),
    )


class TestRemoteAssetStore:
    @pytest.mark.asyncio
    async def test_uploads_signed_request_and_returns_secure_url(self):
        seen = {}

        def handler(request: httpx.Request):
            seen["url"] = str(request.url)
            seen["body"] = request.read()
            return httpx.Response(
                200, json={"secure_url": "https://res.images.test/demo/blog/a.png"}
            )

        store = _remote_store(handler)
        url = await store.store(b"image-bytes", "a.png")

        assert url == "https://res.images.test/demo/blog/a.png"
        assert seen["url"] == "https://api.images.test/v1_1/demo/image/upload"
        assert b'name="folder"' in seen["body"]
        assert b'filename="a.png"' in seen["body"]
        assert b"image-bytes" in seen["body"]

    def test_signature_covers_sorted_params_and_secret(self):
        store = _remote_store(lambda request: httpx.Response(200))
        expected = hashlib.sha1(b"folder=blog&timestamp=100secret").hexdigest()
        assert store.sign({"timestamp": "100", "folder": "blog"}) == expected

    @pytest.mark.asyncio
    async def test_rejection_raises_storage_error(self):
        store = _remote_store(lambda request: httpx.Response(401, json={"error": "bad key"}))
        with pytest.raises(StorageError):
            await store.store(b"x", "a.png")

    @pytest.mark.asyncio
    async def test_network_error_raises_storage_error(self):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        with pytest.raises(StorageError):
            await _remote_store(handler).store(b"x", "a.png")

    @pytest.mark.asyncio
    async def test_response_without_url_raises_storage_error(self):
        store = _remote_store(lambda request: httpx.Response(200, json={"public_id": "a"}))
        with pytest.raises(StorageError):
            await store.store(b"x", "a.png")


class TestBuildAssetStore:
    def test_local_by_default(self, tmp_path):
        store = build_asset_store(Settings(upload_dir=str(tmp_path)))
        assert isinstance(store, LocalAssetStore)

    def test_remote_when_configured(self):
        store = build_asset_store(
            Settings(
                asset_storage="remote",
                asset_host_cloud_name="demo",
                asset_host_api_key="key",
                asset_host_api_secret="secret",
            )
        )
        assert isinstance(store, RemoteAssetStore)
        assert store.upload_url == "https://api.cloudinary.com/v1_1/demo/image/upload"

    def test_remote_without_credentials_is_rejected(self):
        with pytest.raises(ValueError, match="asset_host_api_key"):
            build_asset_store(Settings(asset_storage="remote", asset_host_cloud_name="demo"))
