"""
Test fixtures for blog API tests.

MongoDB is replaced by an in-memory collection exposing the motor methods the
repositories call; the asset store is replaced by a recorder.
"""

from types import SimpleNamespace

import bson
import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import PyMongoError

from blogapi.core.config import Settings
from blogapi.core.errors import StorageError
from blogapi.core.mongodb import CODEC_OPTIONS
from blogapi.main import create_app
from blogapi.services.asset_store import AssetStore
from blogapi.services.repository import Repositories


class InMemoryCursor:
    def __init__(self, documents):
        self.documents = documents

    async def to_list(self, length=None):
        return self.documents if length is None else self.documents[:length]


def _wire(document):
    """Pass a document through BSON the way the motor client does."""
    return bson.decode(bson.encode(document), codec_options=CODEC_OPTIONS)


class InMemoryCollection:
    """Async collection double with insert_one / find / find_one.

    Documents are BSON-encoded on the way in and decoded on the way out, so
    millisecond datetime precision and timezone handling match a real server.
    """

    def __init__(self):
        self.documents = []
        self.fail_writes = False
        self.fail_reads = False

    async def insert_one(self, document):
        if self.fail_writes:
            raise PyMongoError("write failed")
        document.setdefault("_id", ObjectId())
        self.documents.append(_wire(document))
        return SimpleNamespace(inserted_id=document["_id"])

    def find(self, query):
        if self.fail_reads:
            raise PyMongoError("read failed")
        return InMemoryCursor([_wire(d) for d in self.documents])

    async def find_one(self, query):
        if self.fail_reads:
            raise PyMongoError("read failed")
        for document in self.documents:
            if all(document.get(k) == v for k, v in query.items()):
                return _wire(document)
        return None


class InMemoryMongoDB:
    def __init__(self):
        self.collections = {}

    def get_collection(self, collection_name):
        return self.collections.setdefault(collection_name, InMemoryCollection())


class RecordingAssetStore(AssetStore):
    """Returns a fixed-host URL and remembers what it stored."""

    def __init__(self):
        self.stored = []
        self.fail = False

    async def store(self, data, original_name):
        if self.fail:
            raise StorageError("host down")
        self.stored.append((original_name, data))
        return f"https://assets.example.com/blog/{original_name}"


@pytest.fixture
def mongodb():
    return InMemoryMongoDB()


@pytest.fixture
def repositories(mongodb):
    return Repositories(mongodb)


@pytest.fixture
def asset_store():
    return RecordingAssetStore()


@pytest.fixture
def settings(tmp_path):
    return Settings(
        asset_storage="local",
        upload_dir=str(tmp_path / "uploads"),
        public_base_url="http://testserver",
        allowed_origins="http://localhost:5173",
    )


@pytest.fixture
def client(settings, repositories, asset_store):
    """Test client without the lifespan, wired to in-memory storage."""
    app = create_app(settings)
    app.state.repositories = repositories
    app.state.asset_store = asset_store
    return TestClient(app)
