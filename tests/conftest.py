"""
Shared fixtures.

MongoDB is replaced by `FakeMongoClient` so tests never touch the network;
the fake answers `ping` immediately, or raises when built through the
`unreachable_mongo` fixture.
"""
import pytest
from pymongo.errors import ServerSelectionTimeoutError
from reset_api import create_app
from reset_api.config import Settings
from reset_api.db import mongo


class FakeAdmin:
    def __init__(self, error=None):
        self.error = error
        self.commands = []

    def command(self, name):
        self.commands.append(name)
        if self.error is not None:
            raise self.error
        return {"ok": 1.0}


class FakeMongoClient:
    ping_error = None

    def __init__(self, uri, **kwargs):
        self.uri = uri
        self.kwargs = kwargs
        self.admin = FakeAdmin(self.ping_error)
        self.closed = False

    def get_default_database(self, default=None):
        name = self.uri.rsplit('/', 1)[-1]
        return name or default

    def close(self):
        self.closed = True


class UnreachableMongoClient(FakeMongoClient):
    ping_error = ServerSelectionTimeoutError("localhost:27017: [Errno 111] Connection refused")


@pytest.fixture
def fake_mongo(monkeypatch):
    monkeypatch.setattr('reset_api.db.MongoClient', FakeMongoClient)
    yield mongo
    mongo.close()


@pytest.fixture
def unreachable_mongo(monkeypatch):
    monkeypatch.setattr('reset_api.db.MongoClient', UnreachableMongoClient)
    yield mongo
    mongo.close()


@pytest.fixture
def make_app(fake_mongo):
    """Factory: builds an app from Settings overrides and waits for the DB attempt."""
    def _make_app(**overrides):
        app = create_app(Settings(**overrides))
        app.config['TESTING'] = True
        mongo.wait(timeout=5)
        return app
    return _make_app


@pytest.fixture
def app(make_app):
    return make_app()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def production_client(make_app):
    app = make_app(environment='production', allowed_origins=('https://app.example.com',))
    return app.test_client()
