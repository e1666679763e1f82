import fnmatch

import pytest
from fastapi.testclient import TestClient
from redis import ConnectionError as RedisConnectionError

from exploding_kittens.main import app
from exploding_kittens.redis_client import get_redis


class FakeRedis:
    """In-memory stand-in for the few redis.asyncio commands the game uses."""

    def __init__(self):
        self.strings = {}
        self.lists = {}

    async def delete(self, *keys):
        removed = 0
        for key in keys:
            removed += int(self.strings.pop(key, None) is not None)
            removed += int(self.lists.pop(key, None) is not None)
        return removed

    async def rpush(self, key, *values):
        items = self.lists.setdefault(key, [])
        items.extend(str(v) for v in values)
        return len(items)

    async def lpop(self, key):
        items = self.lists.get(key)
        if not items:
            return None
        value = items.pop(0)
        if not items:
            del self.lists[key]
        return value

    async def get(self, key):
        return self.strings.get(key)

    async def set(self, key, value):
        self.strings[key] = str(value)
        return True

    async def scan_iter(self, match=None):
        for key in list(self.strings) + list(self.lists):
            if match is None or fnmatch.fnmatchcase(key, match):
                yield key


REFUSED = "Error 111 connecting to localhost:6379. Connection refused."


class BrokenRedis:
    """Every command fails as if the server were unreachable."""

    def __getattr__(self, name):
        async def fail(*args, **kwargs):
            raise RedisConnectionError(REFUSED)

        return fail

    async def scan_iter(self, match=None):
        raise RedisConnectionError(REFUSED)
        yield  # pragma: no cover


class FlakyRedis(FakeRedis):
    """Works like FakeRedis except for writes to the chosen keys.

    ``failing`` maps a command name to key prefixes; a matching call raises
    before touching the store, so earlier writes stay in place.
    """

    def __init__(self, failing):
        super().__init__()
        self.failing = failing

    def _check(self, command, key):
        for prefix in self.failing.get(command, ()):
            if key.startswith(prefix):
                raise RedisConnectionError(REFUSED)

    async def set(self, key, value):
        self._check("set", key)
        return await super().set(key, value)

    async def rpush(self, key, *values):
        self._check("rpush", key)
        return await super().rpush(key, *values)


@pytest.fixture()
def flaky_client():
    """Build a client over a FlakyRedis; returns ``(client, store)``."""

    def build(failing):
        store = FlakyRedis(failing)
        app.dependency_overrides[get_redis] = lambda: store
        return TestClient(app), store

    yield build
    app.dependency_overrides.clear()


@pytest.fixture()
def fake_redis():
    return FakeRedis()


@pytest.fixture()
def client(fake_redis):
    app.dependency_overrides[get_redis] = lambda: fake_redis
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def broken_client():
    app.dependency_overrides[get_redis] = lambda: BrokenRedis()
    yield TestClient(app)
    app.dependency_overrides.clear()
