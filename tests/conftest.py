import asyncio

import fakeredis
import fakeredis.aioredis
import pytest
from fastapi.testclient import TestClient

from catan_boards.app import create_app
from catan_boards.config import Config
from catan_boards.state import BoardServices


class TestConfig(Config):
    REDIS_URL = 'redis://fake'
    BCRYPT_ROUNDS = 4
    DELETE_MAX_ATTEMPTS = 3
    DELETE_RETRY_BACKOFF = 0
    CORS_ORIGINS = '*'
    LOG_FILE = ''


PASSWORD = 'sheep-for-wood'


def fake_factory(server):
    def factory(config):
        return fakeredis.aioredis.FakeRedis(server=server, decode_responses=True)
    return factory


@pytest.fixture()
def redis_server():
    return fakeredis.FakeServer()


@pytest.fixture()
def app(redis_server):
    return create_app(TestConfig, redis_factory=fake_factory(redis_server))


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def board(client):
    res = client.post('/api/boards', json={'name': 'River Traders', 'slug': 'river-traders', 'password': PASSWORD})
    assert res.status_code == 201
    return res.json()


def auth(password=PASSWORD):
    return {'Authorization': f'Bearer {password}'}


def game(**points):
    return {'players': [{'name': name, 'points': value} for name, value in points.items()]}


@pytest.fixture()
def run_services(redis_server):
    """Run ``coro_fn(services)`` on a fresh loop against the shared fake server."""
    def runner(coro_fn):
        async def main():
            services = BoardServices.build(fake_factory(redis_server)(TestConfig), TestConfig)
            try:
                return await coro_fn(services)
            finally:
                await services.close()
        return asyncio.run(main())
    return runner
