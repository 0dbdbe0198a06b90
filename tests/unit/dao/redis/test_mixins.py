"""Unit tests for RedisClientMixin.

Test coverage includes:
    1. Client construction
       - Builds a decoding client from redis_* parameters.
       - Rejects the decode_responses option (it is not configurable).
       - Adopts a caller-provided decoding client.
       - Refuses a caller-provided client that returns bytes.
    2. Healthcheck behavior
       - Healthcheck pings Redis.
       - Unreachable Redis raises DataStoreError (or returns False on request).
"""

from unittest.mock import MagicMock, patch

import pytest
import redis

from linkalias.dao.exceptions import DataStoreError
from linkalias.exceptions import BadConfigurationError
from linkalias.dao.redis.mixins import RedisClientMixin


# -------------------------------
# Fixtures
# -------------------------------


def make_client(**connection_kwargs):
    kwargs = {'host': 'redis', 'port': 6379, 'db': 0, 'decode_responses': True} | connection_kwargs
    _redis_client = MagicMock(spec=redis.Redis, connection_pool=MagicMock(spec=redis.ConnectionPool, connection_kwargs=kwargs))
    _redis_client.ping.return_value = True
    return _redis_client


@pytest.fixture
def redis_client():
    return make_client()


# -------------------------------
# 1. Client construction
# -------------------------------


def test_initialize_without_redis_client():
    """Ensure the mixin builds a decoding client from redis_* parameters."""
    redis_config = {
        'redis_host': 'redis',
        'redis_port': '6379',
        'redis_db': '1',
        'redis_username': 'default',
        'redis_password': 'password',
        'redis_socket_timeout': 2.5,
    }

    with patch('linkalias.dao.redis.mixins.redis.Redis', autospec=True) as redis_mock:
        mixin = RedisClientMixin(**redis_config, prefix='testapp:test')

        redis_mock.assert_called_once_with(
            host='redis',
            port=6379,
            db=1,
            username='default',
            password='password',
            socket_timeout=2.5,
            decode_responses=True,
        )
        assert mixin.redis is redis_mock.return_value
        redis_mock.return_value.ping.assert_called_once()


def test_initialize_rejects_decode_responses_option():
    with pytest.raises(TypeError):
        RedisClientMixin(redis_decode_responses=False)


def test_initialize_with_redis_client(redis_client):
    mixin = RedisClientMixin(redis_client=redis_client, prefix='testapp:test')

    assert mixin.redis is redis_client
    assert mixin.keys.link_key('ex1') == 'testapp:test:links:ex1'
    redis_client.ping.assert_called_once()


@pytest.mark.parametrize('connection_kwargs', [{'decode_responses': False}, {'decode_responses': None}])
def test_initialize_with_bytes_redis_client(connection_kwargs):
    """Ensure a client returning bytes is refused before any command runs."""
    redis_client = make_client(**connection_kwargs)

    with pytest.raises(BadConfigurationError, match='decode_responses=True'):
        RedisClientMixin(redis_client=redis_client)
    redis_client.ping.assert_not_called()


def test_initialize_with_unreachable_redis():
    exception_message = "Can't connect to Redis at 203.0.113.1:18000/5. Check the provided configuration parameters."

    with patch('linkalias.dao.redis.mixins.redis.Redis', autospec=True) as redis_mock:
        redis_mock_instance = redis_mock.return_value
        redis_mock_instance.ping.side_effect = redis.exceptions.ConnectionError('Connection error')
        redis_mock_instance.connection_pool = MagicMock()
        redis_mock_instance.connection_pool.connection_kwargs = {'host': '203.0.113.1', 'port': 18000, 'db': 5}

        with pytest.raises(DataStoreError, match=exception_message):
            RedisClientMixin(redis_host='203.0.113.1', redis_port=18000, redis_db=5)


# -------------------------------
# 2. Healthcheck behavior
# -------------------------------


def test_healthcheck_passes(redis_client):
    mixin = RedisClientMixin(redis_client=redis_client)

    assert mixin._healthcheck() is True
    assert redis_client.ping.call_count == 2  # once in initialization, once separately


def test_healthcheck_fails(redis_client):
    redis_client.ping.side_effect = redis.exceptions.ConnectionError('Connection error')

    with pytest.raises(DataStoreError, match="Can't connect to Redis at redis:6379/0."):
        RedisClientMixin(redis_client=redis_client)


def test_healthcheck_without_raising(redis_client):
    mixin = RedisClientMixin(redis_client=redis_client)
    redis_client.ping.side_effect = redis.exceptions.ConnectionError('Connection error')

    assert mixin._healthcheck(raise_error=False) is False
