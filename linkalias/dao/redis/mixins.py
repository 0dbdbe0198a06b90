"""Redis connection handling shared by Redis-backed DAOs.

Short link hashes are read back as `{'id': ..., 'url': ...}` with str keys,
so every client a DAO works with must decode responses. Clients built here
always do. Clients passed in by the caller are checked once, before the
first PING.

Classes:
    - RedisClientMixin: owns the Redis client and key schema of a DAO.

Example:
        >>> class ShortLinkRedisDAO(RedisClientMixin, ShortLinkBaseDAO):
        ...     pass
        ...
        >>> dao = ShortLinkRedisDAO(redis_host='redis', prefix='linkalias:prod')
        >>> dao.keys.link_key('ex1')
        'linkalias:prod:links:ex1'
"""

from typing import Optional

import redis

from linkalias.dao.redis.redis_key_schema import RedisKeySchema
from linkalias.dao.exceptions import DataStoreError
from linkalias.exceptions import BadConfigurationError


class RedisClientMixin:
    """Give a DAO a ready, decoding Redis client

    Attributes:
        redis (redis.Redis):
            Client used for every DAO operation.
        keys (RedisKeySchema):
            Builds the namespaced keys for links and the id counter.
    """

    def __init__(
        self,
        redis_host: str = 'localhost',
        redis_port: int | str = 6379,
        redis_db: int | str = 0,
        redis_username: Optional[str] = None,
        redis_password: Optional[str] = None,
        redis_socket_timeout: Optional[float] = None,
        redis_client: Optional[redis.Redis] = None,
        prefix: Optional[str] = None,
    ):
        """Connect to Redis (or adopt `redis_client`) and PING it

        Connection parameters are ignored when `redis_client` is given.

        Raises:
            BadConfigurationError:
                If `redis_client` was created without decode_responses=True.
            DataStoreError:
                If Redis doesn't answer the PING.
        """
        if redis_client is None:
            redis_client = redis.Redis(
                host=redis_host,
                port=int(redis_port),
                db=int(redis_db),
                username=redis_username,
                password=redis_password,
                socket_timeout=redis_socket_timeout,
                decode_responses=True,
            )
        elif not redis_client.connection_pool.connection_kwargs.get('decode_responses'):
            raise BadConfigurationError('Redis client must be created with decode_responses=True.')

        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)

        self._healthcheck()

    def _endpoint(self) -> str:
        info = self.redis.connection_pool.connection_kwargs
        return f"{info.get('host')}:{info.get('port')}/{info.get('db')}"

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """PING Redis; return False instead of raising when raise_error is off"""
        try:
            self.redis.ping()
        except redis.exceptions.ConnectionError as e:
            if not raise_error:
                return False
            raise DataStoreError(f"Can't connect to Redis at {self._endpoint()}. Check the provided configuration parameters.") from e
        return True
