"""Data Access Object (DAO) implementation for managing short links in Redis

This module provides a Redis-based implementation of ShortLinkBaseDAO.

Responsibilities:
    - Insert and retrieve short links from Redis;
    - Allocate monotonically increasing ids from a global counter;
    - Translate Redis failures into DAO exceptions.

Data layout:
    <prefix>:links:<alias>    HASH {id: <int>, url: <target url>}
    <prefix>:counters:links   STRING (INCR-ed once per successful insert)

Classes:
    ShortLinkRedisDAO:
        DAO for storing and retrieving short links in a Redis datastore.

Example:
    >>> from linkalias.dao.redis import ShortLinkRedisDAO

    >>> dao = ShortLinkRedisDAO(prefix="linkalias:dev")

    >>> dao.save_url("https://example.com/page", "abc123")
    1
    >>> dao.get_url("abc123")
    'https://example.com/page'
"""

from beartype import beartype

from linkalias.models import ShortLinkModel
from linkalias.dao.base import ShortLinkBaseDAO
from linkalias.dao.redis.mixins import RedisClientMixin
from linkalias.dao.redis.helpers import handle_redis_errors
from linkalias.dao.exceptions import AliasConflictError, AliasNotFoundError, DataStoreError


# KEYS[1] = link hash key, KEYS[2] = global counter key, ARGV[1] = target URL
# Returns the new link id, or 0 when the alias is already taken.
SAVE_URL_LUA = r"""
if redis.call('EXISTS', KEYS[1]) == 1 then
  return 0
end
local id = redis.call('INCR', KEYS[2])
redis.call('HSET', KEYS[1], 'id', id, 'url', ARGV[1])
return id
"""


class ShortLinkRedisDAO(RedisClientMixin, ShortLinkBaseDAO):
    """Redis-based Data Access Object (DAO) for managing short links

    This class implements the ShortLinkBaseDAO interface using Redis as a data store.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        save_url(target_url: str, alias: str, **kwargs) -> int:
            Insert a short link and allocate its id atomically.
            Raises AliasConflictError when the alias is already taken.
            Raises DataStoreError on Redis failures.

        get_link(alias: str, **kwargs) -> ShortLinkModel:
            Retrieve a short link by alias.
            Raises AliasNotFoundError when the alias doesn't exist.
            Raises DataStoreError on Redis failures.
    """

    @handle_redis_errors
    @beartype
    def save_url(self, target_url: str, alias: str, **kwargs) -> int:
        """Insert a short link into Redis

        The existence check, id allocation and write run inside one Lua script,
        which Redis executes atomically. Of two concurrent inserts with the same
        alias exactly one gets an id; the other observes AliasConflictError.
        Ids are only consumed by successful inserts.

        Args:
            target_url (str):
                Absolute URL the alias redirects to.
            alias (str):
                Unique short identifier.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            int: id of the new short link.

        Raises:
            AliasConflictError:
                If a short link with the same alias already exists.
            DataStoreError:
                If a Redis failure occurs.

        Example:
            >>> dao.save_url('https://example.com', 'abc123')
            42
        """
        link_key = self.keys.link_key(alias)
        counter_key = self.keys.counter_key()

        link_id = int(self.redis.eval(SAVE_URL_LUA, 2, link_key, counter_key, target_url))
        if link_id == 0:
            raise AliasConflictError(f"Short link with alias '{alias}' already exists.")

        return link_id

    @handle_redis_errors
    @beartype
    def get_link(self, alias: str, **kwargs) -> ShortLinkModel:
        """Retrieve a stored short link by alias

        Args:
            alias (str):
                The alias of the short link.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortLinkModel:
                The retrieved short link.

        Raises:
            AliasNotFoundError:
                If the alias does not exist in Redis.
            DataStoreError:
                If a Redis failure occurs or the stored hash is malformed.

        Example:
            >>> dao.get_link('abc123')
            ShortLinkModel(id=42, alias='abc123', target='https://example.com')
        """
        record = self.redis.hgetall(self.keys.link_key(alias))
        if not record:
            raise AliasNotFoundError(f"Short link with alias '{alias}' not found.")

        try:
            return ShortLinkModel(id=int(record['id']), alias=alias, target=record['url'])
        except (KeyError, ValueError) as e:
            raise DataStoreError(f"Corrupted short link record for alias '{alias}'.") from e
