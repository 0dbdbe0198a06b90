from linkalias.dao.redis.redis_key_schema import RedisKeySchema
from linkalias.dao.redis.mixins import RedisClientMixin
from linkalias.dao.redis.short_link_redis_dao import ShortLinkRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'ShortLinkRedisDAO',
]
