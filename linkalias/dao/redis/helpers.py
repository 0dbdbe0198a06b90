import functools
import redis
from typing import TypeVar, Any
from collections.abc import Callable

from linkalias.dao.exceptions import DataStoreError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def handle_redis_errors[F](method: F) -> F:
    """Wrap Redis-interacting DAO methods to translate Redis errors

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis operations which may raise redis.exceptions.RedisError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on connectivity issues with Redis
            or on any other failed Redis command.

    Example:
        >>> @handle_redis_errors
        ... def get_count(self):
        ...     return self.redis.get('count')
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except redis.exceptions.ConnectionError as e:
            info = self.redis.connection_pool.connection_kwargs
            raise DataStoreError(f"Can't connect to Redis at {info.get('host')}:{info.get('port')}/{info.get('db')}.") from e
        except redis.exceptions.RedisError as e:
            raise DataStoreError(f'Redis command failed in {method.__name__}(): {e}') from e

    return wrapper
