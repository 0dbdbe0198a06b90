"""Build the short link DAO selected by the application configuration.

Functions:
    short_link_dao(app_config: dict) -> ShortLinkBaseDAO
        Instantiate the DAO for whichever backend section `load_config()` returned.

Example:
    >>> from linkalias.utils import load_config
    >>> from linkalias.dao.factory import short_link_dao
    >>> dao = short_link_dao(load_config('redirect_url'))
    >>> type(dao).__name__
    'ShortLinkSQLiteDAO'
"""

import logging

from linkalias.dao.base import ShortLinkBaseDAO
from linkalias.dao.memory import ShortLinkMemoryDAO
from linkalias.dao.redis import ShortLinkRedisDAO
from linkalias.dao.sqlite import ShortLinkSQLiteDAO
from linkalias.types import AppConfig
from linkalias.exceptions import BadConfigurationError
from linkalias.utils.config import app_prefix


logger = logging.getLogger(__name__)

# Memory stores live as long as the process (i.e. across warm invocations)
_memory_dao: ShortLinkMemoryDAO | None = None


def short_link_dao(app_config: AppConfig) -> ShortLinkBaseDAO:
    """Instantiate the DAO for the backend configured for a handler

    Args:
        app_config (dict):
            Handler configuration as returned by `load_config()`, e.g.
            {'sqlite': {'storage_path': './storage/storage.db'}, 'auth': {...}}.

    Returns:
        ShortLinkBaseDAO: a ready-to-use DAO.

    Raises:
        BadConfigurationError:
            If no supported backend section is present, or its parameters are invalid.
        DataStoreError:
            If the data store can't be reached or prepared.
    """
    global _memory_dao

    if 'sqlite' in app_config:
        logger.debug('Using SQLite as the backend database for short links.')
        try:
            return ShortLinkSQLiteDAO(**app_config['sqlite'])
        except (TypeError, ValueError) as e:
            raise BadConfigurationError(f'Invalid SQLite configuration: {e}') from e

    if 'redis' in app_config:
        logger.debug('Using Redis as the backend database for short links.')
        redis_config = {f'redis_{k}': v for k, v in app_config['redis'].items()}
        try:
            return ShortLinkRedisDAO(**redis_config, prefix=app_prefix())
        except (TypeError, ValueError) as e:
            raise BadConfigurationError(f'Invalid Redis configuration: {e}') from e

    if 'memory' in app_config:
        logger.debug('Using process memory as the backend database for short links.')
        if _memory_dao is None:
            _memory_dao = ShortLinkMemoryDAO()
        return _memory_dao

    raise BadConfigurationError(f'No supported storage backend configured (given sections: {sorted(app_config)}).')
