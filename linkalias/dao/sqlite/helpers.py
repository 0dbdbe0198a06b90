import functools
import sqlite3
from typing import TypeVar, Any
from collections.abc import Callable

from linkalias.dao.exceptions import DataStoreError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def handle_sqlite_errors[F](method: F) -> F:
    """Wrap SQLite-interacting DAO methods to translate engine errors

    Conflicts on the alias column are translated by the DAO itself before they
    reach this decorator; everything left over (I/O errors, locked database,
    corruption, unrelated constraint violations) becomes a DataStoreError.

    Args:
        method (Callable[..., Any]):
            DAO method performing SQLite operations which may raise sqlite3.Error.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on SQLite failures.

    Example:
        >>> @handle_sqlite_errors
        ... def count(self):
        ...     with self._connect() as conn:
        ...         return conn.execute('SELECT COUNT(*) FROM url').fetchone()[0]
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except sqlite3.Error as e:
            raise DataStoreError(f'SQLite operation {method.__name__}() failed on {self.storage_path}: {e}') from e

    return wrapper
