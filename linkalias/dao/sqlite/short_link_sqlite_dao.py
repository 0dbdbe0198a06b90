"""Data Access Object (DAO) implementation for managing short links in SQLite

Schema:
    url(id INTEGER PRIMARY KEY AUTOINCREMENT, alias TEXT NOT NULL UNIQUE, url TEXT NOT NULL)
    idx_alias ON url(alias)

Alias uniqueness is enforced by the UNIQUE constraint: the insert is a single
statement in its own transaction, so of two concurrent inserts with the same
alias the engine lets exactly one through. AUTOINCREMENT keeps ids from ever
being reused.

Every operation opens its own connection, which makes a single DAO instance
safe to share between threads.

Example:
    >>> from linkalias.dao.sqlite import ShortLinkSQLiteDAO

    >>> dao = ShortLinkSQLiteDAO(storage_path='./storage/storage.db')
    >>> dao.save_url('https://example.com', 'ex1')
    1
    >>> dao.get_url('ex1')
    'https://example.com'
"""

import os
import sqlite3
from contextlib import contextmanager
from collections.abc import Iterator

from beartype import beartype

from linkalias.models import ShortLinkModel
from linkalias.dao.base import ShortLinkBaseDAO
from linkalias.dao.sqlite.helpers import handle_sqlite_errors
from linkalias.dao.exceptions import AliasConflictError, AliasNotFoundError, DataStoreError
from linkalias.utils.constants import DEFAULT_SQLITE_TIMEOUT


SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS url(
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    alias TEXT NOT NULL UNIQUE,
    url TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_alias ON url(alias);
"""

ALIAS_UNIQUE_VIOLATION = 'UNIQUE constraint failed: url.alias'


class ShortLinkSQLiteDAO(ShortLinkBaseDAO):
    """SQLite-based Data Access Object (DAO) for managing short links

    Attributes:
        storage_path (str):
            Path of the SQLite database file.
        timeout (float):
            Seconds to wait for a lock held by a concurrent writer.
    """

    def __init__(self, storage_path: str, timeout: float = DEFAULT_SQLITE_TIMEOUT):
        """Open (and if needed create) the SQLite database

        Args:
            storage_path (str):
                Path of the SQLite database file. Missing parent directories are created.
            timeout (float):
                Busy timeout in seconds. Defaults to DEFAULT_SQLITE_TIMEOUT.

        Raises:
            ValueError:
                If storage_path is empty or ':memory:' (every connection would see a new database).
            DataStoreError:
                If the database can't be opened or the schema can't be prepared.
        """
        if not storage_path or storage_path == ':memory:':
            raise ValueError(f'storage_path must point to a database file (given value: {storage_path!r}).')

        self.storage_path = storage_path
        self.timeout = float(timeout)

        self._prepare()

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self.storage_path, timeout=self.timeout)
        try:
            # commits on success, rolls back on error
            with conn:
                yield conn
        finally:
            conn.close()

    @handle_sqlite_errors
    def _prepare(self) -> None:
        try:
            directory = os.path.dirname(os.path.abspath(self.storage_path))
            os.makedirs(directory, exist_ok=True)
        except OSError as e:
            raise DataStoreError(f"Can't create storage directory for {self.storage_path}: {e}") from e

        with self._connect() as conn:
            conn.executescript(SCHEMA_SQL)

    @handle_sqlite_errors
    @beartype
    def save_url(self, target_url: str, alias: str, **kwargs) -> int:
        """Insert a short link into SQLite

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
                On any other SQLite failure.
        """
        try:
            with self._connect() as conn:
                cursor = conn.execute('INSERT INTO url(url, alias) VALUES(?, ?)', (target_url, alias))
        except sqlite3.IntegrityError as e:
            if ALIAS_UNIQUE_VIOLATION in str(e):
                raise AliasConflictError(f"Short link with alias '{alias}' already exists.") from e
            raise

        return cursor.lastrowid

    @handle_sqlite_errors
    @beartype
    def get_link(self, alias: str, **kwargs) -> ShortLinkModel:
        """Retrieve a stored short link by alias

        Raises:
            AliasNotFoundError:
                If the alias does not exist.
            DataStoreError:
                On SQLite failures.
        """
        with self._connect() as conn:
            row = conn.execute('SELECT id, url FROM url WHERE alias = ?', (alias,)).fetchone()

        if row is None:
            raise AliasNotFoundError(f"Short link with alias '{alias}' not found.")

        link_id, target_url = row
        return ShortLinkModel(id=link_id, alias=alias, target=target_url)
