"""Unit tests for the ShortLinkSQLiteDAO

Every test runs against a real SQLite database file under tmp_path.

Test coverage includes:

1. Initialization and schema
   - Ensures the database file, its parent directories and the schema are created.
   - Ensures reopening an existing database keeps its data.
   - Ensures in-memory or empty storage paths are rejected.
   - Ensures unusable storage paths raise DataStoreError.

2. Insertion behavior
   - Validates inserts return increasing ids.
   - Confirms taken aliases raise AliasConflictError and leave the first mapping intact.
   - Ensures invalid types raise BeartypeCallHintParamViolation.
   - Confirms other SQLite failures raise DataStoreError.

3. Retrieval behavior
   - Ensures stored aliases resolve to a populated ShortLinkModel.
   - Confirms missing aliases raise AliasNotFoundError.

4. Concurrency
   - Exactly one of many concurrent inserts of the same alias succeeds.
   - Concurrent inserts of distinct aliases all succeed with distinct ids.
"""

import re
import sqlite3
from concurrent.futures import ThreadPoolExecutor

import pytest
from beartype.roar import BeartypeCallHintParamViolation

from linkalias.models import ShortLinkModel
from linkalias.dao.exceptions import DataStoreError, AliasConflictError, AliasNotFoundError
from linkalias.dao.sqlite import ShortLinkSQLiteDAO


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def storage_path(tmp_path):
    return str(tmp_path / 'storage' / 'storage.db')


@pytest.fixture
def dao(storage_path):
    return ShortLinkSQLiteDAO(storage_path=storage_path)


# -------------------------------
# 1. Initialization and schema
# -------------------------------


def test_initialize_creates_database(storage_path):
    ShortLinkSQLiteDAO(storage_path=storage_path)

    with sqlite3.connect(storage_path) as conn:
        tables = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")}
        indexes = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'index'")}

    assert 'url' in tables
    assert 'idx_alias' in indexes


def test_reopen_keeps_data(storage_path):
    ShortLinkSQLiteDAO(storage_path=storage_path).save_url('https://example.com', 'ex1')

    assert ShortLinkSQLiteDAO(storage_path=storage_path).get_url('ex1') == 'https://example.com'


@pytest.mark.parametrize('storage_path', ['', ':memory:'])
def test_initialize_rejects_non_file_storage(storage_path):
    with pytest.raises(ValueError, match='storage_path must point to a database file'):
        ShortLinkSQLiteDAO(storage_path=storage_path)


def test_initialize_with_unusable_storage_path(tmp_path):
    blocker = tmp_path / 'not-a-directory'
    blocker.write_text('x')

    with pytest.raises(DataStoreError):
        ShortLinkSQLiteDAO(storage_path=str(blocker / 'storage.db'))


def test_initialize_with_corrupted_database(tmp_path):
    path = tmp_path / 'storage.db'
    path.write_bytes(b'this is definitely not a sqlite database' * 100)

    with pytest.raises(DataStoreError, match='SQLite operation'):
        ShortLinkSQLiteDAO(storage_path=str(path))


# -------------------------------
# 2. Insertion behavior
# -------------------------------


def test_save_url_returns_increasing_ids(dao):
    first = dao.save_url('https://example.com/1', 'ex1')
    second = dao.save_url('https://example.com/2', 'ex2')

    assert first == 1
    assert second == 2


def test_save_url_which_already_exists(dao):
    dao.save_url('https://example.com/first', 'ex1')

    with pytest.raises(AliasConflictError, match=re.escape("Short link with alias 'ex1' already exists.")):
        dao.save_url('https://example.com/second', 'ex1')

    assert dao.get_url('ex1') == 'https://example.com/first'


def test_ids_are_not_reused_after_conflict(dao):
    dao.save_url('https://example.com/1', 'ex1')
    with pytest.raises(AliasConflictError):
        dao.save_url('https://example.com/1', 'ex1')

    assert dao.save_url('https://example.com/2', 'ex2') > 1


def test_aliases_are_case_sensitive(dao):
    dao.save_url('https://example.com/lower', 'abc')
    dao.save_url('https://example.com/upper', 'ABC')

    assert dao.get_url('abc') == 'https://example.com/lower'
    assert dao.get_url('ABC') == 'https://example.com/upper'


@pytest.mark.parametrize('target_url, alias', [(None, 'ex1'), ('https://example.com', 1), (b'https://example.com', 'ex1')])
def test_save_url_with_invalid_type(dao, target_url, alias):
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        dao.save_url(target_url, alias)


def test_save_url_with_sqlite_failure(dao, storage_path):
    with sqlite3.connect(storage_path) as conn:
        conn.execute('DROP TABLE url')

    with pytest.raises(DataStoreError, match=r'SQLite operation save_url\(\) failed'):
        dao.save_url('https://example.com', 'ex1')


# -------------------------------
# 3. Retrieval behavior
# -------------------------------


def test_get_link(dao):
    link_id = dao.save_url('https://example.com/page?q=1', 'ex1')

    assert dao.get_link('ex1') == ShortLinkModel(id=link_id, alias='ex1', target='https://example.com/page?q=1')


def test_get_link_which_does_not_exist(dao):
    with pytest.raises(AliasNotFoundError, match=re.escape("Short link with alias 'nope' not found.")):
        dao.get_link('nope')


def test_get_url_which_does_not_exist(dao):
    with pytest.raises(AliasNotFoundError):
        dao.get_url('nope')


# -------------------------------
# 4. Concurrency
# -------------------------------


def _try_save(dao, target_url, alias):
    try:
        return dao.save_url(target_url, alias)
    except AliasConflictError:
        return None


def test_concurrent_saves_of_same_alias(dao):
    """Exactly one of N concurrent saves of one alias wins."""
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda i: _try_save(dao, f'https://example.com/{i}', 'race'), range(16)))

    winners = [result for result in results if result is not None]
    assert len(winners) == 1
    winner_index = results.index(winners[0])
    assert dao.get_link('race') == ShortLinkModel(id=winners[0], alias='race', target=f'https://example.com/{winner_index}')


def test_concurrent_saves_of_distinct_aliases(dao):
    with ThreadPoolExecutor(max_workers=8) as pool:
        ids = list(pool.map(lambda i: dao.save_url(f'https://example.com/{i}', f'alias{i}'), range(32)))

    assert len(set(ids)) == 32
    for i in range(32):
        assert dao.get_url(f'alias{i}') == f'https://example.com/{i}'
