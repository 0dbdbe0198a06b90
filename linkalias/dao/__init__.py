"""Data access layer: the persistent alias -> target URL mapping.

Subpackages:
    base:    ShortLinkBaseDAO, the contract every data store implements.
    sqlite:  ShortLinkSQLiteDAO, SQLite file storage.
    redis:   ShortLinkRedisDAO, Redis storage.
    memory:  ShortLinkMemoryDAO, in-process storage for tests and local runs.

Use `linkalias.dao.factory.short_link_dao()` to build the DAO selected by configuration.
"""
