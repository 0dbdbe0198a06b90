"""Abstract base class for ShortLink data access objects (DAOs).

This class establishes a consistent contract for all ShortLink DAO implementations,
regardless of the underlying storage mechanism (e.g., SQLite, Redis, in-memory).

Responsibilities:
    - Provide an interface for inserting and retrieving alias -> URL mappings.
    - Standardize error handling across multiple data store implementations.
    - Guarantee alias uniqueness through the data store's own atomic primitives.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from linkalias.dao.sqlite import ShortLinkSQLiteDAO

        >>> dao = ShortLinkSQLiteDAO(storage_path='./storage/storage.db')

        >>> dao.save_url('https://example.com/blog/article-123', 'a1b2c3')
        1

        >>> dao.get_url('a1b2c3')
        'https://example.com/blog/article-123'

        >>> dao.get_link('a1b2c3')
        ShortLinkModel(id=1, alias='a1b2c3', target='https://example.com/blog/article-123')
"""

from abc import ABC, abstractmethod

from linkalias.models import ShortLinkModel


class ShortLinkBaseDAO(ABC):
    """Interface for ShortLink data access objects (DAOs).

    Methods:
        save_url(target_url: str, alias: str, **kwargs) -> int:
            Insert a new short link and return its id.
            Raises AliasConflictError if the alias already exists.
            Raises DataStoreError on connection or write failure.

        get_link(alias: str, **kwargs) -> ShortLinkModel:
            Retrieve the full short link record bound to an alias.
            Raises AliasNotFoundError if the alias does not exist.
            Raises DataStoreError on connection or read failure.

        get_url(alias: str, **kwargs) -> str:
            Retrieve the target URL bound to an alias.
            Same error contract as get_link().

    Subclassing:
        Datastore-specific implementations (e.g., ShortLinkSQLiteDAO or
        ShortLinkRedisDAO) must extend this class and implement all
        abstract methods. The uniqueness check and the insert must happen
        in one atomic step of the data store, so that of two concurrent
        save_url() calls with the same alias exactly one succeeds.

    NOTE:
        - Records are immutable. The DAO does not provide an interface to
          update or delete entries.
    """

    @abstractmethod
    def save_url(self, target_url: str, alias: str, **kwargs) -> int:
        """Insert a new short link into the data store.

        Args:
            target_url (str):
                Absolute URL the alias will redirect to.

            alias (str):
                Unique short identifier.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            int: id assigned to the new short link by the data store.

        Raises:
            AliasConflictError:
                If a short link with the same alias already exists. The
                existing record is left unchanged.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get_link(self, alias: str, **kwargs) -> ShortLinkModel:
        """Retrieve a short link record from the data store by its alias.

        Args:
            alias (str):
                The alias of the short link to be retrieved.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortLinkModel: The stored short link.

        Raises:
            AliasNotFoundError:
                If no short link with the given alias exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    def get_url(self, alias: str, **kwargs) -> str:
        """Retrieve the target URL bound to an alias.

        Raises:
            AliasNotFoundError:
                If no short link with the given alias exists.

            DataStoreError:
                If there is an error in the data store.
        """
        return self.get_link(alias, **kwargs).target
