"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    AliasNotFoundError:
        Raised when no short link is bound to the requested alias.

    AliasConflictError:
        Raised when attempting to insert a short link whose alias is already taken.

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection issues,
        I/O errors, corruption, unrelated constraint violations, etc.).

Example:
    >>> from linkalias.dao.exceptions import AliasNotFoundError
    >>> raise AliasNotFoundError("Short link with alias 'ex1' not found.")
    Traceback (most recent call last):
        ...
    linkalias.dao.exceptions.AliasNotFoundError: Short link with alias 'ex1' not found.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class AliasNotFoundError(DAOError):
    """Exception raised when a short link is not found in the data store."""

    pass


class AliasConflictError(DAOError):
    """Exception raised when attempting to insert a short link whose alias already exists."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, disk I/O errors, etc.
    """

    pass
