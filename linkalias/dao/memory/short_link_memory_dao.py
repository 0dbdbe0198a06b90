"""In-memory implementation of ShortLinkBaseDAO

Keeps short links in a process-local dictionary. Nothing is persisted across
process restarts, so this backend is meant for unit tests and local runs.

The dictionary and the id counter are guarded by the DAO's own lock: that lock
plays the role a UNIQUE index plays for SQLite, making check-and-insert one
atomic step for every thread sharing the instance.
"""

import itertools
import threading

from beartype import beartype

from linkalias.models import ShortLinkModel
from linkalias.dao.base import ShortLinkBaseDAO
from linkalias.dao.exceptions import AliasConflictError, AliasNotFoundError


class ShortLinkMemoryDAO(ShortLinkBaseDAO):
    """Thread-safe, process-local short link store."""

    def __init__(self):
        self._links: dict[str, ShortLinkModel] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    @beartype
    def save_url(self, target_url: str, alias: str, **kwargs) -> int:
        with self._lock:
            if alias in self._links:
                raise AliasConflictError(f"Short link with alias '{alias}' already exists.")
            link = ShortLinkModel(id=next(self._ids), alias=alias, target=target_url)
            self._links[alias] = link
        return link.id

    @beartype
    def get_link(self, alias: str, **kwargs) -> ShortLinkModel:
        with self._lock:
            link = self._links.get(alias)
        if link is None:
            raise AliasNotFoundError(f"Short link with alias '{alias}' not found.")
        return link

    def __len__(self) -> int:
        with self._lock:
            return len(self._links)
