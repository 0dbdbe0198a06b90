"""Read-only lookup of target URLs for the redirect path.

Classes:
    RedirectResolver:
        Narrow seam over a short link DAO exposing only alias resolution.
"""

from linkalias.dao.base import ShortLinkBaseDAO


class RedirectResolver:
    """Resolve aliases to their target URLs.

    Exists so the redirect handler depends on a read-only capability instead of
    the full DAO. No business logic of its own: every call goes to the data store.
    """

    def __init__(self, dao: ShortLinkBaseDAO):
        self._dao = dao

    def resolve(self, alias: str) -> str:
        """Return the target URL bound to alias.

        Raises:
            AliasNotFoundError:
                If no short link with that alias exists.
            DataStoreError:
                If the data store fails.
        """
        return self._dao.get_url(alias)
