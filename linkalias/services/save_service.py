"""Creation of new short links.

SaveService validates the request, picks the alias (the caller's, or a freshly
generated one) and stores the mapping. Alias uniqueness is left entirely to the
data store: SaveService never checks for an existing alias before inserting.

Classes:
    SaveService:
        Orchestrates AliasGenerator and a short link DAO.

Example:
    >>> from linkalias.dao.memory import ShortLinkMemoryDAO
    >>> from linkalias.services import SaveService
    >>> service = SaveService(ShortLinkMemoryDAO())
    >>> service.create('https://example.com', 'ex1')
    ('ex1', 1)
    >>> alias, link_id = service.create('https://example.com')
    >>> len(alias)
    6
"""

import logging

from linkalias.dao.base import ShortLinkBaseDAO
from linkalias.dao.exceptions import AliasConflictError
from linkalias.exceptions import AliasAllocationError
from linkalias.utils.shortener import AliasGenerator
from linkalias.utils.validators import validate_target_url, validate_alias
from linkalias.utils.constants import DEFAULT_MAX_ALIAS_ATTEMPTS


class SaveService:
    """Store new alias -> target URL mappings.

    Attributes:
        dao (ShortLinkBaseDAO):
            Data store holding the mappings.
        generator (AliasGenerator):
            Source of candidate aliases when the caller supplies none.
        logger (logging.Logger | logging.LoggerAdapter):
            Logger, usually an adapter carrying request context.
        max_attempts (int):
            Number of generated candidates tried before giving up.
    """

    def __init__(
        self,
        dao: ShortLinkBaseDAO,
        generator: AliasGenerator | None = None,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
        max_attempts: int = DEFAULT_MAX_ALIAS_ATTEMPTS,
    ):
        if max_attempts < 1:
            raise ValueError(f'max_attempts must be a positive integer (given value: {max_attempts}).')

        self.dao = dao
        self.generator = generator or AliasGenerator()
        self.logger = logger or logging.getLogger(__name__)
        self.max_attempts = max_attempts

    def create(self, target_url: str, desired_alias: str | None = None) -> tuple[str, int]:
        """Create a new short link.

        A caller-supplied alias is tried exactly once. Without one, generated
        candidates are tried until one is free or max_attempts is reached.

        Args:
            target_url (str):
                Absolute http(s) URL to shorten.
            desired_alias (str | None):
                Alias requested by the caller. None or '' means "generate one".

        Returns:
            tuple[str, int]: the allocated alias and the id of the new short link.

        Raises:
            ValidationError:
                If target_url or desired_alias is malformed. Nothing is stored.
            AliasConflictError:
                If desired_alias is already taken.
            AliasAllocationError:
                If every generated candidate was taken.
            DataStoreError:
                If the data store fails.
        """
        validate_target_url(target_url)

        if desired_alias:
            validate_alias(desired_alias)
            link_id = self.dao.save_url(target_url, desired_alias)
            self.logger.info('url added', extra={'id': link_id, 'alias': desired_alias})
            return desired_alias, link_id

        for attempt in range(1, self.max_attempts + 1):
            alias = self.generator.generate()
            try:
                link_id = self.dao.save_url(target_url, alias)
            except AliasConflictError:
                self.logger.warning('generated alias already taken', extra={'alias': alias, 'attempt': attempt})
                continue
            self.logger.info('url added', extra={'id': link_id, 'alias': alias, 'attempt': attempt})
            return alias, link_id

        self.logger.error('failed to allocate a free alias', extra={'attempts': self.max_attempts})
        raise AliasAllocationError(f'No free alias found after {self.max_attempts} attempts.')
