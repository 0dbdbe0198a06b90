from dataclasses import dataclass


@dataclass(frozen=True)
class ShortLinkModel:
    """Represent a persisted alias -> target URL mapping.

    Records are immutable: once a data store assigns an id, neither the alias
    nor the target change.

    Attributes:
        id (int):
            Identifier assigned by the data store. Unique and never reused.
        alias (str):
            Globally unique short identifier, e.g. 'aZ3kQ9'.
        target (str):
            Absolute URL the alias redirects to.

    Example:
        >>> link = ShortLinkModel(id=1, alias='ex1', target='https://example.com')
        >>> link.alias
        'ex1'
        >>> link.target
        'https://example.com'
    """

    id: int
    alias: str
    target: str
