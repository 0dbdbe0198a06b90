"""Input validation for SaveService.

Functions:
    validate_target_url(target_url) -> str
        Ensure a target URL is a non-empty, absolute http(s) URL with a host.
    validate_alias(alias) -> str
        Ensure a caller-supplied alias only uses URL-safe characters.
"""

import re
from urllib.parse import urlparse

from linkalias.exceptions import ValidationError
from linkalias.utils.constants import MAX_ALIAS_LENGTH


ALLOWED_SCHEMES = frozenset({'http', 'https'})
ALIAS_PATTERN = re.compile(rf'^[A-Za-z0-9]{{1,{MAX_ALIAS_LENGTH}}}$')


def validate_target_url(target_url: object) -> str:
    """Validate a target URL before it reaches the data store

    Args:
        target_url (object):
            Value received from the client.

    Returns:
        str: the unchanged URL.

    Raises:
        ValidationError:
            If the URL is missing, not a string, relative, uses a scheme other
            than http/https, lacks a host, has a malformed port or contains
            whitespace.

    Example:
        >>> validate_target_url('https://example.com')
        'https://example.com'
        >>> validate_target_url('example.com')
        Traceback (most recent call last):
            ...
        linkalias.exceptions.ValidationError: field url is not a valid URL: missing scheme
    """
    if not isinstance(target_url, str) or not target_url:
        raise ValidationError('field url is a required field')
    if any(c.isspace() for c in target_url):
        raise ValidationError('field url is not a valid URL: contains whitespace')

    try:
        components = urlparse(target_url)
        hostname = components.hostname
        components.port  # raises on non-numeric or out-of-range ports
    except ValueError as e:
        raise ValidationError(f'field url is not a valid URL: {e}') from e

    if not components.scheme:
        raise ValidationError('field url is not a valid URL: missing scheme')
    if components.scheme.lower() not in ALLOWED_SCHEMES:
        raise ValidationError(f'field url is not a valid URL: unsupported scheme {components.scheme!r}')
    if not hostname:
        raise ValidationError('field url is not a valid URL: missing host')

    return target_url


def validate_alias(alias: object) -> str:
    """Validate a caller-supplied alias

    Raises:
        ValidationError:
            If the alias is not a string of 1..MAX_ALIAS_LENGTH letters/digits.

    Example:
        >>> validate_alias('ex1')
        'ex1'
    """
    if not isinstance(alias, str) or not ALIAS_PATTERN.fullmatch(alias):
        raise ValidationError(f'field alias must be 1 to {MAX_ALIAS_LENGTH} letters or digits')
    return alias
