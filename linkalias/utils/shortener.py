"""Alias generation utility

This module provides the generator SaveService uses to draw candidate aliases
when the caller doesn't ask for a specific one.

Classes:
    AliasGenerator(length=6, digits=True, rng=None):
        Draw fixed-length aliases uniformly at random from a Base62 (or
        letters-only) alphabet.

Example:
    >>> from linkalias.utils import AliasGenerator
    >>> generator = AliasGenerator()
    >>> alias = generator.generate()
    >>> len(alias)
    6

    Deterministic output for tests:

    >>> import random
    >>> AliasGenerator(rng=random.Random(42)).generate() == AliasGenerator(rng=random.Random(42)).generate()
    True
"""

import secrets
import string
from typing import Any

from linkalias.utils.constants import DEFAULT_ALIAS_LENGTH


LETTERS = string.ascii_lowercase + string.ascii_uppercase
ALPHABET = LETTERS + string.digits


class AliasGenerator:
    """Generate random aliases of a fixed length.

    The generator performs no uniqueness check: the data store rejects a taken
    alias and SaveService retries with a fresh candidate.

    Aliases work as bearer tokens to the stored URLs, so the default randomness
    source is `secrets.SystemRandom()`: cryptographically secure and
    unpredictable across process restarts. Pass any object exposing
    `choice(sequence)` (e.g. `random.Random(seed)`) to get a reproducible
    sequence in tests.

    Attributes:
        length (int):
            Number of characters of every generated alias.
        alphabet (str):
            Characters aliases are drawn from.
    """

    def __init__(self, length: int = DEFAULT_ALIAS_LENGTH, digits: bool = True, rng: Any = None):
        if not isinstance(length, int) or isinstance(length, bool):
            raise TypeError(f'Alias length must be of type integer (given type: {type(length)}).')
        if length < 1:
            raise ValueError(f'Alias length must be a positive integer (given value: {length}).')

        self.length = length
        self.alphabet = ALPHABET if digits else LETTERS
        self.rng = rng if rng is not None else secrets.SystemRandom()

    def generate(self) -> str:
        """Draw a new candidate alias.

        Returns:
            str: `length` characters, each drawn uniformly from `alphabet`.
        """
        return ''.join(self.rng.choice(self.alphabet) for _ in range(self.length))
