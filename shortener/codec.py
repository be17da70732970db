"""Short code validation and generation."""

import re
import secrets
import string

from .errors import (
    BoundarySpecialChar,
    EmptyInput,
    InvalidCharacters,
    RepeatedSpecialChar,
    TooLong,
    TooShort,
)


# Random codes use lowercase alphanumerics only (36 symbols)
RANDOM_ALPHABET = string.ascii_lowercase + string.digits

SPECIAL_CHARS = frozenset("._-")
ALLOWED_CUSTOM_CHARS = frozenset(string.ascii_letters + string.digits) | SPECIAL_CHARS

MIN_CUSTOM_LENGTH = 3
MAX_CUSTOM_LENGTH = 50
DEFAULT_RANDOM_LENGTH = 6

_LOOKUP_CODE_RE = re.compile(r"[a-z0-9._-]+", re.IGNORECASE | re.ASCII)


def normalize_custom(value: str) -> str:
    """Validate a user supplied alias and return its canonical form.

    Checks run in a fixed order and the first failure is raised:
    empty, characters, length, boundary specials, repeated specials.

    Args:
        value: Raw alias as received from the client

    Returns:
        Lowercase alias

    Raises:
        ValidationError: One of the codec subclasses describing the problem
    """
    trimmed = (value or "").strip()
    if not trimmed:
        raise EmptyInput()

    if not all(c in ALLOWED_CUSTOM_CHARS for c in trimmed):
        raise InvalidCharacters()

    normalized = trimmed.lower()

    if len(normalized) < MIN_CUSTOM_LENGTH:
        raise TooShort()
    if len(normalized) > MAX_CUSTOM_LENGTH:
        raise TooLong()

    if normalized[0] in SPECIAL_CHARS or normalized[-1] in SPECIAL_CHARS:
        raise BoundarySpecialChar()

    for prev, curr in zip(normalized, normalized[1:]):
        if prev in SPECIAL_CHARS and curr in SPECIAL_CHARS:
            raise RepeatedSpecialChar()

    return normalized


def random_code(length: int = DEFAULT_RANDOM_LENGTH) -> str:
    """Generate a random short code.

    Args:
        length: Number of characters

    Returns:
        Code drawn uniformly from a-z0-9
    """
    return "".join(secrets.choice(RANDOM_ALPHABET) for _ in range(length))


def is_valid_lookup_code(code: str) -> bool:
    """Check whether a requested code is well formed enough to look up."""
    return bool(code) and _LOOKUP_CODE_RE.fullmatch(code) is not None
