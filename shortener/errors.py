"""Exception hierarchy for the URL shortener."""

from typing import Optional


class ShortenerError(Exception):
    """Base class for all shortener errors.

    The message is meant for humans and is returned verbatim to clients
    for 4xx responses.
    """

    default_message = "URL shortener error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class ValidationError(ShortenerError, ValueError):
    """Malformed client input."""

    default_message = "Invalid input"


class EmptyInput(ValidationError):
    default_message = "Custom name must not be empty"


class InvalidCharacters(ValidationError):
    default_message = (
        "Custom name may only contain letters, numbers, dot (.), dash (-) or underscore (_)"
    )


class TooShort(ValidationError):
    default_message = "Custom name must be at least 3 characters"


class TooLong(ValidationError):
    default_message = "Custom name must be at most 50 characters"


class BoundarySpecialChar(ValidationError):
    default_message = "Custom name must not start or end with a dot, dash or underscore"


class RepeatedSpecialChar(ValidationError):
    default_message = "Custom name must not contain consecutive dots, dashes or underscores"


class ReservedName(ValidationError):
    default_message = "Custom name is reserved. Please choose another one."


class InvalidURL(ValidationError):
    default_message = "URL is not valid. It must start with http:// or https://"


class InvalidShortCode(ValidationError):
    default_message = "Invalid short code format"


class AliasTaken(ShortenerError):
    default_message = "Custom name is already in use. Please choose another one."


class ExhaustedRetries(ShortenerError):
    default_message = "Could not generate a unique short code. Please try again."


class AliasNotFound(ShortenerError):
    default_message = "Short URL not found"


class DuplicateKeyError(ShortenerError):
    """The store rejected an insert because the short code already exists."""

    default_message = "Short code already exists"


class StoreError(ShortenerError):
    """The persistence backend failed or could not be reached."""

    default_message = "Store operation failed"


class ConfigError(ShortenerError):
    """Startup configuration is missing or invalid."""

    default_message = "Invalid configuration"
