"""Short code reservation with collision handling."""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from . import codec
from .database.base import AliasStoreBase
from .errors import AliasTaken, ExhaustedRetries, ReservedName


MAX_RANDOM_ATTEMPTS = 10

# First path segments used by the app's own routes
RESERVED_NAMES = frozenset({"api", "health", "shorten"})


@dataclass(frozen=True)
class CustomAlias:
    """A code chosen by the requester."""

    name: str


@dataclass(frozen=True)
class RandomAlias:
    """Ask for a generated code."""

    length: int = codec.DEFAULT_RANDOM_LENGTH


AliasCandidate = Union[CustomAlias, RandomAlias]


class UniquenessResolver:
    """Pick a short code that is not in the store yet.

    This is a pre-check only. Two concurrent requests can both get the same
    code back, so the store's insert has the final word on uniqueness.
    """

    def __init__(
        self,
        store: AliasStoreBase,
        logger: Optional[logging.Logger] = None,
        max_random_attempts: int = MAX_RANDOM_ATTEMPTS,
    ):
        self.store = store
        self.logger = logger or logging.getLogger(__name__)
        self.max_random_attempts = max_random_attempts

    async def reserve(self, candidate: AliasCandidate) -> str:
        """Return a code that is currently free.

        Args:
            candidate: CustomAlias or RandomAlias

        Returns:
            Normalized short code

        Raises:
            ValidationError: Custom name failed normalization
            ReservedName: Custom name clashes with an application route
            AliasTaken: Custom name already exists
            ExhaustedRetries: Every random attempt collided
            StoreError: The store lookup failed
        """
        if isinstance(candidate, CustomAlias):
            return await self._reserve_custom(candidate.name)
        return await self._reserve_random(candidate.length)

    async def _reserve_custom(self, name: str) -> str:
        short_code = codec.normalize_custom(name)

        if short_code in RESERVED_NAMES:
            raise ReservedName()

        if await self.store.find_by_code(short_code) is not None:
            self.logger.info(f"Custom short code already taken: {short_code}")
            raise AliasTaken()

        return short_code

    async def _reserve_random(self, length: int) -> str:
        for attempt in range(1, self.max_random_attempts + 1):
            short_code = codec.random_code(length)

            if short_code in RESERVED_NAMES:
                continue

            if await self.store.find_by_code(short_code) is None:
                if attempt > 1:
                    self.logger.debug(f"Generated code after {attempt} attempts: {short_code}")
                return short_code

            self.logger.debug(f"Collision on random code {short_code} (attempt {attempt})")

        self.logger.warning(
            f"Unable to generate unique short code after {self.max_random_attempts} attempts"
        )
        raise ExhaustedRetries()
