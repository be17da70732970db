"""Core business logic for URL shortener."""

from .redirect import RedirectResolver
from .reservation import CustomAlias, RandomAlias, UniquenessResolver
from .service import URLShortenerService
from .sweeper import RetentionSweeper, SweepScheduler

__all__ = [
    "CustomAlias",
    "RandomAlias",
    "RedirectResolver",
    "RetentionSweeper",
    "SweepScheduler",
    "UniquenessResolver",
    "URLShortenerService",
]
