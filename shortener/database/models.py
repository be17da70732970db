"""Data models for URL shortener."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class AliasRecord:
    """A short code mapped to its original URL."""

    short_code: str
    original_url: str
    created_at: datetime
    last_accessed_at: Optional[datetime] = None

    def __post_init__(self):
        self.short_code = self.short_code.lower()
        if self.last_accessed_at is None:
            self.last_accessed_at = self.created_at

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "short_code": self.short_code,
            "original_url": self.original_url,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "last_accessed_at": self.last_accessed_at.isoformat() if self.last_accessed_at else None,
        }

    @classmethod
    def from_row(cls, row) -> "AliasRecord":
        """Create from a database row (mapping with the `urls` column names)."""
        return cls(
            short_code=row["short_code"],
            original_url=row["original_url"],
            created_at=row["created_at"],
            last_accessed_at=row["last_clicked_at"],
        )
