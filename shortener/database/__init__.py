"""Persistence layer for URL shortener."""

from .base import AliasStoreBase
from .memory import InMemoryAliasStore
from .models import AliasRecord
from .postgres import PostgresAliasStore

__all__ = ["AliasStoreBase", "AliasRecord", "InMemoryAliasStore", "PostgresAliasStore"]
