"""Persistence layer for gymbook."""

from .images import ImageLoader, ImageStore
from .kv import KeyValueStore, MemoryKeyValueStore, SQLiteKeyValueStore, get_db_path

__all__ = [
    "ImageLoader",
    "ImageStore",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "SQLiteKeyValueStore",
    "get_db_path",
]
