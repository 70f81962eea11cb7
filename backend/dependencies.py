"""
Dependency wiring for the FastAPI app and the admin scripts.
"""

from __future__ import annotations

from backend.config import get_settings
from backend.context import BoardContext, build_context
from backend.local_cache import InMemoryLocalCache, LocalCache, SqlLocalCache
from backend.remote_store import FirebaseRemoteStore, InMemoryRemoteStore, RemoteStore

_remote_store: RemoteStore | None = None
_local_cache: LocalCache | None = None
_board_context: BoardContext | None = None


def get_remote_store() -> RemoteStore:
    """
    Return a singleton remote store so listeners and in-memory data persist
    across requests.
    """
    global _remote_store
    if _remote_store:
        return _remote_store

    settings = get_settings()
    if settings.use_in_memory_backends or not settings.firebase_database_url:
        _remote_store = InMemoryRemoteStore()
    else:
        _remote_store = FirebaseRemoteStore(
            database_url=settings.firebase_database_url,
            credentials_path=settings.firebase_credentials_path,
        )
    return _remote_store


def get_local_cache() -> LocalCache:
    global _local_cache
    if _local_cache:
        return _local_cache

    settings = get_settings()
    if settings.use_in_memory_backends or not settings.local_cache_url:
        _local_cache = InMemoryLocalCache()
    else:
        _local_cache = SqlLocalCache(settings.local_cache_url)
    return _local_cache


def get_board_context() -> BoardContext:
    global _board_context
    if _board_context:
        return _board_context

    _board_context = build_context(get_remote_store(), get_local_cache())
    return _board_context
