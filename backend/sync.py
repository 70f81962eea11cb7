"""
Two-tier data synchronization: the remote document store in front, a local
persistent mirror of each collection behind it.

Policy:
  * Writes go to the remote store and are then applied to the local mirror,
    even when the remote write failed. The mirror is a backup, not a
    consistency mechanism.
  * Reads go to the remote store. A successful read of a whole collection
    replaces its mirror; a failed read is answered from the mirror.
  * Nothing is retried or versioned and errors never reach the caller: reads
    degrade to the cache and writes report a `WriteResult`.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from backend.local_cache import LocalCache
from backend.remote_store import (
    ListenerHandle,
    RemoteStore,
    ValueCallback,
    join_path,
    remove_at,
    set_at,
    split_path,
)
from shared.utils import generate_id

logger = logging.getLogger(__name__)


@dataclass
class WriteResult:
    success: bool
    error: Optional[str] = None
    key: Optional[str] = None


def collection_to_list(data: Any) -> List[dict]:
    """Turns an id-keyed map into a list, defaulting each `id` to its key."""
    if not data:
        return []
    if isinstance(data, list):
        return [dict(item) for item in data if isinstance(item, dict)]
    items = []
    for key, record in data.items():
        if not isinstance(record, dict):
            continue
        items.append({**record, "id": record.get("id") or key})
    return items


def list_to_collection(items: List[dict]) -> Dict[str, dict]:
    """Inverse of `collection_to_list`; items without an id are dropped."""
    collection: Dict[str, dict] = {}
    for item in items:
        item_id = item.get("id") or item.get("firebaseKey")
        if not item_id:
            logger.warning("Skipping record without id: %s", item)
            continue
        record = {k: v for k, v in item.items() if k != "firebaseKey"}
        collection[item_id] = record
    return collection


class SyncAdapter:
    """Async get/save/update/delete/push/listen over remote store + local cache."""

    def __init__(self, remote: RemoteStore, cache: LocalCache):
        self.remote = remote
        self.cache = cache
        self._listeners: Dict[str, List[ListenerHandle]] = defaultdict(list)

    async def get(self, path: str) -> Any:
        try:
            value = await asyncio.to_thread(self.remote.get, path)
        except Exception:
            logger.exception("Error getting %s from remote store, using local cache", path)
            return self._read_local(path)

        segments = split_path(path)
        if len(segments) == 1 and not segments[0].startswith("."):
            self._write_mirror(segments[0], value if isinstance(value, dict) else {})
        logger.debug("Data retrieved from remote store: %s", path)
        return value

    async def save(self, path: str, data: Any) -> WriteResult:
        result = await self._remote_write(self.remote.set, path, data)
        self._mirror_set(path, data)
        return result

    async def update(self, path: str, partial: dict) -> WriteResult:
        result = await self._remote_write(self.remote.update, path, partial)
        for key, value in (partial or {}).items():
            self._mirror_set(join_path(path, key), value)
        return result

    async def delete(self, path: str) -> WriteResult:
        result = await self._remote_write(self.remote.delete, path)
        self._mirror_set(path, None)
        return result

    async def push(self, path: str, data: Any) -> WriteResult:
        try:
            key = await asyncio.to_thread(self.remote.push, path, data)
            result = WriteResult(success=True, key=key)
        except Exception as e:
            logger.exception("Error pushing to remote store (%s)", path)
            key = generate_id()
            result = WriteResult(success=False, error=str(e), key=key)
        self._mirror_set(join_path(path, key), data)
        return result

    def listen(self, path: str, callback: ValueCallback) -> bool:
        try:
            handle = self.remote.listen(path, callback)
        except Exception:
            logger.exception("Error listening to remote store (%s)", path)
            return False
        self._listeners[join_path(path)].append(handle)
        logger.info("Listening to remote store: %s", path)
        return True

    def stop_listening(self, path: str) -> None:
        for handle in self._listeners.pop(join_path(path), []):
            try:
                handle.close()
            except Exception:
                logger.exception("Error stopping listener (%s)", path)
        logger.info("Stopped listening to remote store: %s", path)

    async def is_connected(self) -> bool:
        try:
            return bool(await asyncio.to_thread(self.remote.is_connected))
        except Exception:
            logger.exception("Error checking remote store connection")
            return False

    async def get_collection(self, name: str) -> List[dict]:
        return collection_to_list(await self.get(name))

    async def save_collection(self, name: str, items: List[dict]) -> WriteResult:
        return await self.save(name, list_to_collection(items))

    async def migrate_local_to_remote(self, key: str, path: str) -> WriteResult:
        """Uploads a cached collection when the remote path is still empty."""
        raw = self.cache.get_item(key)
        if not raw:
            return WriteResult(success=True)
        try:
            items = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error("Local cache entry %s is not valid JSON: %s", key, e)
            return WriteResult(success=False, error=str(e))

        existing = await asyncio.to_thread(self._remote_get_or_none, path)
        if existing:
            logger.info("Remote store already has data at %s, skipping migration", path)
            return WriteResult(success=True)

        data = list_to_collection(items) if isinstance(items, list) else items
        result = await self.save(path, data)
        if result.success:
            logger.info("Migrated %s to remote store: %s", key, path)
        return result

    def shutdown(self) -> None:
        for path in list(self._listeners):
            self.stop_listening(path)

    def _remote_get_or_none(self, path: str) -> Any:
        try:
            return self.remote.get(path)
        except Exception:
            logger.exception("Error reading %s before migration", path)
            return None

    async def _remote_write(self, operation, path: str, *args) -> WriteResult:
        try:
            await asyncio.to_thread(operation, path, *args)
        except Exception as e:
            logger.exception("Error writing %s to remote store", path)
            return WriteResult(success=False, error=str(e))
        logger.debug("Data written to remote store: %s", path)
        return WriteResult(success=True)

    def _read_mirror(self, collection: str) -> Dict[str, Any]:
        raw = self.cache.get_item(collection)
        if not raw:
            return {}
        try:
            items = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Discarding unreadable local mirror for %s", collection)
            return {}
        if isinstance(items, dict):
            return items
        return list_to_collection(items)

    def _write_mirror(self, collection: str, data: Dict[str, Any]) -> None:
        try:
            self.cache.set_item(
                collection, json.dumps(collection_to_list(data), default=str)
            )
        except Exception:
            logger.exception("Error writing local mirror for %s", collection)

    def _read_local(self, path: str) -> Any:
        segments = split_path(path)
        if not segments or segments[0].startswith("."):
            return None
        node: Any = self._read_mirror(segments[0])
        for segment in segments[1:]:
            if isinstance(node, dict):
                node = node.get(segment)
            elif isinstance(node, list) and segment.isdigit() and int(segment) < len(node):
                node = node[int(segment)]
            else:
                return None
        if node == {} or node == []:
            return None
        return node

    def _mirror_set(self, path: str, value: Any) -> None:
        segments = split_path(path)
        if not segments:
            for collection, data in (value or {}).items():
                self._mirror_set(collection, data)
            return
        collection, rest = segments[0], segments[1:]
        if collection.startswith("."):
            return

        if not rest:
            if isinstance(value, list):
                value = list_to_collection(value)
            self._write_mirror(collection, value if isinstance(value, dict) else {})
            return

        data = self._read_mirror(collection)
        if value is None or value == {} or value == []:
            remove_at(data, rest)
        else:
            set_at(data, rest, json.loads(json.dumps(value, default=str)))
        self._write_mirror(collection, data)
