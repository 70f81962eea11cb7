"""
Remote document store abstraction: Firebase Realtime Database and an
in-memory implementation for development and tests.

Both address data by slash-separated paths into a single JSON tree.
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Protocol

import firebase_admin
from firebase_admin import credentials, db
from firebase_admin import exceptions as firebase_exceptions

from shared.constants import CONNECTED_PATH
from shared.utils import generate_id

logger = logging.getLogger(__name__)

ValueCallback = Callable[[Any], None]


class ListenerHandle(Protocol):
    def close(self) -> None:
        ...


class RemoteStore(Protocol):
    """Operations the sync layer needs from the hosted document store."""

    def get(self, path: str) -> Any:
        ...

    def set(self, path: str, value: Any) -> None:
        ...

    def update(self, path: str, values: dict) -> None:
        ...

    def delete(self, path: str) -> None:
        ...

    def push(self, path: str, value: Any) -> str:
        ...

    def listen(self, path: str, callback: ValueCallback) -> ListenerHandle:
        ...

    def is_connected(self) -> bool:
        ...


def split_path(path: str) -> List[str]:
    return [segment for segment in (path or "").split("/") if segment]


def join_path(*parts: str) -> str:
    segments: List[str] = []
    for part in parts:
        segments.extend(split_path(part))
    return "/".join(segments)


def _is_related(a: List[str], b: List[str]) -> bool:
    """True when one path is an ancestor of (or equal to) the other."""
    shortest = min(len(a), len(b))
    return a[:shortest] == b[:shortest]


def _list_index(node: list, segment: str, allow_append: bool = False) -> Optional[int]:
    if not segment.isdigit():
        return None
    index = int(segment)
    limit = len(node) + 1 if allow_append else len(node)
    return index if index < limit else None


def _child(node: Any, segment: str) -> Any:
    if isinstance(node, dict):
        return node.get(segment)
    if isinstance(node, list):
        index = _list_index(node, segment)
        return node[index] if index is not None else None
    return None


def _assign(node: Any, segment: str, value: Any) -> None:
    if isinstance(node, list):
        index = int(segment)
        if index == len(node):
            node.append(value)
        else:
            node[index] = value
    else:
        node[segment] = value


def _container_for(child: Any, next_segment: str) -> Any:
    """Returns `child` if `next_segment` can be written into it, else a replacement.

    Arrays are patched in place at a valid index; any other key turns the
    array into an index-keyed map that keeps the existing elements.
    """
    if isinstance(child, list):
        if _list_index(child, next_segment, allow_append=True) is not None:
            return child
        return {str(i): item for i, item in enumerate(child) if item is not None}
    if isinstance(child, dict):
        return child
    return {}


def set_at(tree: Dict[str, Any], segments: List[str], value: Any) -> None:
    """Writes `value` at `segments` below `tree`, creating maps on the way."""
    node: Any = tree
    for depth, segment in enumerate(segments[:-1]):
        child = _container_for(_child(node, segment), segments[depth + 1])
        _assign(node, segment, child)
        node = child
    _assign(node, segments[-1], value)


def remove_at(tree: Dict[str, Any], segments: List[str]) -> None:
    """Removes the node at `segments` and prunes parents left empty."""
    trail: List[Any] = [tree]
    node: Any = tree
    for segment in segments[:-1]:
        node = _child(node, segment)
        if not isinstance(node, (dict, list)):
            return
        trail.append(node)

    for depth in range(len(segments) - 1, -1, -1):
        if depth < len(segments) - 1 and trail[depth + 1]:
            break
        _discard(trail, segments, depth)


def _discard(trail: List[Any], segments: List[str], depth: int) -> None:
    node, segment = trail[depth], segments[depth]
    if isinstance(node, dict):
        node.pop(segment, None)
        return
    index = _list_index(node, segment)
    if index is None:
        return
    if index == len(node) - 1:
        node.pop()
        return
    # Removing an inner element leaves a sparse array, stored as a map.
    remaining = {str(i): item for i, item in enumerate(node) if i != index and item is not None}
    _assign(trail[depth - 1], segments[depth - 1], remaining)
    trail[depth] = remaining


@dataclass
class _InMemoryListener:
    store: "InMemoryRemoteStore"
    path: str
    callback: ValueCallback

    def close(self) -> None:
        self.store._remove_listener(self)


@dataclass
class InMemoryRemoteStore:
    """Path-addressed JSON tree with Realtime Database write semantics.

    Writing `None` or an empty container removes the node and any parents
    left empty, so reads of missing or emptied paths return `None`.
    """

    root: Dict[str, Any] = field(default_factory=dict)
    connected: bool = True
    write_count: int = 0

    def __post_init__(self):
        self._lock = threading.RLock()
        self._listeners: List[_InMemoryListener] = []

    def get(self, path: str) -> Any:
        if join_path(path) == CONNECTED_PATH:
            return self.connected
        with self._lock:
            node: Any = self.root
            for segment in split_path(path):
                if isinstance(node, dict):
                    node = node.get(segment)
                elif isinstance(node, list) and segment.isdigit():
                    index = int(segment)
                    node = node[index] if index < len(node) else None
                else:
                    return None
                if node is None:
                    return None
            if node == {}:
                return None
            return _copy(node)

    def set(self, path: str, value: Any) -> None:
        with self._lock:
            self._set(split_path(path), _copy(value))
            self.write_count += 1
        self._notify([split_path(path)])

    def update(self, path: str, values: dict) -> None:
        if not values:
            return
        base = split_path(path)
        changed = [base + split_path(key) for key in values]
        with self._lock:
            for key, value in values.items():
                self._set(base + split_path(key), _copy(value))
            self.write_count += 1
        self._notify(changed)

    def delete(self, path: str) -> None:
        self.set(path, None)

    def push(self, path: str, value: Any) -> str:
        key = generate_id()
        self.set(join_path(path, key), value)
        return key

    def listen(self, path: str, callback: ValueCallback) -> ListenerHandle:
        listener = _InMemoryListener(store=self, path=join_path(path), callback=callback)
        with self._lock:
            self._listeners.append(listener)
        callback(self.get(listener.path))
        return listener

    def is_connected(self) -> bool:
        return self.connected

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        with self._lock:
            self.root.clear()
            self.write_count = 0

    def _set(self, segments: List[str], value: Any) -> None:
        if not segments:
            self.root.clear()
            if isinstance(value, dict):
                self.root.update({k: v for k, v in value.items() if not _is_empty(v)})
            return

        if _is_empty(value):
            remove_at(self.root, segments)
        else:
            set_at(self.root, segments, value)

    def _remove_listener(self, listener: _InMemoryListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def _notify(self, changed: List[List[str]]) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener_path = split_path(listener.path)
            if any(_is_related(listener_path, path) for path in changed):
                try:
                    listener.callback(self.get(listener.path))
                except Exception:
                    logger.exception("Listener for %s failed", listener.path)


def _is_empty(value: Any) -> bool:
    return value is None or value == {} or value == []


def _copy(value: Any) -> Any:
    # JSON round trip mimics what the hosted store persists.
    return json.loads(json.dumps(value, default=str))


@dataclass
class FirebaseRemoteStore:
    """
    Firebase Realtime Database client backed by the Admin SDK.
    """

    database_url: str
    credentials_path: Optional[str] = None
    app_name: str = "join-board"

    def __post_init__(self):
        if not self.database_url:
            raise ValueError("FIREBASE_DATABASE_URL is required for FirebaseRemoteStore")
        try:
            self._app = firebase_admin.get_app(self.app_name)
        except ValueError:
            cred = (
                credentials.Certificate(self.credentials_path)
                if self.credentials_path
                else credentials.ApplicationDefault()
            )
            self._app = firebase_admin.initialize_app(
                cred, {"databaseURL": self.database_url}, name=self.app_name
            )
        logger.info("Firebase initialized for %s", self.database_url)

    def _ref(self, path: str) -> db.Reference:
        return db.reference("/" + join_path(path), app=self._app)

    def get(self, path: str) -> Any:
        return self._ref(path).get()

    def set(self, path: str, value: Any) -> None:
        self._ref(path).set(value)

    def update(self, path: str, values: dict) -> None:
        if not values:
            return
        self._ref(path).update(values)

    def delete(self, path: str) -> None:
        self._ref(path).delete()

    def push(self, path: str, value: Any) -> str:
        return self._ref(path).push(value).key

    def listen(self, path: str, callback: ValueCallback) -> ListenerHandle:
        ref = self._ref(path)
        # The SDK streams put/patch deltas; subscribers want the whole value.
        return ref.listen(lambda event: callback(ref.get()))

    def is_connected(self) -> bool:
        # The Admin SDK has no `.info/connected`; a shallow root read stands in.
        try:
            self._ref("").get(shallow=True)
        except firebase_exceptions.FirebaseError as e:
            logger.warning("Realtime Database unreachable: %s", e)
            return False
        return True
