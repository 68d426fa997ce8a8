from __future__ import annotations

import threading
import uuid
from contextlib import contextmanager
from typing import Any, Iterator

from repairdesk.application.exceptions import SurfaceNotFound
from repairdesk.application.ports.workspace_store import WorkspaceStorePort


class MemoryWorkspaceStore(WorkspaceStorePort):
    def __init__(self, surface_limit: int = 500) -> None:
        self._surfaces: dict[tuple[str, str], Any] = {}
        self._surface_locks: dict[tuple[str, str], threading.Lock] = {}
        self._lock = threading.Lock()
        self._surface_limit = surface_limit

    def add(self, kind: str, surface: Any) -> str:
        surface_id = uuid.uuid4().hex
        self.put(kind, surface_id, surface)
        return surface_id

    def put(self, kind: str, surface_id: str, surface: Any) -> None:
        with self._lock:
            key = (kind, surface_id)
            self._surfaces[key] = surface
            self._surface_locks.setdefault(key, threading.Lock())
            if len(self._surfaces) > self._surface_limit:
                # dicts keep insertion order: drop the oldest surface
                oldest = next(iter(self._surfaces))
                del self._surfaces[oldest]
                self._surface_locks.pop(oldest, None)

    def get(self, kind: str, surface_id: str) -> Any:
        surface = self.find(kind, surface_id)
        if surface is None:
            raise SurfaceNotFound(f"{kind} {surface_id} not found")
        return surface

    def find(self, kind: str, surface_id: str) -> Any | None:
        with self._lock:
            return self._surfaces.get((kind, surface_id))

    @contextmanager
    def locked(self, kind: str, surface_id: str) -> Iterator[Any]:
        with self._lock:
            surface_lock = self._surface_locks.get((kind, surface_id))
        if surface_lock is None:
            raise SurfaceNotFound(f"{kind} {surface_id} not found")
        with surface_lock:
            # discarded while waiting for the lock
            yield self.get(kind, surface_id)

    def discard(self, kind: str, surface_id: str) -> None:
        with self._lock:
            self._surfaces.pop((kind, surface_id), None)
            self._surface_locks.pop((kind, surface_id), None)
