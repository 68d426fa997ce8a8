from abc import ABC, abstractmethod
from typing import Any, ContextManager


class WorkspaceStorePort(ABC):
    """Holds the live state-machine instances of every open surface."""

    @abstractmethod
    def add(self, kind: str, surface: Any) -> str:
        """Register a surface and return its generated id."""
        raise NotImplementedError

    @abstractmethod
    def put(self, kind: str, surface_id: str, surface: Any) -> None:
        raise NotImplementedError

    @abstractmethod
    def get(self, kind: str, surface_id: str) -> Any:
        """Return the surface or raise SurfaceNotFound."""
        raise NotImplementedError

    @abstractmethod
    def find(self, kind: str, surface_id: str) -> Any | None:
        raise NotImplementedError

    @abstractmethod
    def locked(self, kind: str, surface_id: str) -> ContextManager[Any]:
        """Hold the surface exclusively for one transition; raise SurfaceNotFound if unknown."""
        raise NotImplementedError

    @abstractmethod
    def discard(self, kind: str, surface_id: str) -> None:
        raise NotImplementedError
