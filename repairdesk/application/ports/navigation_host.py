from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

BackListener = Callable[[], None]


class NavigationHostPort(ABC):
    @abstractmethod
    def push_guard_entry(self) -> None:
        """Add one history entry that the next back signal will consume."""
        raise NotImplementedError

    @abstractmethod
    def drop_guard_entry(self) -> None:
        """Remove the guard entry pushed earlier, without leaving the screen."""
        raise NotImplementedError

    @abstractmethod
    def add_back_listener(self, listener: BackListener) -> None:
        raise NotImplementedError

    @abstractmethod
    def remove_back_listener(self, listener: BackListener) -> None:
        raise NotImplementedError

    @abstractmethod
    def navigate(self, path: str) -> None:
        raise NotImplementedError
