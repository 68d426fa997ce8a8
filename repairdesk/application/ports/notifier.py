from abc import ABC, abstractmethod


class NotifierPort(ABC):
    @abstractmethod
    def success(self, message: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def error(self, message: str) -> None:
        raise NotImplementedError
