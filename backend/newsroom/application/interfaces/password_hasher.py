"""Abstract interface (port) for credential hashing."""

from abc import ABC, abstractmethod


class PasswordHasher(ABC):
    @abstractmethod
    def hash(self, password: str) -> str:
        ...

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        ...

    @abstractmethod
    def needs_rehash(self, password_hash: str) -> bool:
        ...
