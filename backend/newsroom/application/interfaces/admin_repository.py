from abc import ABC, abstractmethod

from newsroom.domain.entities import Admin, LoginAttempt


class AdminRepository(ABC):
    """Port for back-office user accounts."""

    @abstractmethod
    async def get_by_id(self, admin_id: int) -> Admin | None:
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> Admin | None:
        ...

    @abstractmethod
    async def create(self, admin: Admin) -> Admin:
        ...

    @abstractmethod
    async def update_password(self, admin_id: int, password_hash: str) -> None:
        ...


class LoginAttemptStore(ABC):
    """Shared failed-login counters keyed by identifier (not by session)."""

    @abstractmethod
    async def get(self, identifier: str) -> LoginAttempt | None:
        ...

    @abstractmethod
    async def save(self, attempt: LoginAttempt) -> None:
        ...

    @abstractmethod
    async def clear(self, identifier: str) -> None:
        ...
