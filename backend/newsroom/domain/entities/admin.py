"""Back-office user and login throttling entities."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum


class AdminRole(str, Enum):
    ADMIN = "admin"
    EDITOR = "editor"


@dataclass
class Admin:
    username: str
    email: str
    password_hash: str
    role: AdminRole = AdminRole.EDITOR
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class LoginAttempt:
    """Failed-login counter for one identifier, valid for a fixed window."""

    identifier: str
    count: int = 0
    window_started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def expires_at(self, window: timedelta) -> datetime:
        started = self.window_started_at
        if started.tzinfo is None:
            started = started.replace(tzinfo=timezone.utc)
        return started + window

    def is_expired(self, now: datetime, window: timedelta) -> bool:
        return now >= self.expires_at(window)

    def remaining_seconds(self, now: datetime, window: timedelta) -> int:
        return max(0, int((self.expires_at(window) - now).total_seconds()))
