"""Back-office authentication with per-identifier login throttling."""

import logging
from datetime import timedelta

from newsroom.application.interfaces import AdminRepository, LoginAttemptStore, PasswordHasher
from newsroom.domain.clock import Clock, utc_now
from newsroom.domain.entities import Admin, AdminRole, LoginAttempt
from newsroom.domain.exceptions import AuthenticationError, LoginLockedError

logger = logging.getLogger(__name__)


class AuthService:
    """Verifies admin credentials and enforces the failed-login budget.

    Failures are counted per normalised email in the shared
    ``LoginAttemptStore``, so the limit holds across sessions and clients.
    A window opens on the first failure and lasts ``lockout_minutes``; once
    ``max_attempts`` failures land inside it the identifier is locked until
    the window expires.
    """

    def __init__(
        self,
        admins: AdminRepository,
        attempts: LoginAttemptStore,
        hasher: PasswordHasher,
        *,
        max_attempts: int = 5,
        lockout_minutes: int = 15,
        clock: Clock = utc_now,
    ):
        self._admins = admins
        self._attempts = attempts
        self._hasher = hasher
        self._max_attempts = max_attempts
        self._window = timedelta(minutes=lockout_minutes)
        self._clock = clock

    async def login(self, email: str, password: str) -> Admin:
        """Return the admin for valid credentials.

        Raises:
            LoginLockedError: too many recent failures for this email.
            AuthenticationError: unknown email or wrong password.
        """
        identifier = _identifier(email)
        attempt = await self._current_attempt(identifier)
        if attempt is not None and attempt.count >= self._max_attempts:
            remaining = attempt.remaining_seconds(self._clock(), self._window)
            logger.warning("Login blocked for '%s' (%ds remaining)", identifier, remaining)
            raise LoginLockedError(remaining)

        admin = await self._admins.get_by_email(identifier)
        if admin is None or not self._hasher.verify(password, admin.password_hash):
            await self._record_failure(identifier, attempt)
            raise AuthenticationError()

        await self._attempts.clear(identifier)

        if self._hasher.needs_rehash(admin.password_hash):
            admin.password_hash = self._hasher.hash(password)
            await self._admins.update_password(admin.id, admin.password_hash)
            logger.info("Rehashed password for admin %s", admin.id)

        logger.info("Admin %s logged in", admin.id)
        return admin

    async def get_admin(self, admin_id: int) -> Admin | None:
        return await self._admins.get_by_id(admin_id)

    async def bootstrap_admin(
        self, username: str, email: str, password: str, role: AdminRole = AdminRole.ADMIN
    ) -> Admin:
        """Create an admin account unless one already exists for ``email``."""
        identifier = _identifier(email)
        existing = await self._admins.get_by_email(identifier)
        if existing is not None:
            return existing
        admin = Admin(
            username=username,
            email=identifier,
            password_hash=self._hasher.hash(password),
            role=role,
        )
        created = await self._admins.create(admin)
        logger.info("Created %s account %s for '%s'", role.value, created.id, identifier)
        return created

    async def _current_attempt(self, identifier: str) -> LoginAttempt | None:
        attempt = await self._attempts.get(identifier)
        if attempt is not None and attempt.is_expired(self._clock(), self._window):
            await self._attempts.clear(identifier)
            return None
        return attempt

    async def _record_failure(self, identifier: str, attempt: LoginAttempt | None) -> None:
        if attempt is None:
            attempt = LoginAttempt(identifier=identifier, count=0, window_started_at=self._clock())
        attempt.count += 1
        await self._attempts.save(attempt)

        if attempt.count >= self._max_attempts:
            logger.warning("Login locked for '%s' after %d failures", identifier, attempt.count)
        else:
            logger.info("Failed login for '%s' (%d/%d)", identifier, attempt.count, self._max_attempts)


def _identifier(email: str) -> str:
    return (email or "").strip().lower()
