"""SQLAlchemy implementations of the admin account and login-attempt ports."""

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from newsroom.application.interfaces import AdminRepository, LoginAttemptStore
from newsroom.domain.clock import as_utc
from newsroom.domain.entities import Admin, AdminRole, LoginAttempt
from newsroom.infrastructure.database.models import AdminModel, LoginAttemptModel


class SQLAlchemyAdminRepository(AdminRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: AdminModel) -> Admin:
        try:
            role = AdminRole(model.role)
        except ValueError:
            role = AdminRole.EDITOR
        return Admin(
            id=model.id,
            username=model.username,
            email=model.email,
            password_hash=model.password,
            role=role,
            created_at=as_utc(model.created_at),
        )

    async def get_by_id(self, admin_id: int) -> Admin | None:
        model = await self._session.get(AdminModel, admin_id)
        return self._to_entity(model) if model else None

    async def get_by_email(self, email: str) -> Admin | None:
        result = await self._session.execute(select(AdminModel).where(AdminModel.email == email))
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def create(self, admin: Admin) -> Admin:
        model = AdminModel(
            username=admin.username,
            email=admin.email,
            password=admin.password_hash,
            role=admin.role.value,
            created_at=as_utc(admin.created_at),
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update_password(self, admin_id: int, password_hash: str) -> None:
        await self._session.execute(
            update(AdminModel).where(AdminModel.id == admin_id).values(password=password_hash)
        )


class SQLAlchemyLoginAttemptStore(LoginAttemptStore):
    """Failed-login counters in the ``login_attempts`` table, shared by every worker."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get(self, identifier: str) -> LoginAttempt | None:
        model = await self._session.get(LoginAttemptModel, identifier, populate_existing=True)
        if model is None:
            return None
        return LoginAttempt(
            identifier=model.identifier,
            count=model.count,
            window_started_at=as_utc(model.window_started_at),
        )

    async def save(self, attempt: LoginAttempt) -> None:
        model = await self._session.get(LoginAttemptModel, attempt.identifier)
        if model is None:
            model = LoginAttemptModel(identifier=attempt.identifier)
            self._session.add(model)
        model.count = attempt.count
        model.window_started_at = as_utc(attempt.window_started_at)
        await self._session.flush()

    async def clear(self, identifier: str) -> None:
        model = await self._session.get(LoginAttemptModel, identifier)
        if model is not None:
            await self._session.delete(model)
            await self._session.flush()
