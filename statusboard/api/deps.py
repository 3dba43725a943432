from collections.abc import AsyncGenerator

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from statusboard.common.enums import UserRole
from statusboard.common.exceptions import PermissionDeniedError
from statusboard.core.analysis.project_analyzer import ProjectAnalyzer
from statusboard.core.analysis.schemas import ProviderConfig
from statusboard.core.analysis.service import get_active_llm_config, provider_config_from
from statusboard.core.ingestion.repository import SqlReportRepository
from statusboard.db.session import async_session_factory


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_current_role(
    x_user_role: str = Header(UserRole.ADMIN.value, description="Caller role"),
) -> UserRole:
    # Stand-in for real authentication: every caller is trusted to state its role.
    try:
        return UserRole(x_user_role)
    except ValueError:
        raise PermissionDeniedError(f"Unknown role '{x_user_role}'")


def require_role(*roles: UserRole):
    async def role_checker(role: UserRole = Depends(get_current_role)) -> UserRole:
        if role not in roles:
            raise PermissionDeniedError(
                f"This action requires one of the following roles: {', '.join(r.value for r in roles)}"
            )
        return role

    return role_checker


def get_project_analyzer() -> ProjectAnalyzer:
    return ProjectAnalyzer()


def get_repository(db: AsyncSession = Depends(get_db)) -> SqlReportRepository:
    return SqlReportRepository(db)


async def get_provider_config(db: AsyncSession = Depends(get_db)) -> ProviderConfig:
    return provider_config_from(await get_active_llm_config(db))
