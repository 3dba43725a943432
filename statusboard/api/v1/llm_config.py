import uuid

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from statusboard.api.deps import get_db, require_role
from statusboard.common.enums import LlmProvider, UserRole
from statusboard.common.exceptions import NotFoundError
from statusboard.core.analysis.service import get_active_llm_config, provider_config_from
from statusboard.db.models.llm_config import LlmConfiguration
from statusboard.integrations.ai_client import AIClient

router = APIRouter(prefix="/llm-config", tags=["LLM Configuration"])


# ---------- Schemas ----------


class LlmConfigRequest(BaseModel):
    provider_name: LlmProvider = LlmProvider.OPENAI
    model_name: str = Field(..., min_length=1)
    api_key: str = Field(..., min_length=1)
    base_url: str | None = None


class LlmConfigResponse(BaseModel):
    id: uuid.UUID
    provider_name: str
    model_name: str
    api_key_hint: str
    base_url: str | None
    is_active: bool
    last_updated_by: str | None
    updated_at: str

    @classmethod
    def from_orm_instance(cls, row: LlmConfiguration) -> "LlmConfigResponse":
        return cls(
            id=row.id,
            provider_name=row.provider_name,
            model_name=row.model_name,
            api_key_hint=_mask(row.api_key),
            base_url=row.base_url,
            is_active=row.is_active,
            last_updated_by=row.last_updated_by,
            updated_at=row.updated_at.isoformat(),
        )


class LlmHealthResponse(BaseModel):
    provider_name: str
    model_name: str
    reachable: bool


def _mask(api_key: str) -> str:
    if len(api_key) <= 4:
        return "****"
    return f"****{api_key[-4:]}"


# ---------- Endpoints ----------


@router.get("", response_model=LlmConfigResponse)
async def get_llm_config(
    _role: UserRole = Depends(require_role(UserRole.DELIVERY_MANAGER, UserRole.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    config = await get_active_llm_config(db)
    if config is None:
        raise NotFoundError("LLM configuration")
    return LlmConfigResponse.from_orm_instance(config)


@router.post("", response_model=LlmConfigResponse, status_code=201)
async def save_llm_config(
    body: LlmConfigRequest,
    role: UserRole = Depends(require_role(UserRole.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    """Store a new provider configuration; it replaces the active one."""
    await db.execute(
        update(LlmConfiguration)
        .where(LlmConfiguration.is_active.is_(True))
        .values(is_active=False)
    )

    config = LlmConfiguration(
        provider_name=body.provider_name.value,
        model_name=body.model_name,
        api_key=body.api_key,
        base_url=body.base_url,
        is_active=True,
        last_updated_by=role.value,
    )
    db.add(config)
    await db.flush()
    return LlmConfigResponse.from_orm_instance(config)


@router.get("/health", response_model=LlmHealthResponse)
async def check_llm_health(
    _role: UserRole = Depends(require_role(UserRole.DELIVERY_MANAGER, UserRole.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    provider = provider_config_from(await get_active_llm_config(db))
    reachable = await AIClient().health_check(provider)
    return LlmHealthResponse(
        provider_name=provider.provider.value,
        model_name=provider.model,
        reachable=reachable,
    )
