from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from statusboard.common.enums import LlmProvider
from statusboard.db.base import Entity


class LlmConfiguration(Entity):
    __tablename__ = "llm_configurations"

    provider_name: Mapped[str] = mapped_column(
        String(50), nullable=False, default=LlmProvider.OPENAI.value
    )
    model_name: Mapped[str] = mapped_column(String(100), nullable=False)
    api_key: Mapped[str] = mapped_column(String(500), nullable=False)
    base_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    last_updated_by: Mapped[str | None] = mapped_column(String(100), nullable=True)
