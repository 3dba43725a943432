from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import select

from statusboard.db.models.llm_config import LlmConfiguration


@pytest.mark.asyncio
async def test_no_config_yet(client, admin_headers):
    response = await client.get("/api/v1/llm-config", headers=admin_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_save_config_replaces_active_one(client, admin_headers, db_session):
    first = await client.post(
        "/api/v1/llm-config",
        headers=admin_headers,
        json={"provider_name": "OpenAI", "model_name": "gpt-4o", "api_key": "sk-first-1234"},
    )
    assert first.status_code == 201
    assert first.json()["api_key_hint"] == "****1234"

    second = await client.post(
        "/api/v1/llm-config",
        headers=admin_headers,
        json={"provider_name": "DeepSeek", "model_name": "deepseek-chat", "api_key": "sk-second-9876"},
    )
    assert second.status_code == 201

    current = await client.get("/api/v1/llm-config", headers=admin_headers)
    assert current.json()["id"] == second.json()["id"]
    assert current.json()["provider_name"] == "DeepSeek"
    assert "sk-second" not in current.text

    result = await db_session.execute(select(LlmConfiguration).where(LlmConfiguration.is_active.is_(True)))
    assert len(result.scalars().all()) == 1


@pytest.mark.asyncio
async def test_unknown_provider_rejected(client, admin_headers):
    response = await client.post(
        "/api/v1/llm-config",
        headers=admin_headers,
        json={"provider_name": "Skynet", "model_name": "t-800", "api_key": "sk-x"},
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_only_admin_can_save_config(client, manager_headers):
    response = await client.post(
        "/api/v1/llm-config",
        headers=manager_headers,
        json={"provider_name": "OpenAI", "model_name": "gpt-4o", "api_key": "sk-x"},
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_health_check_reports_unreachable_without_key(client, manager_headers):
    response = await client.get("/api/v1/llm-config/health", headers=manager_headers)

    assert response.status_code == 200
    assert response.json()["reachable"] is False


@pytest.mark.asyncio
async def test_health_check_uses_stored_config(client, admin_headers):
    await client.post(
        "/api/v1/llm-config",
        headers=admin_headers,
        json={"provider_name": "Google", "model_name": "gemini-1.5-pro", "api_key": "real-key-1"},
    )

    with patch(
        "statusboard.integrations.ai_client.AIClient.health_check",
        new=AsyncMock(return_value=True),
    ) as health_check:
        response = await client.get("/api/v1/llm-config/health", headers=admin_headers)

    assert response.json() == {"provider_name": "Google", "model_name": "gemini-1.5-pro", "reachable": True}
    config = health_check.await_args.args[0]
    assert config.api_key == "real-key-1"
