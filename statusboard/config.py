from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "postgresql+asyncpg://statusboard:statusboard_dev@db:5432/statusboard"

    # Redis
    REDIS_URL: str = "redis://redis:6379/0"

    # HTTP
    ALLOWED_ORIGINS: str = "*"

    # AI Provider (OpenAI-compatible chat completions)
    AI_PROVIDER: str = "OpenAI"
    AI_API_KEY: str = "mock_ai_key"
    AI_BASE_URL: str = ""
    AI_MODEL: str = "gpt-4o"
    AI_TIMEOUT_SECONDS: float = 30.0
    AI_TEMPERATURE: float = 0.3
    AI_MAX_TOKENS: int = 1500

    # Spreadsheet ingestion
    EXCEL_DIR: str = "public/excels"
    TREND_WINDOW_WEEKS: int = 8

    # App
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
