import sys

from pydantic_settings import BaseSettings

_ENV_FILE = None if "pytest" in sys.modules else ".env"


class Settings(BaseSettings):
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Enables the fast-track leave path. Never on in production.
    DEMO_MODE: bool = False

    OPENAI_ENDPOINT: str = ""
    OPENAI_API_KEY: str = ""
    OPENAI_API_VERSION: str = "2024-10-21"
    OPENAI_CHAT_MODEL: str = "gpt-3.5-turbo"
    OPENAI_PREMIUM_MODEL: str = "gpt-4-turbo"
    ENABLE_PREMIUM_MODEL: bool = False
    OPENAI_TIMEOUT_SECONDS: float = 30.0

    AUDIT_WEBHOOK_URL: str = ""

    SUPABASE_JWT_SECRET: str = ""
    SUPABASE_JWT_AUDIENCE: str = "authenticated"

    CORS_ORIGINS: list[str] = ["http://localhost:3000"]

    model_config = {
        "env_file": _ENV_FILE,
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }


def resolve_model(settings: Settings) -> str:
    if settings.ENABLE_PREMIUM_MODEL:
        return settings.OPENAI_PREMIUM_MODEL
    return settings.OPENAI_CHAT_MODEL


settings = Settings()
