"""API settings (project metadata and CORS).

存储与模型相关的配置分别在 StorageSettings / LLMSettings 中。
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "DesignersOS API"
    VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"

    # 前端开发服务器；部署时通过 CORS_ORIGINS='["https://..."]' 覆盖
    CORS_ORIGINS: list[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:3000",
    ]


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
