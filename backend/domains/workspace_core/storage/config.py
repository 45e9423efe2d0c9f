"""
存储配置 (pydantic-settings)

环境变量:
- STORAGE_BACKEND: file / memory
- STORAGE_DATA_DIR: 文件后端的数据目录
- STORAGE_NAMESPACE: 存储键前缀
- STORAGE_LOCK_TIMEOUT: 文件锁超时（秒）
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """持久化存储配置"""

    model_config = SettingsConfigDict(
        env_prefix="STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    backend: Literal["file", "memory"] = "file"
    data_dir: Path = Field(default_factory=lambda: Path.home() / ".designers_os" / "data")
    namespace: str = "designers_os"
    lock_timeout: float = 10.0


@lru_cache
def get_storage_settings() -> StorageSettings:
    """Get cached storage settings instance."""
    return StorageSettings()
