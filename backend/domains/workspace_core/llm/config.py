"""
模型配置

密钥和端点只来自环境变量（LLM_API_KEY / LLM_API_URL），绝不下发到浏览器。
模型参数来自 config/llm_models.yaml:

    default_profile: gemini
    timeout: 60
    profiles:
      gemini:
        provider: gemini
        model: gemini-2.0-flash
        temperature: 0.7
        max_tokens: 8192

默认端点是 Gemini 的 OpenAI 兼容接口。
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

GEMINI_OPENAI_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/openai/"

# backend/domains/workspace_core/llm/config.py -> 仓库根目录/config
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[4] / "config" / "llm_models.yaml"


class ModelProfile(BaseModel):
    """一组可复用的模型调用参数"""

    model_config = ConfigDict(frozen=True)

    provider: str = "gemini"
    model: str = "gemini-2.0-flash"
    temperature: float = 0.7
    max_tokens: int = 8192


class LLMSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="LLM_",
        extra="ignore",
        populate_by_name=True,
    )

    api_url: str = Field(default=GEMINI_OPENAI_ENDPOINT, validation_alias="LLM_API_URL")
    api_key: str = Field(default="", validation_alias="LLM_API_KEY")

    default_profile: str = "gemini"
    timeout: int = 60
    profiles: Dict[str, ModelProfile] = Field(default_factory=dict)

    @classmethod
    def from_yaml(cls, yaml_path: Optional[Path] = None) -> "LLMSettings":
        """环境变量 + yaml 中的模型参数；文件不存在时全部使用默认值"""
        return cls(**read_profiles_file(yaml_path or _configured_path()))

    def profile(self, key: Optional[str] = None) -> ModelProfile:
        """按 key 取模型参数，未定义的 key 回落到默认参数"""
        return self.profiles.get(key or self.default_profile, ModelProfile())

    def resolve(self, key: Optional[str] = None, temperature: Optional[float] = None) -> ModelProfile:
        """调用时显式传入的 temperature 优先于配置"""
        profile = self.profile(key)
        if temperature is None:
            return profile
        return profile.model_copy(update={"temperature": temperature})


def _configured_path() -> Path:
    override = os.environ.get("LLM_CONFIG_PATH")
    return Path(override) if override else DEFAULT_CONFIG_PATH


def read_profiles_file(path: Path) -> Dict[str, Any]:
    """读取 yaml，返回可直接传给 LLMSettings 的字段"""
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    fields: Dict[str, Any] = {
        "profiles": {
            key: ModelProfile(**(params or {}))
            for key, params in (data.get("profiles") or {}).items()
        }
    }
    if "default_profile" in data:
        fields["default_profile"] = data["default_profile"]
    if "timeout" in data:
        fields["timeout"] = int(data["timeout"])
    return fields


@lru_cache
def get_llm_settings() -> LLMSettings:
    return LLMSettings.from_yaml()


def reload_llm_settings() -> LLMSettings:
    """环境变量或 yaml 变更后重新读取"""
    get_llm_settings.cache_clear()
    return get_llm_settings()
