"""
聊天模型客户端

对 LangChain ChatOpenAI 的薄封装，只负责: 消息转换、调用、结果提取、日志。
助手的提示词拼装在 assistant_hub 中完成。

消息格式:
    {"role": "system" | "user" | "assistant", "content": str | list[dict]}

content 为列表时按 OpenAI 多模态格式传递，例如:
    [{"type": "text", "text": "..."},
     {"type": "image_url", "image_url": {"url": "data:image/png;base64,..."}}]
"""

import time
from dataclasses import dataclass, field
from typing import Any, Optional

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from domains.core.exceptions import ConfigurationError, ExternalServiceError

from ..logging import get_logger
from .config import LLMSettings, ModelProfile, get_llm_settings

logger = get_logger(__name__)

_MESSAGE_TYPES = {
    "system": SystemMessage,
    "assistant": AIMessage,
    "user": HumanMessage,
}


@dataclass
class LLMReply:
    text: str
    tool_calls: list[dict[str, Any]] = field(default_factory=list)


def to_langchain_messages(messages: list[dict[str, Any]]) -> list[BaseMessage]:
    """未知 role 按用户消息处理"""
    return [
        _MESSAGE_TYPES.get(msg.get("role", "user"), HumanMessage)(content=msg.get("content", ""))
        for msg in messages
    ]


def text_of(content: Any) -> str:
    """多段内容只保留文本部分"""
    if isinstance(content, str):
        return content
    chunks = []
    for part in content or []:
        if isinstance(part, str):
            chunks.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            chunks.append(part.get("text", ""))
    return "".join(chunks)


def reply_from_message(message: Any) -> LLMReply:
    calls = getattr(message, "tool_calls", None) or []
    return LLMReply(
        text=text_of(message.content),
        tool_calls=[
            {"name": call.get("name"), "args": call.get("args", {}), "id": call.get("id")}
            for call in calls
        ],
    )


def usage_fields(message: Any) -> dict[str, int]:
    usage = getattr(message, "usage_metadata", None) or {}
    return {
        "prompt_tokens": usage.get("input_tokens", 0),
        "completion_tokens": usage.get("output_tokens", 0),
        "total_tokens": usage.get("total_tokens", 0),
    }


class LLMClient:
    """按配置 profile 创建并缓存 ChatOpenAI 实例"""

    def __init__(self, settings: Optional[LLMSettings] = None, profile: Optional[str] = None):
        self.settings = settings or get_llm_settings()
        self.profile_key = profile or self.settings.default_profile
        self._chat_models: dict[tuple[str, Optional[float]], BaseChatModel] = {}

    @property
    def is_configured(self) -> bool:
        return bool(self.settings.api_key)

    def chat_model(self, profile: ModelProfile, key: str, temperature: Optional[float]) -> BaseChatModel:
        cache_key = (key, temperature)
        if cache_key not in self._chat_models:
            self._chat_models[cache_key] = ChatOpenAI(
                model=profile.model,
                temperature=profile.temperature,
                max_tokens=profile.max_tokens,
                base_url=self.settings.api_url,
                api_key=self.settings.api_key,
                timeout=self.settings.timeout,
            )
        return self._chat_models[cache_key]

    async def achat(
        self,
        messages: list[dict[str, Any]],
        profile: Optional[str] = None,
        temperature: Optional[float] = None,
        caller: str = "",
    ) -> LLMReply:
        """
        调用模型并返回文本与工具调用

        Raises:
            ConfigurationError: 未配置 LLM_API_KEY
            ExternalServiceError: 模型服务调用失败
        """
        if not self.is_configured:
            raise ConfigurationError("LLM_API_KEY", "API key not configured")

        key = profile or self.profile_key
        resolved = self.settings.resolve(key, temperature)
        model = self.chat_model(resolved, key, temperature)

        started = time.perf_counter()
        try:
            message = await model.ainvoke(to_langchain_messages(messages))
        except Exception as e:
            logger.error(
                "llm_call_failed",
                model=resolved.model,
                caller=caller,
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            raise ExternalServiceError(resolved.provider, str(e), cause=e) from e

        logger.info(
            "llm_call_completed",
            model=resolved.model,
            caller=caller,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
            **usage_fields(message),
        )
        return reply_from_message(message)

    def close(self) -> None:
        self._chat_models.clear()
