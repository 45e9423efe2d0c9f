"""
AI 助手服务

服务端代理边界：API 密钥只保存在服务端，前端只提交消息与上下文。
"""

import logging

from domains.core.exceptions import ConfigurationError
from domains.workspace_core.llm import LLMClient

from ..core import (
    FUNCTION_PROCESSED_TEXT,
    NO_RESPONSE_TEXT,
    PENDING_CHANGES_TEXT,
    AssistantReply,
    AssistantRequest,
)

logger = logging.getLogger(__name__)


class AssistantService:
    """AI 助手服务"""

    def __init__(self, llm_client: LLMClient):
        self.llm_client = llm_client

    async def reply(self, request: AssistantRequest) -> AssistantReply:
        """
        处理一次对话请求

        Raises:
            ConfigurationError: 未配置 API 密钥
            ExternalServiceError: 模型调用失败
        """
        if not self.llm_client.is_configured:
            raise ConfigurationError("LLM_API_KEY", "API key not configured")

        if request.is_function_callback:
            logger.debug("assistant_function_callback_acknowledged")
            return AssistantReply(text=FUNCTION_PROCESSED_TEXT)

        result = await self.llm_client.achat(
            request.build_messages(),
            caller="assistant.chat",
        )

        if result.text:
            text = result.text
        elif result.tool_calls:
            text = PENDING_CHANGES_TEXT
        else:
            text = NO_RESPONSE_TEXT

        logger.info(
            f"assistant_reply: ignite={request.is_ignite}, has_image={bool(request.image_base64)}, "
            f"function_calls={len(result.tool_calls)}"
        )
        return AssistantReply(text=text, function_calls=list(result.tool_calls))
