"""
Assistant Hub - AI 助手代理

提供:
- 图片 data URL 解析
- 上下文 / IGNITE 模式的消息拼接
- 通过 LLM 客户端调用模型（密钥只在服务端）
"""

from .core import (
    AssistantReply,
    AssistantRequest,
    ImagePayload,
    parse_image_payload,
)
from .services import AssistantService

__all__ = [
    'AssistantReply',
    'AssistantRequest',
    'ImagePayload',
    'parse_image_payload',
    'AssistantService',
]
