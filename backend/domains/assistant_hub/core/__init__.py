"""
AI 助手核心模块
"""

from .models import (
    DEFAULT_IMAGE_MIME_TYPE,
    FUNCTION_PROCESSED_TEXT,
    NO_RESPONSE_TEXT,
    PENDING_CHANGES_TEXT,
    AssistantReply,
    AssistantRequest,
    ImagePayload,
    parse_image_payload,
)

__all__ = [
    'DEFAULT_IMAGE_MIME_TYPE',
    'FUNCTION_PROCESSED_TEXT',
    'NO_RESPONSE_TEXT',
    'PENDING_CHANGES_TEXT',
    'AssistantReply',
    'AssistantRequest',
    'ImagePayload',
    'parse_image_payload',
]
