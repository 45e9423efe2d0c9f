"""
AI 助手服务模块
"""

from .assistant_service import AssistantService

__all__ = ['AssistantService']
