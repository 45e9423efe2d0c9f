"""
LLM 模块

基于 LangChain 的聊天模型调用（OpenAI 兼容端点）。
"""

from .client import LLMClient, LLMReply, reply_from_message, text_of, to_langchain_messages
from .config import LLMSettings, ModelProfile, get_llm_settings, reload_llm_settings

__all__ = [
    "LLMClient",
    "LLMReply",
    "reply_from_message",
    "text_of",
    "to_langchain_messages",
    "LLMSettings",
    "ModelProfile",
    "get_llm_settings",
    "reload_llm_settings",
]
