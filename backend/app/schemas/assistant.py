"""AI assistant Pydantic schemas.

字段名与前端保持一致（camelCase）。
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
    """对话请求"""

    model_config = ConfigDict(populate_by_name=True)

    message: str = Field("", description="用户消息")
    image_base64: Optional[str] = Field(None, alias="imageBase64", description="图片 data URL 或 base64")
    context: Optional[str] = Field(None, description="当前应用状态")
    user_memory: Optional[str] = Field(None, alias="userMemory", description="用户长期记忆")
    is_ignite: bool = Field(False, alias="isIgnite", description="IGNITE 模式")
    function_calls: Optional[Any] = Field(None, alias="functionCalls", description="函数调用回传")


class ChatResponse(BaseModel):
    """对话响应"""

    model_config = ConfigDict(populate_by_name=True)

    text: str
    function_calls: List[Dict[str, Any]] = Field(default_factory=list, alias="functionCalls")


class ChatErrorResponse(BaseModel):
    """对话失败响应"""

    error: str
    details: Optional[str] = None
    diagnostic: Optional[str] = None
