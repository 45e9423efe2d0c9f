"""
AI 助手请求/响应模型

负责把前端的原始请求整理成模型调用所需的内容:
- 图片 data URL 拆分为 MIME 类型 + base64 数据
- 应用上下文、IGNITE 模式作为前缀拼接到用户消息
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

DEFAULT_IMAGE_MIME_TYPE = "image/png"

NO_RESPONSE_TEXT = "No response generated."
PENDING_CHANGES_TEXT = "One moment, processing changes..."
FUNCTION_PROCESSED_TEXT = "Function processed"

CONTEXT_TEMPLATE = "[CURRENT APP STATE CONTEXT]:\n{context}\n\n[USER REQUEST]:\n{message}"

IGNITE_PREFIX = (
    "[SUPER AGENT MODE: IGNITE ACTIVATED]\n\n"
    "INSTRUCTION: You are in a high-powered execution mode. \n"
    "1. Analyze the request deeply.\n"
    "2. If tasks are mentioned via @, prioritize them.\n"
    "3. Verify your plan before answering.\n"
    "4. You have full permission to CREATE, UPDATE, DELETE tasks/clients/projects if implied.\n\n"
)


@dataclass(frozen=True)
class ImagePayload:
    """拆分后的图片数据"""
    mime_type: str
    data: str

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"


def parse_image_payload(raw: str) -> ImagePayload:
    """
    解析前端传来的图片字符串

    - 数据: 含 "base64," 时取其后的部分，否则整体作为数据
    - MIME: 同时含 ":" 和 ";" 时取两者之间的部分，否则为 image/png

    例:
        parse_image_payload("data:image/jpeg;base64,AAAA")
        # ImagePayload(mime_type='image/jpeg', data='AAAA')
    """
    data = raw.split("base64,")[1] if "base64," in raw else raw
    if ":" in raw and ";" in raw:
        mime_type = raw.split(":")[1].split(";")[0]
    else:
        mime_type = DEFAULT_IMAGE_MIME_TYPE
    return ImagePayload(mime_type=mime_type, data=data)


@dataclass
class AssistantRequest:
    """
    一次对话请求

    Attributes:
        message: 用户消息
        image_base64: 图片 data URL 或裸 base64（可选）
        context: 当前应用状态描述（可选）
        user_memory: 用户长期记忆（可选）
        is_ignite: 是否启用 IGNITE 模式
        function_calls: 前端回传的函数调用结果；存在时不调用模型
    """
    message: str = ""
    image_base64: Optional[str] = None
    context: Optional[str] = None
    user_memory: Optional[str] = None
    is_ignite: bool = False
    function_calls: Optional[Any] = None

    @property
    def is_function_callback(self) -> bool:
        return self.function_calls is not None

    def build_user_text(self) -> str:
        """拼接上下文与 IGNITE 前缀后的用户消息"""
        text = self.message
        if self.context:
            text = CONTEXT_TEMPLATE.format(context=self.context, message=self.message)
        if self.is_ignite:
            text = IGNITE_PREFIX + text
        return text

    def build_system_prompt(self) -> str:
        sections = []
        if self.user_memory:
            sections.append(f"[USER LONG-TERM MEMORY & CONTEXT]:\n{self.user_memory}")
        if self.context:
            sections.append(self.context)
        return "\n\n".join(sections)

    def build_messages(self) -> List[Dict[str, Any]]:
        """转换为 LLM 客户端的消息列表（带图片时使用多模态内容）"""
        messages: List[Dict[str, Any]] = []
        system_prompt = self.build_system_prompt()
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})

        user_text = self.build_user_text()
        if self.image_base64:
            image = parse_image_payload(self.image_base64)
            content: Any = [
                {"type": "text", "text": user_text},
                {"type": "image_url", "image_url": {"url": image.data_url}},
            ]
        else:
            content = user_text
        messages.append({"role": "user", "content": content})
        return messages


@dataclass
class AssistantReply:
    """对话结果"""
    text: str
    function_calls: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {'text': self.text, 'function_calls': self.function_calls}
