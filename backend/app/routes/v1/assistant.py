"""AI assistant API routes.

服务端代理：API 密钥只保存在服务端环境变量中。
响应格式与前端约定一致: 成功 {text, functionCalls}，失败 {error, details, diagnostic}。
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.schemas.assistant import ChatErrorResponse, ChatRequest, ChatResponse
from app.core.deps import get_assistant_service
from domains.assistant_hub import AssistantRequest
from domains.core import ConfigurationError, ExternalServiceError
from domains.workspace_core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={500: {"model": ChatErrorResponse}},
)
async def chat(
    request: ChatRequest,
    service=Depends(get_assistant_service),
):
    """发送一条消息给 AI 助手"""
    try:
        reply = await service.reply(
            AssistantRequest(
                message=request.message,
                image_base64=request.image_base64,
                context=request.context,
                user_memory=request.user_memory,
                is_ignite=request.is_ignite,
                function_calls=request.function_calls,
            )
        )
    except ConfigurationError as e:
        logger.error("assistant_api_key_missing", config_key=e.config_key)
        return JSONResponse(
            status_code=500,
            content=ChatErrorResponse(
                error="API key not configured",
                details="LLM_API_KEY environment variable is missing.",
                diagnostic="MISSING_API_KEY",
            ).model_dump(),
        )
    except ExternalServiceError as e:
        logger.error("assistant_generation_failed", error=e.message)
        return JSONResponse(
            status_code=500,
            content=ChatErrorResponse(
                error="Failed to generate response",
                details=e.message,
                diagnostic="GENERATION_ERROR",
            ).model_dump(),
        )

    return ChatResponse(text=reply.text, function_calls=reply.function_calls)
