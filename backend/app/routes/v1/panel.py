"""Tool panel API routes.

视图层把原始的悬停/聚焦事件转发到这里，根据返回的 expanded_tool 渲染面板。
"""

from fastapi import APIRouter, Depends

from app.schemas.common import ApiResponse, model_to_dict
from app.schemas.panel import PanelEventRequest, PanelState
from app.core.deps import get_panel_controller

router = APIRouter()


@router.get("/", response_model=ApiResponse[PanelState])
async def get_panel_state(controller=Depends(get_panel_controller)):
    """获取当前面板状态"""
    return ApiResponse(data=PanelState(**model_to_dict(controller.snapshot())))


@router.post("/events", response_model=ApiResponse[PanelState])
async def dispatch_panel_event(
    request: PanelEventRequest,
    controller=Depends(get_panel_controller),
):
    """分发一个面板事件，返回新状态"""
    state = controller.dispatch(request.event, request.tool)
    return ApiResponse(data=PanelState(**model_to_dict(state)))


@router.post("/reset", response_model=ApiResponse[PanelState])
async def reset_panel(controller=Depends(get_panel_controller)):
    """回到空闲状态"""
    state = controller.reset()
    return ApiResponse(data=PanelState(**model_to_dict(state)))
