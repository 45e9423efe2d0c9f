"""
核心层：面板状态模型和控制器
"""

from .controller import (
    PanelEvent,
    ToolPanelController,
    apply_event,
    on_focus_in,
    on_focus_out,
    on_hover_enter,
    on_hover_leave,
)
from .models import IDLE_STATE, PanelState, ToolId

__all__ = [
    'ToolId',
    'PanelState',
    'IDLE_STATE',
    'PanelEvent',
    'ToolPanelController',
    'apply_event',
    'on_hover_enter',
    'on_hover_leave',
    'on_focus_in',
    'on_focus_out',
]
