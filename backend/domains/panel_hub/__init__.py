"""
快捷工具面板领域模块

面板上的工具悬停展开、输入时锁定展开，同一时刻最多展开一个工具。
控制器只持有交互状态，便签/提醒/发票的内容由各自的领域模块管理。
"""

from .core.controller import PanelEvent, ToolPanelController, apply_event
from .core.models import IDLE_STATE, PanelState, ToolId

__all__ = [
    'ToolId',
    'PanelState',
    'IDLE_STATE',
    'PanelEvent',
    'ToolPanelController',
    'apply_event',
]
