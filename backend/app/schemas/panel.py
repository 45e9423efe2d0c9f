"""Tool panel Pydantic schemas."""

from typing import Optional

from pydantic import BaseModel, Field

from domains.panel_hub import PanelEvent, ToolId


class PanelEventRequest(BaseModel):
    """视图层转发的面板事件"""

    event: PanelEvent = Field(..., description="事件类型")
    tool: ToolId = Field(..., description="工具标识")


class PanelState(BaseModel):
    """面板状态"""

    hovered_tool: Optional[ToolId] = Field(None, description="悬停的工具")
    typing_locked: bool = Field(False, description="是否输入锁定")
    locked_tool: Optional[ToolId] = Field(None, description="输入锁定的工具")
    expanded_tool: Optional[ToolId] = Field(None, description="当前展开的工具")
