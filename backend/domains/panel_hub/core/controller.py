"""
工具面板控制器

状态转换是纯函数（旧状态 + 事件 -> 新状态），控制器只负责保存当前状态、
分发事件、在状态变化时通知订阅者（视图层按 expanded_tool 重新渲染）。

转换规则:
- hover_enter(T): hovered = T
- hover_leave(T): 仅当 hovered == T 时清空（迟到的离开事件不会关掉新悬停的工具）
- focus_in(T):    锁定 T，同时 hovered = T（聚焦意味着指针在该工具的输入框上）
- focus_out(T):   仅当 locked == T 时解锁；hovered 保持不变

所有转换对任意 ToolId 都有定义，重复相同输入结果不变。
"""

import logging
import threading
from enum import Enum
from typing import Callable, List, Optional

from .models import IDLE_STATE, PanelState, ToolId

logger = logging.getLogger(__name__)


class PanelEvent(str, Enum):
    """视图层转发的原始事件"""
    HOVER_ENTER = "hover_enter"
    HOVER_LEAVE = "hover_leave"
    FOCUS_IN = "focus_in"
    FOCUS_OUT = "focus_out"


# ==================== 状态转换（纯函数） ====================

def on_hover_enter(state: PanelState, tool: ToolId) -> PanelState:
    return PanelState(
        hovered_tool=tool,
        typing_locked=state.typing_locked,
        locked_tool=state.locked_tool,
    )


def on_hover_leave(state: PanelState, tool: ToolId) -> PanelState:
    if state.hovered_tool != tool:
        return state
    return PanelState(
        hovered_tool=None,
        typing_locked=state.typing_locked,
        locked_tool=state.locked_tool,
    )


def on_focus_in(state: PanelState, tool: ToolId) -> PanelState:
    return PanelState(hovered_tool=tool, typing_locked=True, locked_tool=tool)


def on_focus_out(state: PanelState, tool: ToolId) -> PanelState:
    if state.locked_tool != tool:
        return state
    return PanelState(hovered_tool=state.hovered_tool, typing_locked=False, locked_tool=None)


TRANSITIONS = {
    PanelEvent.HOVER_ENTER: on_hover_enter,
    PanelEvent.HOVER_LEAVE: on_hover_leave,
    PanelEvent.FOCUS_IN: on_focus_in,
    PanelEvent.FOCUS_OUT: on_focus_out,
}


def apply_event(state: PanelState, event: PanelEvent, tool: ToolId) -> PanelState:
    """按事件类型执行状态转换"""
    return TRANSITIONS[PanelEvent(event)](state, tool)


# ==================== 控制器 ====================

StateListener = Callable[[PanelState], None]


class ToolPanelController:
    """
    工具面板控制器

    只维护交互状态，不持有任何持久化数据。

    使用示例:
        controller = ToolPanelController()
        controller.on_focus_in(ToolId.NOTES)
        controller.on_hover_enter(ToolId.INVOICE)
        controller.expanded_tool()  # ToolId.NOTES，输入锁定优先
    """

    def __init__(self, initial: PanelState = IDLE_STATE):
        self._state = initial
        self._lock = threading.Lock()
        self._listeners: List[StateListener] = []

    @property
    def state(self) -> PanelState:
        return self._state

    def snapshot(self) -> PanelState:
        """当前状态（不可变值）"""
        return self._state

    def expanded_tool(self) -> Optional[ToolId]:
        return self._state.expanded_tool

    # ==================== 事件 ====================

    def on_hover_enter(self, tool: ToolId) -> PanelState:
        return self.dispatch(PanelEvent.HOVER_ENTER, tool)

    def on_hover_leave(self, tool: ToolId) -> PanelState:
        return self.dispatch(PanelEvent.HOVER_LEAVE, tool)

    def on_focus_in(self, tool: ToolId) -> PanelState:
        return self.dispatch(PanelEvent.FOCUS_IN, tool)

    def on_focus_out(self, tool: ToolId) -> PanelState:
        return self.dispatch(PanelEvent.FOCUS_OUT, tool)

    def dispatch(self, event: PanelEvent, tool: ToolId) -> PanelState:
        """执行一次状态转换，状态变化时通知订阅者"""
        with self._lock:
            previous = self._state
            self._state = apply_event(previous, event, ToolId(tool))
            current = self._state

        if current != previous:
            logger.debug(
                f"panel_state_changed: event={PanelEvent(event).value}, tool={ToolId(tool).value}, "
                f"expanded={current.expanded_tool.value if current.expanded_tool else None}"
            )
            self._notify(current)
        return current

    def reset(self) -> PanelState:
        """回到空闲状态（无悬停、无锁定）"""
        with self._lock:
            changed = self._state != IDLE_STATE
            self._state = IDLE_STATE
        if changed:
            self._notify(IDLE_STATE)
        return IDLE_STATE

    # ==================== 订阅 ====================

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """订阅状态变化，返回取消订阅函数"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, state: PanelState) -> None:
        for listener in list(self._listeners):
            listener(state)
