"""
工具面板状态模型

面板上的每个工具（便签、提醒、发票）都可以展开或收起，
同一时刻最多只有一个工具处于展开状态。

展开的工具由两个信号共同决定:
- 悬停 (hover): 指针当前所在的工具
- 输入锁定 (typing lock): 用户正在某个工具内输入，优先级高于悬停
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ToolId(str, Enum):
    """
    工具标识

    状态机不枚举工具集合，新增工具只需在这里添加成员。
    """
    NOTES = "notes"
    REMINDERS = "reminders"
    INVOICE = "invoice"


@dataclass(frozen=True)
class PanelState:
    """
    面板状态（不可变值）

    Attributes:
        hovered_tool: 指针悬停的工具
        typing_locked: 是否处于输入锁定
        locked_tool: 输入锁定的工具；typing_locked 为 True 时必不为空
    """
    hovered_tool: Optional[ToolId] = None
    typing_locked: bool = False
    locked_tool: Optional[ToolId] = None

    def __post_init__(self):
        if self.typing_locked and self.locked_tool is None:
            raise ValueError("typing_locked requires locked_tool")

    @property
    def expanded_tool(self) -> Optional[ToolId]:
        """当前展开的工具：输入锁定优先，否则取悬停的工具"""
        return self.locked_tool if self.typing_locked else self.hovered_tool

    def to_dict(self) -> dict:
        return {
            'hovered_tool': self.hovered_tool.value if self.hovered_tool else None,
            'typing_locked': self.typing_locked,
            'locked_tool': self.locked_tool.value if self.locked_tool else None,
            'expanded_tool': self.expanded_tool.value if self.expanded_tool else None,
        }


IDLE_STATE = PanelState()
