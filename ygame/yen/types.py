"""YEN 类型定义和常量"""

from __future__ import annotations

from dataclasses import dataclass, field

# =============================================================================
# 常量定义
# =============================================================================

# 行分隔符
ROW_SEPARATOR = "/"

# 空格子
EMPTY = "."

# 默认玩家标记（先手蓝 B，后手橙 R）
DEFAULT_PLAYERS: tuple[str, str] = ("B", "R")

# 引擎一侧的最小棋盘尺寸（新对局）
MIN_GAME_SIZE = 2


class FormatError(ValueError):
    """YEN 格式错误（行数或行长度不符）"""


# =============================================================================
# 数据结构
# =============================================================================


@dataclass(frozen=True)
class YenPosition:
    """一个局面的快照（不可变）

    size: 三角形边长
    turn: 轮到谁走（引擎给出的整数序号或玩家标记）
    players: 两个玩家标记，按顺序
    layout: 按行排列的格子，行之间用 "/" 分隔
    """

    size: int
    layout: str
    turn: int | str = 0
    players: tuple[str, ...] = field(default=DEFAULT_PLAYERS)

    @property
    def rows(self) -> list[str]:
        """按 "/" 拆开的各行"""
        return self.layout.split(ROW_SEPARATOR)
