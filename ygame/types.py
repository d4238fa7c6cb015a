"""
核心类型定义

Y 棋（三角形棋盘上的连接棋）客户端使用的基础数据类型
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Union


class Coords(NamedTuple):
    """重心坐标 (x, y, z)

    满足 x + y + z == size - 1
    x == 0 表示贴 a 边，y == 0 贴 b 边，z == 0 贴 c 边
    """

    x: int
    y: int
    z: int

    def to_dict(self) -> dict[str, int]:
        return {"x": self.x, "y": self.y, "z": self.z}


class Touches(NamedTuple):
    """格子贴靠的三角形边（角上的格子贴两条边）"""

    a: bool
    b: bool
    c: bool


@dataclass(frozen=True)
class Cell:
    """棋盘上的一个格子（解码结果，只读）"""

    cell_id: int
    row: int
    col: int
    value: str
    coords: Coords
    touches: Touches

    @property
    def is_empty(self) -> bool:
        # 避免循环导入，空格标记与 yen.types.EMPTY 保持一致
        return self.value == "."


@dataclass(frozen=True)
class Move:
    """已执行的一步棋"""

    actor: str  # "human" / "bot"
    cell_id: int
    coords: Coords


@dataclass(frozen=True)
class Ongoing:
    """对局进行中，next 为下一个落子方"""

    next: str


@dataclass(frozen=True)
class Finished:
    """对局结束，winner 为胜者"""

    winner: str


GameStatus = Union[Ongoing, Finished]
