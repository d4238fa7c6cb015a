"""YEN 生成函数"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from ygame.types import Cell
from ygame.yen.coords import total_cells
from ygame.yen.types import DEFAULT_PLAYERS, EMPTY, ROW_SEPARATOR, YenPosition


def encode(size: int, cells: Iterable[Cell]) -> str:
    """格子列表 -> layout 字符串（decode 的逆操作）

    格子按 cell_id 排序后逐行拼接，因此对任何结构合法的格子序列，
    encode(size, decode(p)) == p.layout。

    Raises:
        ValueError: 格子数量或位置与 size 不符
    """
    ordered = sorted(cells, key=lambda cell: cell.cell_id)
    if len(ordered) != total_cells(size):
        raise ValueError(f"Expected {total_cells(size)} cells for size {size}, got {len(ordered)}")

    rows: list[list[str]] = [[] for _ in range(size)]
    for expected_id, cell in enumerate(ordered):
        if cell.cell_id != expected_id or not 0 <= cell.row < size:
            raise ValueError(f"Unexpected cell {cell.cell_id} at row {cell.row}, col {cell.col}")
        if cell.col != len(rows[cell.row]):
            raise ValueError(f"Unexpected cell {cell.cell_id} at row {cell.row}, col {cell.col}")
        rows[cell.row].append(cell.value)

    return ROW_SEPARATOR.join("".join(row) for row in rows)


def empty_layout(size: int) -> str:
    """空棋盘 layout，例如 size=3 -> "./../..." """
    return ROW_SEPARATOR.join(EMPTY * (r + 1) for r in range(size))


def new_position(size: int, players: tuple[str, ...] = DEFAULT_PLAYERS) -> YenPosition:
    """空棋盘局面，先手为 players[0]"""
    return YenPosition(size=size, layout=empty_layout(size), turn=0, players=players)


def to_yen_dict(position: YenPosition) -> dict[str, Any]:
    """YenPosition -> JSON 对象（引擎协议格式）"""
    return {
        "size": position.size,
        "turn": position.turn,
        "players": list(position.players),
        "layout": position.layout,
    }
