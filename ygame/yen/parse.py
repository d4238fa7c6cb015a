"""YEN 解析：局面 -> 格子列表"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from ygame.types import Cell
from ygame.yen.coords import coordinates_of, side_membership
from ygame.yen.types import DEFAULT_PLAYERS, FormatError, YenPosition


def decode(position: YenPosition) -> list[Cell]:
    """把局面解码为格子列表

    第 r 行必须恰好有 r+1 个字符，每个字符对应一个格子。
    cell_id 按行优先连续编号。任何一处不合法都会整体失败，不返回部分结果。

    Args:
        position: 局面

    Returns:
        size*(size+1)/2 个格子

    Raises:
        FormatError: 尺寸、行数或行长度错误
    """
    size = position.size
    if size < 1:
        raise FormatError(f"Invalid YEN size: {size}")

    rows = position.rows
    if len(rows) != size:
        raise FormatError(f"Invalid YEN layout: expected {size} rows, got {len(rows)}")

    cells: list[Cell] = []
    cell_id = 0

    for r, row_str in enumerate(rows):
        expected_len = r + 1
        if len(row_str) != expected_len:
            raise FormatError(
                f"Invalid YEN row {r}: expected length {expected_len}, got {len(row_str)}"
            )

        for c, value in enumerate(row_str):
            coords = coordinates_of(size, r, c)
            cells.append(
                Cell(
                    cell_id=cell_id,
                    row=r,
                    col=c,
                    value=value,
                    coords=coords,
                    touches=side_membership(*coords),
                )
            )
            cell_id += 1

    return cells


def parse_yen(data: Mapping[str, Any] | str) -> YenPosition:
    """从 JSON 对象（或 JSON 文本）构造 YenPosition

    Examples:
        >>> parse_yen('{"size": 2, "turn": 0, "players": ["B", "R"], "layout": "./.."}')
        YenPosition(size=2, layout='./..', turn=0, players=('B', 'R'))
    """
    if isinstance(data, str):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as e:
            raise FormatError(f"Invalid YEN JSON: {e.msg}") from e

    if not isinstance(data, Mapping):
        raise FormatError("Invalid YEN: expected an object")

    size = data.get("size")
    layout = data.get("layout")
    if not isinstance(size, int) or isinstance(size, bool):
        raise FormatError(f"Invalid YEN size: {size!r}")
    if not isinstance(layout, str):
        raise FormatError(f"Invalid YEN layout: {layout!r}")

    players = data.get("players") or DEFAULT_PLAYERS
    return YenPosition(
        size=size,
        layout=layout,
        turn=data.get("turn", 0),
        players=tuple(str(p) for p in players),
    )
