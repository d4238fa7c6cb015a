"""格子编号与重心坐标的相互转换

格子按行优先编号：第 r 行（从 0 开始）有 r+1 个格子，起始编号 r*(r+1)/2。
坐标规则与引擎一致：

    x = size - 1 - row
    y = col
    z = size - 1 - x - y

所有计算都是整数运算。
"""

from __future__ import annotations

from math import isqrt

from ygame.types import Coords, Touches


def total_cells(size: int) -> int:
    """三角数 size*(size+1)/2"""
    if size < 0:
        raise ValueError(f"Invalid board size: {size}")
    return size * (size + 1) // 2


def row_start(row: int) -> int:
    """第 row 行第一个格子的编号"""
    return row * (row + 1) // 2


def cell_id_of(row: int, col: int) -> int:
    """(row, col) -> cell_id"""
    if row < 0 or not 0 <= col <= row:
        raise ValueError(f"Invalid cell: row {row}, col {col}")
    return row_start(row) + col


def row_col_of(cell_id: int) -> tuple[int, int]:
    """cell_id -> (row, col)

    取满足 r*(r+1)/2 <= cell_id 的最大 r
    """
    if cell_id < 0:
        raise ValueError(f"cell_id out of range: {cell_id}")
    row = (isqrt(8 * cell_id + 1) - 1) // 2
    return row, cell_id - row_start(row)


def coordinates_of(size: int, row: int, col: int) -> Coords:
    """(row, col) -> (x, y, z)"""
    x = size - 1 - row
    y = col
    z = (size - 1) - x - y
    return Coords(x, y, z)


def side_membership(x: int, y: int, z: int) -> Touches:
    """坐标为 0 的分量对应贴靠的边"""
    return Touches(a=x == 0, b=y == 0, c=z == 0)


def coords_of_cell(cell_id: int, size: int) -> Coords:
    """cell_id -> 坐标（越界时报错）

    Args:
        cell_id: 格子编号
        size: 棋盘尺寸

    Returns:
        Coords

    Raises:
        ValueError: cell_id 不在 [0, total_cells(size)) 内
    """
    total = total_cells(size)
    if not 0 <= cell_id < total:
        raise ValueError(f"cell_id out of range: {cell_id} (max {total - 1})")
    row, col = row_col_of(cell_id)
    return coordinates_of(size, row, col)


def cell_id_of_coords(coords: Coords, size: int) -> int:
    """坐标 -> cell_id"""
    x, y, z = coords
    if min(x, y, z) < 0 or x + y + z != size - 1:
        raise ValueError(f"Invalid coordinates for size {size}: ({x}, {y}, {z})")
    return cell_id_of(size - 1 - x, y)
