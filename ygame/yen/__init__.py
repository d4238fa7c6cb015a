"""
YEN 局面记法

## 格式

    {"size": 3, "turn": 0, "players": ["B", "R"], "layout": "./../B.R"}

- size: 三角形边长（>= 1）
- turn: 轮到谁走，玩家序号或玩家标记
- players: 两个玩家标记，按落子顺序
- layout: 从顶点往下逐行排列，每行用 `/` 分隔，第 r 行有 r+1 个格子

### 格子符号

- `.` 空格
- 玩家标记（默认 `B` / `R`）

### 编号和坐标

格子按行优先编号（第 r 行从 r*(r+1)/2 开始）。重心坐标：

    x = size - 1 - row,  y = col,  z = size - 1 - x - y

x/y/z 为 0 分别表示贴 a/b/c 边。

## 示例

    layout "./../B.R" (size 3):

            .           cell 0   (2,0,0)
           . .          cell 1-2
          B . R         cell 3-5, cell 3 = (0,0,2)
"""

# Types
from ygame.yen.types import (
    DEFAULT_PLAYERS,
    EMPTY,
    MIN_GAME_SIZE,
    ROW_SEPARATOR,
    FormatError,
    YenPosition,
)

# Coordinates
from ygame.yen.coords import (
    cell_id_of,
    cell_id_of_coords,
    coordinates_of,
    coords_of_cell,
    row_col_of,
    side_membership,
    total_cells,
)

# Parse
from ygame.yen.parse import decode, parse_yen

# Generate
from ygame.yen.generate import empty_layout, encode, new_position, to_yen_dict

# Validate
from ygame.yen.validate import count_stones, validate_yen

# Display
from ygame.yen.display import EMPTY_SYMBOL, yen_to_ascii, yen_to_rich

__all__ = [
    # Types
    "DEFAULT_PLAYERS",
    "EMPTY",
    "MIN_GAME_SIZE",
    "ROW_SEPARATOR",
    "FormatError",
    "YenPosition",
    # Coordinates
    "total_cells",
    "cell_id_of",
    "row_col_of",
    "coordinates_of",
    "side_membership",
    "coords_of_cell",
    "cell_id_of_coords",
    # Parse
    "decode",
    "parse_yen",
    # Generate
    "encode",
    "empty_layout",
    "new_position",
    "to_yen_dict",
    # Validate
    "validate_yen",
    "count_stones",
    # Display
    "EMPTY_SYMBOL",
    "yen_to_ascii",
    "yen_to_rich",
]
