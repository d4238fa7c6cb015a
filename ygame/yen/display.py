"""YEN 显示函数（ASCII、rich 终端）"""

from __future__ import annotations

from rich.text import Text

from ygame.yen.parse import decode
from ygame.yen.types import EMPTY, YenPosition

EMPTY_SYMBOL = "·"

# 玩家颜色（与网页版一致：先手蓝，后手橙）
PLAYER_STYLES = ("bold #28BBF5", "bold #FF7B00")


def yen_to_ascii(position: YenPosition, show_ids: bool = False) -> str:
    """将局面转换为三角形 ASCII 棋盘

    Args:
        position: 局面
        show_ids: 空格子显示 cell_id（方便在终端里选格子）

    Returns:
        ASCII 棋盘字符串

    Examples:
        >>> print(yen_to_ascii(YenPosition(size=3, layout="./../B.R")))
            ·
           · ·
          B · R
    """
    cells = decode(position)
    width = len(str(len(cells) - 1)) if show_ids else 1

    lines = []
    for r in range(position.size):
        row_cells = [cell for cell in cells if cell.row == r]
        symbols = []
        for cell in row_cells:
            if cell.value != EMPTY:
                symbols.append(cell.value.center(width))
            elif show_ids:
                symbols.append(str(cell.cell_id).rjust(width))
            else:
                symbols.append(EMPTY_SYMBOL)
        indent = " " * ((position.size - r - 1) * (width + 1) // 2 + 2)
        lines.append(indent + " ".join(symbols))

    return "\n".join(lines)


def yen_to_rich(position: YenPosition, show_ids: bool = True) -> Text:
    """带颜色的终端棋盘"""
    cells = decode(position)
    width = len(str(len(cells) - 1)) if show_ids else 1
    styles = dict(zip(position.players, PLAYER_STYLES))

    text = Text()
    for r in range(position.size):
        text.append(" " * ((position.size - r - 1) * (width + 1) // 2 + 2))
        for cell in (c for c in cells if c.row == r):
            if cell.value == EMPTY:
                label = str(cell.cell_id).rjust(width) if show_ids else EMPTY_SYMBOL
                text.append(label, style="dim")
            else:
                text.append(cell.value.center(width), style=styles.get(cell.value, "bold"))
            text.append(" ")
        text.append("\n")
    return text
