"""YEN 验证

decode 只检查形状（行数、行长度）；这里额外检查玩家标记和格子符号。
"""

from __future__ import annotations

from collections import Counter

from ygame.yen.parse import decode
from ygame.yen.types import EMPTY, FormatError, YenPosition


def validate_yen(position: YenPosition) -> tuple[bool, str]:
    """验证局面是否合法

    检查项：
    1. 形状：size >= 1，行数 == size，第 r 行长度 == r+1
    2. 玩家：恰好两个不同的单字符标记，且不能是空格标记
    3. 格子：只能是空格标记或玩家标记
    4. 回合：整数时必须是玩家序号，字符串时必须是玩家标记

    Returns:
        (is_valid, message)
    """
    try:
        cells = decode(position)
    except FormatError as e:
        return False, str(e)

    players = position.players
    if len(players) != 2:
        return False, f"Expected 2 players, got {len(players)}"
    if any(len(p) != 1 for p in players):
        return False, f"Player marks must be single characters: {list(players)}"
    if players[0] == players[1]:
        return False, f"Player marks must differ: {list(players)}"
    if EMPTY in players:
        return False, f"Player mark cannot be '{EMPTY}'"

    allowed = {EMPTY, *players}
    for cell in cells:
        if cell.value not in allowed:
            return False, f"Invalid symbol '{cell.value}' at cell {cell.cell_id}"

    turn = position.turn
    if isinstance(turn, bool):
        return False, f"Invalid turn: {turn!r}"
    if isinstance(turn, int):
        if not 0 <= turn < len(players):
            return False, f"Invalid turn index: {turn}"
    elif turn not in players:
        return False, f"Invalid turn mark: {turn!r}"

    return True, "OK"


def count_stones(position: YenPosition) -> dict[str, int]:
    """统计每个玩家的棋子数"""
    counts = Counter(cell.value for cell in decode(position) if cell.value != EMPTY)
    return {player: counts.get(player, 0) for player in position.players}
