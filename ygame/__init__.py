"""
Y 棋 (Game of Y) 客户端

三角形棋盘上的连接棋：双方轮流在空格落子，先用一串相连的棋子
同时连通三角形三条边的一方获胜。胜负由对局引擎判定，
本包负责局面记法（YEN）的解码、坐标换算和人机对局会话。
"""

from ygame.session import GameSession, SessionConfig, SessionState
from ygame.types import Cell, Coords, Finished, GameStatus, Move, Ongoing, Touches
from ygame.yen import FormatError, YenPosition, decode, total_cells

__all__ = [
    "Cell",
    "Coords",
    "Touches",
    "Move",
    "Ongoing",
    "Finished",
    "GameStatus",
    "YenPosition",
    "FormatError",
    "decode",
    "total_cells",
    "GameSession",
    "SessionConfig",
    "SessionState",
]
