"""
对局会话

一个玩家视角的一局人机对局。状态机：

    IDLE --request_new_game--> STARTING --成功--> AWAITING_MOVE
                                        --失败--> IDLE
    AWAITING_MOVE --select_cell(空格)--> SUBMITTING --成功(ongoing)--> AWAITING_MOVE
                                                    --成功(finished)--> FINISHED
                                                    --失败--> AWAITING_MOVE（局面不变）
    任意状态 --abandon--> IDLE

每次发出请求前 generation 加一，请求返回时如果 generation 已经变了，结果直接丢弃。
同一时刻最多只有一个请求在途（STARTING / SUBMITTING）。
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar
from uuid import uuid4

from ygame.api.client import DEFAULT_BASE_URL, EngineClient
from ygame.api.errors import EngineError, NetworkError, describe_error
from ygame.logging import logger
from ygame.types import Cell, Finished, GameStatus, Move
from ygame.yen.parse import decode
from ygame.yen.types import MIN_GAME_SIZE, FormatError, YenPosition

T = TypeVar("T")

DEFAULT_SIZE = 7
DEFAULT_BOT = "random_bot"

HUMAN = "human"
BOT = "bot"


class SessionState(Enum):
    """会话状态"""

    IDLE = "idle"
    STARTING = "starting"
    AWAITING_MOVE = "awaiting_move"
    SUBMITTING = "submitting"
    FINISHED = "finished"


@dataclass
class SessionConfig:
    """会话配置"""

    base_url: str = DEFAULT_BASE_URL
    bot_id: str = DEFAULT_BOT
    size: int = DEFAULT_SIZE
    timeout_seconds: float = 10.0  # 单次请求最长等待


def normalize_size(value: object, default: int = DEFAULT_SIZE) -> int:
    """把用户输入的尺寸规整为合法值，不合法（非整数或 < 2）时用默认值"""
    try:
        size = int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        return default
    if isinstance(value, float) and not value.is_integer():
        return default
    return size if size >= MIN_GAME_SIZE else default


class GameSession:
    """人机对局会话

    Args:
        engine: 引擎客户端（需要 new_game / human_vs_bot_move 两个协程方法）
        config: 会话配置
    """

    def __init__(self, engine: EngineClient, config: SessionConfig | None = None):
        self.session_id = str(uuid4())
        self.engine = engine
        self.config = config or SessionConfig()

        self._state = SessionState.IDLE
        self._generation = 0
        self._position: YenPosition | None = None
        self._cells: tuple[Cell, ...] = ()
        self._status: GameStatus | None = None
        self._history: list[Move] = []
        self._error: str | None = None

    # =========================================================================
    # 只读属性
    # =========================================================================

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def position(self) -> YenPosition | None:
        return self._position

    @property
    def cells(self) -> tuple[Cell, ...]:
        return self._cells

    @property
    def status(self) -> GameStatus | None:
        """最近一次落子后引擎给出的状态"""
        return self._status

    @property
    def winner(self) -> str | None:
        if isinstance(self._status, Finished):
            return self._status.winner
        return None

    @property
    def history(self) -> tuple[Move, ...]:
        return tuple(self._history)

    @property
    def error(self) -> str | None:
        """最近一次失败的信息，下一次请求开始时清空"""
        return self._error

    @property
    def is_busy(self) -> bool:
        return self._state in (SessionState.STARTING, SessionState.SUBMITTING)

    @property
    def is_interactive(self) -> bool:
        """棋盘是否可以点击"""
        return self._state == SessionState.AWAITING_MOVE

    # =========================================================================
    # 操作
    # =========================================================================

    def can_select(self, cell_id: int) -> bool:
        """落子前的本地检查：等待落子状态，且目标是棋盘上的空格"""
        if self._state != SessionState.AWAITING_MOVE:
            return False
        if not 0 <= cell_id < len(self._cells):
            return False
        return self._cells[cell_id].is_empty

    async def request_new_game(self, size: int | None = None) -> bool:
        """开始新对局

        不在 IDLE 时先放弃当前对局（在途请求的结果会被丢弃）。

        Returns:
            是否成功进入 AWAITING_MOVE
        """
        if self._state != SessionState.IDLE:
            self.abandon()

        size = self.config.size if size is None else size
        token = self._dispatch(SessionState.STARTING)
        logger.info(f"session {self.session_id[:8]}: new game size={size}")

        try:
            position = await self._bounded(self.engine.new_game(size))
            cells = decode(position)
        except (EngineError, FormatError) as e:
            return self._fail(token, "new game", e, SessionState.IDLE)
        except Exception as e:
            return self._fail(token, "new game", e, SessionState.IDLE, unexpected=True)

        if self._is_stale(token, "new game result"):
            return False

        self._position = position
        self._cells = tuple(cells)
        self._transition(SessionState.AWAITING_MOVE)
        return True

    async def select_cell(self, cell_id: int) -> bool:
        """在 cell_id 落子并等待 bot 应答

        不满足 can_select 时什么都不做（不发请求），返回 False。

        Returns:
            引擎是否接受了这一步
        """
        if not self.can_select(cell_id):
            logger.debug(
                f"session {self.session_id[:8]}: ignored cell {cell_id} in {self._state.value}"
            )
            return False

        position = self._position
        if position is None:
            return False
        token = self._dispatch(SessionState.SUBMITTING)

        try:
            result = await self._bounded(
                self.engine.human_vs_bot_move(self.config.bot_id, position, cell_id)
            )
            new_position = result.yen.to_position()
            cells = decode(new_position)
        except (EngineError, FormatError) as e:
            return self._fail(token, f"move {cell_id}", e, SessionState.AWAITING_MOVE)
        except Exception as e:
            return self._fail(
                token, f"move {cell_id}", e, SessionState.AWAITING_MOVE, unexpected=True
            )

        if self._is_stale(token, "move result"):
            return False

        self._history.append(result.human_move.to_move(HUMAN))
        if result.bot_move is not None:
            self._history.append(result.bot_move.to_move(BOT))

        self._position = new_position
        self._cells = tuple(cells)
        self._status = result.game_status()

        if isinstance(self._status, Finished):
            logger.info(f"session {self.session_id[:8]}: finished, winner={self._status.winner}")
            self._transition(SessionState.FINISHED)
        else:
            self._transition(SessionState.AWAITING_MOVE)
        return True

    def abandon(self) -> None:
        """放弃当前对局，回到 IDLE；在途请求的结果将被丢弃"""
        self._generation += 1
        self._position = None
        self._cells = ()
        self._status = None
        self._history = []
        self._error = None
        self._transition(SessionState.IDLE)

    # =========================================================================
    # 内部
    # =========================================================================

    def _dispatch(self, state: SessionState) -> int:
        """发请求前：推进 generation 并进入等待状态，返回本次请求的 token"""
        self._generation += 1
        self._error = None
        self._transition(state)
        return self._generation

    def _fail(
        self,
        token: int,
        what: str,
        error: Exception,
        state: SessionState,
        unexpected: bool = False,
    ) -> bool:
        """请求失败：记录错误信息并回到请求前的状态（过期的失败直接丢弃）"""
        if self._is_stale(token, f"{what} failure"):
            return False
        self._error = describe_error(error)
        if unexpected:
            logger.opt(exception=error).error(
                f"session {self.session_id[:8]}: {what} raised: {self._error}"
            )
        else:
            logger.warning(f"session {self.session_id[:8]}: {what} failed: {self._error}")
        self._transition(state)
        return False

    def _is_stale(self, token: int, what: str) -> bool:
        if token == self._generation:
            return False
        logger.info(
            f"session {self.session_id[:8]}: discarded stale {what} "
            f"(gen {token}, current {self._generation})"
        )
        return True

    def _transition(self, state: SessionState) -> None:
        logger.debug(
            f"session {self.session_id[:8]} gen={self._generation}: "
            f"{self._state.name} -> {state.name}"
        )
        self._state = state

    async def _bounded(self, call: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(call, timeout=self.config.timeout_seconds)
        except asyncio.TimeoutError as e:
            raise NetworkError(
                f"Request timed out after {self.config.timeout_seconds}s"
            ) from e
