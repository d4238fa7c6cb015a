"""
测试用假引擎

实现与真实引擎相同的 HTTP 协议，但不判断胜负：
bot 总是下第一个空格，第 finish_after 步人类落子后宣布 winner。
"""

from __future__ import annotations

from dataclasses import dataclass, field

from fastapi import APIRouter, FastAPI
from fastapi.responses import JSONResponse, PlainTextResponse

from ygame.api.models import MoveRequest, NewGameRequest
from ygame.types import Cell
from ygame.yen import (
    EMPTY,
    MIN_GAME_SIZE,
    FormatError,
    YenPosition,
    coords_of_cell,
    decode,
    encode,
    new_position,
    to_yen_dict,
)

API_VERSION = "v1"


@dataclass
class FakeEngineConfig:
    """假引擎行为"""

    bots: tuple[str, ...] = ("random_bot",)
    finish_after: int | None = None  # 第几步人类落子后结束
    winner: str = "human"
    human_moves: list[int] = field(default_factory=list)


def _error(message: str, bot_id: str | None = None, status_code: int = 400) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"api_version": API_VERSION, "bot_id": bot_id, "message": message},
    )


def _place(
    position: YenPosition, cells: list[Cell], cell_id: int, mark: str
) -> tuple[YenPosition, list[Cell]]:
    updated = [
        Cell(c.cell_id, c.row, c.col, mark, c.coords, c.touches) if c.cell_id == cell_id else c
        for c in cells
    ]
    turn = (position.players.index(mark) + 1) % len(position.players)
    layout = encode(position.size, updated)
    return YenPosition(size=position.size, layout=layout, turn=turn, players=position.players), updated


def create_app(config: FakeEngineConfig | None = None) -> FastAPI:
    """创建假引擎应用（路由挂在 /api/game 下，与网关一致）"""
    config = config or FakeEngineConfig()
    app = FastAPI(title="Fake Y engine")
    router = APIRouter(prefix="/api/game")

    @router.get("/status", response_class=PlainTextResponse)
    def status():
        return "OK"

    @router.post(f"/{API_VERSION}/game/new")
    def new_game(request: NewGameRequest):
        if request.size < MIN_GAME_SIZE:
            return _error("Board size must be >= 2")
        return {"yen": to_yen_dict(new_position(request.size))}

    @router.post(f"/{API_VERSION}/game/hvb/move/{{bot_id}}")
    def human_vs_bot_move(bot_id: str, request: MoveRequest):
        position = request.yen.to_position()
        try:
            cells = decode(position)
        except FormatError as e:
            return _error(f"Invalid YEN: {e}", bot_id)

        if request.cell_id >= len(cells):
            return _error(
                f"cell_id out of range: {request.cell_id} (max {len(cells) - 1})", bot_id
            )
        if cells[request.cell_id].value != EMPTY:
            return _error("Human move rejected: cell is occupied", bot_id)

        human, bot = position.players[0], position.players[1]
        position, cells = _place(position, cells, request.cell_id, human)
        config.human_moves.append(request.cell_id)
        human_move = {
            "cell_id": request.cell_id,
            "coords": coords_of_cell(request.cell_id, position.size).to_dict(),
        }

        if config.finish_after is not None and len(config.human_moves) >= config.finish_after:
            if config.winner == "human":
                return {
                    "yen": to_yen_dict(position),
                    "human_move": human_move,
                    "bot_move": None,
                    "status": {"state": "finished", "winner": "human"},
                }

        if bot_id not in config.bots:
            return _error(f"Unknown bot_id: {bot_id}", bot_id)

        empty = [c.cell_id for c in cells if c.value == EMPTY]
        if not empty:
            return _error("Bot could not choose a move", bot_id)
        bot_cell = empty[0]
        position, cells = _place(position, cells, bot_cell, bot)

        finished = config.finish_after is not None and len(config.human_moves) >= config.finish_after
        return {
            "yen": to_yen_dict(position),
            "human_move": human_move,
            "bot_move": {
                "cell_id": bot_cell,
                "coords": coords_of_cell(bot_cell, position.size).to_dict(),
            },
            "status": (
                {"state": "finished", "winner": config.winner}
                if finished
                else {"state": "ongoing", "next": "human"}
            ),
        }

    app.include_router(router)
    return app
