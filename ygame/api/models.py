"""
引擎协议请求/响应模型

Pydantic models for engine protocol validation.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from ygame.types import Coords, Finished, GameStatus, Move, Ongoing
from ygame.yen.types import DEFAULT_PLAYERS, YenPosition


class YenModel(BaseModel):
    """局面（YEN）"""

    size: int
    turn: int | str = 0
    players: list[str] = Field(default_factory=lambda: list(DEFAULT_PLAYERS))
    layout: str

    @classmethod
    def from_position(cls, position: YenPosition) -> "YenModel":
        return cls(
            size=position.size,
            turn=position.turn,
            players=list(position.players),
            layout=position.layout,
        )

    def to_position(self) -> YenPosition:
        return YenPosition(
            size=self.size,
            turn=self.turn,
            players=tuple(self.players),
            layout=self.layout,
        )


class CoordsModel(BaseModel):
    """重心坐标"""

    x: int
    y: int
    z: int


class NewGameRequest(BaseModel):
    """新对局请求"""

    size: int


class NewGameResponse(BaseModel):
    """新对局响应"""

    model_config = ConfigDict(populate_by_name=True)

    yen: YenModel = Field(validation_alias=AliasChoices("yen", "position"))


class MoveRequest(BaseModel):
    """落子请求"""

    yen: YenModel
    cell_id: int = Field(ge=0)


class AppliedMove(BaseModel):
    """引擎执行的一步"""

    cell_id: int
    coords: CoordsModel

    def to_move(self, actor: str) -> Move:
        return Move(
            actor=actor,
            cell_id=self.cell_id,
            coords=Coords(self.coords.x, self.coords.y, self.coords.z),
        )


class OngoingStatus(BaseModel):
    """对局继续"""

    state: Literal["ongoing"]
    next: str


class FinishedStatus(BaseModel):
    """对局结束"""

    state: Literal["finished"]
    winner: str


StatusModel = Annotated[Union[OngoingStatus, FinishedStatus], Field(discriminator="state")]


class HumanVsBotMoveResponse(BaseModel):
    """人机落子响应"""

    model_config = ConfigDict(populate_by_name=True)

    yen: YenModel = Field(validation_alias=AliasChoices("yen", "position"))
    human_move: AppliedMove
    bot_move: AppliedMove | None = None
    status: StatusModel

    def game_status(self) -> GameStatus:
        if isinstance(self.status, FinishedStatus):
            return Finished(winner=self.status.winner)
        return Ongoing(next=self.status.next)
