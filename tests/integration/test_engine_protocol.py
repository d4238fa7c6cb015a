"""
引擎协议集成测试

客户端 + 会话通过 ASGITransport 与假引擎（FastAPI）对话
"""

import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from ygame.api.client import EngineClient
from ygame.api.errors import EngineResponseError
from ygame.session import GameSession, SessionConfig, SessionState
from ygame.types import Coords
from ygame.yen import decode, new_position

from fake_engine import FakeEngineConfig, create_app

BASE_URL = "http://testserver/api/game"


def _engine_client(config: FakeEngineConfig) -> EngineClient:
    transport = httpx.ASGITransport(app=create_app(config))
    return EngineClient(base_url=BASE_URL, transport=transport)


@pytest.fixture
def engine_config():
    return FakeEngineConfig()


@pytest_asyncio.fixture
async def client(engine_config):
    async with _engine_client(engine_config) as engine_client:
        yield engine_client


class TestFakeEngine:
    """假引擎本身（同步 TestClient）"""

    def test_status(self):
        with TestClient(create_app()) as c:
            response = c.get("/api/game/status")
        assert response.status_code == 200
        assert response.text == "OK"

    def test_new_game_rejects_small_board(self):
        with TestClient(create_app()) as c:
            response = c.post("/api/game/v1/game/new", json={"size": 1})
        assert response.status_code == 400
        assert response.json()["message"] == "Board size must be >= 2"


class TestClientAgainstEngine:
    """客户端对接假引擎"""

    @pytest.mark.asyncio
    async def test_status(self, client: EngineClient):
        assert await client.status() == "OK"

    @pytest.mark.asyncio
    async def test_new_game(self, client: EngineClient):
        position = await client.new_game(4)
        assert position == new_position(4)

    @pytest.mark.asyncio
    async def test_new_game_error_message(self, client: EngineClient):
        with pytest.raises(EngineResponseError, match="Board size must be >= 2") as exc_info:
            await client.new_game(1)
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_move_round_trip(self, client: EngineClient):
        position = await client.new_game(3)

        result = await client.human_vs_bot_move("random_bot", position, 3)

        assert result.human_move.cell_id == 3
        assert result.human_move.to_move("human").coords == Coords(0, 0, 2)
        assert result.bot_move is not None
        assert result.bot_move.cell_id == 0
        assert [c.value for c in decode(result.yen.to_position())] == ["R", ".", ".", "B", ".", "."]

    @pytest.mark.asyncio
    async def test_unknown_bot(self, client: EngineClient):
        position = await client.new_game(3)
        with pytest.raises(EngineResponseError, match="Unknown bot_id: nope"):
            await client.human_vs_bot_move("nope", position, 0)


class TestSessionAgainstEngine:
    """完整会话流程"""

    @pytest.mark.asyncio
    async def test_play_until_finished(self):
        config = FakeEngineConfig(finish_after=2, winner="bot")
        engine_client = _engine_client(config)
        session = GameSession(engine_client, SessionConfig(size=4, bot_id="random_bot"))

        assert await session.request_new_game()
        assert await session.select_cell(9)
        assert session.state == SessionState.AWAITING_MOVE
        assert session.cells[0].value == "R"
        assert session.cells[9].value == "B"

        assert not await session.select_cell(0)  # bot 已占
        assert await session.select_cell(8)

        assert session.state == SessionState.FINISHED
        assert session.winner == "bot"
        assert [(m.actor, m.cell_id) for m in session.history] == [
            ("human", 9),
            ("bot", 0),
            ("human", 8),
            ("bot", 1),
        ]
        assert config.human_moves == [9, 8]

        assert not await session.select_cell(5)
        assert config.human_moves == [9, 8]
        await engine_client.aclose()

    @pytest.mark.asyncio
    async def test_human_wins_without_bot_reply(self):
        config = FakeEngineConfig(finish_after=1, winner="human")
        engine_client = _engine_client(config)
        session = GameSession(engine_client, SessionConfig(size=3))

        await session.request_new_game()
        await session.select_cell(4)

        assert session.state == SessionState.FINISHED
        assert session.winner == "human"
        assert [m.actor for m in session.history] == ["human"]
        await engine_client.aclose()

    @pytest.mark.asyncio
    async def test_engine_rejection_keeps_position(self):
        engine_client = _engine_client(FakeEngineConfig(bots=()))
        session = GameSession(engine_client, SessionConfig(size=3, bot_id="ghost"))

        await session.request_new_game()
        before = session.position
        assert not await session.select_cell(2)

        assert session.state == SessionState.AWAITING_MOVE
        assert session.position == before
        assert session.error == "Unknown bot_id: ghost"
        await engine_client.aclose()
