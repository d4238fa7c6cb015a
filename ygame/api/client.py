"""
引擎客户端

通过 HTTP 调用对局引擎：

- GET  /status                        健康检查
- POST /v1/game/new                   新对局 {size} -> {yen}
- POST /v1/game/hvb/move/{bot_id}     人机落子 {yen, cell_id} -> 新局面 + 双方走法 + 状态
"""

from __future__ import annotations

from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from ygame.api.errors import (
    EngineError,
    EngineResponseError,
    NetworkError,
    ProtocolError,
    describe_error,
)
from ygame.api.models import (
    HumanVsBotMoveResponse,
    MoveRequest,
    NewGameRequest,
    NewGameResponse,
    YenModel,
)
from ygame.logging import logger
from ygame.yen.types import YenPosition

DEFAULT_BASE_URL = "http://localhost:8000/api/game"
API_VERSION = "v1"

ResponseT = TypeVar("ResponseT", bound=BaseModel)


def error_message(response: httpx.Response) -> str:
    """从非 2xx 响应中提取错误信息

    有 message 字段就用它，否则（包括响应体不是 JSON）返回 "HTTP <status>"
    """
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict) and body.get("message") is not None:
        return describe_error(body["message"])
    return f"HTTP {response.status_code}"


class EngineClient:
    """对局引擎客户端

    可以传入自己的 httpx.AsyncClient（由调用方负责关闭），
    否则按 timeout/transport 创建一个，并在 aclose() 时关闭。
    测试时可以传 transport=httpx.ASGITransport(app)。
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        http: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(timeout=timeout, transport=transport)

    async def __aenter__(self) -> "EngineClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    # =========================================================================
    # 接口
    # =========================================================================

    async def status(self) -> str:
        """健康检查，正常时引擎返回 "OK" """
        response = await self._send("GET", "/status")
        return response.text

    async def new_game(self, size: int) -> YenPosition:
        """创建新对局，返回初始局面"""
        payload = NewGameRequest(size=size).model_dump()
        response = await self._send("POST", f"/{API_VERSION}/game/new", json=payload)
        return self._parse(response, NewGameResponse).yen.to_position()

    async def human_vs_bot_move(
        self, bot_id: str, position: YenPosition, cell_id: int
    ) -> HumanVsBotMoveResponse:
        """提交人类落子，引擎应用后让 bot 应答"""
        payload = MoveRequest(yen=YenModel.from_position(position), cell_id=cell_id).model_dump()
        path = f"/{API_VERSION}/game/hvb/move/{quote(bot_id, safe='')}"
        response = await self._send("POST", path, json=payload)
        return self._parse(response, HumanVsBotMoveResponse)

    # =========================================================================
    # 内部
    # =========================================================================

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url}")
        try:
            response = await self._http.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            raise NetworkError(f"Request timed out: {method} {path}") from e
        except httpx.HTTPError as e:
            raise NetworkError(f"Network error: {describe_error(e)}") from e

        if not response.is_success:
            message = error_message(response)
            logger.warning(f"{method} {path} -> {response.status_code}: {message}")
            raise EngineResponseError(message, response.status_code)
        return response

    @staticmethod
    def _parse(response: httpx.Response, model: type[ResponseT]) -> ResponseT:
        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise ProtocolError(f"Unexpected engine response: {describe_error(e)}") from e


__all__ = ["EngineClient", "EngineError", "DEFAULT_BASE_URL", "error_message"]
