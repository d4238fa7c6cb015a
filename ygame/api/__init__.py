"""
引擎协议

对局引擎的 HTTP 客户端和请求/响应模型
"""

from ygame.api.client import EngineClient
from ygame.api.errors import (
    EngineError,
    EngineResponseError,
    NetworkError,
    ProtocolError,
    describe_error,
)

__all__ = [
    "EngineClient",
    "EngineError",
    "EngineResponseError",
    "NetworkError",
    "ProtocolError",
    "describe_error",
]
