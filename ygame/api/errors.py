"""
引擎调用错误

所有引擎相关的失败都转换为 EngineError 的子类，由会话层统一展示。
"""

from __future__ import annotations

from typing import Any


class EngineError(Exception):
    """引擎调用失败"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NetworkError(EngineError):
    """传输层失败（连接失败、超时）"""


class EngineResponseError(NetworkError):
    """引擎返回非 2xx 状态码"""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class ProtocolError(EngineError):
    """2xx 响应，但内容不是预期结构"""


def describe_error(value: Any) -> str:
    """把任意失败值转换为可展示的字符串

    - 带 message 属性的对象 -> message
    - 异常 -> str(e)，为空时用类名
    - 带 "message" 键的 dict -> 该值
    - 其它 -> str(value)
    """
    message = getattr(value, "message", None)
    if isinstance(message, str) and message:
        return message
    if isinstance(value, BaseException):
        return str(value) or type(value).__name__
    if isinstance(value, dict) and value.get("message") is not None:
        return str(value["message"])
    if value is None:
        return "Unknown error"
    return str(value)
