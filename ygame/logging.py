"""
中央日志配置

提供统一的 logger 和文件日志配置。
"""

import sys
from pathlib import Path

from loguru import logger

# 默认运行日志目录（相对当前工作目录）
RUNTIME_LOGS_DIR = Path("logs")


def setup_console_logging(level: str = "WARNING") -> int:
    """替换默认的 stderr 输出，只保留 level 及以上"""
    logger.remove()
    return logger.add(sys.stderr, level=level)


def setup_file_logging(log_dir: Path = RUNTIME_LOGS_DIR, level: str = "DEBUG") -> int:
    """添加文件日志输出，返回 sink id（可用 logger.remove 移除）"""
    log_dir.mkdir(parents=True, exist_ok=True)
    return logger.add(
        log_dir / "ygame.log",
        rotation="10 MB",
        retention="7 days",
        level=level,
    )


__all__ = ["logger", "RUNTIME_LOGS_DIR", "setup_console_logging", "setup_file_logging"]
