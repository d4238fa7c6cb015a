"""对局记录

把一局人机对局保存为 JSON 文件（程序读取），文件名带时间戳。
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path

import arrow

from ygame.session import GameSession
from ygame.yen.generate import to_yen_dict

LOG_DIR = Path("data/game_logs")


@dataclass
class MoveRecord:
    """单步记录"""

    actor: str
    cell_id: int
    coords: dict[str, int]


@dataclass
class GameRecord:
    """单局记录"""

    session_id: str
    bot_id: str
    size: int
    state: str
    winner: str | None
    final_yen: dict | None
    moves: list[MoveRecord] = field(default_factory=list)
    saved_at: str = ""


def record_session(session: GameSession) -> GameRecord:
    """从会话当前状态生成记录"""
    position = session.position
    return GameRecord(
        session_id=session.session_id,
        bot_id=session.config.bot_id,
        size=position.size if position else session.config.size,
        state=session.state.value,
        winner=session.winner,
        final_yen=to_yen_dict(position) if position else None,
        moves=[
            MoveRecord(actor=m.actor, cell_id=m.cell_id, coords=m.coords.to_dict())
            for m in session.history
        ],
        saved_at=arrow.now().isoformat(),
    )


def save_record(record: GameRecord, log_dir: Path = LOG_DIR) -> Path:
    """保存记录，返回文件路径"""
    log_dir.mkdir(parents=True, exist_ok=True)
    stamp = arrow.get(record.saved_at).format("YYYYMMDD_HHmmss") if record.saved_at else "unknown"
    path = log_dir / f"{stamp}_{record.session_id[:8]}.json"
    with open(path, "w", encoding="utf-8") as f:
        json.dump(asdict(record), f, ensure_ascii=False, indent=2)
    return path


def load_record(path: Path) -> GameRecord:
    """读取记录"""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    data["moves"] = [MoveRecord(**m) for m in data.get("moves", [])]
    return GameRecord(**data)
