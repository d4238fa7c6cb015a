"""
Y 棋命令行

- show: 显示 YEN 局面
- validate: 验证 YEN 局面
- coords: 列出格子编号与坐标
- status: 引擎健康检查
- play: 在终端里与 bot 对弈

## 使用示例

```bash
ygame show --yen '{"size": 3, "turn": 0, "players": ["B", "R"], "layout": "./../B.R"}'
ygame coords --size 4
ygame play --size 7 --bot random_bot --url http://localhost:8000/api/game
```
"""

from __future__ import annotations

import asyncio
import json
import sys
from dataclasses import asdict
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ygame.api.client import DEFAULT_BASE_URL, EngineClient
from ygame.api.errors import EngineError
from ygame.game_log import record_session, save_record
from ygame.logging import logger, setup_console_logging, setup_file_logging
from ygame.session import (
    DEFAULT_BOT,
    DEFAULT_SIZE,
    HUMAN,
    GameSession,
    SessionConfig,
    SessionState,
    normalize_size,
)
from ygame.yen import (
    FormatError,
    YenPosition,
    coordinates_of,
    decode,
    parse_yen,
    row_col_of,
    side_membership,
    total_cells,
    validate_yen,
    yen_to_rich,
)

app = typer.Typer(help="Game of Y - 终端客户端")
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="输出调试日志"),
) -> None:
    """Game of Y 客户端"""
    setup_console_logging("DEBUG" if verbose else "WARNING")


def _load_yen(yen: str | None, file: Path | None) -> YenPosition:
    if file is not None:
        return parse_yen(file.read_text(encoding="utf-8"))
    if yen is None:
        raise FormatError("Either --yen or --file is required")
    return parse_yen(yen)


@app.command()
def show(
    yen: str | None = typer.Option(None, "--yen", "-y", help="YEN JSON 字符串"),
    file: Path | None = typer.Option(None, "--file", "-f", help="YEN JSON 文件"),
    ids: bool = typer.Option(False, "--ids", help="空格子显示 cell_id"),
    output_json: bool = typer.Option(False, "--json", help="JSON 输出（格子列表）"),
) -> None:
    """显示局面"""
    try:
        position = _load_yen(yen, file)
        if output_json:
            print(json.dumps([asdict(cell) for cell in decode(position)], indent=2))
        else:
            console.print(yen_to_rich(position, show_ids=ids))
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        raise typer.Exit(1) from None


@app.command()
def validate(
    yen: str | None = typer.Option(None, "--yen", "-y", help="YEN JSON 字符串"),
    file: Path | None = typer.Option(None, "--file", "-f", help="YEN JSON 文件"),
) -> None:
    """验证局面"""
    try:
        position = _load_yen(yen, file)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        raise typer.Exit(1) from None

    valid, msg = validate_yen(position)
    if not valid:
        print(f"Invalid: {msg}", file=sys.stderr)
        raise typer.Exit(1)
    print("Valid")


@app.command()
def coords(
    size: int = typer.Option(DEFAULT_SIZE, "--size", "-s", help="棋盘尺寸"),
    cell: int | None = typer.Option(None, "--cell", "-c", help="只显示一个格子"),
) -> None:
    """列出格子编号、行列与重心坐标"""
    if size < 1:
        print(f"Error: invalid size {size}", file=sys.stderr)
        raise typer.Exit(1)

    total = total_cells(size)
    if cell is not None and not 0 <= cell < total:
        print(f"Error: cell_id out of range: {cell} (max {total - 1})", file=sys.stderr)
        raise typer.Exit(1)

    table = Table(title=f"size={size}, {total} cells")
    for column in ("cell", "row", "col", "x", "y", "z", "sides"):
        table.add_column(column, justify="right")

    for cell_id in [cell] if cell is not None else range(total):
        row, col = row_col_of(cell_id)
        xyz = coordinates_of(size, row, col)
        touches = side_membership(*xyz)
        sides = "".join(name for name, hit in zip("abc", touches) if hit) or "-"
        table.add_row(*(str(v) for v in (cell_id, row, col, *xyz)), sides)

    console.print(table)


@app.command()
def status(
    url: str = typer.Option(DEFAULT_BASE_URL, "--url", "-u", envvar="YGAME_ENGINE_URL", help="引擎地址"),
) -> None:
    """引擎健康检查"""

    async def _status() -> str:
        async with EngineClient(base_url=url) as client:
            return await client.status()

    try:
        print(asyncio.run(_status()))
    except EngineError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise typer.Exit(1) from None


@app.command()
def play(
    size: str = typer.Option(str(DEFAULT_SIZE), "--size", "-s", help="棋盘尺寸（< 2 时用 7）"),
    bot: str = typer.Option(DEFAULT_BOT, "--bot", "-b", envvar="YGAME_BOT", help="bot 名称"),
    url: str = typer.Option(DEFAULT_BASE_URL, "--url", "-u", envvar="YGAME_ENGINE_URL", help="引擎地址"),
    timeout: float = typer.Option(10.0, "--timeout", "-t", help="请求超时（秒）"),
    save_log: bool = typer.Option(False, "--save-log", help="结束后保存对局记录"),
    log_dir: Path | None = typer.Option(None, "--log-dir", help="运行日志目录"),
) -> None:
    """与 bot 对弈（输入 cell_id 落子，n 新对局，q 退出）"""
    if log_dir is not None:
        setup_file_logging(log_dir)

    config = SessionConfig(
        base_url=url,
        bot_id=bot,
        size=normalize_size(size),
        timeout_seconds=timeout,
    )
    console.print(f"[bold]Game of Y[/bold] - size {config.size}, bot {config.bot_id}")
    asyncio.run(_play(config, save_log))


async def _play(config: SessionConfig, save_log: bool) -> None:
    async with EngineClient(base_url=config.base_url, timeout=config.timeout_seconds) as client:
        session = GameSession(client, config)
        await session.request_new_game()

        while True:
            if session.error:
                console.print(f"[red]Error: {session.error}[/red]")

            if session.state == SessionState.IDLE:
                if not typer.confirm("Start a new game?", default=True):
                    break
                await session.request_new_game()
                continue

            position = session.position
            if position is None:
                break
            console.print(yen_to_rich(position, show_ids=True))

            if session.state == SessionState.FINISHED:
                if session.winner == HUMAN:
                    console.print("[green bold]You win![/green bold]")
                else:
                    console.print(f"[yellow bold]Game over, winner: {session.winner}[/yellow bold]")
                _maybe_save(session, save_log)
                if not typer.confirm("Play again?", default=False):
                    break
                await session.request_new_game()
                continue

            answer = typer.prompt("cell_id (n = new game, q = quit)").strip().lower()
            if answer == "q":
                _maybe_save(session, save_log)
                session.abandon()
                break
            if answer == "n":
                await session.request_new_game()
                continue

            try:
                cell_id = int(answer)
            except ValueError:
                console.print(f"[red]Not a cell id: {answer}[/red]")
                continue

            if not session.can_select(cell_id):
                console.print(f"[red]Cell {cell_id} is not available[/red]")
                continue
            await session.select_cell(cell_id)


def _maybe_save(session: GameSession, save_log: bool) -> None:
    if not save_log or not session.history:
        return
    path = save_record(record_session(session))
    logger.info(f"game record saved to {path}")
    console.print(f"Saved: {path}")


if __name__ == "__main__":
    app()
