"""
CLI 工具函数 — Rich 输出、输入读取、结果写出。

约定：
- 正文结果写 stdout（或 --out 指定的文件）
- 报告（--report）是一行 JSON，写 stderr
- 错误信息用 Rich 渲染到 stderr，退出码 1
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from token_saver.errors import InputError

_console: Console | None = None
_err_console: Console | None = None


def create_console() -> Console:
    """
    获取全局 stdout Console。

    # [DX Decision] 全局单例 Console，确保所有 CLI 输出格式一致。
    """
    global _console
    if _console is None:
        _console = Console()
    return _console


def create_err_console() -> Console:
    """获取全局 stderr Console（错误与警告）。"""
    global _err_console
    if _err_console is None:
        _err_console = Console(stderr=True)
    return _err_console


def print_error(message: str, exit_code: int = 1) -> NoReturn:
    # [DX Decision] 使用 X 而非 ✗，避免 Windows 终端编码问题
    create_err_console().print(f"[bold red]X 错误：[/bold red]{escape(message)}")
    sys.exit(exit_code)


def print_success(message: str) -> None:
    create_console().print(f"[bold green]OK[/bold green] {escape(message)}")


def format_token_count(count: int) -> str:
    """
    格式化 Token 数字为带千分位分隔符的字符串。

    示例::

        >>> format_token_count(128000)
        '128,000'
    """
    return f"{count:,}"


def setup_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


def read_input(path: str | None) -> str:
    """
    读取输入文本：给出路径时读文件，否则读 stdin。

    stdin 是交互式终端时返回空串（不阻塞等待输入）。

    异常:
        InputError: 文件不存在或无法按 UTF-8 读取
    """
    if path is None:
        stream = typer.get_text_stream("stdin")
        if stream.isatty():
            return ""
        return stream.read()

    file_path = Path(path)
    if not file_path.is_file():
        raise InputError(
            what=f"输入文件 '{path}' 不存在。",
            why=f"在路径 '{file_path.absolute()}' 下未找到该文件。",
            how="检查路径，或省略文件参数改为从 stdin 读取。",
            path=str(path),
        )
    try:
        return file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(
            what=f"无法读取输入文件 '{path}'。",
            why=str(e),
            how="请检查文件权限和编码（需要 UTF-8）。",
            path=str(path),
        ) from e


def write_output(text: str, out: str | None) -> None:
    """写出结果：--out 时写文件（自动创建父目录），否则写 stdout。末尾补一个换行。"""
    if out is None:
        typer.echo(text)
        return
    out_path = Path(out)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(text + "\n", encoding="utf-8")


def emit_report(report: dict[str, Any]) -> None:
    """把报告作为一行紧凑 JSON 写到 stderr。"""
    typer.echo(json.dumps(report, ensure_ascii=False, separators=(",", ":")), err=True)
