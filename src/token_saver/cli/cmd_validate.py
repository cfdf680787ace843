"""validate 命令 — 校验 YAML 配置文件。"""

from __future__ import annotations

from rich.panel import Panel

from token_saver.cli.utils import create_console, print_success
from token_saver.config.loader import validate_config_file

console = create_console()


def validate_command(path: str) -> None:
    errors = validate_config_file(path)
    if not errors:
        print_success(f"配置文件 {path} 校验通过。")
        return

    for err in errors:
        console.print(Panel(err, title="[red]校验失败[/red]", border_style="red"))
    raise SystemExit(1)
