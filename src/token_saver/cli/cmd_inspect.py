"""
estimate / detect / explain 命令 — 只分析，不改写文本。
"""

from __future__ import annotations

import json

from rich.panel import Panel
from rich.table import Table

from token_saver.analysis.content_type import ContentTypeDetector
from token_saver.cli.utils import create_console, format_token_count, print_error, read_input
from token_saver.compress.filler import explain_matches
from token_saver.errors import TokenSaverError
from token_saver.models.enums import Preset
from token_saver.tokenizer.heuristic import estimate_tokens
from token_saver.tokenizer.registry import get_tokenizer

console = create_console()


def estimate_command(
    input_file: str | None,
    model: str,
    exact: bool,
    diff_bump: bool,
    as_json: bool,
) -> None:
    """估算 Token 数；--exact 额外给出 tiktoken 精确计数。"""
    try:
        text = read_input(input_file)
        estimate = estimate_tokens(text, model, diff_heuristic_bump=diff_bump)
        exact_tokens: int | None = None
        exact_name: str | None = None
        if exact:
            counter = get_tokenizer(model, exact=True)
            exact_tokens = counter.count(text)
            exact_name = counter.name
    except TokenSaverError as e:
        print_error(e.full_message)

    data = estimate.to_dict()
    if exact_tokens is not None:
        data["exact"] = {"tokens": exact_tokens, "tokenizer": exact_name}

    if as_json:
        console.print_json(json.dumps(data, ensure_ascii=False))
        return

    table = Table(title="Token 估算", show_header=False)
    table.add_column("项", style="bold")
    table.add_column("值", justify="right")
    table.add_row("字符数", format_token_count(estimate.chars))
    table.add_row("估算 Token", format_token_count(estimate.tokens))
    table.add_row("比率模型", estimate.model)
    if estimate.note:
        table.add_row("说明", estimate.note)
    if exact_tokens is not None:
        table.add_row(f"精确 Token（{exact_name}）", format_token_count(exact_tokens))
    console.print(table)


def detect_command(input_file: str | None, as_json: bool) -> None:
    """检测内容类型。"""
    try:
        text = read_input(input_file)
    except TokenSaverError as e:
        print_error(e.full_message)

    detection = ContentTypeDetector().detect(text)
    if as_json:
        console.print_json(json.dumps(detection.to_dict()))
        return

    f = detection.features
    console.print(
        Panel(
            f"类型：[bold]{detection.type.value}[/bold]\n"
            f"置信度：{detection.confidence:.2f}\n"
            f"代码占比：{f.code_percent:.1%}  散文占比：{f.prose_percent:.1%}\n"
            f"日志特征：{f.log_patterns}  文档特征：{f.doc_patterns}",
            title="内容类型检测",
            border_style="cyan",
        )
    )


def explain_command(input_file: str | None, preset: Preset, as_json: bool) -> None:
    """列出当前预设下命中的填充词规则及次数。"""
    try:
        text = read_input(input_file)
    except TokenSaverError as e:
        print_error(e.full_message)

    matches = explain_matches(text, preset)
    if as_json:
        console.print_json(
            json.dumps([{"pattern": m.pattern, "count": m.count} for m in matches])
        )
        return

    if not matches:
        console.print(f"[dim]预设 {preset.value} 下没有规则命中。[/dim]")
        return

    table = Table(title=f"命中规则（{preset.value}）")
    table.add_column("规则", style="cyan", overflow="fold")
    table.add_column("次数", justify="right")
    for m in matches:
        table.add_row(m.pattern, str(m.count))
    console.print(table)
