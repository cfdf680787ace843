"""
optimize / strip-fillers 命令 — 文本进，文本出。

用法::

    token-saver optimize notes.md --target-savings 30 --report
    cat prompt.txt | token-saver strip-fillers --preset aggressive
"""

from __future__ import annotations

from token_saver.cli.utils import (
    emit_report,
    print_error,
    read_input,
    setup_logging,
    write_output,
)
from token_saver.compress.filler import explain_matches, strip_fillers
from token_saver.config import load_config
from token_saver.errors import TokenSaverError
from token_saver.models.enums import Preset
from token_saver.models.options import StageToggles
from token_saver.models.result import make_report
from token_saver.optimizer.engine import Optimizer
from token_saver.tokenizer.heuristic import estimate_tokens


def optimize_command(
    input_file: str | None,
    preset: Preset | None,
    target_savings: float | None,
    max_tokens: int | None,
    no_semantic: bool,
    no_whitespace: bool,
    no_duplicates: bool,
    no_summarization: bool,
    no_context: bool,
    model: str | None,
    config_path: str | None,
    report: bool,
    out: str | None,
    verbose: bool,
) -> None:
    """执行完整的优化流水线。"""
    setup_logging(verbose)
    try:
        config = load_config(config_path)
        text = read_input(input_file)
        overrides: dict[str, object] = {
            "target_savings_percent": target_savings,
            "max_tokens": max_tokens,
            "toggles": StageToggles(
                semantic=not no_semantic,
                whitespace=not no_whitespace,
                duplicates=not no_duplicates,
                summarization=not no_summarization,
                context=not no_context,
            ),
        }
        if preset is not None:
            overrides["preset"] = preset
        if model is not None:
            overrides["model"] = model
        options = config.default_options(**overrides)
        # 单次 CLI 进程里缓存没有意义
        result = Optimizer(config, cache=None).optimize(text, options)
    except TokenSaverError as e:
        print_error(e.full_message)

    write_output(result.output, out)
    if report:
        emit_report(result.to_report())


def strip_fillers_command(
    input_file: str | None,
    preset: Preset,
    keep_eol: bool,
    report: bool,
    out: str | None,
) -> None:
    """只运行填充词过滤。"""
    try:
        text = read_input(input_file)
    except TokenSaverError as e:
        print_error(e.full_message)

    result = strip_fillers(text, preset, keep_eol=keep_eol)
    write_output(result.output, out)
    if report:
        before = estimate_tokens(text)
        after = estimate_tokens(result.output)
        rules = [] if result.preserved.json else [m.pattern for m in explain_matches(text, preset)]
        payload: dict[str, object] = {
            "mode": "strip-fillers",
            "before": before.to_dict(),
            "after": after.to_dict(),
            "preserved": {
                "codeBlocks": result.preserved.code_blocks,
                "inline": result.preserved.inline,
                "json": result.preserved.json,
            },
        }
        payload.update(make_report(before, after, rules))
        emit_report(payload)
