"""
Token Saver CLI — 命令行工具入口。

用法::

    token-saver --help
    token-saver optimize notes.md --target-savings 30 --report
    token-saver strip-fillers prompt.txt --preset aggressive
    token-saver estimate prompt.txt --model claude-3.5
    token-saver detect server.log
    token-saver explain prompt.txt --preset ultra
    token-saver validate token_saver.yaml
"""

from __future__ import annotations

import typer

from token_saver.cli.utils import create_console
from token_saver.models.enums import Preset

app = typer.Typer(
    name="token-saver",
    help="Token Saver — 在不破坏代码与结构化数据的前提下压缩 LLM 输入文本",
    add_completion=False,
    no_args_is_help=True,
)

console = create_console()

_INPUT_ARG = typer.Argument(None, help="输入文件路径（省略时从 stdin 读取）")


def optimize(
    input_file: str | None = _INPUT_ARG,
    preset: Preset | None = typer.Option(
        None, "--preset", "-p", help="填充词过滤的起始级别（默认取配置）"
    ),
    target_savings: float | None = typer.Option(
        None, "--target-savings", min=0.0, max=100.0, help="期望节省的 Token 百分比"
    ),
    max_tokens: int | None = typer.Option(None, "--max-tokens", min=0, help="输出 Token 上限"),
    no_semantic: bool = typer.Option(False, "--no-semantic", help="关闭语义压缩"),
    no_whitespace: bool = typer.Option(False, "--no-whitespace", help="关闭空白压缩"),
    no_duplicates: bool = typer.Option(False, "--no-duplicates", help="关闭去重"),
    no_summarization: bool = typer.Option(False, "--no-summarization", help="关闭长文本摘要"),
    no_context: bool = typer.Option(False, "--no-context", help="关闭按内容类型的专用优化"),
    model: str | None = typer.Option(None, "--model", "-m", help="Token 估算使用的比率模型"),
    config: str | None = typer.Option(None, "--config", "-c", help="配置文件路径（默认自动搜索）"),
    report: bool = typer.Option(False, "--report", help="向 stderr 输出一行 JSON 报告"),
    out: str | None = typer.Option(None, "--out", "-o", help="输出文件路径（默认 stdout）"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="输出调试日志"),
) -> None:
    """运行完整的优化流水线。"""
    from token_saver.cli.cmd_optimize import optimize_command
    optimize_command(
        input_file=input_file,
        preset=preset,
        target_savings=target_savings,
        max_tokens=max_tokens,
        no_semantic=no_semantic,
        no_whitespace=no_whitespace,
        no_duplicates=no_duplicates,
        no_summarization=no_summarization,
        no_context=no_context,
        model=model,
        config_path=config,
        report=report,
        out=out,
        verbose=verbose,
    )


app.command(name="optimize")(optimize)
app.command(name="advanced", help="optimize 的别名。")(optimize)


@app.command(name="strip-fillers")
def strip_fillers(
    input_file: str | None = _INPUT_ARG,
    preset: Preset = typer.Option(Preset.CONSERVATIVE, "--preset", "-p", help="过滤级别"),
    keep_eol: bool = typer.Option(False, "--keep-eol", help="保留原始换行符"),
    report: bool = typer.Option(False, "--report", help="向 stderr 输出一行 JSON 报告"),
    out: str | None = typer.Option(None, "--out", "-o", help="输出文件路径（默认 stdout）"),
) -> None:
    """只删除填充词（代码围栏、行内代码、JSON 原样保留）。"""
    from token_saver.cli.cmd_optimize import strip_fillers_command
    strip_fillers_command(
        input_file=input_file, preset=preset, keep_eol=keep_eol, report=report, out=out
    )


@app.command(name="estimate")
def estimate(
    input_file: str | None = _INPUT_ARG,
    model: str = typer.Option("generic", "--model", "-m", help="比率模型或真实模型名"),
    exact: bool = typer.Option(False, "--exact", help="额外使用 tiktoken 精确计数"),
    diff_bump: bool = typer.Option(False, "--diff-bump", help="按代码 / diff 上下文上浮 15%"),
    as_json: bool = typer.Option(False, "--json", help="以 JSON 输出"),
) -> None:
    """估算文本的 Token 数。"""
    from token_saver.cli.cmd_inspect import estimate_command
    estimate_command(
        input_file=input_file, model=model, exact=exact, diff_bump=diff_bump, as_json=as_json
    )


@app.command(name="detect")
def detect(
    input_file: str | None = _INPUT_ARG,
    as_json: bool = typer.Option(False, "--json", help="以 JSON 输出"),
) -> None:
    """检测内容类型（code / prose / json / log / documentation / mixed）。"""
    from token_saver.cli.cmd_inspect import detect_command
    detect_command(input_file=input_file, as_json=as_json)


@app.command(name="explain")
def explain(
    input_file: str | None = _INPUT_ARG,
    preset: Preset = typer.Option(Preset.CONSERVATIVE, "--preset", "-p", help="过滤级别"),
    as_json: bool = typer.Option(False, "--json", help="以 JSON 输出"),
) -> None:
    """列出命中的填充词规则及次数（不改写文本）。"""
    from token_saver.cli.cmd_inspect import explain_command
    explain_command(input_file=input_file, preset=preset, as_json=as_json)


@app.command(name="validate")
def validate(
    path: str = typer.Argument("token_saver.yaml", help="YAML 配置文件路径"),
) -> None:
    """校验配置文件。"""
    from token_saver.cli.cmd_validate import validate_command
    validate_command(path=path)


@app.command(name="version")
def version() -> None:
    """显示版本信息。"""
    from token_saver import __version__
    console.print(f"Token Saver v{__version__}")


def main() -> None:
    """CLI 入口点。"""
    app()


if __name__ == "__main__":
    main()
