"""
上下文专用优化器 — 针对日志、文档、代码注释的定向压缩。

每个优化器返回 ContextOptimizationResult，
由编排器根据 savings_percent 决定是否采纳（默认阈值 5%）。
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Protocol

from token_saver.compress.base import TextRule, apply_rules, rule
from token_saver.models.enums import ContentType
from token_saver.models.result import savings_percent
from token_saver.tokenizer.heuristic import count_tokens


@dataclass(frozen=True)
class ContextOptimizationResult:
    output: str
    original_tokens: int
    optimized_tokens: int
    savings_percent: float


class ContextOptimizer(Protocol):
    @property
    def name(self) -> str: ...

    def optimize(self, text: str) -> ContextOptimizationResult: ...


def _result(original: str, output: str, model: str) -> ContextOptimizationResult:
    before = count_tokens(original, model)
    after = count_tokens(output, model)
    return ContextOptimizationResult(
        output=output,
        original_tokens=before,
        optimized_tokens=after,
        savings_percent=savings_percent(before, after),
    )


# ---------------------------------------------------------------------------
# 日志
# ---------------------------------------------------------------------------

_LOG_NOISE: tuple[TextRule, ...] = (
    # ISO 8601 时间戳（可带毫秒与时区）
    rule(r"\d{4}-\d{2}-\d{2}[\sT]\d{2}:\d{2}:\d{2}(?:\.\d+)?(?:Z|[+-]\d{2}:\d{2})?", ignore_case=False),
    rule(r"\[\d{4}-\d{2}-\d{2}[\sT]\d{2}:\d{2}:\d{2}\]", ignore_case=False),
    # 斜杠日期：03/15/2024 10:00:00
    rule(r"\d{2}/\d{2}/\d{4}\s+\d{2}:\d{2}:\d{2}", ignore_case=False),
    rule(r"\[(ERROR|WARN|INFO|DEBUG|TRACE)\]\s*"),
)

_REPEAT_MIN_LENGTH = 10


class LogOptimizer:
    """
    日志优化器。

    1. 删除时间戳与 ``[LEVEL]`` 标签
    2. 连续重复的行（归一化后长度 > 10）折叠为 ``[Repeated Nx] <line>``，
       N 随连续次数增长并覆盖同一个标记行
    3. 合并多余空行
    """

    def __init__(self, model: str = "generic"):
        self._model = model

    @property
    def name(self) -> str:
        return "log-optimization"

    def optimize(self, text: str) -> ContextOptimizationResult:
        stripped = apply_rules(text, _LOG_NOISE)

        out: list[str] = []
        run_key: str | None = None
        run_count = 0
        for line in stripped.split("\n"):
            key = line.strip().lower()
            if len(key) <= _REPEAT_MIN_LENGTH:
                out.append(line)
                run_key, run_count = None, 0
                continue
            if key != run_key:
                out.append(line)
                run_key, run_count = key, 1
                continue
            run_count += 1
            marker = f"[Repeated {run_count}x] {line}"
            if run_count == 2:
                out.append(marker)
            else:
                out[-1] = marker

        output = re.sub(r"\n{3,}", "\n\n", "\n".join(out))
        return _result(text, output, self._model)


# ---------------------------------------------------------------------------
# 文档
# ---------------------------------------------------------------------------

_DOC_RULES: tuple[TextRule, ...] = (
    rule(r"\bas mentioned (above|below|earlier|previously)\b"),
    rule(r"\bas (discussed|stated|noted) (above|below|earlier)\b"),
    rule(r"Note:\s*(It is important to|Remember that|Keep in mind that)", "Note:"),
    rule(r"Example \d+:\s*", "Example: "),
)

_SEE_ALSO = re.compile(r"See (also|above|below)", re.IGNORECASE)
_SEE_ALSO_CLAUSE = re.compile(r"See (also|above|below)[^.]*\.", re.IGNORECASE)
_SEE_ALSO_LIMIT = 3


class DocumentationOptimizer:
    """
    文档优化器：删除"如上所述"类回指、冗余 Note 前缀，
    统一示例编号；"See also" 引用超过 3 处时整句删除。
    """

    def __init__(self, model: str = "generic"):
        self._model = model

    @property
    def name(self) -> str:
        return "doc-optimization"

    def optimize(self, text: str) -> ContextOptimizationResult:
        output = apply_rules(text, _DOC_RULES)
        if len(_SEE_ALSO.findall(output)) > _SEE_ALSO_LIMIT:
            output = _SEE_ALSO_CLAUSE.sub("", output)
        # 文档保留最多两个空行作为章节分隔
        output = re.sub(r"\n{4,}", "\n\n\n", output)
        return _result(text, output, self._model)


# ---------------------------------------------------------------------------
# 代码注释
# ---------------------------------------------------------------------------

_COMMENT_PREFIXES = ("//", "/*", "*")
_COMMENT_MARKERS = re.compile(r"^(?://|/\*|\*)\s*|\s*\*/\s*$")
_OBVIOUS_COMMENTS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^(set|get|assign|return|create|initialize|define|declare)\s+\w+", re.IGNORECASE),
    re.compile(r"^(this|the|a|an)\s+\w+\s+(is|does|returns|sets|gets)", re.IGNORECASE),
    re.compile(r"^(variable|function|method|class|object)\s+\w+", re.IGNORECASE),
    # 空注释
    re.compile(r"^$"),
)
_OBVIOUS_MAX_LENGTH = 50


def is_obvious_comment(line: str) -> bool:
    """注释行去掉标记后命中"显而易见"模式且不超过 50 字符。"""
    trimmed = line.strip()
    if not trimmed.startswith(_COMMENT_PREFIXES):
        return False
    body = _COMMENT_MARKERS.sub("", trimmed).strip()
    if len(body) > _OBVIOUS_MAX_LENGTH:
        return False
    return any(p.search(body) for p in _OBVIOUS_COMMENTS)


class CodeCommentOptimizer:
    """删除显而易见的注释行（``// set x``、``// the function returns ...``）。"""

    def __init__(self, model: str = "generic"):
        self._model = model

    @property
    def name(self) -> str:
        return "code-comment-optimization"

    def optimize(self, text: str) -> ContextOptimizationResult:
        kept = [line for line in text.split("\n") if not is_obvious_comment(line)]
        output = re.sub(r"\n{3,}", "\n\n", "\n".join(kept))
        return _result(text, output, self._model)


_OPTIMIZERS: dict[ContentType, type] = {
    ContentType.LOG: LogOptimizer,
    ContentType.DOCUMENTATION: DocumentationOptimizer,
    ContentType.CODE: CodeCommentOptimizer,
}


def get_context_optimizer(content_type: ContentType, model: str = "generic") -> ContextOptimizer | None:
    """按内容类型返回对应的优化器；prose / json / mixed 没有专用优化器，返回 None。"""
    cls = _OPTIMIZERS.get(content_type)
    return cls(model=model) if cls is not None else None
