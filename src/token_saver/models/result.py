"""
优化结果与报告辅助函数。

不变量：optimized_tokens ≤ original_tokens；
strategies 中的每个标签都对应一个真正修改了文本的阶段。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from token_saver.models.enums import ContentType
from token_saver.tokenizer.heuristic import Estimate

CACHED_STRATEGY = "cached"


@dataclass(frozen=True)
class OptimizationResult:
    """
    一次优化调用的结果。

    属性:
        output: 优化后的文本
        original_tokens: 原文估算 Token 数
        optimized_tokens: 优化后估算 Token 数
        saved: 节省的 Token 数
        savings_percent: 节省百分比（保留两位小数）
        strategies: 按执行顺序排列的生效策略标签
        content_type: 内容类型
    """

    output: str
    original_tokens: int
    optimized_tokens: int
    saved: int
    savings_percent: float
    strategies: list[str] = field(default_factory=list)
    content_type: ContentType = ContentType.MIXED

    @property
    def from_cache(self) -> bool:
        return CACHED_STRATEGY in self.strategies

    def to_report(self) -> dict[str, Any]:
        """``--report`` 输出的 JSON 结构。"""
        return {
            "mode": "advanced-optimization",
            "before": {"tokens": self.original_tokens},
            "after": {"tokens": self.optimized_tokens},
            "saved": self.saved,
            "savingsPercent": self.savings_percent,
            "strategies": list(self.strategies),
            "contentType": self.content_type.value,
        }


def savings_percent(original_tokens: int, optimized_tokens: int) -> float:
    """节省百分比，四舍五入到两位小数；原文为 0 时返回 0。"""
    if original_tokens <= 0:
        return 0.0
    return round((original_tokens - optimized_tokens) / original_tokens * 100, 2)


def percent_saved(before: int, after: int) -> float:
    """节省百分比，截断到 [0, 100]（报告用，不做四舍五入）。"""
    if before <= 0:
        return 0.0
    return max(0.0, min(100.0, (before - after) / before * 100))


def make_report(
    before: Estimate,
    after: Estimate,
    rules_triggered: list[str] | None = None,
) -> dict[str, Any]:
    """
    生成单次变换的前后对比报告。

    参数:
        before: 变换前的估算
        after: 变换后的估算
        rules_triggered: 触发的规则列表

    返回:
        可直接 json.dumps 的字典
    """
    return {
        "chars_before": before.chars,
        "tokens_before": before.tokens,
        "chars_after": after.chars,
        "tokens_after": after.tokens,
        "percent_saved": percent_saved(before.tokens, after.tokens),
        "model": after.model,
        "note": after.note or before.note,
        "rules_triggered": list(rules_triggered or []),
    }
