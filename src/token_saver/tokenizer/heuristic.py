"""
基于字符数的 Token 启发式估算。

整个优化流水线只依赖这一种计数方式：``tokens = ceil(chars / ratio[model])``。
它不追求与任何真实 BPE Tokenizer 完全一致，只要求确定性、零依赖、足够快，
这样同一段文本在任何环境下都得到同一个数，早停判断和缓存结果才可复现。

# [Design Decision] 未知模型名一律回退到 "generic" 比率，而不是报错。
# 估算是"尽力而为"的，调用方传错模型名不应该让优化失败。
"""

from __future__ import annotations

import math
from dataclasses import dataclass

# 每个 Token 对应的平均字符数（英文文本经验值）
CHARS_PER_TOKEN: dict[str, float] = {
    "gpt-4o-mini": 4.0,
    "gpt-4.1": 3.7,
    "claude-3.5": 3.8,
    "gemini-1.5": 3.9,
    "generic": 4.0,
}

GENERIC_MODEL = "generic"

# diff / 代码上下文符号密集，实际 Token 数通常偏高
_DIFF_BUMP_FACTOR = 1.15
_DIFF_BUMP_NOTE = "Heuristic - Code Context"


@dataclass(frozen=True)
class Estimate:
    """
    一次 Token 估算的结果（派生值，不做存储）。

    属性:
        chars: 字符数
        tokens: 估算的 Token 数
        model: 实际使用的比率表条目（未知模型会变成 "generic"）
        note: 附加说明（例如启用了代码上下文上浮）
    """

    chars: int
    tokens: int
    model: str
    note: str | None = None

    def to_dict(self) -> dict[str, object]:
        """转换为字典（用于 ``--report`` 输出）。"""
        data: dict[str, object] = {
            "chars": self.chars,
            "tokens": self.tokens,
            "model": self.model,
        }
        if self.note:
            data["note"] = self.note
        return data


def resolve_ratio_model(model: str | None) -> str:
    """把模型名解析为比率表中存在的条目。"""
    if model and model in CHARS_PER_TOKEN:
        return model
    return GENERIC_MODEL


def estimate_tokens(
    text: str,
    model: str | None = None,
    diff_heuristic_bump: bool = False,
) -> Estimate:
    """
    估算文本的 Token 数。

    参数:
        text: 待估算文本
        model: 模型名（未知或 None 时使用 "generic"）
        diff_heuristic_bump: 是否按代码/diff 上下文上浮 15%

    返回:
        Estimate

    示例::

        >>> estimate_tokens("Hello world.").tokens
        3
    """
    resolved = resolve_ratio_model(model)
    chars = len(text)
    tokens = math.ceil(chars / CHARS_PER_TOKEN[resolved])
    note = None
    if diff_heuristic_bump:
        tokens = math.ceil(tokens * _DIFF_BUMP_FACTOR)
        note = _DIFF_BUMP_NOTE
    return Estimate(chars=chars, tokens=tokens, model=resolved, note=note)


def count_tokens(text: str, model: str | None = None) -> int:
    """只返回 Token 数的便捷函数。"""
    return estimate_tokens(text, model).tokens


class HeuristicCounter:
    """
    启发式 Token 计数器，实现 TokenCounter 协议。

    用法::

        counter = HeuristicCounter("claude-3.5")
        counter.count("Hello, world!")  # ceil(13 / 3.8) = 4
    """

    def __init__(self, model: str | None = None) -> None:
        self._model = resolve_ratio_model(model)

    def count(self, text: str) -> int:
        """估算文本的 Token 数量。"""
        if not text:
            return 0
        return estimate_tokens(text, self._model).tokens

    @property
    def name(self) -> str:
        """Tokenizer 名称标识。"""
        return f"heuristic:{self._model}"
