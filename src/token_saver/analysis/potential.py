"""
优化潜力预检 — 廉价的正则扫描，决定编排器是否值得跑完整流水线。

# [Design Decision] 只检查通用信号（填充词、冗长短语、多余空白、重复句子）。
# 纯日志这类只有上下文专用优化器能处理的内容可能被判为"无潜力"而直接跳过，
# 这是已知的覆盖缺口。
"""

from __future__ import annotations

import re

_FILLER = re.compile(r"basically|actually|simply|in fact|obviously|literally|you know|I mean", re.IGNORECASE)
_VERBOSE = re.compile(
    r"in order to|due to the fact that|at this point in time|for the purpose of",
    re.IGNORECASE,
)
_BLANK_RUN = re.compile(r"\n{3,}")
_SPACE_RUN = re.compile(r"[ \t]{3,}")
_SENTENCE_BOUNDARY = re.compile(r"[.!?]+\s+")
_DUPLICATE_MIN_LENGTH = 20


def has_duplicate_sentence(text: str) -> bool:
    seen: set[str] = set()
    for sentence in _SENTENCE_BOUNDARY.split(text):
        key = sentence.lower().strip()
        if len(key) > _DUPLICATE_MIN_LENGTH and key in seen:
            return True
        seen.add(key)
    return False


def has_optimization_potential(text: str) -> bool:
    """任一信号命中即返回 True。"""
    if _FILLER.search(text) or _VERBOSE.search(text):
        return True
    if _BLANK_RUN.search(text) or _SPACE_RUN.search(text):
        return True
    return has_duplicate_sentence(text)
