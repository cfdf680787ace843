"""
长文本摘要 — 抽取式，按句子重要性打分保留关键句。

仅在原文估算超过阈值（默认 10,000 Token）时由编排器调用。

算法：
1. 按空行切段；可选保留首段、尾段原文
2. 中间段落逐句打分，得分 > 0.3 的句子保留，用空格连接
3. 某段没有句子达标 → 回退为 "首句 ... 末句"
4. 结果仍超出 max_tokens → 去停用词，再按比例截断并追加省略号

# [Design Decision] 截断作用在去停用词之后的文本上，
# 截断长度由它自身的 Token 比例推算，保证结果落在预算内。
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

from token_saver.tokenizer.heuristic import count_tokens

_PARAGRAPH_SPLIT = re.compile(r"\n\s*\n")
_SENTENCE_SPLIT = re.compile(r"([.!?]+[\s\n])")
_STOP_WORDS = re.compile(r"\b(the|a|an|and|or|but|in|on|at|to|for|of|with|by)\b", re.IGNORECASE)

IMPORTANT_KEYWORDS: tuple[str, ...] = (
    "important", "essential", "critical", "key", "main", "primary",
    "however", "therefore", "consequently", "thus", "moreover",
    "example", "note", "warning", "error", "result", "conclusion",
)

_TRUNCATE_SAFETY = 0.9


@dataclass(frozen=True)
class SummaryOptions:
    """
    属性:
        max_tokens: 摘要的目标上限
        preserve_structure: True 时段落用空行连接，否则用空格
        keep_first / keep_last: 是否原样保留首段 / 尾段
        min_sentence_length: 参与打分的最短句子（去空白后字符数）
        score_threshold: 句子得分需严格大于该值才会保留
    """

    max_tokens: int = 5000
    preserve_structure: bool = True
    keep_first: bool = True
    keep_last: bool = True
    min_sentence_length: int = 20
    score_threshold: float = 0.3


@dataclass(frozen=True)
class SummaryResult:
    output: str
    original_tokens: int
    summarized_tokens: int
    compression_ratio: float


def score_sentence(sentence: str) -> float:
    """句子重要性得分，范围 [0, 1]。"""
    lower = sentence.lower()
    score = 0.1 * sum(1 for kw in IMPORTANT_KEYWORDS if kw in lower)
    score += min(0.2, len(sentence) / 200)
    if re.search(r"\d", sentence):
        score += 0.1
    if re.match(r"[A-Z]", sentence.strip()):
        score += 0.05
    return min(1.0, score)


def _pair_sentences(paragraph: str) -> list[str]:
    """切句并把标点接回句尾；空句丢弃。"""
    pieces = _SENTENCE_SPLIT.split(paragraph)
    sentences: list[str] = []
    for i in range(0, len(pieces), 2):
        body = pieces[i]
        punctuation = pieces[i + 1] if i + 1 < len(pieces) else ""
        if body.strip():
            sentences.append(body + punctuation)
    return sentences


class Summarizer:
    """抽取式摘要器。"""

    def __init__(self, options: SummaryOptions | None = None, model: str = "generic"):
        self._options = options or SummaryOptions()
        self._model = model

    @property
    def name(self) -> str:
        return "summarization"

    def summarize(self, text: str) -> SummaryResult:
        opts = self._options
        original_tokens = count_tokens(text, self._model)
        if original_tokens <= opts.max_tokens:
            return SummaryResult(text, original_tokens, original_tokens, 1.0)

        paragraphs = _PARAGRAPH_SPLIT.split(text)
        head: list[str] = []
        tail: list[str] = []
        middle = paragraphs
        if opts.keep_first and middle:
            head, middle = middle[:1], middle[1:]
        if opts.keep_last and middle:
            middle, tail = middle[:-1], middle[-1:]

        parts = list(head)
        for paragraph in middle:
            summary = self.summarize_paragraph(paragraph)
            if summary.strip():
                parts.append(summary)
        parts.extend(tail)

        output = ("\n\n" if opts.preserve_structure else " ").join(parts)
        if count_tokens(output, self._model) > opts.max_tokens:
            output = self._compress_hard(output)

        summarized_tokens = count_tokens(output, self._model)
        return SummaryResult(
            output=output,
            original_tokens=original_tokens,
            summarized_tokens=summarized_tokens,
            compression_ratio=summarized_tokens / original_tokens if original_tokens else 1.0,
        )

    def summarize_paragraph(self, paragraph: str) -> str:
        sentences = _pair_sentences(paragraph)
        opts = self._options
        key = [
            s for s in sentences
            if len(s.strip()) >= opts.min_sentence_length
            and score_sentence(s) > opts.score_threshold
        ]
        if key:
            return " ".join(s.strip() for s in key)
        if len(sentences) >= 2:
            return f"{sentences[0].strip()} ... {sentences[-1].strip()}"
        return sentences[0].strip() if sentences else ""

    def _compress_hard(self, text: str) -> str:
        max_tokens = self._options.max_tokens
        compressed = _STOP_WORDS.sub("", text)
        compressed = re.sub(r"\s+", " ", compressed).strip()
        tokens = count_tokens(compressed, self._model)
        if tokens <= max_tokens:
            return compressed
        ratio = max_tokens / tokens
        return compressed[: math.floor(len(compressed) * ratio * _TRUNCATE_SAFETY)] + "..."
