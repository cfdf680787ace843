"""
重复内容移除 — 段落级 + 句子级两遍去重。

第一遍：按空行切段，归一化后（小写、合并空白）长度 > 20 的段落只保留首次出现；
短段落（标题、列表项等）一律保留。
第二遍：在剩余段落中按 .!? 切句，跨全文记录已见句子，
归一化后（去标点）长度 > 10 的重复句子被删除；短句原样保留。
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_PARAGRAPH_SPLIT = re.compile(r"\n\s*\n")
# 捕获组保留标点与其后的空白，使 split 结果成对出现
_SENTENCE_SPLIT = re.compile(r"([.!?]+[\s\n])")
_WHITESPACE_RUN = re.compile(r"\s+")
_PUNCTUATION = re.compile(r"[^\w\s]")


@dataclass(frozen=True)
class DuplicateRemovalResult:
    output: str
    duplicates_removed: int


def normalize_paragraph(paragraph: str) -> str:
    return _WHITESPACE_RUN.sub(" ", paragraph.lower().strip())


def normalize_sentence(sentence: str) -> str:
    stripped = _PUNCTUATION.sub("", sentence.lower().strip())
    return _WHITESPACE_RUN.sub(" ", stripped).strip()


class DuplicateRemover:
    """
    两遍去重器。

    属性:
        paragraph_min_length: 段落参与去重的最小归一化长度（严格大于）
        sentence_min_length: 句子参与去重的最小归一化长度（严格大于）
    """

    def __init__(self, paragraph_min_length: int = 20, sentence_min_length: int = 10):
        self._paragraph_min = paragraph_min_length
        self._sentence_min = sentence_min_length

    @property
    def name(self) -> str:
        return "duplicate-removal"

    def remove(self, text: str) -> DuplicateRemovalResult:
        """先删重复段落，再删重复句子，返回合计删除数。"""
        paragraphs, para_removed = self._dedupe_paragraphs(_PARAGRAPH_SPLIT.split(text))
        paragraphs, sent_removed = self._dedupe_sentences(paragraphs)
        output = "\n\n".join(paragraphs)
        # 没删任何东西时保持原文，避免仅仅因为空行重排被记为一次修改
        if para_removed + sent_removed == 0:
            output = text
        return DuplicateRemovalResult(output=output, duplicates_removed=para_removed + sent_removed)

    def _dedupe_paragraphs(self, paragraphs: list[str]) -> tuple[list[str], int]:
        seen: set[str] = set()
        unique: list[str] = []
        removed = 0
        for paragraph in paragraphs:
            key = normalize_paragraph(paragraph)
            if len(key) <= self._paragraph_min:
                unique.append(paragraph)
            elif key in seen:
                removed += 1
            else:
                seen.add(key)
                unique.append(paragraph)
        return unique, removed

    def _dedupe_sentences(self, paragraphs: list[str]) -> tuple[list[str], int]:
        seen: set[str] = set()
        result: list[str] = []
        removed = 0
        for paragraph in paragraphs:
            pieces = _SENTENCE_SPLIT.split(paragraph)
            kept: list[str] = []
            for i in range(0, len(pieces), 2):
                sentence = pieces[i]
                punctuation = pieces[i + 1] if i + 1 < len(pieces) else ""
                if not sentence.strip():
                    kept.append(sentence + punctuation)
                    continue
                key = normalize_sentence(sentence)
                if len(key) <= self._sentence_min:
                    kept.append(sentence + punctuation)
                elif key in seen:
                    removed += 1
                else:
                    seen.add(key)
                    kept.append(sentence + punctuation)
            merged = "".join(kept)
            if merged.strip():
                result.append(merged)
        return result, removed
