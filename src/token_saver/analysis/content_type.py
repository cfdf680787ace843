"""
内容类型检测 — 为编排器挑选上下文专用优化器。

纯函数：逐行扫描，维护代码围栏状态。
- 围栏内的字符全部计为代码
- 围栏外，某行结构符号（``{}();=<>[]``）数量超过单词数 × 0.3 → 代码，否则为散文
- 另行统计日志特征（时间戳、日志级别）与文档特征（标题、围栏、列表、链接）

判定优先级：json → log → code → documentation → prose → mixed
"""

from __future__ import annotations

import logging
import re

from token_saver.compress.base import is_fence_line, is_likely_json
from token_saver.models.detection import ContentFeatures, ContentTypeDetection
from token_saver.models.enums import ContentType

logger = logging.getLogger(__name__)

_LOG_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\d{4}-\d{2}-\d{2}[\sT]\d{2}:\d{2}:\d{2}"),
    re.compile(r"\[(ERROR|WARN|INFO|DEBUG|TRACE)\]", re.IGNORECASE),
    re.compile(r"\b(ERROR|WARN(?:ING)?|INFO|DEBUG|TRACE)\b"),
)

_DOC_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^#{1,6}\s+", re.MULTILINE),
    re.compile(r"```[\s\S]*?```"),
    re.compile(r"^\s*[-*+]\s+", re.MULTILINE),
    re.compile(r"\[.*?\]\(.*?\)"),
)

_CODE_SYMBOLS = re.compile(r"[{}();=<>\[\]]")
_WORDS = re.compile(r"\b\w+\b")
_CODE_SYMBOL_RATIO = 0.3


def _count(patterns: tuple[re.Pattern[str], ...], text: str) -> int:
    return sum(len(p.findall(text)) for p in patterns)


def is_code_line(line: str) -> bool:
    """结构符号密度超过阈值的行视为代码。"""
    symbols = len(_CODE_SYMBOLS.findall(line))
    words = len(_WORDS.findall(line))
    return symbols > words * _CODE_SYMBOL_RATIO


class ContentTypeDetector:
    """
    内容类型检测器。

    基本用法::

        detection = ContentTypeDetector().detect('{"a": 1}')
        detection.type        # ContentType.JSON
        detection.confidence  # 0.9
    """

    def detect(self, text: str) -> ContentTypeDetection:
        if is_likely_json(text):
            return ContentTypeDetection(
                type=ContentType.JSON,
                confidence=0.9,
                features=ContentFeatures(json_percent=1.0),
            )

        code_chars = 0
        prose_chars = 0
        in_fence = False
        for line in text.split("\n"):
            if is_fence_line(line):
                in_fence = not in_fence
                if in_fence:
                    code_chars += len(line)
                continue
            if in_fence or is_code_line(line):
                code_chars += len(line)
            else:
                prose_chars += len(line)

        total = code_chars + prose_chars
        features = ContentFeatures(
            code_percent=code_chars / total if total else 0.0,
            prose_percent=prose_chars / total if total else 0.0,
            json_percent=0.0,
            log_patterns=_count(_LOG_PATTERNS, text),
            doc_patterns=_count(_DOC_PATTERNS, text),
        )
        content_type, confidence = self._classify(features)
        logger.debug(
            "Detected content type %s (confidence=%.2f, code=%.2f, prose=%.2f, log=%d, doc=%d)",
            content_type.value,
            confidence,
            features.code_percent,
            features.prose_percent,
            features.log_patterns,
            features.doc_patterns,
        )
        return ContentTypeDetection(type=content_type, confidence=confidence, features=features)

    @staticmethod
    def _classify(f: ContentFeatures) -> tuple[ContentType, float]:
        if f.json_percent > 0.8:
            return ContentType.JSON, 0.9
        if f.log_patterns > 5:
            return ContentType.LOG, min(0.9, 0.5 + f.log_patterns / 20)
        if f.code_percent > 0.6:
            return ContentType.CODE, min(0.9, 0.5 + f.code_percent)
        if f.doc_patterns > 3 and f.prose_percent > 0.7:
            return ContentType.DOCUMENTATION, min(0.85, 0.5 + f.doc_patterns / 10)
        if f.prose_percent > 0.7:
            return ContentType.PROSE, min(0.8, 0.5 + f.prose_percent)
        return ContentType.MIXED, 0.5


def detect_content_type(text: str) -> ContentTypeDetection:
    return ContentTypeDetector().detect(text)
