"""
输入分析单元测试。

覆盖范围:
- analysis/content_type.py: ContentTypeDetector 判定优先级与置信度
- analysis/potential.py: has_optimization_potential 预检
"""

from __future__ import annotations

import pytest

from token_saver.analysis import (
    ContentTypeDetector,
    detect_content_type,
    has_optimization_potential,
    is_code_line,
)
from token_saver.models import ContentType


class TestContentTypeDetector:
    """内容类型检测测试。"""

    def test_json(self, json_document: str) -> None:
        detection = ContentTypeDetector().detect(json_document)
        assert detection.type is ContentType.JSON
        assert detection.confidence > 0.8
        assert detection.features.json_percent == 1.0

    def test_iso_log(self, iso_log: str) -> None:
        detection = ContentTypeDetector().detect(iso_log)
        assert detection.type is ContentType.LOG
        assert detection.features.log_patterns > 5
        assert detection.confidence == pytest.approx(0.9)

    def test_plain_iso_lines_are_log(self) -> None:
        """6 行 ISO 时间戳即可判为日志。"""
        text = "\n".join(f"2024-03-15 10:00:0{i} request served in 12ms" for i in range(6))
        assert detect_content_type(text).type is ContentType.LOG

    def test_code(self) -> None:
        text = "def f(x):\n    return g(x[0]) + h(y)\nx = {1: 2}"
        detection = ContentTypeDetector().detect(text)
        assert detection.type is ContentType.CODE
        assert detection.features.code_percent == 1.0

    def test_fenced_content_counts_as_code(self) -> None:
        text = "```\nThe quick brown fox is here\nand more words follow\n```"
        assert detect_content_type(text).type is ContentType.CODE

    def test_prose(self) -> None:
        text = "The quick brown fox jumps over the lazy dog. It was a sunny day."
        detection = ContentTypeDetector().detect(text)
        assert detection.type is ContentType.PROSE
        assert detection.confidence == pytest.approx(0.8)

    def test_documentation(self) -> None:
        text = (
            "# Title\n\nSome intro text for readers.\n\n## Install\n\n"
            "- step one here\n- step two here\n- step three here"
        )
        detection = ContentTypeDetector().detect(text)
        assert detection.type is ContentType.DOCUMENTATION
        assert detection.features.doc_patterns == 5
        assert detection.confidence == pytest.approx(0.85)

    def test_mixed(self) -> None:
        text = "x = f(a, b);\nThe weather is nice today."
        detection = ContentTypeDetector().detect(text)
        assert detection.type is ContentType.MIXED
        assert detection.confidence == 0.5

    def test_empty(self) -> None:
        assert detect_content_type("").type is ContentType.MIXED

    def test_deterministic(self, iso_log: str) -> None:
        assert detect_content_type(iso_log) == detect_content_type(iso_log)

    def test_is_code_line(self) -> None:
        assert is_code_line("if (a == b) { run(); }")
        assert not is_code_line("A perfectly normal sentence.")


class TestOptimizationPotential:
    """优化潜力预检测试。"""

    def test_clean_text_has_no_potential(self) -> None:
        assert not has_optimization_potential("Hello world.")

    def test_filler(self, verbose_sentence: str) -> None:
        assert has_optimization_potential(verbose_sentence)

    @pytest.mark.parametrize(
        "text",
        [
            "We did it in order to win.",
            "Due to the fact that it rained.",
            "first\n\n\nsecond",
            "wide   gap",
        ],
    )
    def test_signals(self, text: str) -> None:
        assert has_optimization_potential(text)

    def test_duplicate_sentence(self) -> None:
        text = "The build finished successfully. The build finished successfully. Done"
        assert has_optimization_potential(text)

    def test_short_duplicate_ignored(self) -> None:
        assert not has_optimization_potential("Hi there. Hi there. Bye now.")

    def test_pure_log_without_signals(self) -> None:
        """只有上下文专用优化才能处理的内容会被预检跳过（已知缺口）。"""
        text = "2024-03-15T10:00:01Z [INFO] up\n2024-03-15T10:00:02Z [INFO] ready"
        assert not has_optimization_potential(text)
