"""
去重单元测试。

覆盖范围:
- compress/dedup.py: DuplicateRemover（段落 + 句子两遍）
"""

from __future__ import annotations

from token_saver.compress import DuplicateRemover

PARAGRAPH = "The quick brown fox jumps over the lazy dog."


class TestParagraphPass:
    """段落级去重。"""

    def test_repeated_paragraph(self) -> None:
        result = DuplicateRemover().remove(f"{PARAGRAPH}\n\n{PARAGRAPH}")
        assert result.output == PARAGRAPH
        assert result.duplicates_removed >= 1

    def test_whitespace_and_case_insensitive(self) -> None:
        text = f"{PARAGRAPH}\n\n  {PARAGRAPH.upper()}  "
        result = DuplicateRemover().remove(text)
        assert result.output == PARAGRAPH
        assert result.duplicates_removed == 1

    def test_short_paragraphs_kept(self) -> None:
        """短段落（标题、列表项）即使重复也保留。"""
        text = "# Title\n\n# Title"
        result = DuplicateRemover().remove(text)
        assert result.output == text
        assert result.duplicates_removed == 0


class TestSentencePass:
    """句子级去重（跨段落）。"""

    def test_repeated_sentence_across_paragraphs(self) -> None:
        text = (
            "Alpha beta gamma delta. Something else here.\n\n"
            "Alpha beta gamma delta. Another new one."
        )
        result = DuplicateRemover().remove(text)
        assert result.output == (
            "Alpha beta gamma delta. Something else here.\n\nAnother new one."
        )
        assert result.duplicates_removed == 1

    def test_punctuation_ignored(self) -> None:
        text = "Deploy the service now! Deploy the service now. Done"
        result = DuplicateRemover().remove(text)
        assert result.output == "Deploy the service now! Done"
        assert result.duplicates_removed == 1

    def test_short_sentences_kept(self) -> None:
        text = "Yes. Yes. Yes."
        result = DuplicateRemover().remove(text)
        assert result.output == text
        assert result.duplicates_removed == 0


class TestRemoverConfig:
    def test_custom_thresholds(self) -> None:
        remover = DuplicateRemover(paragraph_min_length=2, sentence_min_length=2)
        result = remover.remove("Hello\n\nHello")
        assert result.output == "Hello"
        assert result.duplicates_removed == 1

    def test_no_duplicates_returns_input(self) -> None:
        """没有删除时原文（包括多余空行）保持不变。"""
        text = "First paragraph here.\n\n\n\nSecond paragraph here."
        result = DuplicateRemover().remove(text)
        assert result.output == text
        assert result.duplicates_removed == 0

    def test_name(self) -> None:
        assert DuplicateRemover().name == "duplicate-removal"
