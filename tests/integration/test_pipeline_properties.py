"""
流水线性质集成测试 — 从公开入口验证整条流水线的不变量。

覆盖范围:
- Token 单调不增
- 不动点上的幂等性
- 代码围栏不可侵犯
- 内容类型判定
- 重复段落去除
- 缓存命中的确定性（含多线程共享缓存）
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from token_saver.analysis import detect_content_type
from token_saver.cache import MemoryCache
from token_saver.compress import DuplicateRemover, FillerStripper, WhitespaceCompressor
from token_saver.models import ContentType, OptimizationOptions, Preset
from token_saver.optimizer import Optimizer

DUP = "The deployment pipeline finished without any errors today."

SAMPLES = [
    "",
    "Hello world.",
    "This is basically a very simple test that contains actually quite verbose language in fact.",
    f"{DUP}\n\n{DUP}\n\nIt is basically fine.",
    "We have the ability to ship in order to learn.\n\n\n\nAt this point in time it works.",
    "Basically, you know, this works. I mean it really does.",
    "Run `basically   x` then\n```\nkeep    this\n\n\n\n```\nactually done.",
    '{"note": "basically   fine"}',
    "## Title\n\n- item one\n- item two\n\nAs mentioned above, see [docs](http://x).",
]


def _fence_bodies(text: str) -> list[str]:
    bodies: list[str] = []
    current: list[str] | None = None
    for line in text.split("\n"):
        if line.strip().startswith("```"):
            if current is None:
                current = []
            else:
                bodies.append("\n".join(current))
                current = None
            continue
        if current is not None:
            current.append(line)
    return bodies


@pytest.mark.integration
class TestMonotonicReduction:
    """任何输入、任何选项下 optimized_tokens ≤ original_tokens。"""

    @pytest.mark.parametrize("text", SAMPLES)
    @pytest.mark.parametrize("preset", list(Preset))
    @pytest.mark.parametrize("target", [None, 10.0, 90.0])
    def test_never_grows(self, text: str, preset: Preset, target: float | None) -> None:
        options = OptimizationOptions(preset=preset, target_savings_percent=target)
        result = Optimizer(cache=None).optimize(text, options)
        assert result.optimized_tokens <= result.original_tokens
        assert result.saved >= 0


@pytest.mark.integration
class TestIdempotence:
    """对优化结果再跑一次，不会再有阶段生效。"""

    @pytest.mark.parametrize(
        "text",
        [
            "This is basically a very simple test that contains actually quite verbose language in fact.",
            "Hello world.",
            f"{DUP}\n\n{DUP}\n\nIt is basically fine.",
        ],
    )
    def test_second_pass_is_noop(self, text: str) -> None:
        optimizer = Optimizer(cache=None)
        first = optimizer.optimize(text)
        second = optimizer.optimize(first.output)
        assert second.optimized_tokens == first.optimized_tokens
        assert second.strategies == []

    def test_fenced_input(self, fenced_text: str) -> None:
        optimizer = Optimizer(cache=None)
        first = optimizer.optimize(fenced_text)
        second = optimizer.optimize(first.output)
        assert second.output == first.output
        assert second.strategies == []

    def test_second_pass_with_cache(self, verbose_sentence: str) -> None:
        optimizer = Optimizer(cache=MemoryCache())
        first = optimizer.optimize(verbose_sentence)
        second = optimizer.optimize(first.output)
        assert second.strategies in ([], ["cached"])


@pytest.mark.integration
class TestCodeFenceInviolability:
    """围栏内的字节在填充词过滤与空白压缩前后完全一致。"""

    @pytest.mark.parametrize("preset", list(Preset))
    def test_filler_then_whitespace(self, fenced_text: str, preset: Preset) -> None:
        stripped = FillerStripper(preset).strip(fenced_text).output
        compressed = WhitespaceCompressor().compress(stripped).output
        assert _fence_bodies(stripped) == _fence_bodies(fenced_text)
        assert _fence_bodies(compressed) == _fence_bodies(fenced_text)

    @pytest.mark.parametrize("preset", list(Preset))
    def test_crlf_and_decomposed_bytes(self, preset: Preset) -> None:
        text = "basically ok\r\n```\r\ncafe\u0301   x\r\n\r\n```\r\nactually done"
        stripped = FillerStripper(preset).strip(text).output
        compressed = WhitespaceCompressor().compress(stripped).output
        assert _fence_bodies(stripped) == ["cafe\u0301   x\r\n\r"]
        assert _fence_bodies(compressed) == _fence_bodies(text)

    def test_through_optimizer(self, fenced_text: str) -> None:
        options = OptimizationOptions(preset=Preset.CONSERVATIVE, target_savings_percent=90)
        result = Optimizer(cache=None).optimize(fenced_text, options)
        assert _fence_bodies(result.output) == _fence_bodies(fenced_text)

    def test_multiple_fences(self) -> None:
        text = "a   b\n```\nbasically    x\n```\nmid   text\n```js\nlet  y   = 1;\n\n\n```\nactually end"
        for preset in Preset:
            stripped = FillerStripper(preset).strip(text).output
            compressed = WhitespaceCompressor().compress(stripped).output
            assert _fence_bodies(compressed) == ["basically    x", "let  y   = 1;\n\n"]


@pytest.mark.integration
class TestContentTypeCorrectness:
    """内容类型判定。"""

    def test_json_document(self, json_document: str) -> None:
        detection = detect_content_type(json_document)
        assert detection.type is ContentType.JSON
        assert detection.confidence > 0.8

    def test_iso_log(self, iso_log: str) -> None:
        assert detect_content_type(iso_log).type is ContentType.LOG


@pytest.mark.integration
class TestDuplicateParagraphs:
    """重复段落去除。"""

    def test_repeated_paragraph(self) -> None:
        result = DuplicateRemover().remove(f"{DUP}\n\n{DUP}")
        assert result.duplicates_removed >= 1
        assert result.output.count(DUP) == 1


@pytest.mark.integration
class TestCacheDeterminism:
    """缓存命中的确定性。"""

    def test_byte_identical_hit(self, cached_optimizer: Optimizer) -> None:
        text = "We have the ability to ship in order to learn.\n\n\n\nAt this point in time it works."
        first = cached_optimizer.optimize(text)
        second = cached_optimizer.optimize(text)
        assert second.output == first.output
        assert "cached" in second.strategies

    def test_shared_cache_across_threads(self, verbose_sentence: str) -> None:
        cache = MemoryCache(max_size=4)
        optimizer = Optimizer(cache=cache)
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: optimizer.optimize(verbose_sentence), range(32)))
        assert len({r.output for r in results}) == 1
        stats = cache.stats()
        assert stats.hits + stats.misses == 32
        assert stats.current_size == 1


@pytest.mark.integration
class TestDocumentedScenarios:
    """文档中给出的示例场景。"""

    def test_example_sentence(self, verbose_sentence: str) -> None:
        result = Optimizer(cache=None).optimize(
            verbose_sentence, OptimizationOptions(preset=Preset.STANDARD)
        )
        for word in ("basically", "actually", "in fact"):
            assert word not in result.output.lower()
        assert result.optimized_tokens < result.original_tokens == 23

    def test_no_op_gate(self) -> None:
        result = Optimizer(cache=None).optimize("Hello world.")
        assert result.output == "Hello world."
        assert result.strategies == []
