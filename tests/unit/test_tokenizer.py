"""
Tokenizer 模块单元测试。

覆盖范围:
- tokenizer/heuristic.py: estimate_tokens, Estimate, HeuristicCounter
- tokenizer/registry.py: find_encoding, get_tokenizer
- tokenizer/tiktoken_counter.py: estimate_with_tokenizer（需要编码文件，离线时跳过）
"""

from __future__ import annotations

import math

import pytest

from token_saver.errors import TokenizerError
from token_saver.tokenizer import (
    CHARS_PER_TOKEN,
    HeuristicCounter,
    TokenCounter,
    clear_cache,
    count_tokens,
    estimate_tokens,
    estimate_with_tokenizer,
    get_tokenizer,
    list_ratio_models,
)
from token_saver.tokenizer.registry import find_encoding


@pytest.fixture
def tiktoken_available() -> None:
    """tiktoken 首次使用需要下载编码文件，离线环境跳过。"""
    try:
        get_tokenizer("gpt-4", exact=True)
    except TokenizerError:
        pytest.skip("tiktoken 编码文件不可用")


class TestEstimateTokens:
    """启发式估算测试。"""

    def test_generic_ratio(self) -> None:
        """generic 模型：ceil(chars / 4)。"""
        est = estimate_tokens("Hello world.")
        assert est.chars == 12
        assert est.tokens == 3
        assert est.model == "generic"
        assert est.note is None

    def test_ceil_rounding(self) -> None:
        assert estimate_tokens("abcde").tokens == 2

    def test_empty_text(self) -> None:
        est = estimate_tokens("")
        assert est.chars == 0
        assert est.tokens == 0

    @pytest.mark.parametrize("model", ["gpt-4o-mini", "gpt-4.1", "claude-3.5", "gemini-1.5"])
    def test_known_model_ratios(self, model: str) -> None:
        text = "x" * 100
        est = estimate_tokens(text, model)
        assert est.model == model
        assert est.tokens == math.ceil(100 / CHARS_PER_TOKEN[model])

    def test_unknown_model_falls_back_to_generic(self) -> None:
        """未知模型名不报错，回退到 generic。"""
        est = estimate_tokens("x" * 40, "some-future-model")
        assert est.model == "generic"
        assert est.tokens == 10

    def test_diff_bump(self) -> None:
        """代码上下文上浮 15% 并附带说明。"""
        est = estimate_tokens("x" * 400, diff_heuristic_bump=True)
        assert est.tokens == math.ceil(100 * 1.15)
        assert est.note == "Heuristic - Code Context"

    def test_to_dict(self) -> None:
        assert estimate_tokens("abcd").to_dict() == {"chars": 4, "tokens": 1, "model": "generic"}
        bumped = estimate_tokens("abcd", diff_heuristic_bump=True).to_dict()
        assert bumped["note"] == "Heuristic - Code Context"

    def test_count_tokens_shortcut(self) -> None:
        assert count_tokens("x" * 39, "claude-3.5") == 11

    def test_deterministic(self) -> None:
        text = "The same text always gives the same estimate."
        assert estimate_tokens(text) == estimate_tokens(text)


class TestHeuristicCounter:
    """HeuristicCounter 测试。"""

    def test_implements_protocol(self) -> None:
        assert isinstance(HeuristicCounter(), TokenCounter)

    def test_name(self) -> None:
        assert HeuristicCounter("claude-3.5").name == "heuristic:claude-3.5"
        assert HeuristicCounter("unknown").name == "heuristic:generic"

    def test_count(self) -> None:
        assert HeuristicCounter().count("Hello, world!") == 4
        assert HeuristicCounter().count("") == 0


class TestRegistry:
    """注册表测试。"""

    def test_default_is_heuristic(self) -> None:
        counter = get_tokenizer()
        assert counter.name == "heuristic:generic"

    @pytest.mark.parametrize(
        ("model", "encoding"),
        [
            ("gpt-4o", "o200k_base"),
            ("gpt-4o-mini-2024-07-18", "o200k_base"),
            ("gpt-4-turbo", "cl100k_base"),
            ("claude-3-5-sonnet", "cl100k_base"),
            ("GPT-3.5-turbo", "cl100k_base"),
        ],
    )
    def test_find_encoding_prefix(self, model: str, encoding: str) -> None:
        assert find_encoding(model) == encoding

    def test_find_encoding_unknown(self) -> None:
        assert find_encoding("generic") is None

    def test_exact_unknown_model_raises(self) -> None:
        """要求精确计数但模型无法映射时抛 TokenizerError。"""
        with pytest.raises(TokenizerError) as exc_info:
            get_tokenizer("generic", exact=True)
        assert exc_info.value.model == "generic"
        assert "--exact" in exc_info.value.how

    def test_list_ratio_models(self) -> None:
        models = list_ratio_models()
        assert "generic" in models
        assert models == sorted(models)


class TestExactEstimation:
    """tiktoken 精确计数测试。"""

    def test_unknown_model_returns_none(self) -> None:
        assert estimate_with_tokenizer("hello", "generic") is None

    def test_exact_estimate(self, tiktoken_available: None) -> None:
        est = estimate_with_tokenizer("Hello, world!", "gpt-4")
        assert est is not None
        assert est.chars == 13
        assert 0 < est.tokens < 13
        assert est.model == "gpt-4"

    def test_exact_counter_cached(self, tiktoken_available: None) -> None:
        first = get_tokenizer("gpt-4", exact=True)
        second = get_tokenizer("gpt-4", exact=True)
        assert first is second
        assert first.name == "tiktoken:cl100k_base"

    def test_clear_cache(self, tiktoken_available: None) -> None:
        first = get_tokenizer("gpt-4", exact=True)
        clear_cache()
        assert get_tokenizer("gpt-4", exact=True) is not first
