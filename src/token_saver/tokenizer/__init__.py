"""
Token Saver Token 计数模块。

流水线使用确定性的启发式估算；tiktoken 精确计数仅用于报告。
"""

from token_saver.tokenizer.heuristic import (
    CHARS_PER_TOKEN,
    Estimate,
    HeuristicCounter,
    count_tokens,
    estimate_tokens,
)
from token_saver.tokenizer.protocol import TokenCounter
from token_saver.tokenizer.registry import clear_cache, get_tokenizer, list_ratio_models
from token_saver.tokenizer.tiktoken_counter import TiktokenCounter, estimate_with_tokenizer

__all__ = [
    "CHARS_PER_TOKEN",
    "Estimate",
    "HeuristicCounter",
    "TiktokenCounter",
    "TokenCounter",
    "clear_cache",
    "count_tokens",
    "estimate_tokens",
    "estimate_with_tokenizer",
    "get_tokenizer",
    "list_ratio_models",
]
