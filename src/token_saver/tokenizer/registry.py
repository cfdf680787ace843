"""
Tokenizer 注册表 — 根据模型名选择计数器。

# [Design Decision] 使用前缀匹配而非精确匹配，
# 因为模型名经常带日期或版本后缀（如 gpt-4o-mini-2024-07-18）。
"""

from __future__ import annotations

import logging

from token_saver.errors import TokenizerError
from token_saver.tokenizer.heuristic import CHARS_PER_TOKEN, HeuristicCounter
from token_saver.tokenizer.protocol import TokenCounter
from token_saver.tokenizer.tiktoken_counter import TiktokenCounter

logger = logging.getLogger(__name__)

# 模型名前缀到 tiktoken 编码方案的映射
_MODEL_TO_ENCODING: dict[str, str] = {
    "gpt-4o": "o200k_base",
    "gpt-4o-mini": "o200k_base",
    "gpt-4.1": "o200k_base",
    "gpt-4": "cl100k_base",
    "gpt-3.5": "cl100k_base",
    "o1": "o200k_base",
    "o3": "o200k_base",
    # 🏭 生产提示：Anthropic / Google 没有公开的 tiktoken 编码，
    # 使用 cl100k_base 近似，误差通常在 5% 以内。
    "claude": "cl100k_base",
    "gemini": "cl100k_base",
}

# 精确计数器实例缓存（tiktoken 编码加载较慢）
_counter_cache: dict[str, TokenCounter] = {}


def find_encoding(model: str) -> str | None:
    """通过前缀匹配找到编码方案，按前缀长度降序优先匹配更具体的前缀。"""
    model_lower = model.lower()
    for prefix in sorted(_MODEL_TO_ENCODING, key=len, reverse=True):
        if model_lower.startswith(prefix):
            return _MODEL_TO_ENCODING[prefix]
    return None


def get_tokenizer(model: str = "generic", exact: bool = False) -> TokenCounter:
    """
    根据模型名获取 Token 计数器。

    参数:
        model: 模型名称
        exact: True 时要求 tiktoken 精确计数

    返回:
        TokenCounter 实例

    异常:
        TokenizerError: exact=True 但该模型没有可用的 tiktoken 编码
    """
    if not exact:
        return HeuristicCounter(model)

    if model in _counter_cache:
        return _counter_cache[model]

    encoding_name = find_encoding(model)
    if encoding_name is None:
        raise TokenizerError(
            what=f"模型 '{model}' 没有可用的精确 Tokenizer。",
            why="该模型名无法映射到任何 tiktoken 编码方案。",
            how="去掉 --exact 使用启发式估算，或换用以下前缀之一："
            + ", ".join(sorted(_MODEL_TO_ENCODING)),
            model=model,
        )

    try:
        counter: TokenCounter = TiktokenCounter(encoding_name)
    except Exception as e:
        raise TokenizerError(
            what=f"加载 tiktoken 编码 '{encoding_name}' 失败。",
            why=str(e),
            how="检查网络（首次使用需要下载编码文件）或设置 TIKTOKEN_CACHE_DIR。",
            model=model,
        ) from e

    _counter_cache[model] = counter
    logger.info("已为模型 '%s' 创建精确计数器：%s", model, counter.name)
    return counter


def list_ratio_models() -> list[str]:
    """列出启发式比率表中已知的模型名。"""
    return sorted(CHARS_PER_TOKEN)


def clear_cache() -> None:
    """清除精确计数器缓存。通常仅在测试中使用。"""
    _counter_cache.clear()
