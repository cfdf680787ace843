"""
基于 tiktoken 的精确 Token 计数器。

流水线本身从不依赖它；它只服务于报告场景：
想知道启发式估算和真实 BPE 计数差多少时，用 ``estimate --exact``。

对于非 OpenAI 模型（如 Claude、Gemini），tiktoken 的计数结果是近似值。
"""

from __future__ import annotations

import logging

import tiktoken

from token_saver.tokenizer.heuristic import Estimate

logger = logging.getLogger(__name__)


class TiktokenCounter:
    """
    基于 tiktoken 的 Token 计数器。

    用法::

        counter = TiktokenCounter()  # 默认 cl100k_base
        counter.count("Hello, world!")

        counter = TiktokenCounter(encoding_name="o200k_base")

    属性:
        encoding_name: tiktoken 编码方案名称
    """

    def __init__(self, encoding_name: str = "cl100k_base") -> None:
        self._encoding_name = encoding_name
        self._encoding = tiktoken.get_encoding(encoding_name)

    def count(self, text: str) -> int:
        """计算文本的 Token 数量。"""
        if not text:
            return 0
        return len(self._encoding.encode(text))

    @property
    def name(self) -> str:
        """Tokenizer 名称标识。"""
        return f"tiktoken:{self._encoding_name}"

    @property
    def encoding_name(self) -> str:
        return self._encoding_name


def estimate_with_tokenizer(text: str, model: str) -> Estimate | None:
    """
    使用 tiktoken 精确计数；模型无法映射到编码或编码加载失败时返回 None。

    # [DX Decision] 这里吞掉异常并返回 None，而不是抛出：
    # 精确计数只是报告上的"加分项"，调用方据此回退到启发式估算。

    参数:
        text: 待计数文本
        model: 模型名

    返回:
        Estimate 或 None
    """
    from token_saver.tokenizer.registry import find_encoding

    encoding_name = find_encoding(model)
    if encoding_name is None:
        logger.debug("模型 '%s' 没有对应的 tiktoken 编码，跳过精确计数。", model)
        return None

    try:
        counter = TiktokenCounter(encoding_name)
    except Exception as e:
        logger.warning(
            "为模型 '%s' 加载 tiktoken 编码 '%s' 失败，回退到启发式估算。错误：%s",
            model,
            encoding_name,
            e,
        )
        return None

    return Estimate(chars=len(text), tokens=counter.count(text), model=model)
