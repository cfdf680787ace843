"""
TokenCounter 协议定义。

优化流水线内部固定使用启发式估算；但报告和 CLI 的 ``estimate --exact``
需要可替换的计数器，这里用 Protocol 把两者统一起来。

# [Design Decision] 使用 Protocol（结构化子类型）而非 ABC（名义子类型），
# 让任何实现了 count() 和 name 的对象都可以作为 TokenCounter 使用。
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TokenCounter(Protocol):
    """
    Token 计数器协议。

    内置实现：
    - HeuristicCounter：字符数 / 比率（流水线使用）
    - TiktokenCounter：基于 tiktoken 的精确计数（可选）

    最小实现示例::

        class MyTokenizer:
            def count(self, text: str) -> int:
                return len(text.split())

            @property
            def name(self) -> str:
                return "whitespace"
    """

    def count(self, text: str) -> int:
        """计算文本的 Token 数量。"""
        ...

    @property
    def name(self) -> str:
        """Tokenizer 名称标识。"""
        ...
