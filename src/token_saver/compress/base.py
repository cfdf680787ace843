"""
文本变换的公共基础：规则对象与代码保护扫描工具。

→ 所有规则表都表示为有序的 (匹配器, 替换文本) 值对，声明式、可审计。

各阶段共享同一套代码保护语义：
- 以 ``` 开头（去掉首尾空白后）的行切换围栏状态，围栏内的行原样通过
- 行内代码（反引号包裹）按片段切分，代码片段本身不参与变换

# [Design Decision] 围栏状态机逐行扫描、而不是用一个跨行正则匹配整个代码块，
# 这样未闭合的围栏也能得到保护（直到文本结束），不会因为正则回溯失败而"漏保护"。
"""

from __future__ import annotations

import json
import re
import unicodedata
from dataclasses import dataclass

FENCE_MARKER = "```"

# 捕获分组让 re.split 保留行内代码片段：奇数下标即代码片段
_INLINE_CODE_SPLIT = re.compile(r"(`[^`]*`)")

_EOL_PATTERN = re.compile(r"\r\n?|\n")
# 捕获分组保留换行符本身，split 结果为 行, 换行符, 行, ...
_LINE_BREAK = re.compile(r"(\r\n|\r|\n)")
_EXCESS_BLANK_LINES = re.compile(r"\n{3,}")


@dataclass(frozen=True)
class TextRule:
    """
    一条文本替换规则。

    属性:
        pattern: 已编译的正则表达式
        replacement: 替换文本（空串表示删除）
    """

    pattern: re.Pattern[str]
    replacement: str

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)

    def count(self, text: str) -> int:
        """统计文本中的匹配次数。"""
        return sum(1 for _ in self.pattern.finditer(text))


def rule(regex: str, replacement: str = "", ignore_case: bool = True) -> TextRule:
    """构造规则的便捷函数，默认大小写不敏感。"""
    flags = re.IGNORECASE if ignore_case else 0
    return TextRule(pattern=re.compile(regex, flags), replacement=replacement)


def apply_rules(text: str, rules: tuple[TextRule, ...]) -> str:
    """按表顺序依次应用所有规则。"""
    for r in rules:
        text = r.apply(text)
    return text


def is_fence_line(line: str) -> bool:
    """判断一行是否为代码围栏标记行。"""
    return line.strip().startswith(FENCE_MARKER)


def split_inline_code(line: str) -> list[str]:
    """
    按行内代码切分一行文本。

    返回的列表中奇数下标为行内代码片段（含反引号），偶数下标为普通文本
    （可能是空串）。
    """
    return _INLINE_CODE_SPLIT.split(line)


def is_inline_code(part: str) -> bool:
    return len(part) >= 2 and part.startswith("`") and part.endswith("`")


def is_likely_json(text: str) -> bool:
    """去掉首尾空白后以 { 或 [ 开头，且能被完整解析为 JSON。"""
    stripped = text.strip()
    if not (stripped.startswith("{") or stripped.startswith("[")):
        return False
    try:
        json.loads(stripped)
    except ValueError:
        return False
    return True


def normalize_eol(text: str) -> str:
    """把 \\r\\n 与 \\r 统一为 \\n。"""
    if not text:
        return text
    return _EOL_PATTERN.sub("\n", text)


def normalize_text(text: str, keep_eol: bool = False) -> str:
    """Unicode NFC 归一化，必要时统一换行符。匹配规则前必须先做这一步。"""
    normalized = unicodedata.normalize("NFC", text)
    if keep_eol:
        return normalized
    return normalize_eol(normalized)


def split_lines(text: str) -> list[tuple[str, str]]:
    """按任意换行符切行，返回 (行内容, 行尾换行符) 对；最后一行的换行符为空串。"""
    parts = _LINE_BREAK.split(text)
    return [(parts[i], parts[i + 1] if i + 1 < len(parts) else "") for i in range(0, len(parts), 2)]


def collapse_blank_lines(text: str, max_newlines: int = 2) -> str:
    """把连续超过 max_newlines 个换行压到 max_newlines 个。"""
    if max_newlines == 2:
        return _EXCESS_BLANK_LINES.sub("\n\n", text)
    pattern = re.compile("\n{%d,}" % (max_newlines + 1))
    return pattern.sub("\n" * max_newlines, text)
