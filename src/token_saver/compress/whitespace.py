"""
空白压缩 — 去掉冗余空白，同时保护代码。

开启代码保护时（默认）：
- 围栏内的行原样保留，连空行也不合并
- 围栏开始前的上一行先做行内压缩
- 围栏外：去掉行首行尾空白，连续空格/制表符合并为一个，
  连续空行最多保留一个
- 行内代码片段内部的空白不动
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from token_saver.compress.base import is_fence_line, is_inline_code, split_inline_code

_SPACE_RUN = re.compile(r"[ \t]{2,}")


@dataclass(frozen=True)
class WhitespaceCompressionResult:
    output: str
    compressed: bool


def compress_line_whitespace(line: str) -> str:
    """单行压缩：合并空白串并去掉首尾空白。"""
    return _SPACE_RUN.sub(" ", line).strip(" \t")


def _compress_outside_inline_code(line: str) -> str:
    parts = split_inline_code(line)
    if len(parts) == 1:
        return compress_line_whitespace(line)

    last = len(parts) - 1
    out: list[str] = []
    for i, part in enumerate(parts):
        if is_inline_code(part):
            out.append(part)
            continue
        part = _SPACE_RUN.sub(" ", part)
        if i == 0:
            part = part.lstrip(" \t")
        if i == last:
            part = part.rstrip(" \t")
        out.append(part)
    return "".join(out)


class WhitespaceCompressor:
    """
    空白压缩器。

    基本用法::

        result = WhitespaceCompressor().compress("a    b\\n\\n\\n\\nc")
        result.output  # "a b\\n\\nc"

    属性:
        protect_code: 是否保护围栏与行内代码（默认 True）
    """

    def __init__(self, protect_code: bool = True):
        self._protect_code = protect_code

    @property
    def name(self) -> str:
        return "whitespace-compression"

    def compress(self, text: str) -> WhitespaceCompressionResult:
        if not self._protect_code:
            output = self._compress_plain(text)
        else:
            output = self._compress_protected(text)
        return WhitespaceCompressionResult(output=output, compressed=output != text)

    @staticmethod
    def _compress_plain(text: str) -> str:
        output = re.sub(r"\n{3,}", "\n\n", text)
        output = _SPACE_RUN.sub(" ", output)
        output = re.sub(r"[ \t]+\n", "\n", output)
        return re.sub(r"\n[ \t]+", "\n", output)

    @staticmethod
    def _compress_protected(text: str) -> str:
        # (行内容, 是否属于围栏) 对；围栏标记行本身算作围栏
        lines: list[tuple[str, bool]] = []
        in_fence = False

        for line in text.split("\n"):
            if is_fence_line(line):
                if not in_fence and lines:
                    prev, prev_fenced = lines[-1]
                    lines[-1] = (compress_line_whitespace(prev), prev_fenced)
                in_fence = not in_fence
                lines.append((line, True))
                continue
            if in_fence:
                lines.append((line, True))
                continue
            lines.append((_compress_outside_inline_code(line), False))

        final: list[str] = []
        last_was_empty = False
        for line, fenced in lines:
            if fenced:
                final.append(line)
                last_was_empty = False
                continue
            is_empty = not line.strip()
            if is_empty and last_was_empty:
                continue
            final.append(line)
            last_was_empty = is_empty

        return "\n".join(final)
