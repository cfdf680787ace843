"""
填充词过滤器 — 分级删除"说了等于没说"的词句。

→ 三态扫描：普通文本 / 代码围栏 / 行内代码

处理流程：
1. 整段可解析为 JSON → 原样返回（保护结构化负载）
2. 逐行扫描，围栏标记行与围栏内的行连同换行符逐字节通过
3. 围栏外的行做 NFC 归一化，换行符统一为 \n（keep_eol=True 时保留）
4. 按行内代码切分（代码片段不做归一化）；代码片段及紧邻代码片段的文本不做替换
   （形如 "really `fn()`" 的副词往往在修饰代码，删掉会改变含义）
5. 其余片段按预设规则表顺序依次替换
"""

from __future__ import annotations

from dataclasses import dataclass, field

from token_saver.compress.base import (
    apply_rules,
    is_fence_line,
    is_inline_code,
    is_likely_json,
    normalize_text,
    split_inline_code,
    split_lines,
)
from token_saver.compress.presets import get_preset_rules
from token_saver.models.enums import Preset


@dataclass(frozen=True)
class PreservedSpans:
    """被保护（未处理）的内容统计。"""

    code_blocks: int = 0
    inline: int = 0
    json: bool = False


@dataclass(frozen=True)
class StripResult:
    """
    填充词过滤结果。

    属性:
        output: 处理后的文本
        changed: 是否有规则改写了文本（归一化本身不计入）
        preserved: 受保护内容的统计
    """

    output: str
    changed: bool
    preserved: PreservedSpans = field(default_factory=PreservedSpans)


@dataclass(frozen=True)
class RuleMatch:
    """explain_matches 的单条结果。"""

    pattern: str
    count: int


class FillerStripper:
    """
    分级填充词过滤器。

    基本用法::

        stripper = FillerStripper(Preset.STANDARD)
        result = stripper.strip("This is basically done.")
        result.output  # "This is done."

    属性:
        preset: 使用的预设
        keep_eol: 是否保留原始换行符（默认统一为 \\n）
    """

    def __init__(self, preset: Preset | str = Preset.CONSERVATIVE, keep_eol: bool = False):
        self._preset = Preset(preset)
        self._keep_eol = keep_eol
        self._rules = get_preset_rules(self._preset)

    @property
    def name(self) -> str:
        """策略标签（用于结果中的 strategies 列表）。"""
        return f"strip-fillers-{self._preset.value}"

    @property
    def preset(self) -> Preset:
        return self._preset

    def strip(self, text: str) -> StripResult:
        """执行过滤。"""
        if is_likely_json(text):
            return StripResult(output=text, changed=False, preserved=PreservedSpans(json=True))

        in_fence = False
        fence_count = 0
        inline_count = 0
        changed = False
        out: list[str] = []

        for line, eol in split_lines(text):
            if is_fence_line(line) or in_fence:
                # 围栏标记行与围栏内的行连同换行符逐字节保留
                if is_fence_line(line):
                    in_fence = not in_fence
                    if in_fence:
                        fence_count += 1
                out.append(line + eol)
                continue

            parts = split_inline_code(line)
            segments: list[str] = []
            for i, part in enumerate(parts):
                if is_inline_code(part):
                    inline_count += 1
                    segments.append(part)
                    continue
                part = normalize_text(part, keep_eol=True)
                left = i > 0 and is_inline_code(parts[i - 1])
                right = i < len(parts) - 1 and is_inline_code(parts[i + 1])
                if left or right:
                    segments.append(part)
                    continue
                replaced = apply_rules(part, self._rules)
                changed = changed or replaced != part
                segments.append(replaced)
            if eol and not self._keep_eol:
                eol = "\n"
            out.append("".join(segments) + eol)

        return StripResult(
            output="".join(out),
            changed=changed,
            preserved=PreservedSpans(code_blocks=fence_count, inline=inline_count),
        )


def strip_fillers(
    text: str,
    preset: Preset | str = Preset.CONSERVATIVE,
    keep_eol: bool = False,
) -> StripResult:
    """FillerStripper 的函数式入口。"""
    return FillerStripper(preset, keep_eol=keep_eol).strip(text)


def explain_matches(text: str, preset: Preset | str = Preset.CONSERVATIVE) -> list[RuleMatch]:
    """
    统计某个预设下每条规则在文本中的匹配次数（只列出命中的规则）。

    用于回答"为什么这段文本被改了"——不做任何替换。
    """
    matches: list[RuleMatch] = []
    for r in get_preset_rules(preset):
        count = r.count(text)
        if count:
            matches.append(RuleMatch(pattern=r.pattern.pattern, count=count))
    return matches
