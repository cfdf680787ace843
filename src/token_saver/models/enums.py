"""
枚举类型：内容类型与过滤预设。

# [Design Decision] 使用 str 枚举，值即对外的字符串标识，
# 既能直接写进 JSON 报告，也能被 pydantic / typer 直接解析。
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum


class ContentType(str, Enum):
    """输入文本的粗粒度分类，决定运行哪个上下文专用优化器。"""

    CODE = "code"
    PROSE = "prose"
    JSON = "json"
    LOG = "log"
    DOCUMENTATION = "documentation"
    MIXED = "mixed"


class Preset(str, Enum):
    """
    填充词过滤的激进程度分级。

    各级规则严格叠加：conservative ⊂ standard ⊂ aggressive ⊂ ultra。
    """

    CONSERVATIVE = "conservative"
    STANDARD = "standard"
    AGGRESSIVE = "aggressive"
    ULTRA = "ultra"

    @property
    def level(self) -> int:
        """在升级顺序中的位置（0 起）。"""
        return PRESET_ORDER.index(self)


PRESET_ORDER: tuple[Preset, ...] = (
    Preset.CONSERVATIVE,
    Preset.STANDARD,
    Preset.AGGRESSIVE,
    Preset.ULTRA,
)


def next_preset(preset: Preset) -> Preset | None:
    """返回下一个更激进的预设；已经是 ultra 时返回 None。"""
    idx = PRESET_ORDER.index(preset)
    if idx + 1 < len(PRESET_ORDER):
        return PRESET_ORDER[idx + 1]
    return None


def escalate_from(preset: Preset) -> Iterator[Preset]:
    """从给定预设开始逐级升级到 ultra（含起点）。"""
    current: Preset | None = preset
    while current is not None:
        yield current
        current = next_preset(current)
