"""
填充词过滤的预设规则表。

每一级只声明自己新增的规则，get_preset_rules() 负责按
conservative → standard → aggressive → ultra 叠加。
同一级内部按"具体在前、宽泛在后"排序，顺序即语义，不要随意调整。
"""

from __future__ import annotations

from token_saver.compress.base import TextRule, rule
from token_saver.models.enums import PRESET_ORDER, Preset

_CONSERVATIVE: tuple[TextRule, ...] = (
    rule(r"\bin order to\b", "to"),
    rule(r"\bdue to the fact that\b", "because"),
    rule(r"\bit'?s important to note( that)?\b"),
    rule(r"\bat the end of the day\b"),
    rule(r"^\s*I(?:\s+personally)?\s+think(?:\s+that)?\b"),
)

_STANDARD: tuple[TextRule, ...] = (
    rule(r"\bbasically\b,?\s*"),
    rule(r"\bactually\b,?\s*"),
    rule(r"\bsimply\b,?\s*"),
    rule(r"\bin fact\b,?\s*"),
    rule(r"\bneedless to say\b,?\s*"),
    rule(r"\bas you can see\b,?\s*"),
    rule(r"\bin a nutshell\b,?\s*"),
    rule(r"\bfor the most part\b,?\s*"),
    rule(r"\bthe truth is(?: that)?\b,?\s*"),
    rule(r"\bkind of\b\s*"),
    rule(r"\bsort of\b\s*"),
)

_AGGRESSIVE: tuple[TextRule, ...] = (
    rule(r"\bobviously\b,?\s*"),
    rule(r"\bliterally\b,?\s*"),
    rule(r"\bin my opinion\b,?\s*"),
    rule(r"\bto be honest\b,?\s*"),
    # 缩写只匹配大写，避免误伤普通单词
    rule(r"\bIMO\b,?\s*", ignore_case=False),
    rule(r"\bTBH\b,?\s*", ignore_case=False),
)

_ULTRA: tuple[TextRule, ...] = (
    rule(r"\bwhat I mean is\b"),
    rule(r"\bthe thing is\b"),
    rule(r"\bwhat I'm saying is\b"),
    rule(r"\bif you will\b"),
    rule(r"\bas it were\b"),
    rule(r"\byou know\b"),
    rule(r"\bI mean\b"),
    rule(r"\byou see\b"),
    rule(r"\bof course\b"),
    rule(r"\bas you know\b"),
    rule(r"\bit likely that\b", "likely"),
    rule(r"\bfor all intents and purposes\b"),
    rule(r"\bmake sure to\b", "must"),
    rule(r"\bkeep in mind that\b"),
    rule(r"\bwhen it comes to\b", "for"),
    rule(r"\bprior to\b", "before"),
    rule(r"\bsubsequent to\b", "after"),
    rule(r"\bin the event that\b", "if"),
    rule(r"\bwith regard to\b", "about"),
    rule(r"\bin terms of\b", "for"),
    rule(r"\bin the case of\b", "for"),
    rule(r"\bin the context of\b", "in"),
    rule(r"\bwith respect to\b", "for"),
    rule(r"\bin relation to\b", "about"),
    rule(r"\bas far as\b", "for"),
    rule(r"\bmore often than not\b", "usually"),
    rule(r"\bat this point in time\b", "now"),
    rule(r"\bin the near future\b", "soon"),
    rule(r"\bat the present time\b", "now"),
)

_TIER_RULES: dict[Preset, tuple[TextRule, ...]] = {
    Preset.CONSERVATIVE: _CONSERVATIVE,
    Preset.STANDARD: _STANDARD,
    Preset.AGGRESSIVE: _AGGRESSIVE,
    Preset.ULTRA: _ULTRA,
}


def get_preset_rules(preset: Preset | str) -> tuple[TextRule, ...]:
    """
    返回某个预设生效的全部规则（含所有更低级别的规则）。

    参数:
        preset: 预设枚举或其字符串值

    返回:
        按应用顺序排列的规则元组
    """
    preset = Preset(preset)
    rules: tuple[TextRule, ...] = ()
    for tier in PRESET_ORDER[: preset.level + 1]:
        rules += _TIER_RULES[tier]
    return rules
