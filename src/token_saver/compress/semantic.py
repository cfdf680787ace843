"""
语义压缩 — 把冗长短语替换为等义的简短表达。

对正式、啰嗦的文本效果明显（"have the ability to" → "can"）。
规则全局生效、大小写不敏感，不做代码保护：
编排器把它排在去重之后、填充词过滤之前，
JSON 与代码类内容通常在此之前已经被上下文专用优化器处理。
"""

from __future__ import annotations

from dataclasses import dataclass

from token_saver.compress.base import TextRule, rule

SEMANTIC_RULES: tuple[TextRule, ...] = (
    # 动词化
    rule(r"\bperform an analysis of\b", "analyze"),
    rule(r"\bconduct a review of\b", "review"),
    rule(r"\bcarry out an examination of\b", "examine"),
    rule(r"\bundertake a study of\b", "study"),
    rule(r"\bcarry out\b", "do"),
    rule(r"\bperform\b", "do"),
    rule(r"\bconduct\b", "do"),
    # 能力
    rule(r"\bhave the ability to\b", "can"),
    rule(r"\bis able to\b", "can"),
    rule(r"\bis capable of\b", "can"),
    rule(r"\bis in a position to\b", "can"),
    rule(r"\bhas the capacity to\b", "can"),
    # 时间
    rule(r"\bin the process of\b", ""),
    rule(r"\bat this point in time\b", "now"),
    rule(r"\bat the present time\b", "now"),
    rule(r"\bat this moment in time\b", "now"),
    rule(r"\bin the near future\b", "soon"),
    rule(r"\bat a later date\b", "later"),
    # 介词短语
    rule(r"\bby means of\b", "via"),
    rule(r"\bin the vicinity of\b", "near"),
    rule(r"\bfor the purpose of\b", "for"),
    rule(r"\bin a timely manner\b", "quickly"),
    rule(r"\bwith the exception of\b", "except"),
    rule(r"\bin the case of\b", "for"),
    rule(r"\bin the context of\b", "in"),
    rule(r"\bwith respect to\b", "for"),
    rule(r"\bin relation to\b", "about"),
    rule(r"\bas far as\b", "for"),
    # 冗余量词
    rule(r"\bmore often than not\b", "usually"),
    rule(r"\bthe majority of\b", "most"),
    rule(r"\ba number of\b", "many"),
    rule(r"\ba lot of\b", "many"),
    rule(r"\ba great deal of\b", "much"),
    rule(r"\ba large amount of\b", "much"),
    rule(r"\ba small number of\b", "few"),
    # 多余修饰
    rule(r"\bvery much\b", "much"),
    rule(r"\bquite a lot\b", "many"),
    rule(r"\brather than\b", "than"),
    # 常见的啰嗦句式
    rule(r"\bit is worth noting that\b", ""),
    rule(r"\bit should be noted that\b", ""),
    rule(r"\bit is important to remember that\b", ""),
    rule(r"\bit is essential to\b", "must"),
    rule(r"\bit is necessary to\b", "must"),
    rule(r"\bit is required to\b", "must"),
)


@dataclass(frozen=True)
class SemanticCompressionResult:
    """
    属性:
        output: 处理后的文本
        replacements: 实际改动了文本的规则条数（不是匹配次数）
    """

    output: str
    replacements: int


class SemanticCompressor:
    """无状态的冗长短语替换器。"""

    def __init__(self, rules: tuple[TextRule, ...] = SEMANTIC_RULES):
        self._rules = rules

    @property
    def name(self) -> str:
        return "semantic-compression"

    def compress(self, text: str) -> SemanticCompressionResult:
        output = text
        replacements = 0
        for r in self._rules:
            before = output
            output = r.apply(output)
            if output != before:
                replacements += 1
        return SemanticCompressionResult(output=output, replacements=replacements)
