"""内容类型检测结果。"""

from __future__ import annotations

from dataclasses import asdict, dataclass

from token_saver.models.enums import ContentType


@dataclass(frozen=True)
class ContentFeatures:
    """
    检测过程中提取的特征。

    属性:
        code_percent: 代码字符占比
        prose_percent: 散文字符占比
        json_percent: JSON 字符占比
        log_patterns: 时间戳 / 日志级别匹配次数
        doc_patterns: Markdown 结构（标题、代码块、列表、链接）匹配次数
    """

    code_percent: float = 0.0
    prose_percent: float = 0.0
    json_percent: float = 0.0
    log_patterns: int = 0
    doc_patterns: int = 0


@dataclass(frozen=True)
class ContentTypeDetection:
    """
    内容类型检测结果，纯函数产物：同一文本两次检测结果完全相同。

    属性:
        type: 检测出的内容类型
        confidence: 置信度，范围 [0, 1]
        features: 特征明细
    """

    type: ContentType
    confidence: float
    features: ContentFeatures

    def to_dict(self) -> dict[str, object]:
        return {
            "type": self.type.value,
            "confidence": self.confidence,
            "features": asdict(self.features),
        }
