"""
Token Saver 数据模型。

选项用 Pydantic（需要校验），结果用 frozen dataclass（纯值对象）。
"""

from token_saver.models.detection import ContentFeatures, ContentTypeDetection
from token_saver.models.enums import (
    PRESET_ORDER,
    ContentType,
    Preset,
    escalate_from,
    next_preset,
)
from token_saver.models.options import OptimizationOptions, StageToggles
from token_saver.models.result import (
    CACHED_STRATEGY,
    OptimizationResult,
    make_report,
    percent_saved,
    savings_percent,
)

__all__ = [
    "CACHED_STRATEGY",
    "PRESET_ORDER",
    "ContentFeatures",
    "ContentType",
    "ContentTypeDetection",
    "OptimizationOptions",
    "OptimizationResult",
    "Preset",
    "StageToggles",
    "escalate_from",
    "make_report",
    "next_preset",
    "percent_saved",
    "savings_percent",
]
