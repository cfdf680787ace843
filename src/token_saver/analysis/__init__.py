"""输入分析：内容类型检测与优化潜力预检。"""

from token_saver.analysis.content_type import ContentTypeDetector, detect_content_type, is_code_line
from token_saver.analysis.potential import has_duplicate_sentence, has_optimization_potential

__all__ = [
    "ContentTypeDetector",
    "detect_content_type",
    "has_duplicate_sentence",
    "has_optimization_potential",
    "is_code_line",
]
