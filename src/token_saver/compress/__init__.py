"""文本压缩阶段：填充词、语义、空白、去重、上下文专用、摘要。"""

from token_saver.compress.context import (
    CodeCommentOptimizer,
    ContextOptimizationResult,
    ContextOptimizer,
    DocumentationOptimizer,
    LogOptimizer,
    get_context_optimizer,
)
from token_saver.compress.dedup import DuplicateRemovalResult, DuplicateRemover
from token_saver.compress.filler import (
    FillerStripper,
    PreservedSpans,
    RuleMatch,
    StripResult,
    explain_matches,
    strip_fillers,
)
from token_saver.compress.presets import get_preset_rules
from token_saver.compress.semantic import SemanticCompressionResult, SemanticCompressor
from token_saver.compress.summary import Summarizer, SummaryOptions, SummaryResult
from token_saver.compress.whitespace import WhitespaceCompressionResult, WhitespaceCompressor

__all__ = [
    "CodeCommentOptimizer",
    "ContextOptimizationResult",
    "ContextOptimizer",
    "DocumentationOptimizer",
    "DuplicateRemovalResult",
    "DuplicateRemover",
    "FillerStripper",
    "LogOptimizer",
    "PreservedSpans",
    "RuleMatch",
    "SemanticCompressionResult",
    "SemanticCompressor",
    "StripResult",
    "Summarizer",
    "SummaryOptions",
    "SummaryResult",
    "WhitespaceCompressionResult",
    "WhitespaceCompressor",
    "explain_matches",
    "get_context_optimizer",
    "get_preset_rules",
    "strip_fillers",
]
