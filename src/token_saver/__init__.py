"""
Token Saver — Token 预算感知的文本优化流水线。

在把文本送进 LLM 之前删掉不承载信息的部分：填充词、冗长短语、
重复段落、多余空白、日志噪声；代码围栏、行内代码和 JSON 原样保留。

快速上手::

    from token_saver import OptimizationOptions, optimize

    result = optimize(text, OptimizationOptions(target_savings_percent=20))
    result.output            # 优化后的文本
    result.strategies        # ["duplicate-removal", "strip-fillers-standard", ...]

显式持有优化器（自定义配置或缓存）::

    from token_saver import Optimizer, load_config

    optimizer = Optimizer(load_config("token_saver.yaml"))
    result = optimizer.optimize(text)
"""

from token_saver.analysis import ContentTypeDetector, has_optimization_potential
from token_saver.cache import MemoryCache, compute_cache_key
from token_saver.compress import (
    DuplicateRemover,
    FillerStripper,
    SemanticCompressor,
    Summarizer,
    WhitespaceCompressor,
    explain_matches,
    get_context_optimizer,
    strip_fillers,
)
from token_saver.config import OptimizerConfig, load_config
from token_saver.errors import (
    ConfigLoadError,
    ConfigValidationError,
    InputError,
    TokenizerError,
    TokenSaverError,
)
from token_saver.models import (
    ContentType,
    ContentTypeDetection,
    OptimizationOptions,
    OptimizationResult,
    Preset,
    StageToggles,
    make_report,
    percent_saved,
)
from token_saver.optimizer import Optimizer, optimize
from token_saver.tokenizer import Estimate, estimate_tokens, estimate_with_tokenizer

__version__ = "0.1.0"

__all__ = [
    # 顶层入口
    "Optimizer",
    "optimize",
    # 数据模型
    "ContentType",
    "ContentTypeDetection",
    "OptimizationOptions",
    "OptimizationResult",
    "Preset",
    "StageToggles",
    # Token 估算
    "Estimate",
    "estimate_tokens",
    "estimate_with_tokenizer",
    # 各阶段
    "ContentTypeDetector",
    "DuplicateRemover",
    "FillerStripper",
    "SemanticCompressor",
    "Summarizer",
    "WhitespaceCompressor",
    "explain_matches",
    "get_context_optimizer",
    "has_optimization_potential",
    "strip_fillers",
    # 缓存
    "MemoryCache",
    "compute_cache_key",
    # 配置
    "OptimizerConfig",
    "load_config",
    # 报告
    "make_report",
    "percent_saved",
    # 异常
    "ConfigLoadError",
    "ConfigValidationError",
    "InputError",
    "TokenSaverError",
    "TokenizerError",
    # 版本
    "__version__",
]
