"""配置：Pydantic Schema + YAML 加载。"""

from token_saver.config.loader import SEARCH_PATHS, load_config, validate_config_file
from token_saver.config.schema import CacheConfig, EstimatorConfig, OptimizerConfig, PipelineConfig

__all__ = [
    "SEARCH_PATHS",
    "CacheConfig",
    "EstimatorConfig",
    "OptimizerConfig",
    "PipelineConfig",
    "load_config",
    "validate_config_file",
]
