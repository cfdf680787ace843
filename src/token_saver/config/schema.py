"""
优化器配置的 Schema 定义。

配置文件（YAML）只负责"环境相关"的参数：估算模型、流水线阈值、缓存容量。
单次调用的选项（目标节省率、阶段开关等）走 OptimizationOptions。

# [Design Decision] 使用 Pydantic 模型作为 Schema，
# 校验错误可以精确到字段路径，CLI 直接展示给用户。
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from token_saver.models.enums import Preset
from token_saver.models.options import OptimizationOptions


class EstimatorConfig(BaseModel):
    """Token 估算配置。"""

    model: str = Field(default="generic", description="比率表条目（未知名称回退到 generic）")


class PipelineConfig(BaseModel):
    """流水线阈值配置。"""

    default_preset: Preset = Field(default=Preset.STANDARD, description="填充词过滤的默认起始级别")
    summarization_threshold: int = Field(
        default=10_000, gt=0, description="原文超过该 Token 数才会触发摘要"
    )
    context_min_savings_percent: float = Field(
        default=5.0, ge=0.0, le=100.0, description="上下文专用优化被采纳所需的最低节省百分比"
    )
    summary_min_sentence_length: int = Field(default=20, ge=0)
    summary_score_threshold: float = Field(default=0.3, ge=0.0, le=1.0)
    paragraph_min_length: int = Field(default=20, ge=0, description="段落参与去重的最小归一化长度")
    sentence_min_length: int = Field(default=10, ge=0, description="句子参与去重的最小归一化长度")


class CacheConfig(BaseModel):
    """结果缓存配置。"""

    enabled: bool = Field(default=True)
    max_entries: int = Field(default=1000, gt=0)
    ttl_seconds: float = Field(default=3600, gt=0)


class OptimizerConfig(BaseModel):
    """
    根配置模型。

    YAML 示例::

        estimator:
          model: claude-3.5
        pipeline:
          default_preset: aggressive
          summarization_threshold: 20000
        cache:
          enabled: true
          max_entries: 500
    """

    estimator: EstimatorConfig = Field(default_factory=EstimatorConfig)
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)

    @model_validator(mode="after")
    def _check_lengths(self) -> OptimizerConfig:
        if self.pipeline.sentence_min_length > self.pipeline.paragraph_min_length:
            raise ValueError(
                "pipeline.sentence_min_length 不能大于 pipeline.paragraph_min_length"
            )
        return self

    def default_options(self, **overrides: object) -> OptimizationOptions:
        """以配置中的默认预设和估算模型构造 OptimizationOptions。"""
        values: dict[str, object] = {
            "preset": self.pipeline.default_preset,
            "model": self.estimator.model,
        }
        values.update(overrides)
        return OptimizationOptions(**values)
