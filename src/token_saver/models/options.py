"""
优化选项模型。

→ OptimizationOptions 是优化核心唯一的输入参数对象。

# [Design Decision] 使用 frozen 的 Pydantic 模型：
# 1. 构造时即校验（百分比范围、非负 Token 数）
# 2. 不可变，可安全地跨调用复用
# 3. model_dump_json() 提供稳定的序列化形式，直接作为缓存键的一部分
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from token_saver.models.enums import ContentType, Preset


class StageToggles(BaseModel):
    """各优化阶段的开关，全部默认开启。"""

    model_config = ConfigDict(frozen=True)

    semantic: bool = Field(default=True, description="语义压缩（冗长短语替换）")
    whitespace: bool = Field(default=True, description="空白压缩")
    duplicates: bool = Field(default=True, description="重复段落/句子去除")
    summarization: bool = Field(default=True, description="超长内容抽取式摘要")
    context: bool = Field(default=True, description="按内容类型的专用优化")


class OptimizationOptions(BaseModel):
    """
    一次优化调用的全部选项。

    目标 Token 数的计算：
    - target_savings_percent 存在 → floor(original × (1 − pct/100))
    - 否则 max_tokens 存在 → max_tokens
    - 都不存在 → original（不设上限，完整跑完流水线）

    ⚠️ 两者同时给出时 target_savings_percent 优先，不做合并也不报错。

    基本用法::

        options = OptimizationOptions(target_savings_percent=30, preset="aggressive")
        options = OptimizationOptions(toggles=StageToggles(summarization=False))
    """

    model_config = ConfigDict(frozen=True)

    target_savings_percent: float | None = Field(
        default=None, ge=0.0, le=100.0, description="期望节省的 Token 百分比"
    )
    max_tokens: int | None = Field(default=None, ge=0, description="输出 Token 上限")
    preset: Preset = Field(default=Preset.STANDARD, description="填充词过滤的起始级别")
    toggles: StageToggles = Field(default_factory=StageToggles)
    content_type: ContentType | None = Field(
        default=None, description="强制指定内容类型（None 时自动检测）"
    )
    model: str = Field(default="generic", description="Token 估算使用的比率表条目")

    @property
    def has_target(self) -> bool:
        """调用方是否给出了任何缩减目标。"""
        return self.target_savings_percent is not None or self.max_tokens is not None

    def target_tokens(self, original_tokens: int) -> int:
        """根据原始 Token 数计算内部目标 Token 数。"""
        if self.target_savings_percent is not None:
            return int(original_tokens * (1 - self.target_savings_percent / 100))
        if self.max_tokens is not None:
            return self.max_tokens
        return original_tokens

    def cache_fingerprint(self) -> str:
        """用于缓存键的稳定 JSON 表示。"""
        return self.model_dump_json()
