"""
优化编排器 — 把各压缩阶段串成一次确定性的单向流水线。

执行顺序：
1. 缓存查找（命中 → strategies=["cached"]）
2. 计算目标 Token 数，检测内容类型（调用方指定时跳过检测）
3. 优化潜力预检（无潜力 → 原样返回，结果同样写入缓存）
4. 上下文专用优化（节省 > 5% 才采纳）
5. 去重
6. 语义压缩
7. 填充词过滤：从起始预设逐级升到 ultra，策略标签只保留最后生效的一级
8. 空白压缩
9. 原文超过摘要阈值 → 抽取式摘要，压到目标 Token 数以内
   （没有目标时目标就是原文 Token 数，摘要不会改动文本）
10. 构造结果并写入缓存

每个阶段只有在"改动了文本且 Token 估算没有上升"时才被采纳。
调用方给出了目标（target_savings_percent / max_tokens）时，
每个阶段之后检查是否已达标，达标即提前结束。

# [Design Decision] 缓存由调用方注入（或由配置创建），编排器本身不持有全局状态。
# 传 cache=None 得到完全无缓存的编排器，单元测试可以直接用。
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field

from token_saver.analysis.content_type import ContentTypeDetector
from token_saver.analysis.potential import has_optimization_potential
from token_saver.cache.base import OptimizationCache
from token_saver.cache.keys import compute_cache_key
from token_saver.cache.memory import MemoryCache
from token_saver.compress.context import get_context_optimizer
from token_saver.compress.dedup import DuplicateRemover
from token_saver.compress.filler import FillerStripper
from token_saver.compress.semantic import SemanticCompressor
from token_saver.compress.summary import Summarizer, SummaryOptions
from token_saver.compress.whitespace import WhitespaceCompressor
from token_saver.config.schema import OptimizerConfig
from token_saver.models.enums import ContentType, escalate_from
from token_saver.models.options import OptimizationOptions
from token_saver.models.result import CACHED_STRATEGY, OptimizationResult, savings_percent
from token_saver.tokenizer.heuristic import count_tokens

logger = logging.getLogger(__name__)

_USE_CONFIG = object()


@dataclass
class _RunState:
    """单次调用的可变状态。"""

    text: str
    tokens: int
    original_tokens: int
    target: int
    has_target: bool
    model: str
    content_type: ContentType = ContentType.MIXED
    strategies: list[str] = field(default_factory=list)

    @property
    def reached_target(self) -> bool:
        return self.has_target and self.tokens <= self.target

    def accept(self, strategy: str, output: str) -> bool:
        """改动了文本且 Token 不增时采纳，返回是否采纳。"""
        if output == self.text:
            return False
        tokens = count_tokens(output, self.model)
        if tokens > self.tokens:
            logger.debug("Stage %s rejected: %d -> %d tokens", strategy, self.tokens, tokens)
            return False
        logger.debug("Stage %s accepted: %d -> %d tokens", strategy, self.tokens, tokens)
        self.text = output
        self.tokens = tokens
        self.strategies.append(strategy)
        return True


class Optimizer:
    """
    Token 预算感知的文本优化器。

    基本用法::

        optimizer = Optimizer()
        result = optimizer.optimize(text, OptimizationOptions(target_savings_percent=20))
        result.output, result.strategies

    无缓存（测试或一次性调用）::

        optimizer = Optimizer(cache=None)

    属性:
        config: 优化器配置（阈值、缓存容量等）
        cache: 结果缓存；默认按 config.cache 创建 MemoryCache，传 None 关闭缓存
    """

    def __init__(
        self,
        config: OptimizerConfig | None = None,
        cache: OptimizationCache | None | object = _USE_CONFIG,
    ):
        self._config = config or OptimizerConfig()
        if cache is _USE_CONFIG:
            cache_cfg = self._config.cache
            cache = (
                MemoryCache(max_size=cache_cfg.max_entries, ttl_seconds=cache_cfg.ttl_seconds)
                if cache_cfg.enabled
                else None
            )
        self._cache: OptimizationCache | None = cache  # type: ignore[assignment]
        self._detector = ContentTypeDetector()

    @property
    def config(self) -> OptimizerConfig:
        return self._config

    @property
    def cache(self) -> OptimizationCache | None:
        return self._cache

    def default_options(self) -> OptimizationOptions:
        return self._config.default_options()

    def optimize(self, text: str, options: OptimizationOptions | None = None) -> OptimizationResult:
        """
        执行一次优化。对任何 str 输入（包括空串）都不会抛出异常。

        参数:
            text: 输入文本
            options: 本次调用的选项，None 时使用配置中的默认值

        返回:
            OptimizationResult
        """
        options = options or self.default_options()
        key = compute_cache_key(text, options)

        if self._cache is not None:
            cached = self._cache.get(key)
            if cached is not None:
                logger.info("Cache hit for %s", key[:16])
                return OptimizationResult(
                    output=cached.output,
                    original_tokens=cached.original_tokens,
                    optimized_tokens=cached.optimized_tokens,
                    saved=cached.saved,
                    savings_percent=cached.savings_percent,
                    strategies=[CACHED_STRATEGY],
                    content_type=cached.content_type,
                )

        original_tokens = count_tokens(text, options.model)
        state = _RunState(
            text=text,
            tokens=original_tokens,
            original_tokens=original_tokens,
            target=options.target_tokens(original_tokens),
            has_target=options.has_target,
            model=options.model,
            content_type=options.content_type or self._detector.detect(text).type,
        )

        if not has_optimization_potential(text):
            logger.info("No optimization potential detected, returning input unchanged")
            return self._finish(key, state)

        if state.reached_target:
            return self._finish(key, state)

        self._run_stages(state, options)
        return self._finish(key, state)

    def _run_stages(self, state: _RunState, options: OptimizationOptions) -> None:
        toggles = options.toggles
        pipeline = self._config.pipeline

        if toggles.context:
            optimizer = get_context_optimizer(state.content_type, model=state.model)
            if optimizer is not None:
                result = optimizer.optimize(state.text)
                if result.savings_percent > pipeline.context_min_savings_percent:
                    state.accept(optimizer.name, result.output)
                else:
                    logger.debug(
                        "Stage %s skipped: %.2f%% savings below threshold",
                        optimizer.name,
                        result.savings_percent,
                    )
                if state.reached_target:
                    return

        if toggles.duplicates:
            remover = DuplicateRemover(pipeline.paragraph_min_length, pipeline.sentence_min_length)
            dedup = remover.remove(state.text)
            if dedup.duplicates_removed:
                state.accept(remover.name, dedup.output)
            if state.reached_target:
                return

        if toggles.semantic:
            compressor = SemanticCompressor()
            state.accept(compressor.name, compressor.compress(state.text).output)
            if state.reached_target:
                return

        if self._strip_fillers(state, options):
            return

        if toggles.whitespace:
            ws = WhitespaceCompressor()
            state.accept(ws.name, ws.compress(state.text).output)
            if state.reached_target:
                return

        if toggles.summarization and state.original_tokens > pipeline.summarization_threshold:
            summarizer = Summarizer(
                SummaryOptions(
                    max_tokens=state.target,
                    min_sentence_length=pipeline.summary_min_sentence_length,
                    score_threshold=pipeline.summary_score_threshold,
                ),
                model=state.model,
            )
            state.accept(summarizer.name, summarizer.summarize(state.text).output)

    @staticmethod
    def _strip_fillers(state: _RunState, options: OptimizationOptions) -> bool:
        """逐级过滤填充词；返回是否已达标。策略标签只保留最后生效的一级。"""
        filler_tag: str | None = None
        for preset in escalate_from(options.preset):
            stripper = FillerStripper(preset)
            previous_tag = filler_tag
            stripped = stripper.strip(state.text)
            if stripped.changed and state.accept(stripper.name, stripped.output):
                if previous_tag is not None:
                    state.strategies.remove(previous_tag)
                filler_tag = stripper.name
            if state.reached_target:
                return True
            if not state.has_target:
                # 没有目标时只跑起始级别，不做升级
                break
        return False

    def _finish(self, key: str, state: _RunState) -> OptimizationResult:
        result = OptimizationResult(
            output=state.text,
            original_tokens=state.original_tokens,
            optimized_tokens=state.tokens,
            saved=state.original_tokens - state.tokens,
            savings_percent=savings_percent(state.original_tokens, state.tokens),
            strategies=list(state.strategies),
            content_type=state.content_type,
        )
        if self._cache is not None:
            self._cache.set(key, result)
        logger.debug(
            "Optimization finished: %d -> %d tokens, strategies=%s",
            result.original_tokens,
            result.optimized_tokens,
            result.strategies,
        )
        return result


_default_optimizer: Optimizer | None = None
_default_lock = threading.Lock()


def get_default_optimizer() -> Optimizer:
    """进程级默认优化器（懒加载，带默认配置与内存缓存）。"""
    global _default_optimizer
    with _default_lock:
        if _default_optimizer is None:
            _default_optimizer = Optimizer()
        return _default_optimizer


def reset_default_optimizer() -> None:
    global _default_optimizer
    with _default_lock:
        _default_optimizer = None


def optimize(text: str, options: OptimizationOptions | None = None) -> OptimizationResult:
    """模块级入口：使用默认优化器执行一次优化。"""
    return get_default_optimizer().optimize(text, options)
