"""
Token Saver 快速上手示例。

演示最基本的用法：一行调用完成文本压缩，以及目标预算、阶段开关、缓存统计。

运行方式：
    python examples/quickstart.py

无需 API Key，无需任何配置文件。
"""

from token_saver import OptimizationOptions, Optimizer, Preset, StageToggles, estimate_tokens, optimize
from token_saver.cache import MemoryCache


def main() -> None:
    # ===== 场景 1：最简用法 =====
    print("=" * 60)
    print("场景 1：最简用法")
    print("=" * 60)

    text = "This is basically a very simple test that contains actually quite verbose language in fact."
    result = optimize(text)
    print(f"\n原文：{text}")
    print(f"结果：{result.output}")
    print(f"  Token：{result.original_tokens} -> {result.optimized_tokens}（节省 {result.savings_percent}%）")
    print(f"  策略：{result.strategies}")

    # ===== 场景 2：按目标节省比例优化 =====
    print("\n" + "=" * 60)
    print("场景 2：目标节省 30%，从 conservative 逐级升级")
    print("=" * 60)

    notes = (
        "Basically, you know, the release is ready. I mean it really is.\n\n"
        "We have the ability to ship in order to learn from users.\n\n"
        "We have the ability to ship in order to learn from users.\n\n\n\n"
        "At this point in time the rollout is, for all intents and purposes, done."
    )
    result = optimize(
        notes,
        OptimizationOptions(preset=Preset.CONSERVATIVE, target_savings_percent=30),
    )
    print(f"\n结果：\n{result.output}")
    print(f"\n  Token：{result.original_tokens} -> {result.optimized_tokens}")
    print(f"  策略：{result.strategies}")
    print(f"  内容类型：{result.content_type.value}")

    # ===== 场景 3：关闭部分阶段 =====
    print("\n" + "=" * 60)
    print("场景 3：关闭空白压缩与去重")
    print("=" * 60)

    options = OptimizationOptions(toggles=StageToggles(whitespace=False, duplicates=False))
    result = optimize(notes, options)
    print(f"\n  策略：{result.strategies}")

    # ===== 场景 4：自带缓存的优化器 =====
    print("\n" + "=" * 60)
    print("场景 4：缓存命中")
    print("=" * 60)

    cache = MemoryCache(max_size=100, ttl_seconds=600)
    optimizer = Optimizer(cache=cache)
    optimizer.optimize(notes)
    hit = optimizer.optimize(notes)
    print(f"\n  第二次调用策略：{hit.strategies}")
    print(f"  缓存统计：{cache.stats().to_dict()}")

    # ===== 场景 5：只做估算 =====
    estimate = estimate_tokens(notes, "claude-3.5")
    print(f"\n估算：{estimate.chars} 字符 ≈ {estimate.tokens} Token（{estimate.model}）")


if __name__ == "__main__":
    main()
