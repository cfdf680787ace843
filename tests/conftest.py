"""
测试套件共享 Fixtures。
"""

from __future__ import annotations

import pytest

from token_saver.cache import MemoryCache
from token_saver.optimizer import Optimizer, reset_default_optimizer


class FakeClock:
    """可手动推进的时钟，用于 TTL 测试。"""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# === 文本样例 ===


@pytest.fixture
def verbose_sentence() -> str:
    return "This is basically a very simple test that contains actually quite verbose language in fact."


@pytest.fixture
def fenced_text() -> str:
    return (
        "Basically, run the following:\n"
        "\n"
        "```python\n"
        "def f(x):\n"
        "    # basically    a no-op\n"
        "\n"
        "\n"
        "\n"
        "    return   x\n"
        "```\n"
        "That is actually all."
    )


@pytest.fixture
def iso_log() -> str:
    lines = [
        "2024-03-15T10:00:01Z [INFO] Service started on port 8080",
        "2024-03-15T10:00:02Z [INFO] Connected to database primary",
        "2024-03-15T10:00:03Z [WARN] Slow query detected on orders",
        "2024-03-15T10:00:04Z [ERROR] Connection reset by peer",
        "2024-03-15T10:00:05Z [ERROR] Connection reset by peer",
        "2024-03-15T10:00:06Z [ERROR] Connection reset by peer",
    ]
    return "\n".join(lines)


@pytest.fixture
def json_document() -> str:
    return '{\n  "name": "token-saver",\n  "tags": ["basically", "actually"],\n  "size": 3\n}'


# === 组件 Fixtures ===


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> MemoryCache:
    return MemoryCache(max_size=10, ttl_seconds=3600, clock=clock)


@pytest.fixture
def optimizer() -> Optimizer:
    """无缓存的优化器。"""
    return Optimizer(cache=None)


@pytest.fixture
def cached_optimizer(cache: MemoryCache) -> Optimizer:
    return Optimizer(cache=cache)


@pytest.fixture(autouse=True)
def _reset_default_optimizer():
    reset_default_optimizer()
    yield
    reset_default_optimizer()
