"""缓存键生成 — 输入文本 + 选项的规范 JSON 做 SHA-256。"""

from __future__ import annotations

import hashlib
import json

from token_saver.models.options import OptimizationOptions

KEY_PREFIX = "opt:"


def compute_cache_key(text: str, options: OptimizationOptions) -> str:
    """相同 (text, options) 总是得到相同的键；任一字段不同键就不同。"""
    payload = json.dumps(
        {"input": text, "options": json.loads(options.cache_fingerprint())},
        sort_keys=True,
        ensure_ascii=False,
    )
    return KEY_PREFIX + hashlib.sha256(payload.encode("utf-8")).hexdigest()
