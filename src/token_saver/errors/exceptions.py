"""
结构化异常体系 — 错误信息即文档。

每条异常遵循"三段式"规范：
1. What went wrong（发生了什么）
2. Why it happened（为什么发生）
3. How to fix it（怎么修）

# [DX Decision] 优化核心本身对任何字符串输入都不抛异常（最坏情况原样返回）。
# 异常只出现在外围：配置加载、输入读取、精确 Tokenizer 不可用。

示例::

    ConfigValidationError(
        what="配置文件 'token_saver.yaml' 校验失败。",
        why="字段 'cache.ttl_seconds' 必须大于 0。",
        how="把 ttl_seconds 改成正整数，例如 3600。",
    )
"""

from __future__ import annotations

from typing import Any


class TokenSaverError(Exception):
    """
    Token Saver 异常基类。

    所有 Token Saver 异常都继承自此类，支持三段式错误消息。

    属性:
        what: 发生了什么
        why: 为什么发生
        how: 怎么修复
        details: 额外的上下文信息（用于调试）
    """

    def __init__(
        self,
        what: str,
        why: str = "",
        how: str = "",
        details: dict[str, Any] | None = None,
    ) -> None:
        self.what = what
        self.why = why
        self.how = how
        self.details = details or {}

        parts = [what]
        if why:
            parts.append(f"→ 原因：{why}")
        if how:
            parts.append(f"→ 修复建议：{how}")

        self.full_message = "\n".join(parts)
        super().__init__(self.full_message)

    def __str__(self) -> str:
        return self.full_message

    def to_dict(self) -> dict[str, Any]:
        """转换为字典格式，用于 JSON 报告输出。"""
        result: dict[str, Any] = {
            "error_type": type(self).__name__,
            "what": self.what,
        }
        if self.why:
            result["why"] = self.why
        if self.how:
            result["how"] = self.how
        if self.details:
            result["details"] = self.details
        return result


# === 配置相关异常 ===


class ConfigValidationError(TokenSaverError):
    """
    配置校验异常。

    当 YAML 配置内容不符合 OptimizerConfig Schema 时抛出。
    why 字段包含逐字段的错误列表。
    """

    def __init__(
        self,
        what: str,
        why: str = "",
        how: str = "",
        config_path: str = "",
        field_path: str = "",
        **kwargs: Any,
    ) -> None:
        details = {
            "config_path": config_path,
            "field_path": field_path,
        }
        details.update(kwargs)
        super().__init__(what=what, why=why, how=how, details=details)
        self.config_path = config_path
        self.field_path = field_path


class ConfigLoadError(TokenSaverError):
    """
    配置加载异常。

    当配置文件不存在、无法读取、YAML 语法错误或根元素不是字典时抛出。
    """

    def __init__(
        self,
        what: str,
        why: str = "",
        how: str = "",
        file_path: str = "",
        **kwargs: Any,
    ) -> None:
        details = {"file_path": file_path}
        details.update(kwargs)
        super().__init__(what=what, why=why, how=how, details=details)
        self.file_path = file_path


# === Tokenizer 相关异常 ===


class TokenizerError(TokenSaverError):
    """
    Tokenizer 异常。

    当调用方显式要求精确计数（例如 CLI 的 ``--exact``），
    但 tiktoken 无法为该模型提供编码时抛出。
    """

    def __init__(
        self,
        what: str,
        why: str = "",
        how: str = "",
        model: str = "",
        **kwargs: Any,
    ) -> None:
        details = {"model": model}
        details.update(kwargs)
        super().__init__(what=what, why=why, how=how, details=details)
        self.model = model


# === 输入相关异常 ===


class InputError(TokenSaverError):
    """
    输入读取异常。

    CLI 读取输入文件失败（不存在、权限、编码）时抛出。
    """

    def __init__(
        self,
        what: str,
        why: str = "",
        how: str = "",
        path: str = "",
        **kwargs: Any,
    ) -> None:
        details = {"path": path}
        details.update(kwargs)
        super().__init__(what=what, why=why, how=how, details=details)
        self.path = path
