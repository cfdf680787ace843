"""
Token Saver 结构化异常体系。

所有异常遵循"三段式"规范：What / Why / How to fix。
"""

from token_saver.errors.exceptions import (
    ConfigLoadError,
    ConfigValidationError,
    InputError,
    TokenizerError,
    TokenSaverError,
)

__all__ = [
    "ConfigLoadError",
    "ConfigValidationError",
    "InputError",
    "TokenSaverError",
    "TokenizerError",
]
