"""
Token Saver CLI。

- optimize / advanced: 完整优化流水线
- strip-fillers: 只删除填充词
- estimate / detect / explain: 分析类命令
- validate: 校验配置文件
"""

from token_saver.cli.app import app, main

__all__ = ["app", "main"]
