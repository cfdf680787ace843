"""
YAML 配置文件加载与校验。

加载优先级：
1. 显式指定的路径
2. 当前目录下的默认搜索路径
3. 内置默认值

运行时覆盖项深度合并到文件内容之上，然后统一交给 Pydantic 校验。

# [DX Decision] 加载失败时的错误信息精确到字段级别，
# 告诉用户哪个文件、哪个字段、什么值有问题。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from token_saver.config.schema import OptimizerConfig
from token_saver.errors import ConfigLoadError, ConfigValidationError

logger = logging.getLogger(__name__)

SEARCH_PATHS = (
    Path("token_saver.yaml"),
    Path("token_saver.yml"),
    Path(".token_saver/config.yaml"),
)


def load_config(
    path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> OptimizerConfig:
    """
    加载并校验配置。

    参数:
        path: YAML 文件路径。None 时按 SEARCH_PATHS 自动搜索。
        overrides: 运行时覆盖项

    异常:
        ConfigLoadError: 文件不存在、无法读取或 YAML 格式错误
        ConfigValidationError: 配置内容校验失败
    """
    raw: dict[str, Any] = {}
    source = "<default>"

    if path is not None:
        source = str(path)
        raw = _load_yaml_file(Path(path))
    else:
        for candidate in SEARCH_PATHS:
            if candidate.exists():
                logger.info("Using config file %s", candidate)
                source = str(candidate)
                raw = _load_yaml_file(candidate)
                break
        else:
            logger.debug("No config file found, using defaults")

    if overrides:
        raw = _deep_merge(raw, overrides)

    return _validate(raw, source)


def _load_yaml_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigLoadError(
            what=f"配置文件 '{path}' 不存在。",
            why=f"在路径 '{path.absolute()}' 下未找到该文件。",
            how="请检查文件路径，或去掉 --config 使用默认配置。",
            file_path=str(path),
        )

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigLoadError(
            what=f"无法读取配置文件 '{path}'。",
            why=str(e),
            how="请检查文件权限和编码（需要 UTF-8）。",
            file_path=str(path),
        ) from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigLoadError(
            what=f"配置文件 '{path}' 的 YAML 格式无效。",
            why=str(e),
            how="请使用 YAML 校验工具检查文件语法。",
            file_path=str(path),
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigLoadError(
            what=f"配置文件 '{path}' 的根元素必须是字典（mapping）。",
            why=f"实际类型为 {type(data).__name__}。",
            how="请确保根元素是键值对形式，例如：\n"
                "  pipeline:\n"
                "    default_preset: standard",
            file_path=str(path),
        )
    return data


def _validate(raw: dict[str, Any], source: str) -> OptimizerConfig:
    try:
        return OptimizerConfig(**raw)
    except ValidationError as e:
        errors = e.errors()
        lines = []
        for err in errors:
            field_path = " → ".join(str(loc) for loc in err["loc"]) or "<root>"
            lines.append(f"  字段 '{field_path}': {err['msg']}")
        first = " → ".join(str(loc) for loc in errors[0]["loc"]) if errors else ""
        raise ConfigValidationError(
            what=f"配置 '{source}' 校验失败（{len(errors)} 个错误）。",
            why="\n".join(lines),
            how="请对照字段说明修正配置项，可先用 'token-saver validate <path>' 预校验。",
            config_path=source,
            field_path=first,
        ) from e


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """深度合并，override 优先。"""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def validate_config_file(path: str | Path) -> list[str]:
    """
    校验配置文件，返回错误列表（空列表表示通过）。

    不抛出异常，供 CLI 的 validate 命令使用。
    """
    try:
        load_config(path=path)
    except (ConfigLoadError, ConfigValidationError) as e:
        return [e.full_message]
    return []
