"""
CLI 偏好配置：本地保存/读取输出格式与默认信封方言。
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

OUTPUT_FORMATS = ("text", "json")
DIALECTS = ("openapi", "traditional")

DEFAULTS: dict[str, str] = {"output": "text", "dialect": "openapi"}


def _config_dir() -> Path:
    """配置目录：~/.config/p115api（所有平台统一）。"""
    return Path.home() / ".config" / "p115api"


def _config_path() -> Path:
    return _config_dir() / "config.json"


def load_config() -> dict[str, Any] | None:
    """读取本地配置；不存在或无效则返回 None。"""
    p = _config_path()
    if not p.exists():
        return None
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return None
    if not isinstance(data, dict):
        return None
    return data


def effective_config() -> dict[str, str]:
    """默认值叠加本地配置，非法取值回落到默认值。"""
    cfg = dict(DEFAULTS)
    saved = load_config() or {}
    if saved.get("output") in OUTPUT_FORMATS:
        cfg["output"] = saved["output"]
    if saved.get("dialect") in DIALECTS:
        cfg["dialect"] = saved["dialect"]
    return cfg


def save_config(output: str | None = None, dialect: str | None = None) -> dict[str, Any]:
    """合并保存偏好到本地，返回保存后的内容。"""
    if output is not None and output not in OUTPUT_FORMATS:
        raise ValueError(f"output must be one of {', '.join(OUTPUT_FORMATS)}")
    if dialect is not None and dialect not in DIALECTS:
        raise ValueError(f"dialect must be one of {', '.join(DIALECTS)}")
    p = _config_path()
    p.parent.mkdir(parents=True, exist_ok=True)
    data: dict[str, Any] = load_config() or {}
    if output is not None:
        data["output"] = output
    if dialect is not None:
        data["dialect"] = dialect
    p.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    return data


def clear_config() -> bool:
    """清除本地配置；存在则删除并返回 True。"""
    p = _config_path()
    if p.exists():
        p.unlink()
        return True
    return False
