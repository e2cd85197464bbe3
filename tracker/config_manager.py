"""
Configuration Manager for habitgrid.

集中管理系统常量和配置参数。
所有经验值必须显式声明并可配置。

使用方式:
    from tracker.config_manager import config
    width = config.GRID_WIDTH
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from tracker.logger import get_logger

CONFIG_DIR = Path(__file__).parent.parent / "config"
RUNTIME_CONFIG_PATH = CONFIG_DIR / "runtime.yaml"

logger = get_logger("config")


@dataclass
class SystemConfig:
    """
    系统运行时常量配置。

    所有值均为经验值，可根据用户实际情况调整。
    """

    # === 网格布局 ===

    # 每行显示的习惯数量，决定 set_focus(Up/Down) 的步长
    GRID_WIDTH: int = 3

    # === 单元格字符 ===

    TRUE_CHR: str = "·"
    FALSE_CHR: str = "·"
    FUTURE_CHR: str = "·"

    # === 文件监听 ===

    # auto 存储文件 mtime 轮询间隔（秒）
    WATCH_INTERVAL_SECONDS: float = 1.0

    # === 数值比较 ===

    # 小数习惯 reached_goal/remaining 的比较容差
    FLOAT_EPSILON: float = 1e-9


def _load_runtime_config(path: Optional[Path] = None) -> dict:
    """加载运行时配置覆盖（如果存在）。"""
    path = path or Path(os.getenv("HABITGRID_CONFIG", "") or RUNTIME_CONFIG_PATH)
    if not path.exists():
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (yaml.YAMLError, OSError) as e:
        logger.warning(f"Ignoring unreadable config {path}: {e}")
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Ignoring config {path}: expected a mapping")
        return {}
    return data


def get_config(path: Optional[Path] = None) -> SystemConfig:
    """
    获取系统配置实例。

    优先级：runtime.yaml > 默认值
    """
    base = SystemConfig()
    overrides = _load_runtime_config(path)

    for key, value in overrides.items():
        if hasattr(base, key):
            setattr(base, key, value)

    return base


# 全局配置实例（单例模式）
config = get_config()
