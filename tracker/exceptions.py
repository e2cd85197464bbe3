"""
habitgrid 异常定义模块。

定义系统中所有自定义异常的层次结构：
- HabitGridError: 基类，所有已知错误
- ConfigError: 配置文件错误
- StoreError: 习惯存储文件无法读取或格式错误
- StoreWriteError: 习惯存储文件写入失败
- CommandLineError: 命令行解析错误
"""
from pathlib import Path
from typing import Optional, Union


class HabitGridError(Exception):
    """habitgrid 基础异常类。

    所有系统内已知错误都继承自此类。
    捕获此类可以处理所有预期的错误情况。
    """

    def __init__(self, message: str, hint: Optional[str] = None):
        """
        Args:
            message: 错误描述
            hint: 对用户的操作建议
        """
        super().__init__(message)
        self.message = message
        self.hint = hint

    def get_user_message(self) -> str:
        """返回用户友好的错误消息。"""
        if self.hint:
            return f"{self.message}\nHint: {self.hint}"
        return self.message


class ConfigError(HabitGridError):
    """配置文件错误。"""

    def __init__(self, message: str, config_path: Optional[str] = None):
        hint = f"Check the config file: {config_path}" if config_path else "Check the config file format"
        super().__init__(message, hint)
        self.config_path = config_path


class StoreError(HabitGridError):
    """习惯存储文件无法读取或结构非法。

    启动时视为致命错误；文件变更触发的重新加载时仅报告，保留内存状态。
    """

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        hint = f"Please fix {path}" if path else "Please fix your habit record"
        super().__init__(message, hint)
        self.path = str(path) if path is not None else None


class StoreWriteError(HabitGridError):
    """写入习惯存储文件失败（致命）。"""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message, hint="Check permissions and free space of the data directory")
        self.path = str(path) if path is not None else None


class CommandLineError(HabitGridError):
    """命令解析失败：未知命令、缺少参数或目标格式错误。"""

    def __init__(self, message: str, command: Optional[str] = None):
        super().__init__(message, hint=None)
        self.command = command

    def __str__(self) -> str:
        return self.message
