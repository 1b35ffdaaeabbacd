"""
日志记录模块
============

提供统一的日志记录功能，支持彩色输出和调用位置追踪。

日志默认输出到stderr，stdout只留给逆变器的应答内容。
"""

import datetime
import inspect
import logging
import sys
from typing import Dict, Optional
from pathlib import Path


class ColoredFormatter(logging.Formatter):
    """彩色日志格式化器"""

    # ANSI颜色代码
    COLORS = {
        'DEBUG': '\033[36m',    # 青色
        'INFO': '\033[0m',      # 默认色
        'WARNING': '\033[33m',  # 黄色
        'ERROR': '\033[31m',    # 红色
        'CRITICAL': '\033[35m', # 紫色
        'RESET': '\033[0m'      # 重置
    }

    def format(self, record):
        """格式化日志记录"""
        # 优先使用记录自带的位置信息，取不到时再回溯栈帧
        if record.pathname and record.pathname != __file__:
            caller_filename = Path(record.pathname).name
            caller_function = record.funcName
            caller_line = record.lineno
        else:
            frame = inspect.currentframe()
            try:
                while frame:
                    if frame.f_code.co_filename != __file__:
                        caller_filename = Path(frame.f_code.co_filename).name
                        caller_function = frame.f_code.co_name
                        caller_line = frame.f_lineno
                        break
                    frame = frame.f_back
                else:
                    caller_filename = "unknown"
                    caller_function = "unknown"
                    caller_line = 0
            finally:
                del frame

        # 毫秒精度的时间戳
        now = datetime.datetime.fromtimestamp(record.created)
        milliseconds = now.microsecond // 1000
        timestamp = now.strftime(f"%Y-%m-%d %H:%M:%S.{milliseconds:03d}")

        color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
        reset = self.COLORS['RESET']

        return (
            f"{color}[{timestamp}] {record.levelname}: {record.getMessage()} "
            f"[{caller_filename}.{caller_function}():{caller_line}]{reset}"
        )


# 全局日志器字典
_loggers: Dict[str, logging.Logger] = {}
_current_level: int = logging.WARNING


def setup_logger(
    name: str = "axpert_serial",
    level: int = logging.WARNING,
    log_file: Optional[str] = None,
    console_output: bool = True
) -> logging.Logger:
    """
    设置日志器

    Args:
        name: 日志器名称
        level: 日志级别
        log_file: 日志文件路径，None表示不写入文件
        console_output: 是否输出到控制台(stderr)

    Returns:
        配置好的日志器
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # 清除已有的处理器
    logger.handlers.clear()

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(ColoredFormatter())
        logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

    # 防止重复输出
    logger.propagate = False

    return logger


def get_logger(name: str = "axpert_serial") -> logging.Logger:
    """
    获取日志器实例

    Args:
        name: 日志器名称

    Returns:
        日志器实例
    """
    if name not in _loggers:
        _loggers[name] = setup_logger(name, level=_current_level)
    return _loggers[name]


def set_log_level(level: int) -> None:
    """调整所有日志器的级别，包括之后创建的日志器"""
    global _current_level
    _current_level = level
    for logger in _loggers.values():
        logger.setLevel(level)
