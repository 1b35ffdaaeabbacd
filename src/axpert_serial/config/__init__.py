"""
配置模块
=======

包含系统常量定义和配置管理功能。
"""

from .constants import *
from .settings import *

__all__ = [
    # 常量
    "ExitCode",
    "FRAME_TERMINATOR",
    "FRAME_CRC_SIZE",
    "FRAME_TRAILER_SIZE",
    "ESCAPED_CRC_BYTES",
    "DEFAULT_BAUDRATE",
    "DEFAULT_TIMEOUT_MS",
    "MAX_COMMAND_LENGTH",
    # 配置
    "SerialConfig",
    "TransactionConfig",
]
