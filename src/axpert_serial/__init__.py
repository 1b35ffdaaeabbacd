"""
逆变器串口命令工具
================

通过串口向Axpert类逆变器发送一条ASCII命令，校验并返回应答。

主要功能：
- CRC-16/XMODEM变体校验（含保留字节转义）
- 命令帧封装与应答帧校验
- 带超时的应答接收
- 命令行入口

版本: 1.0.0
"""

__version__ = "1.0.0"
__description__ = "Axpert逆变器串口命令工具"

# 导出主要类
from .core.frame_handler import FrameHandler
from .core.transaction import Transaction, execute
from .core.exceptions import (
    AxpertError,
    NoResponseError,
    ResponseTooShortError,
    ResponseInvalidCrcError,
)

__all__ = [
    "FrameHandler",
    "Transaction",
    "execute",
    "AxpertError",
    "NoResponseError",
    "ResponseTooShortError",
    "ResponseInvalidCrcError",
]
