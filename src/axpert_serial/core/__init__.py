"""
核心模块
========

包含校验算法、数据帧处理、串口管理和命令/应答事务等核心功能。
"""

from .checksum import calculate_crc, escape_crc_byte, crc_to_bytes
from .exceptions import (
    AxpertError,
    NoResponseError,
    ResponseTooShortError,
    ResponseInvalidCrcError,
    PortOpenError,
    CommandWriteError,
)
from .frame_handler import FrameHandler
from .serial_manager import SerialManager
from .io_thread import IoThread
from .transaction import ResponseCollector, Transaction, TransactionState, execute

__all__ = [
    "calculate_crc",
    "escape_crc_byte",
    "crc_to_bytes",
    "AxpertError",
    "NoResponseError",
    "ResponseTooShortError",
    "ResponseInvalidCrcError",
    "PortOpenError",
    "CommandWriteError",
    "FrameHandler",
    "SerialManager",
    "IoThread",
    "ResponseCollector",
    "Transaction",
    "TransactionState",
    "execute",
]
