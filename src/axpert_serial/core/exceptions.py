"""
异常定义
========

命令/应答事务中可能出现的各类失败，每种失败对应一个独立的退出码。
"""

from typing import Optional


class AxpertError(Exception):
    """逆变器通信异常基类"""

    pass


class NoResponseError(AxpertError):
    """超时时间内未收到帧结束符"""

    pass


class ResponseTooShortError(AxpertError):
    """应答不足3字节，无法拆出校验码和结束符"""

    def __init__(self, length: int):
        self.length = length
        super().__init__(f"应答长度不足: {length}字节")


class ResponseInvalidCrcError(AxpertError):
    """应答校验码不匹配"""

    def __init__(self, expected: int, received: int):
        self.expected = expected
        self.received = received
        super().__init__(
            f"校验码错误: 接收={received:#06x}, 计算={expected:#06x}"
        )


class PortOpenError(AxpertError):
    """串口打开失败"""

    def __init__(self, port: str, reason: Optional[str] = None):
        self.port = port
        message = f"无法打开串口 {port}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class CommandWriteError(AxpertError):
    """命令帧未能完整写入串口"""

    pass
