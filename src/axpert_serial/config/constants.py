"""
系统常量定义
============

定义逆变器串口协议中使用的各种常量。
"""

from enum import IntEnum
from typing import Final, Tuple


class ExitCode(IntEnum):
    """命令行退出码枚举"""

    OKAY = 0  # 成功
    INVALID_ARGUMENT = 1  # 参数无效
    NO_RESPONSE = 2  # 超时无应答
    RESPONSE_TOO_SHORT = 3  # 应答过短
    RESPONSE_INVALID_CRC = 4  # 应答校验错误


# 数据帧格式定义：| 命令/应答内容(NB) | CRC高字节(1B) | CRC低字节(1B) | CR(1B) |
FRAME_TERMINATOR: Final[int] = 0x0D  # 帧结束符 CR
FRAME_CRC_SIZE: Final[int] = 2  # 校验码长度
FRAME_TRAILER_SIZE: Final[int] = FRAME_CRC_SIZE + 1  # 校验码 + 结束符

# 校验码中需要转义的保留字节：'(' CR LF
ESCAPED_CRC_BYTES: Final[Tuple[int, ...]] = (0x28, 0x0D, 0x0A)

# 串口配置默认值
DEFAULT_BAUDRATE: Final[int] = 2400  # 逆变器默认波特率
MIN_BAUDRATE: Final[int] = 1
MAX_BAUDRATE: Final[int] = 2000000
DEFAULT_READ_TIMEOUT: Final[float] = 0.1  # 串口读超时(秒)
MIN_PORT_NAME_LENGTH: Final[int] = 2
MAX_PORT_NAME_LENGTH: Final[int] = 20

# 事务配置默认值
DEFAULT_TIMEOUT_MS: Final[int] = 1000  # 默认应答超时(毫秒)
MIN_TIMEOUT_MS: Final[int] = 1
MAX_TIMEOUT_MS: Final[int] = 30000
MAX_COMMAND_LENGTH: Final[int] = 20  # 命令最大长度(字节)
POLL_INTERVAL: Final[float] = 0.02  # 等待应答的轮询间隔(秒)
IO_IDLE_SLEEP: Final[float] = 0.001  # IO线程空闲等待(秒)
