"""
配置管理
========

提供串口和事务相关的配置类。
"""

from dataclasses import dataclass
import serial

from .constants import (
    DEFAULT_BAUDRATE,
    DEFAULT_READ_TIMEOUT,
    DEFAULT_TIMEOUT_MS,
    MIN_BAUDRATE,
    MAX_BAUDRATE,
    MIN_PORT_NAME_LENGTH,
    MAX_PORT_NAME_LENGTH,
    MIN_TIMEOUT_MS,
    MAX_TIMEOUT_MS,
    MAX_COMMAND_LENGTH,
    POLL_INTERVAL,
)


@dataclass
class SerialConfig:
    """串口配置类（固定8N1）"""

    port: str  # 串口号
    baudrate: int = DEFAULT_BAUDRATE  # 波特率
    bytesize: int = serial.EIGHTBITS  # 数据位
    parity: str = serial.PARITY_NONE  # 校验位
    stopbits: float = serial.STOPBITS_ONE  # 停止位
    timeout: float = DEFAULT_READ_TIMEOUT  # 读超时时间

    def __post_init__(self):
        """参数验证"""
        if not self.port or not (
            MIN_PORT_NAME_LENGTH <= len(self.port) <= MAX_PORT_NAME_LENGTH
        ):
            raise ValueError(
                f"串口号长度必须在 {MIN_PORT_NAME_LENGTH} 到 {MAX_PORT_NAME_LENGTH} 之间"
            )
        if not (MIN_BAUDRATE <= self.baudrate <= MAX_BAUDRATE):
            raise ValueError(f"波特率必须在 {MIN_BAUDRATE} 到 {MAX_BAUDRATE} 之间")

    def to_serial_kwargs(self) -> dict:
        """转换为serial.Serial的参数字典"""
        return {
            "port": self.port,
            "baudrate": self.baudrate,
            "bytesize": self.bytesize,
            "parity": self.parity,
            "stopbits": self.stopbits,
            "timeout": self.timeout,
        }


@dataclass
class TransactionConfig:
    """单次命令/应答事务配置类"""

    timeout_ms: int = DEFAULT_TIMEOUT_MS  # 应答超时(毫秒)
    poll_interval: float = POLL_INTERVAL  # 等待轮询间隔(秒)
    max_command_length: int = MAX_COMMAND_LENGTH  # 命令最大长度

    def __post_init__(self):
        """参数验证"""
        if not (MIN_TIMEOUT_MS <= self.timeout_ms <= MAX_TIMEOUT_MS):
            raise ValueError(
                f"timeout_ms必须在 {MIN_TIMEOUT_MS} 到 {MAX_TIMEOUT_MS} 之间"
            )
        if self.poll_interval <= 0:
            raise ValueError("poll_interval必须大于0")
        if self.max_command_length <= 0:
            raise ValueError("max_command_length必须大于0")

    @property
    def timeout_s(self) -> float:
        """超时时间(秒)"""
        return self.timeout_ms / 1000.0
