"""
命令/应答事务模块
================

完成一次命令发送和应答接收：

1. 打包命令帧，清空串口残留数据后写入
2. IO线程把收到的字节逐个追加到本次事务的接收缓冲区，遇到CR即停止
3. 调用方在超时时间内等待完成信号，然后校验应答帧

接收缓冲区和完成标志只属于一次事务，每次 run() 都重新创建。
"""

import threading
import time
from enum import Enum
from typing import Optional, Union

from ..config.constants import FRAME_TERMINATOR
from ..config.settings import SerialConfig, TransactionConfig
from .exceptions import CommandWriteError, NoResponseError
from .frame_handler import FrameHandler
from .io_thread import IoThread
from .serial_manager import SerialManager
from ..utils.logger import get_logger

logger = get_logger(__name__)


class TransactionState(Enum):
    """事务状态"""

    IDLE = "idle"
    SENDING = "sending"
    AWAITING_RESPONSE = "awaiting_response"
    COMPLETE = "complete"


class ResponseCollector:
    """
    应答接收缓冲区

    单生产者/单消费者：IO线程中的 on_data_available() 是唯一写入方，
    等待线程只在 wait_for_completion() 返回True之后读取。缓冲区和完成
    标志由同一把锁保护，完成信号通过Event发布。
    """

    def __init__(self):
        self._buffer = bytearray()
        self._lock = threading.Lock()
        self._completed = threading.Event()

    @property
    def is_complete(self) -> bool:
        """是否已收到帧结束符"""
        return self._completed.is_set()

    def on_data_available(self, source: SerialManager) -> None:
        """
        读取当前可读的字节并追加到缓冲区

        追加CR后立即停止，同一批中CR之后的字节留在驱动缓冲区。
        完成之后再次调用不做任何事。

        Args:
            source: 提供 bytes_waiting 和 read() 的串口对象
        """
        with self._lock:
            if self._completed.is_set():
                return

            while source.bytes_waiting > 0:
                byte = source.read(1)
                if not byte:
                    break

                self._buffer += byte
                if byte[0] == FRAME_TERMINATOR:
                    self._completed.set()
                    logger.debug(f"收到帧结束符，共 {len(self._buffer)} 字节")
                    break

    def wait_for_completion(self, timeout: float, poll_interval: float) -> bool:
        """
        等待接收完成

        Args:
            timeout: 最长等待时间(秒)
            poll_interval: 单次等待的最长时间(秒)

        Returns:
            超时前收到结束符返回True，否则返回False
        """
        deadline = time.monotonic() + timeout
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return self._completed.is_set()
            if self._completed.wait(min(poll_interval, remaining)):
                return True

    def response(self) -> bytes:
        """
        获取完整的应答帧

        Raises:
            RuntimeError: 尚未收到结束符时抛出
        """
        with self._lock:
            if not self._completed.is_set():
                raise RuntimeError("应答尚未接收完成")
            return bytes(self._buffer)

    def discard(self) -> int:
        """丢弃缓冲区内容，返回丢弃的字节数"""
        with self._lock:
            size = len(self._buffer)
            self._buffer.clear()
            return size


class Transaction:
    """单次命令/应答事务，每个实例只能运行一次"""

    def __init__(
        self,
        serial_manager: SerialManager,
        config: Optional[TransactionConfig] = None,
    ):
        """
        初始化事务

        Args:
            serial_manager: 已打开的串口管理器
            config: 事务配置，None时使用默认值
        """
        self.serial_manager = serial_manager
        self.config = config or TransactionConfig()
        self.state = TransactionState.IDLE
        self.collector: Optional[ResponseCollector] = None

    def encode_command(self, command: Union[str, bytes]) -> bytes:
        """
        将命令转换为ASCII字节并检查长度

        Raises:
            ValueError: 命令为空、过长或含非ASCII字符
        """
        if isinstance(command, str):
            try:
                command_bytes = command.encode("ascii")
            except UnicodeEncodeError as e:
                raise ValueError(f"命令必须是ASCII字符: {command!r}") from e
        else:
            command_bytes = bytes(command)

        if not command_bytes:
            raise ValueError("命令不能为空")
        if len(command_bytes) > self.config.max_command_length:
            raise ValueError(
                f"命令长度不能超过 {self.config.max_command_length} 字节"
            )
        return command_bytes

    def run(self, command: Union[str, bytes], timeout_ms: Optional[int] = None) -> bytes:
        """
        发送命令并等待应答

        Args:
            command: ASCII命令
            timeout_ms: 应答超时(毫秒)，None时使用配置值

        Returns:
            校验通过的应答内容

        Raises:
            NoResponseError: 超时未收到结束符
            ResponseTooShortError: 应答不足3字节
            ResponseInvalidCrcError: 应答校验码错误
            CommandWriteError: 命令帧写入失败
        """
        if self.state is not TransactionState.IDLE:
            raise RuntimeError(f"事务已运行过，当前状态: {self.state.value}")

        timeout = (
            self.config.timeout_s if timeout_ms is None else timeout_ms / 1000.0
        )

        self.state = TransactionState.SENDING
        try:
            frame = FrameHandler.build_frame(self.encode_command(command))
            collector = ResponseCollector()
            self.collector = collector

            self.serial_manager.reset_input_buffer()
            io_thread = IoThread(self.serial_manager, collector.on_data_available)
            if not io_thread.start():
                raise CommandWriteError("IO线程启动失败")

            try:
                if not self.serial_manager.write(frame):
                    raise CommandWriteError(f"命令帧写入失败: {frame.hex(' ')}")
                logger.debug(f"已发送命令帧: {frame.hex(' ')}")

                self.state = TransactionState.AWAITING_RESPONSE
                completed = collector.wait_for_completion(
                    timeout, self.config.poll_interval
                )
            finally:
                io_thread.stop()
        finally:
            self.state = TransactionState.COMPLETE

        if not completed:
            dropped = collector.discard()
            logger.warning(
                f"等待应答超时({timeout * 1000:.0f}ms)，丢弃已接收的 {dropped} 字节"
            )
            raise NoResponseError(f"{timeout * 1000:.0f}ms内未收到应答")

        response = collector.response()
        logger.debug(f"收到应答帧: {response.hex(' ')}")
        return FrameHandler.validate(response)


def execute(
    command: Union[str, bytes],
    timeout_ms: int,
    serial_config: SerialConfig,
    transaction_config: Optional[TransactionConfig] = None,
) -> bytes:
    """
    打开串口，完成一次命令/应答事务，然后关闭串口

    Args:
        command: ASCII命令，1到20字节
        timeout_ms: 应答超时(毫秒)
        serial_config: 串口配置
        transaction_config: 事务配置，None时按timeout_ms创建

    Returns:
        校验通过的应答内容

    Raises:
        PortOpenError: 串口打开失败
        以及 Transaction.run() 抛出的各类异常
    """
    config = transaction_config or TransactionConfig(timeout_ms=timeout_ms)
    with SerialManager(serial_config) as manager:
        transaction = Transaction(manager, config)
        return transaction.run(command, timeout_ms)
