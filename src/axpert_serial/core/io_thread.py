"""
IO线程模块
==========

后台线程监视串口，驱动缓冲区中有数据时在本线程上回调数据处理函数。
回调在IO线程中执行，与发起事务的线程不是同一个线程。
"""

import threading
import time
from typing import Callable, Optional

from ..config.constants import IO_IDLE_SLEEP
from .serial_manager import SerialManager
from ..utils.logger import get_logger

logger = get_logger(__name__)

DataAvailableHandler = Callable[[SerialManager], None]


class IoThread:
    """
    IO线程类

    只负责发现“有数据可读”并通知处理函数，读多少字节由处理函数决定。
    """

    def __init__(
        self,
        serial_manager: SerialManager,
        on_data_available: DataAvailableHandler,
        idle_sleep: float = IO_IDLE_SLEEP,
    ):
        """
        初始化IO线程

        Args:
            serial_manager: 串口管理器
            on_data_available: 有数据可读时调用的处理函数
            idle_sleep: 每轮检查之间的等待时间(秒)
        """
        self.serial_manager = serial_manager
        self.on_data_available = on_data_available
        self.idle_sleep = idle_sleep

        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self._running = False

        # 统计信息
        self.notifications = 0
        self.read_errors = 0

    def start(self) -> bool:
        """
        启动IO线程

        Returns:
            启动成功返回True，失败返回False
        """
        if self._running:
            logger.warning("IO线程已经在运行")
            return True

        if not self.serial_manager.is_open:
            logger.error("串口未打开，无法启动IO线程")
            return False

        try:
            self._stop_event.clear()
            self._thread = threading.Thread(
                target=self._io_loop, name="axpert-io", daemon=True
            )
            self._thread.start()
            self._running = True

            logger.debug("IO线程已启动")
            return True

        except RuntimeError as e:
            logger.error(f"启动IO线程失败: {e}")
            return False

    def stop(self, timeout: float = 2.0) -> bool:
        """
        停止IO线程

        Args:
            timeout: 等待线程结束的超时时间(秒)

        Returns:
            停止成功返回True，超时返回False
        """
        if not self._running:
            return True

        self._stop_event.set()

        if self._thread and self._thread.is_alive():
            self._thread.join(timeout)

            if self._thread.is_alive():
                logger.warning(f"IO线程未在{timeout}秒内结束")
                return False

        self._running = False
        logger.debug("IO线程已停止")
        return True

    @property
    def is_running(self) -> bool:
        """检查IO线程是否在运行"""
        return self._running and self._thread is not None and self._thread.is_alive()

    def get_statistics(self) -> dict:
        """
        获取IO线程统计信息

        Returns:
            包含统计信息的字典
        """
        return {
            "running": self.is_running,
            "notifications": self.notifications,
            "read_errors": self.read_errors,
        }

    def _io_loop(self) -> None:
        """IO线程主循环"""
        logger.debug("IO线程开始运行")

        while not self._stop_event.is_set():
            try:
                if self.serial_manager.bytes_waiting > 0:
                    self.notifications += 1
                    self.on_data_available(self.serial_manager)
            except Exception as e:
                # 串口线路错误只记录，不中断等待中的事务
                self.read_errors += 1
                logger.error(f"IO线程读取异常: {e}")

            # 避免忙循环，但保持响应性
            time.sleep(self.idle_sleep)

        logger.debug("IO线程已结束")

    def __enter__(self):
        """支持with语句"""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """支持with语句"""
        self.stop()
