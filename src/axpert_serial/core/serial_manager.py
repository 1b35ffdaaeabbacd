"""
串口管理模块
============

提供串口的统一管理和操作接口。
"""

import serial
from serial.tools import list_ports
from typing import List, Optional, Dict

from ..config.settings import SerialConfig
from .exceptions import PortOpenError
from ..utils.logger import get_logger

logger = get_logger(__name__)


class SerialManager:
    """串口管理器"""

    def __init__(self, config: SerialConfig):
        """
        初始化串口管理器

        Args:
            config: 串口配置对象
        """
        self.config = config
        self._port: Optional[serial.Serial] = None
        self._last_error: Optional[str] = None

    @property
    def port(self) -> Optional[serial.Serial]:
        """获取串口对象"""
        return self._port

    @property
    def is_open(self) -> bool:
        """检查串口是否已打开"""
        return self._port is not None and self._port.is_open

    @property
    def last_error(self) -> Optional[str]:
        """最近一次打开失败的原因"""
        return self._last_error

    @property
    def bytes_waiting(self) -> int:
        """驱动缓冲区中待读取的字节数，串口未打开或出错时返回0"""
        try:
            if not self.is_open:
                return 0
            return self._port.in_waiting
        except (serial.SerialException, OSError) as e:
            logger.error(f"查询待读字节数失败: {e}")
            return 0

    def open(self) -> bool:
        """
        打开串口连接

        Returns:
            成功返回True，失败返回False
        """
        try:
            if self.is_open:
                logger.warning(f"串口 {self.config.port} 已经打开")
                return True

            self._port = serial.Serial(**self.config.to_serial_kwargs())
            self._last_error = None

            logger.info(
                f"成功打开串口 {self.config.port} @ {self.config.baudrate}bps"
            )
            return True

        except (serial.SerialException, OSError, ValueError) as e:
            logger.error(f"打开串口失败: {e}")
            self._last_error = str(e)
            self._port = None
            return False

    def close(self) -> None:
        """关闭串口连接"""
        try:
            if self._port and self._port.is_open:
                self._port.close()
                logger.info(f"已关闭串口 {self.config.port}")
        except (serial.SerialException, OSError) as e:
            logger.error(f"关闭串口失败: {e}")
        finally:
            self._port = None

    def reset_input_buffer(self) -> None:
        """丢弃驱动缓冲区中尚未读取的数据"""
        if not self.is_open:
            return
        try:
            stale = self._port.in_waiting
            self._port.reset_input_buffer()
            if stale:
                logger.debug(f"丢弃残留数据 {stale} 字节")
        except (serial.SerialException, OSError) as e:
            logger.warning(f"清空输入缓冲区失败: {e}")

    def write(self, data: bytes) -> bool:
        """
        向串口写入数据

        Args:
            data: 要写入的字节数据

        Returns:
            全部写入返回True，否则返回False
        """
        try:
            if not self.is_open:
                logger.error("串口未打开，无法写入数据")
                return False

            bytes_written = self._port.write(data)
            self._port.flush()
            return bytes_written == len(data)

        except (serial.SerialException, OSError) as e:
            logger.error(f"写入数据失败: {e}")
            return False

    def read(self, size: int) -> bytes:
        """
        从串口读取指定长度的数据

        Args:
            size: 要读取的字节数

        Returns:
            读取到的数据，失败时返回空bytes
        """
        try:
            if not self.is_open:
                logger.error("串口未打开，无法读取数据")
                return b''

            return self._port.read(size)

        except (serial.SerialException, OSError) as e:
            logger.error(f"读取数据失败: {e}")
            return b''

    @staticmethod
    def list_available_ports() -> List[Dict[str, str]]:
        """
        获取系统可用的串口列表

        Returns:
            串口信息列表，每个元素包含device、description等字段
        """
        ports = []
        for port_info in list_ports.comports():
            ports.append({
                'device': port_info.device,
                'description': port_info.description or '未知设备',
                'hwid': port_info.hwid or '未知硬件ID'
            })
        return ports

    @staticmethod
    def print_available_ports() -> None:
        """打印系统可用的串口信息"""
        ports = SerialManager.list_available_ports()

        if not ports:
            print("没有找到可用的串口。")
            return

        print("可用的串口：")
        for port in ports:
            print(f"  {port['device']} - {port['description']}")

    def __enter__(self):
        """支持with语句"""
        if not self.open():
            raise PortOpenError(self.config.port, self._last_error)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """支持with语句"""
        self.close()

    def __del__(self):
        """析构函数，确保串口被正确关闭"""
        self.close()
