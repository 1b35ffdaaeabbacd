"""
数据帧处理模块
==============

负责命令帧的封装和应答帧的校验。

数据帧格式：| 内容(NB) | CRC高字节(1B) | CRC低字节(1B) | CR(1B) |
"""

from typing import Union

from ..config.constants import FRAME_TERMINATOR, FRAME_TRAILER_SIZE
from .checksum import calculate_crc, crc_to_bytes
from .exceptions import ResponseInvalidCrcError, ResponseTooShortError
from ..utils.logger import get_logger

logger = get_logger(__name__)


class FrameHandler:
    """数据帧处理器"""

    @staticmethod
    def build_frame(command: Union[bytes, bytearray]) -> bytes:
        """
        将命令内容打包成数据帧

        长度上限由调用方检查，这里只拒绝空命令。

        Args:
            command: 命令的ASCII字节

        Returns:
            命令 + 校验码(2B) + CR

        Raises:
            ValueError: 命令为空时抛出

        Examples:
            >>> FrameHandler.build_frame(b'QPI')
            b'QPI\\xbe\\xac\\r'
        """
        if not command:
            raise ValueError("命令不能为空")

        payload = bytes(command)
        frame = payload + crc_to_bytes(calculate_crc(payload)) + bytes((FRAME_TERMINATOR,))
        logger.debug(f"打包命令帧: {frame.hex(' ')}")
        return frame

    @staticmethod
    def validate(buffer: Union[bytes, bytearray]) -> bytes:
        """
        校验应答帧并取出内容

        最后一个字节应为CR，但不做检查。接收到的校验字节直接与重新
        计算（已转义）的校验码比较。

        Args:
            buffer: 接收到的完整应答帧

        Returns:
            去掉校验码和结束符后的应答内容

        Raises:
            ResponseTooShortError: 不足3字节
            ResponseInvalidCrcError: 校验码不匹配
        """
        if len(buffer) < FRAME_TRAILER_SIZE:
            logger.error(f"应答长度不足一帧: {len(buffer)}")
            raise ResponseTooShortError(len(buffer))

        payload = bytes(buffer[:-FRAME_TRAILER_SIZE])
        received_crc = (buffer[-3] << 8) | buffer[-2]

        calculated_crc = calculate_crc(payload)
        if received_crc != calculated_crc:
            logger.error(
                f"校验码错误: 接收={hex(received_crc)}, 计算={hex(calculated_crc)}"
            )
            raise ResponseInvalidCrcError(calculated_crc, received_crc)

        return payload


def build_frame(command: Union[bytes, bytearray]) -> bytes:
    """模块级别名"""
    return FrameHandler.build_frame(command)


def validate(buffer: Union[bytes, bytearray]) -> bytes:
    """模块级别名"""
    return FrameHandler.validate(buffer)
