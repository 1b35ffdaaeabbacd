"""
校验算法模块
============

逆变器协议使用的CRC-16/XMODEM变体（多项式0x1021，初值0）。

算法按半字节查表计算，表中只保存16个值。计算结果的高低两个字节
若与协议保留字节('(' CR LF)相同，则各自加1。转义属于校验值本身，
发送和校验应答时都要做，设备端也是同样的处理。
"""

from typing import Final, Tuple, Union

from ..config.constants import ESCAPED_CRC_BYTES

# 半字节CRC表：标准256项XMODEM表的前16项
CRC_TABLE: Final[Tuple[int, ...]] = (
    0x0000, 0x1021, 0x2042, 0x3063, 0x4084, 0x50A5, 0x60C6, 0x70E7,
    0x8108, 0x9129, 0xA14A, 0xB16B, 0xC18C, 0xD1AD, 0xE1CE, 0xF1EF,
)

BytesLike = Union[bytes, bytearray, memoryview]


def escape_crc_byte(value: int) -> int:
    """
    转义单个校验字节

    Args:
        value: 校验码的高字节或低字节

    Returns:
        值为0x28、0x0D、0x0A时返回value+1，否则原样返回

    Examples:
        >>> escape_crc_byte(0x0D)
        14
        >>> escape_crc_byte(0x41)
        65
    """
    if value in ESCAPED_CRC_BYTES:
        return value + 1
    return value


def calculate_crc(data: BytesLike) -> int:
    """
    计算数据的协议校验码

    逐字节处理，先高半字节后低半字节：取当前CRC的最高4位与半字节异或
    作为表索引，CRC左移4位后与表项异或。最后对高低字节分别转义。

    Args:
        data: 需要计算校验码的字节数据（不含校验码和结束符）

    Returns:
        转义后的16位校验码，高字节在前

    Raises:
        TypeError: 当输入不是字节类型时抛出

    Examples:
        >>> hex(calculate_crc(b'QPI'))
        '0xbeac'
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError("输入数据必须是bytes类型")

    crc = 0
    for byte in bytes(data):
        index = (crc >> 12) ^ (byte >> 4)
        crc = ((crc << 4) & 0xFFFF) ^ CRC_TABLE[index & 0x0F]
        index = (crc >> 12) ^ (byte & 0x0F)
        crc = ((crc << 4) & 0xFFFF) ^ CRC_TABLE[index & 0x0F]

    crc_high = escape_crc_byte((crc >> 8) & 0xFF)
    crc_low = escape_crc_byte(crc & 0xFF)
    return (crc_high << 8) | crc_low


def crc_to_bytes(crc: int) -> bytes:
    """将16位校验码拆成两个字节，高字节在前"""
    return bytes(((crc >> 8) & 0xFF, crc & 0xFF))
