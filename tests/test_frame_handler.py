#!/usr/bin/env python3
"""
数据帧处理测试
==============

测试命令帧封装和应答帧校验。
"""

import random

import pytest

from axpert_serial.core.checksum import calculate_crc, crc_to_bytes
from axpert_serial.core.exceptions import ResponseInvalidCrcError, ResponseTooShortError
from axpert_serial.core.frame_handler import FrameHandler, build_frame, validate

QPI_FRAME = b'QPI\xbe\xac\r'


class TestBuildFrame:
    """测试命令帧封装"""

    def test_qpi_frame(self):
        """QPI命令帧与设备文档一致"""
        assert FrameHandler.build_frame(b'QPI') == QPI_FRAME

    def test_frame_layout(self):
        """帧 = 内容 + 校验码高字节 + 低字节 + CR"""
        command = b'QPIGS'
        frame = FrameHandler.build_frame(command)

        assert frame[:-3] == command
        assert frame[-3:-1] == crc_to_bytes(calculate_crc(command))
        assert frame[-1] == 0x0D
        assert len(frame) == len(command) + 3

    def test_input_not_modified(self):
        """原始命令不被修改"""
        command = bytearray(b'QMOD')
        FrameHandler.build_frame(command)
        assert command == bytearray(b'QMOD')

    def test_empty_command(self):
        """空命令抛出ValueError"""
        with pytest.raises(ValueError):
            FrameHandler.build_frame(b'')

    def test_no_length_limit(self):
        """长度上限由调用方负责，封装本身不限制"""
        frame = FrameHandler.build_frame(b'X' * 100)
        assert len(frame) == 103

    def test_module_alias(self):
        assert build_frame(b'QPI') == QPI_FRAME


class TestValidate:
    """测试应答帧校验"""

    def test_qpi_frame_validates(self):
        """已知正确的QPI帧校验通过"""
        assert FrameHandler.validate(QPI_FRAME) == b'QPI'

    def test_returns_bytes_for_bytearray(self):
        result = FrameHandler.validate(bytearray(QPI_FRAME))
        assert result == b'QPI'
        assert isinstance(result, bytes)

    @pytest.mark.parametrize("buffer", [b'', b'\r', b'\r\r', b'\xbe\xac'])
    def test_too_short(self, buffer):
        """不足3字节时报告过短，而不是校验错误"""
        with pytest.raises(ResponseTooShortError) as exc_info:
            FrameHandler.validate(buffer)
        assert exc_info.value.length == len(buffer)

    def test_empty_payload(self):
        """恰好3字节且校验码为0时内容为空"""
        assert FrameHandler.validate(b'\x00\x00\r') == b''

    @pytest.mark.parametrize("position", [-3, -2])
    @pytest.mark.parametrize("bit", range(8))
    def test_flipped_crc_bit(self, position, bit):
        """校验码中任意一位翻转都会被发现"""
        corrupted = bytearray(QPI_FRAME)
        corrupted[position] ^= 1 << bit

        with pytest.raises(ResponseInvalidCrcError) as exc_info:
            FrameHandler.validate(bytes(corrupted))

        assert exc_info.value.expected == 0xBEAC
        assert exc_info.value.received == (corrupted[-3] << 8) | corrupted[-2]

    def test_corrupted_payload(self):
        """内容被改动时校验失败"""
        with pytest.raises(ResponseInvalidCrcError):
            FrameHandler.validate(b'QPJ\xbe\xac\r')

    def test_terminator_not_checked(self):
        """最后一个字节不参与校验"""
        assert FrameHandler.validate(b'QPI\xbe\xacX') == b'QPI'

    def test_device_reply(self):
        """典型的设备应答"""
        reply = FrameHandler.build_frame(b'(PI30')
        assert FrameHandler.validate(reply) == b'(PI30'

    def test_module_alias(self):
        assert validate(QPI_FRAME) == b'QPI'


class TestRoundTrip:
    """封装后再校验得到原内容"""

    def test_all_lengths(self):
        """长度1到20的命令"""
        rng = random.Random(42)
        printable = bytes(range(0x20, 0x7F))
        for length in range(1, 21):
            for _ in range(20):
                command = bytes(rng.choice(printable) for _ in range(length))
                assert FrameHandler.validate(FrameHandler.build_frame(command)) == command

    @pytest.mark.parametrize("command", [b'QPI', b'QID', b'QVFW', b'QPIGS', b'QPIWS', b'POP02', b'PCP00'])
    def test_common_commands(self, command):
        assert FrameHandler.validate(FrameHandler.build_frame(command)) == command


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
