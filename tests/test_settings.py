#!/usr/bin/env python3
"""
配置类测试
==========

测试 axpert_serial.config.settings 模块中的配置类。

测试内容包括：
- SerialConfig类的默认值和参数验证
- TransactionConfig类的默认值和参数验证
"""

import pytest
import serial

from axpert_serial.config.constants import ExitCode
from axpert_serial.config.settings import SerialConfig, TransactionConfig


class TestSerialConfig:
    """测试SerialConfig配置类"""

    def test_default_values(self):
        """只提供串口号时使用8N1和2400波特率"""
        config = SerialConfig(port="COM1")

        assert config.port == "COM1"
        assert config.baudrate == 2400
        assert config.bytesize == serial.EIGHTBITS
        assert config.parity == serial.PARITY_NONE
        assert config.stopbits == serial.STOPBITS_ONE
        assert config.timeout == 0.1

    def test_to_serial_kwargs(self):
        config = SerialConfig(port="/dev/ttyUSB0", baudrate=9600)

        assert config.to_serial_kwargs() == {
            "port": "/dev/ttyUSB0",
            "baudrate": 9600,
            "bytesize": serial.EIGHTBITS,
            "parity": serial.PARITY_NONE,
            "stopbits": serial.STOPBITS_ONE,
            "timeout": 0.1,
        }

    @pytest.mark.parametrize("port", ["", "C", "X" * 21])
    def test_invalid_port(self, port):
        """串口号长度必须在2到20之间"""
        with pytest.raises(ValueError, match="串口号"):
            SerialConfig(port=port)

    @pytest.mark.parametrize("baudrate", [0, -1, 2000001])
    def test_invalid_baudrate(self, baudrate):
        with pytest.raises(ValueError, match="波特率"):
            SerialConfig(port="COM1", baudrate=baudrate)

    @pytest.mark.parametrize("baudrate", [1, 2400, 2000000])
    def test_baudrate_bounds(self, baudrate):
        assert SerialConfig(port="COM1", baudrate=baudrate).baudrate == baudrate


class TestTransactionConfig:
    """测试TransactionConfig配置类"""

    def test_default_values(self):
        config = TransactionConfig()

        assert config.timeout_ms == 1000
        assert config.poll_interval == 0.02
        assert config.max_command_length == 20
        assert config.timeout_s == 1.0

    @pytest.mark.parametrize("timeout_ms", [0, -5, 30001])
    def test_invalid_timeout(self, timeout_ms):
        with pytest.raises(ValueError, match="timeout_ms"):
            TransactionConfig(timeout_ms=timeout_ms)

    @pytest.mark.parametrize("timeout_ms", [1, 30000])
    def test_timeout_bounds(self, timeout_ms):
        assert TransactionConfig(timeout_ms=timeout_ms).timeout_ms == timeout_ms

    def test_invalid_poll_interval(self):
        with pytest.raises(ValueError, match="poll_interval"):
            TransactionConfig(poll_interval=0)

    def test_invalid_max_command_length(self):
        with pytest.raises(ValueError, match="max_command_length"):
            TransactionConfig(max_command_length=0)


class TestExitCode:
    """退出码取值固定"""

    def test_values(self):
        assert ExitCode.OKAY == 0
        assert ExitCode.INVALID_ARGUMENT == 1
        assert ExitCode.NO_RESPONSE == 2
        assert ExitCode.RESPONSE_TOO_SHORT == 3
        assert ExitCode.RESPONSE_INVALID_CRC == 4


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
