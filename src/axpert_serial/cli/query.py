"""
单命令查询命令行接口
==================

校验命令行参数，执行一次命令/应答事务并把结果映射为退出码。
"""

import argparse
import sys
from typing import Optional

from ..config.constants import (
    ExitCode,
    MIN_BAUDRATE,
    MAX_BAUDRATE,
    MIN_TIMEOUT_MS,
    MAX_TIMEOUT_MS,
    MIN_PORT_NAME_LENGTH,
    MAX_PORT_NAME_LENGTH,
    MAX_COMMAND_LENGTH,
)
from ..config.settings import SerialConfig, TransactionConfig
from ..core.exceptions import (
    CommandWriteError,
    NoResponseError,
    PortOpenError,
    ResponseInvalidCrcError,
    ResponseTooShortError,
)
from ..core.serial_manager import SerialManager
from ..core.transaction import execute
from ..utils.logger import get_logger

logger = get_logger(__name__)


class QueryCLI:
    """单命令查询命令行接口"""

    @staticmethod
    def show_available_ports() -> None:
        """显示可用的串口"""
        SerialManager.print_available_ports()

    @staticmethod
    def validate_args(args: argparse.Namespace) -> Optional[str]:
        """
        检查参数范围

        Args:
            args: 解析后的命令行参数

        Returns:
            参数有效返回None，否则返回错误提示
        """
        if not (MIN_BAUDRATE <= args.baudrate <= MAX_BAUDRATE):
            return "波特率无效"

        if not (MIN_TIMEOUT_MS <= args.timeout <= MAX_TIMEOUT_MS):
            return "超时时间无效"

        port = args.port
        if port is None or not (
            MIN_PORT_NAME_LENGTH <= len(port) <= MAX_PORT_NAME_LENGTH
        ):
            return "串口号无效"

        command = args.command
        if not command or len(command) > MAX_COMMAND_LENGTH:
            return "未提供命令或命令过长"
        if not command.isascii():
            return "命令只能包含ASCII字符"

        return None

    @staticmethod
    def run(args: argparse.Namespace) -> ExitCode:
        """
        执行查询

        应答内容按ASCII输出到stdout，失败信息输出到stderr。

        Args:
            args: 已通过校验的命令行参数

        Returns:
            退出码
        """
        serial_config = SerialConfig(port=args.port, baudrate=args.baudrate)
        transaction_config = TransactionConfig(timeout_ms=args.timeout)

        try:
            payload = execute(
                args.command, args.timeout, serial_config, transaction_config
            )
        except PortOpenError as e:
            print(f"❌ {e}", file=sys.stderr)
            return ExitCode.NO_RESPONSE
        except CommandWriteError as e:
            print(f"❌ {e}", file=sys.stderr)
            return ExitCode.NO_RESPONSE
        except NoResponseError:
            print("❌ 设备无应答", file=sys.stderr)
            return ExitCode.NO_RESPONSE
        except ResponseTooShortError:
            print("❌ 应答过短", file=sys.stderr)
            return ExitCode.RESPONSE_TOO_SHORT
        except ResponseInvalidCrcError:
            print("❌ 应答校验失败", file=sys.stderr)
            return ExitCode.RESPONSE_INVALID_CRC

        print(payload.decode("ascii", errors="replace"))
        return ExitCode.OKAY
