#!/usr/bin/env python3
"""
逆变器串口命令工具 - 模块CLI入口
==============================

支持通过 python -m axpert_serial 或 axpert 命令调用
"""

import sys
import argparse
import logging
from typing import List, Optional

from .cli.query import QueryCLI
from .config.constants import DEFAULT_BAUDRATE, DEFAULT_TIMEOUT_MS, ExitCode
from .utils.logger import get_logger, set_log_level

logger = get_logger(__name__)

# 版本信息
VERSION = "1.0.0"
PROGRAM_NAME = "Axpert逆变器命令工具"


class _ArgumentParser(argparse.ArgumentParser):
    """参数错误时以 INVALID_ARGUMENT 退出，不与其他退出码冲突"""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(ExitCode.INVALID_ARGUMENT, f"{self.prog}: 错误: {message}\n")


def create_parser() -> argparse.ArgumentParser:
    """创建命令行参数解析器"""
    parser = _ArgumentParser(
        prog="axpert",
        description=f"{PROGRAM_NAME} v{VERSION}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
使用示例：
  # 查询设备协议版本
  axpert -p /dev/ttyUSB0 QPI

  # 指定波特率和超时
  axpert -p COM3 -b 2400 -t 2000 QPIGS

退出码：
  0 成功  1 参数无效  2 无应答  3 应答过短  4 应答校验错误
        """,
    )

    parser.add_argument(
        "--version", action="version", version=f"{PROGRAM_NAME} v{VERSION}"
    )
    parser.add_argument("-p", "--port", help="串口号（如 COM1, /dev/ttyUSB0）")
    parser.add_argument(
        "-b", "--baudrate", type=int, default=DEFAULT_BAUDRATE,
        help=f"波特率（默认{DEFAULT_BAUDRATE}）",
    )
    parser.add_argument(
        "-t", "--timeout", type=int, default=DEFAULT_TIMEOUT_MS,
        help=f"应答超时，毫秒（默认{DEFAULT_TIMEOUT_MS}）",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="输出调试日志")
    parser.add_argument(
        "--list-ports", action="store_true", help="列出可用串口后退出"
    )
    parser.add_argument("command", nargs="?", help="要发送的ASCII命令（最多20字符）")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """主函数，返回退出码"""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        set_log_level(logging.DEBUG)

    if args.list_ports:
        QueryCLI.show_available_ports()
        return ExitCode.OKAY

    error = QueryCLI.validate_args(args)
    if error:
        parser.print_usage()
        print(error)
        return ExitCode.INVALID_ARGUMENT

    try:
        return QueryCLI.run(args)
    except KeyboardInterrupt:
        print("\n👋 用户中断程序，退出", file=sys.stderr)
        return ExitCode.NO_RESPONSE


def run() -> None:
    """console script入口"""
    sys.exit(int(main()))


if __name__ == "__main__":
    run()
