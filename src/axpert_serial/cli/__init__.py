"""
命令行接口模块
==============

提供单命令查询的命令行接口。
"""

from .query import QueryCLI

__all__ = [
    "QueryCLI"
]
