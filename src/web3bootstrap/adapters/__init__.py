"""
Process runners — the only way the bootstrapper touches external processes.

    from web3bootstrap.adapters import ProcessRunner, SubprocessRunner, MockProcessRunner
"""

from web3bootstrap.adapters.base import InvokeOptions, ProcessResult, ProcessRunner
from web3bootstrap.adapters.mock import MockProcessRunner, MockResponse
from web3bootstrap.adapters.shell.command import SubprocessRunner

__all__ = [
    "InvokeOptions",
    "MockProcessRunner",
    "MockResponse",
    "ProcessResult",
    "ProcessRunner",
    "SubprocessRunner",
]
