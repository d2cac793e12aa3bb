"""Process executors used by the CLI-backed provider."""

from vcs_gateway.executor.abc import (
    ExecResult,
    Executor,
    ProcessFailedError,
    ProcessSpawnError,
    ProcessTimeoutError,
)
from vcs_gateway.executor.fake import FakeExecutor, FakeResponse
from vcs_gateway.executor.real import AsyncProcessExecutor

__all__ = [
    "Executor",
    "ExecResult",
    "AsyncProcessExecutor",
    "FakeExecutor",
    "FakeResponse",
    "ProcessFailedError",
    "ProcessSpawnError",
    "ProcessTimeoutError",
]
