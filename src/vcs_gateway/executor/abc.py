"""Abstract process executor.

The executor returns a tagged outcome (exit code, stdout, stderr) for every
process that ran, whatever its exit code. Callers decide which exit codes count
as success; see ``ExecResult.check``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from vcs_gateway.context import OperationContext


@dataclass(frozen=True)
class ExecResult:
    """Outcome of one underlying tool invocation."""

    argv: tuple[str, ...]
    cwd: Path
    exit_code: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    def check(self, *, ok_exit_codes: frozenset[int] = frozenset({0})) -> ExecResult:
        """Return self, or raise ProcessFailedError if the exit code is not accepted."""
        if self.exit_code not in ok_exit_codes:
            raise ProcessFailedError(self)
        return self


class ProcessFailedError(RuntimeError):
    """A process exited with a code its caller did not accept.

    Raw failure carrying the full invocation. It never leaves a provider
    unmapped; the error mapper turns it into a classified VcsError.
    """

    def __init__(self, result: ExecResult) -> None:
        self.result = result
        super().__init__(
            f"Command exited with code {result.exit_code}: {' '.join(result.argv)}\n"
            f"stderr: {result.stderr.strip()}"
        )


class ProcessSpawnError(RuntimeError):
    """The process could not be started.

    ``tool_missing`` is True when the binary itself was not found or is not
    executable; False when spawning failed for another reason (for example a
    missing working directory).
    """

    def __init__(self, argv: Sequence[str], cwd: Path, reason: str, *, tool_missing: bool) -> None:
        self.argv = tuple(argv)
        self.cwd = cwd
        self.reason = reason
        self.tool_missing = tool_missing
        super().__init__(f"Failed to start {argv[0] if argv else '<empty>'}: {reason}")


class ProcessTimeoutError(RuntimeError):
    """The process exceeded its timeout and was killed."""

    def __init__(self, argv: Sequence[str], cwd: Path, timeout: float) -> None:
        self.argv = tuple(argv)
        self.cwd = cwd
        self.timeout = timeout
        super().__init__(f"Command timed out after {timeout:g}s: {' '.join(argv)}")


class Executor(ABC):
    """Abstract interface for running tool processes."""

    @abstractmethod
    async def execute(
        self,
        argv: Sequence[str],
        cwd: Path,
        context: OperationContext,
        *,
        timeout: float,
    ) -> ExecResult:
        """Run argv in cwd without a shell and wait for it to exit.

        Args:
            argv: Ordered argument vector; argv[0] is the binary
            cwd: Absolute working directory
            context: Correlation metadata for logging
            timeout: Seconds before the process is killed

        Returns:
            ExecResult for any exit code

        Raises:
            ProcessSpawnError: If the process could not be started
            ProcessTimeoutError: If the timeout elapsed; the process is killed first
        """
        ...
