"""Execution of built git commands through an injected executor."""

from __future__ import annotations

from collections.abc import Sequence

from vcs_gateway.context import OperationContext
from vcs_gateway.executor.abc import Executor, ExecResult
from vcs_gateway.git_cli.command import DEFAULT_GLOBAL_FLAGS, GitCommand

ZERO_ONLY = frozenset({0})


class GitRunner:
    """Binds a git binary, global flags and timeouts to an executor.

    Holds only immutable configuration, so one runner is shared by every
    concurrent operation of a provider.
    """

    def __init__(
        self,
        executor: Executor,
        *,
        binary: str,
        default_timeout: float,
        network_timeout: float,
        global_flags: Sequence[str] = DEFAULT_GLOBAL_FLAGS,
    ) -> None:
        self._executor = executor
        self._binary = binary
        self._default_timeout = default_timeout
        self._network_timeout = network_timeout
        self._global_flags = tuple(global_flags)

    @property
    def binary(self) -> str:
        return self._binary

    def argv(self, command: GitCommand) -> list[str]:
        return command.to_argv(self._binary, self._global_flags)

    async def execute(
        self,
        command: GitCommand,
        context: OperationContext,
        *,
        network: bool = False,
    ) -> ExecResult:
        """Run a command and return its tagged outcome without checking the exit code."""
        timeout = self._network_timeout if network else self._default_timeout
        return await self._executor.execute(
            self.argv(command), context.working_directory, context, timeout=timeout
        )

    async def run(
        self,
        command: GitCommand,
        context: OperationContext,
        *,
        network: bool = False,
        ok_exit_codes: frozenset[int] = ZERO_ONLY,
    ) -> ExecResult:
        """Run a command and raise ProcessFailedError on an unaccepted exit code."""
        result = await self.execute(command, context, network=network)
        return result.check(ok_exit_codes=ok_exit_codes)
