"""Fake executor for testing.

FakeExecutor is an in-memory implementation that answers invocations from
pre-configured responses passed to its constructor.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from vcs_gateway.context import OperationContext
from vcs_gateway.executor.abc import Executor, ExecResult


@dataclass(frozen=True)
class FakeResponse:
    """Scripted answer for invocations whose git arguments start with ``match``.

    Attributes:
        match: Leading git arguments (after the binary and global options)
        stdout: Standard output to return
        stderr: Standard error to return
        exit_code: Exit code to return
        raises: Exception to raise instead of returning a result
    """

    match: tuple[str, ...]
    stdout: str = ""
    stderr: str = ""
    exit_code: int = 0
    raises: Exception | None = None


@dataclass(frozen=True)
class ExecCall:
    """Record of one invocation made against the fake."""

    argv: tuple[str, ...]
    cwd: Path
    request_id: str
    timeout: float

    @property
    def git_args(self) -> tuple[str, ...]:
        return strip_global_options(self.argv)


def strip_global_options(argv: Sequence[str]) -> tuple[str, ...]:
    """Drop the binary and leading global options (``-c key=value``, ``--no-pager``)."""
    args = list(argv[1:])
    while args and args[0].startswith("-"):
        if args[0] in ("-c", "-C"):
            args = args[2:]
        else:
            args = args[1:]
    return tuple(args)


class FakeExecutor(Executor):
    """In-memory executor answering from scripted responses.

    The first response whose ``match`` is a prefix of the invocation's git
    arguments wins. Invocations with no matching response get ``default``.

    Mutation Tracking:
    -----------------
    - calls: Every invocation, in order

    Examples:
    ---------
        executor = FakeExecutor(
            responses=[
                FakeResponse(match=("status",), stdout="## main\\n"),
                FakeResponse(match=("diff", "--no-index"), stdout="...", exit_code=1),
            ]
        )
    """

    def __init__(
        self,
        *,
        responses: Sequence[FakeResponse] | None = None,
        default: FakeResponse | None = None,
    ) -> None:
        self._responses = list(responses) if responses is not None else []
        self._default = default if default is not None else FakeResponse(match=())
        self._calls: list[ExecCall] = []

    @property
    def calls(self) -> list[ExecCall]:
        return list(self._calls)

    def calls_matching(self, *prefix: str) -> list[ExecCall]:
        return [c for c in self._calls if c.git_args[: len(prefix)] == prefix]

    async def execute(
        self,
        argv: Sequence[str],
        cwd: Path,
        context: OperationContext,
        *,
        timeout: float,
    ) -> ExecResult:
        call = ExecCall(
            argv=tuple(argv), cwd=cwd, request_id=context.request_id, timeout=timeout
        )
        self._calls.append(call)

        response = self._find_response(call.git_args)
        if response.raises is not None:
            raise response.raises
        return ExecResult(
            argv=tuple(argv),
            cwd=cwd,
            exit_code=response.exit_code,
            stdout=response.stdout,
            stderr=response.stderr,
        )

    def _find_response(self, git_args: tuple[str, ...]) -> FakeResponse:
        for response in self._responses:
            if git_args[: len(response.match)] == response.match:
                return response
        return self._default
