"""Production executor using asyncio subprocesses."""

import asyncio
import logging
import os
import signal
import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path

from vcs_gateway.context import OperationContext
from vcs_gateway.errors import sanitize_command
from vcs_gateway.executor.abc import (
    Executor,
    ExecResult,
    ProcessSpawnError,
    ProcessTimeoutError,
)

logger = logging.getLogger(__name__)


def copied_env_for_git_subprocess() -> dict[str, str]:
    """Copy of os.environ with machine-stable, non-interactive git settings.

    Forces the C locale so parsers can rely on untranslated messages and
    byte-stable number formatting, and disables credential prompts and paging.
    """
    env = os.environ.copy()
    env["LC_ALL"] = "C"
    env["LANG"] = "C"
    env["LANGUAGE"] = "C"
    env["GIT_TERMINAL_PROMPT"] = "0"
    env["GIT_PAGER"] = "cat"
    env["GIT_EDITOR"] = "true"
    return env


async def _kill_process(process: asyncio.subprocess.Process) -> None:
    """Kill the process and its process group, then reap it."""
    if process.returncode is None:
        try:
            if hasattr(os, "killpg"):
                os.killpg(process.pid, signal.SIGKILL)
            else:
                process.kill()
        except ProcessLookupError:
            pass
    await process.wait()


class AsyncProcessExecutor(Executor):
    """Runs processes with asyncio.create_subprocess_exec (never a shell).

    Each process is started in its own session so that a timeout or a
    cancellation kills helper processes git spawned as well.
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        self._env = dict(env) if env is not None else copied_env_for_git_subprocess()

    async def execute(
        self,
        argv: Sequence[str],
        cwd: Path,
        context: OperationContext,
        *,
        timeout: float,
    ) -> ExecResult:
        if not cwd.is_dir():
            raise ProcessSpawnError(
                argv, cwd, f"working directory does not exist: {cwd}", tool_missing=False
            )

        logger.debug(
            "exec: %s (cwd=%s)", sanitize_command(list(argv)), cwd, extra=context.log_extra()
        )

        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                cwd=cwd,
                env=self._env,
                stdin=subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                start_new_session=True,
            )
        except (FileNotFoundError, PermissionError) as e:
            raise ProcessSpawnError(argv, cwd, str(e), tool_missing=True) from e
        except OSError as e:
            raise ProcessSpawnError(argv, cwd, str(e), tool_missing=False) from e

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
        except TimeoutError:
            logger.warning(
                "Killing process after %gs timeout: %s",
                timeout,
                sanitize_command(list(argv)),
                extra=context.log_extra(),
            )
            await _kill_process(process)
            raise ProcessTimeoutError(argv, cwd, timeout) from None
        except asyncio.CancelledError:
            logger.warning(
                "Killing process after cancellation: %s",
                sanitize_command(list(argv)),
                extra=context.log_extra(),
            )
            await _kill_process(process)
            raise

        assert process.returncode is not None
        return ExecResult(
            argv=tuple(argv),
            cwd=cwd,
            exit_code=process.returncode,
            stdout=stdout.decode("utf-8", errors="replace"),
            stderr=stderr.decode("utf-8", errors="replace"),
        )
