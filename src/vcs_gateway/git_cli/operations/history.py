"""Log, show, blame and reflog orchestration."""

from __future__ import annotations

from vcs_gateway.context import OperationContext
from vcs_gateway.errors import ValidationError
from vcs_gateway.executor.abc import ProcessFailedError
from vcs_gateway.git_cli.command import build_git_command
from vcs_gateway.git_cli.parsers.blame import parse_blame
from vcs_gateway.git_cli.parsers.log import LOG_FORMAT, REFLOG_FORMAT, parse_log, parse_reflog
from vcs_gateway.git_cli.runner import GitRunner
from vcs_gateway.options import BlameOptions, LogOptions, ReflogOptions, ShowOptions
from vcs_gateway.results import BlameResult, LogResult, ReflogResult, ShowResult

# stderr fragments git emits when HEAD points at a branch with no commits
_UNBORN_BRANCH_MARKERS = ("does not have any commits yet", "bad default revision 'head'")


def _is_unborn_branch(error: ProcessFailedError) -> bool:
    stderr = error.result.stderr.lower()
    return any(marker in stderr for marker in _UNBORN_BRANCH_MARKERS)


async def execute_log(
    options: LogOptions, context: OperationContext, runner: GitRunner
) -> LogResult:
    """List commits. A repository with no commits yet yields an empty result."""
    command = build_git_command(
        "log",
        flags={
            "--format": LOG_FORMAT,
            "--max-count": options.max_count,
            "--skip": options.skip,
            "--author": options.author,
            "--since": options.since,
            "--until": options.until,
            "--grep": options.grep,
            "--first-parent": options.first_parent,
        },
        positionals=[options.ref] if options.ref else [],
        paths=[options.path] if options.path else [],
    )
    try:
        result = await runner.run(command, context)
    except ProcessFailedError as e:
        if options.ref is None and _is_unborn_branch(e):
            return LogResult(commits=())
        raise
    return LogResult(commits=parse_log(result.stdout))


async def execute_show(
    options: ShowOptions, context: OperationContext, runner: GitRunner
) -> ShowResult:
    command = build_git_command(
        "show",
        flags={"--stat": options.stat},
        positionals=[options.object],
        paths=[options.path] if options.path else [],
    )
    result = await runner.run(command, context)
    return ShowResult(object=options.object, content=result.stdout)


def _line_range(options: BlameOptions) -> str | None:
    if options.start_line is None and options.end_line is None:
        return None
    start = options.start_line if options.start_line is not None else 1
    if start < 1:
        raise ValidationError(f"start_line must be >= 1, got {start}")
    if options.end_line is None:
        return f"{start},"
    if options.end_line < start:
        raise ValidationError(
            f"end_line ({options.end_line}) must not be before start_line ({start})"
        )
    return f"{start},{options.end_line}"


async def execute_blame(
    options: BlameOptions, context: OperationContext, runner: GitRunner
) -> BlameResult:
    command = build_git_command(
        "blame",
        flags={
            "--line-porcelain": True,
            "-w": options.ignore_whitespace,
            "-L": _line_range(options),
        },
        positionals=[options.ref] if options.ref else [],
        paths=[options.path],
    )
    result = await runner.run(command, context)
    return BlameResult(path=options.path, lines=parse_blame(result.stdout))


async def execute_reflog(
    options: ReflogOptions, context: OperationContext, runner: GitRunner
) -> ReflogResult:
    command = build_git_command(
        ("reflog", "show"),
        flags={
            "--date": "unix",
            "--format": REFLOG_FORMAT,
            "--max-count": options.max_count,
        },
        positionals=[options.ref],
    )
    result = await runner.run(command, context)
    return ReflogResult(ref=options.ref, entries=parse_reflog(result.stdout, options.ref))
