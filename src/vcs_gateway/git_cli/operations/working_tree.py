"""Status, staging, commit, reset and clean orchestration."""

from __future__ import annotations

from vcs_gateway.context import OperationContext
from vcs_gateway.errors import ValidationError
from vcs_gateway.executor.abc import ExecResult, ProcessFailedError
from vcs_gateway.git_cli.command import build_git_command
from vcs_gateway.git_cli.parsers.diff import parse_change_summary
from vcs_gateway.git_cli.parsers.status import parse_conflicted_files, parse_status
from vcs_gateway.git_cli.parsers.transfer import has_conflict_markers, parse_conflict_paths
from vcs_gateway.git_cli.parsers.working_tree import (
    parse_add_verbose,
    parse_clean,
    parse_commit_header,
    parse_reset_unstaged,
)
from vcs_gateway.git_cli.runner import GitRunner
from vcs_gateway.options import (
    AddOptions,
    CleanOptions,
    CommitOptions,
    ResetOptions,
    StatusOptions,
)
from vcs_gateway.results import (
    AddResult,
    CleanResult,
    CommitResult,
    ResetResult,
    StatusResult,
)


async def execute_status(
    options: StatusOptions, context: OperationContext, runner: GitRunner
) -> StatusResult:
    command = build_git_command(
        "status",
        flags={
            "--porcelain": "v1",
            "--branch": True,
            "--untracked-files": "all" if options.include_untracked else "no",
            "-z": True,
        },
    )
    result = await runner.run(command, context)
    return parse_status(result.stdout)


async def read_conflicted_files(runner: GitRunner, context: OperationContext) -> tuple[str, ...]:
    """Paths currently in an unmerged state."""
    command = build_git_command("status", flags={"--porcelain": "v1", "-z": True})
    result = await runner.run(command, context)
    return parse_conflicted_files(result.stdout)


async def conflicted_files_after(
    result: ExecResult, runner: GitRunner, context: OperationContext
) -> tuple[str, ...]:
    """Conflicted paths left behind by a failed merge-family step.

    A non-zero exit without conflict markers is a real failure and is raised.
    """
    if not has_conflict_markers(result.stdout + result.stderr):
        raise ProcessFailedError(result)
    conflicted = await read_conflicted_files(runner, context)
    return conflicted or parse_conflict_paths(result.stdout)


async def execute_add(
    options: AddOptions, context: OperationContext, runner: GitRunner
) -> AddResult:
    if not options.paths and not options.all and not options.update:
        raise ValidationError("add requires paths, all=True or update=True")

    command = build_git_command(
        "add",
        flags={
            "--verbose": True,
            "--all": options.all,
            "--update": options.update,
            "--force": options.force,
        },
        paths=options.paths,
    )
    result = await runner.run(command, context)
    return AddResult(staged_files=parse_add_verbose(result.stdout))


async def execute_commit(
    options: CommitOptions, context: OperationContext, runner: GitRunner
) -> CommitResult:
    """Create a commit, then resolve the full hash of the new HEAD.

    If the commit succeeds but resolving HEAD fails, the failure is raised;
    the commit itself is not undone.
    """
    if not options.message.strip():
        raise ValidationError("Commit message must not be empty")

    command = build_git_command(
        "commit",
        flags={
            "--message": options.message,
            "--author": options.author,
            "--amend": options.amend,
            "--allow-empty": options.allow_empty,
            "--no-verify": options.no_verify,
            "--gpg-sign": options.sign,
        },
    )
    result = await runner.run(command, context)
    branch, _ = parse_commit_header(result.stdout)
    files_changed, insertions, deletions = parse_change_summary(result.stdout)

    head = await runner.run(
        build_git_command("rev-parse", positionals=["HEAD"]), context
    )
    return CommitResult(
        commit_hash=head.stdout.strip(),
        message=options.message,
        branch=branch,
        files_changed=files_changed,
        insertions=insertions,
        deletions=deletions,
    )


async def execute_reset(
    options: ResetOptions, context: OperationContext, runner: GitRunner
) -> ResetResult:
    if options.paths and options.mode != "mixed":
        raise ValidationError(f"reset --{options.mode} cannot be combined with paths")

    flags = {} if options.paths else {f"--{options.mode}": True}
    command = build_git_command(
        "reset", flags=flags, positionals=[options.target], paths=options.paths
    )
    result = await runner.run(command, context)
    return ResetResult(
        mode=options.mode,
        target=options.target,
        unstaged_files=parse_reset_unstaged(result.stdout),
    )


async def execute_clean(
    options: CleanOptions, context: OperationContext, runner: GitRunner
) -> CleanResult:
    if not options.force and not options.dry_run:
        raise ValidationError("clean requires force=True or dry_run=True")

    command = build_git_command(
        "clean",
        flags={
            "-n": options.dry_run,
            "-f": options.force and not options.dry_run,
            "-d": options.directories,
            "-x": options.ignored,
        },
        paths=options.paths,
    )
    result = await runner.run(command, context)
    return CleanResult(files=parse_clean(result.stdout), dry_run=options.dry_run)
