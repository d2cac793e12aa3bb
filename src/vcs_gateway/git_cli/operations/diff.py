"""Diff orchestration, including synthetic diffs for untracked files."""

from __future__ import annotations

import logging

from vcs_gateway.context import OperationContext
from vcs_gateway.executor.abc import ProcessFailedError
from vcs_gateway.git_cli.command import FlagValue, build_git_command
from vcs_gateway.git_cli.parsers.diff import (
    has_binary_changes,
    parse_name_only,
    parse_nul_separated,
    parse_numstat,
)
from vcs_gateway.git_cli.runner import GitRunner
from vcs_gateway.options import DiffOptions
from vcs_gateway.results import DiffResult, DiffStat

logger = logging.getLogger(__name__)

EMPTY_FILE = "/dev/null"

# `git diff --no-index` exits 1 when its two inputs differ
NO_INDEX_FILES_DIFFER = 1


def _base_flags(options: DiffOptions) -> dict[str, FlagValue]:
    return {"--cached": options.staged, "--unified": options.unified}


def _refs(options: DiffOptions) -> list[str]:
    return [ref for ref in (options.source, options.target) if ref]


async def list_untracked_files(
    runner: GitRunner, context: OperationContext, path: str | None
) -> list[str]:
    """Untracked, non-ignored files in enumeration order, optionally under ``path``.

    Listed with ``-z`` so names come back unquoted, exactly as on disk.
    """
    command = build_git_command(
        "ls-files",
        flags={"--others": True, "--exclude-standard": True, "-z": True},
        paths=[path] if path else [],
    )
    result = await runner.run(command, context)
    return list(parse_nul_separated(result.stdout))


async def untracked_file_diff(runner: GitRunner, context: OperationContext, file: str) -> str:
    """Synthetic added-file diff for one untracked file.

    Compares the file against an empty input with ``--no-index``. Exit code 1
    ("files differ") with diff text on stdout is the expected outcome; any
    other non-zero exit, or exit 1 with nothing on stdout, is a failure.
    """
    command = build_git_command(
        "diff",
        flags={"--no-index": True},
        paths=[EMPTY_FILE, file],
    )
    result = await runner.execute(command, context)
    if result.exit_code == 0:
        return result.stdout
    if result.exit_code == NO_INDEX_FILES_DIFFER and result.stdout.strip():
        return result.stdout
    raise ProcessFailedError(result)


async def _numstat(
    options: DiffOptions, context: OperationContext, runner: GitRunner
) -> DiffStat:
    command = build_git_command(
        "diff",
        flags={**_base_flags(options), "--numstat": True},
        positionals=_refs(options),
        paths=[options.path] if options.path else [],
    )
    return parse_numstat((await runner.run(command, context)).stdout)


async def execute_diff(
    options: DiffOptions, context: OperationContext, runner: GitRunner
) -> DiffResult:
    """Run diff and aggregate counts.

    Invocation sequence (any step failing fails the whole operation; nothing
    is retried):
      1. primary diff (the --stat block in stat mode)
      2. untracked listing, when include_untracked
      3. one --no-index comparison per untracked file (full mode only)
      4. --numstat pass over the primary diff (full and stat modes)

    Counts always come from --numstat, since --stat scales its graph and
    shortens long paths.
    """
    refs = _refs(options)
    paths = [options.path] if options.path else []
    flags = _base_flags(options)

    if options.stat:
        stat_command = build_git_command(
            "diff", flags={**flags, "--stat": True}, positionals=refs, paths=paths
        )
        stat_result = await runner.run(stat_command, context)
        untracked_count = 0
        if options.include_untracked:
            untracked_count = len(await list_untracked_files(runner, context, options.path))
        stats = await _numstat(options, context, runner)
        return DiffResult(
            diff=stat_result.stdout,
            files_changed=len(stats.files) + untracked_count,
            insertions=stats.total_additions,
            deletions=stats.total_deletions,
            binary=any(f.binary for f in stats.files),
        )

    primary_command = build_git_command(
        "diff",
        flags={**flags, "--name-only": options.name_only},
        positionals=refs,
        paths=paths,
    )
    primary = await runner.run(primary_command, context)

    untracked: list[str] = []
    untracked_diff = ""
    if options.include_untracked:
        untracked = await list_untracked_files(runner, context, options.path)
        if untracked:
            logger.debug(
                "Generating diffs for %d untracked files", len(untracked), extra=context.log_extra()
            )
        for file in untracked:
            if options.name_only:
                untracked_diff += f"{file}\n"
            else:
                untracked_diff += await untracked_file_diff(runner, context, file)

    combined = primary.stdout + untracked_diff

    if options.name_only:
        return DiffResult(
            diff=combined,
            files_changed=len(parse_name_only(primary.stdout)) + len(untracked),
            insertions=None,
            deletions=None,
            binary=False,
        )

    numstat = await _numstat(options, context, runner)
    return DiffResult(
        diff=combined,
        files_changed=len(numstat.files) + len(untracked),
        insertions=numstat.total_additions,
        deletions=numstat.total_deletions,
        binary=has_binary_changes(combined),
    )
