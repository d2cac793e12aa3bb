"""Tag, stash, worktree and init orchestration."""

from __future__ import annotations

from pathlib import Path

from vcs_gateway.context import OperationContext
from vcs_gateway.errors import ValidationError
from vcs_gateway.executor.abc import ProcessFailedError
from vcs_gateway.git_cli.command import FlagValue, build_git_command, validate_positional
from vcs_gateway.git_cli.operations.remotes import read_head_branch
from vcs_gateway.git_cli.parsers.log import STASH_FORMAT, parse_stash_list
from vcs_gateway.git_cli.parsers.refs import TAG_FORMAT, parse_tag_list
from vcs_gateway.git_cli.parsers.transfer import has_conflict_markers
from vcs_gateway.git_cli.parsers.worktree import parse_worktree_list
from vcs_gateway.git_cli.runner import GitRunner
from vcs_gateway.options import InitOptions, StashOptions, TagOptions, WorktreeOptions
from vcs_gateway.results import (
    InitResult,
    StashEntry,
    StashResult,
    TagResult,
    WorktreeInfo,
    WorktreeResult,
)


def _require_path(path: Path | None, operation: str) -> str:
    if path is None:
        raise ValidationError(f"{operation} requires a path")
    return str(path)


# --- tags ---


async def execute_tag(
    options: TagOptions, context: OperationContext, runner: GitRunner
) -> TagResult:
    """List, create or delete tags.

    A tag with a message, or a signed tag, is annotated. Signing requires a
    message so git never opens an editor.
    """
    if options.mode == "list":
        command = build_git_command(
            "tag",
            flags={"--list": True, "--format": TAG_FORMAT},
            positionals=[options.pattern] if options.pattern else [],
        )
        result = await runner.run(command, context)
        return TagResult(tags=parse_tag_list(result.stdout), created=None, deleted=None)

    if not options.name:
        raise ValidationError(f"tag {options.mode} requires a name")

    if options.mode == "delete":
        await runner.run(
            build_git_command("tag", flags={"--delete": True}, positionals=[options.name]),
            context,
        )
        return TagResult(tags=(), created=None, deleted=options.name)

    if options.sign and not options.message:
        raise ValidationError("Signed tags require a message")
    command = build_git_command(
        "tag",
        flags={
            "--annotate": options.message is not None and not options.sign,
            "--sign": options.sign,
            "--message": options.message,
        },
        positionals=[options.name, options.target] if options.target else [options.name],
    )
    await runner.run(command, context)
    return TagResult(tags=(), created=options.name, deleted=None)


# --- stashes ---


async def _list_stashes(context: OperationContext, runner: GitRunner) -> tuple[StashEntry, ...]:
    result = await runner.run(
        build_git_command(("stash", "list"), flags={"--format": STASH_FORMAT}), context
    )
    return parse_stash_list(result.stdout)


async def execute_stash(
    options: StashOptions, context: OperationContext, runner: GitRunner
) -> StashResult:
    """Run one stash subcommand and return the stash list as it stands afterwards.

    A pop or apply that stops on conflicts returns ``conflicts=True``; git
    keeps the entry on the stack in that case.
    """
    ref = [options.stash_ref] if options.stash_ref else []
    conflicts = False

    if options.mode == "list":
        pass
    elif options.mode == "push":
        command = build_git_command(
            ("stash", "push"),
            flags={
                "--message": options.message,
                "--include-untracked": options.include_untracked,
                "--keep-index": options.keep_index,
            },
            paths=options.paths,
        )
        await runner.run(command, context)
    elif options.mode in ("pop", "apply"):
        result = await runner.execute(
            build_git_command(("stash", options.mode), positionals=ref), context
        )
        if not result.ok:
            if not has_conflict_markers(result.stdout + result.stderr):
                raise ProcessFailedError(result)
            conflicts = True
    elif options.mode == "drop":
        await runner.run(build_git_command(("stash", "drop"), positionals=ref), context)
    else:
        await runner.run(build_git_command(("stash", "clear")), context)

    return StashResult(
        mode=options.mode,
        stashes=await _list_stashes(context, runner),
        conflicts=conflicts,
    )


# --- worktrees ---


async def _list_worktrees(
    context: OperationContext, runner: GitRunner
) -> tuple[WorktreeInfo, ...]:
    result = await runner.run(
        build_git_command(("worktree", "list"), flags={"--porcelain": True}), context
    )
    return parse_worktree_list(result.stdout)


async def execute_worktree(
    options: WorktreeOptions, context: OperationContext, runner: GitRunner
) -> WorktreeResult:
    """Run one worktree subcommand and return the worktree list afterwards."""
    if options.mode == "list":
        return WorktreeResult(mode="list", worktrees=await _list_worktrees(context, runner))

    if options.mode == "prune":
        await runner.run(build_git_command(("worktree", "prune")), context)
        return WorktreeResult(mode="prune", worktrees=await _list_worktrees(context, runner))

    path = _require_path(options.path, f"worktree {options.mode}")

    if options.mode == "add":
        if options.create_branch:
            if not options.branch:
                raise ValidationError("worktree add with create_branch requires a branch")
            # "-b" takes the branch name as a separate argument
            validate_positional(options.branch, "branch name")
            target = options.commit_ish
            flags: dict[str, FlagValue] = {"--force": options.force, "-b": options.branch}
        else:
            target = options.branch or options.commit_ish
            flags = {"--force": options.force}
        command = build_git_command(
            ("worktree", "add"),
            flags=flags,
            positionals=[path, target] if target else [path],
        )
    elif options.mode == "remove":
        command = build_git_command(
            ("worktree", "remove"), flags={"--force": options.force}, positionals=[path]
        )
    elif options.mode == "move":
        new_path = _require_path(options.new_path, "worktree move")
        command = build_git_command(
            ("worktree", "move"), flags={"--force": options.force}, positionals=[path, new_path]
        )
    elif options.mode == "lock":
        command = build_git_command(
            ("worktree", "lock"), flags={"--reason": options.reason}, positionals=[path]
        )
    else:
        command = build_git_command(("worktree", "unlock"), positionals=[path])

    await runner.run(command, context)
    return WorktreeResult(mode=options.mode, worktrees=await _list_worktrees(context, runner))


# --- repositories ---


async def execute_init(
    options: InitOptions, context: OperationContext, runner: GitRunner
) -> InitResult:
    """Create a repository at ``options.path`` (default: the working directory)."""
    target = options.path if options.path is not None else context.working_directory
    if not target.is_absolute():
        target = context.working_directory / target

    command = build_git_command(
        "init",
        flags={
            "--quiet": True,
            "--initial-branch": options.initial_branch,
            "--bare": options.bare,
        },
        positionals=[str(target)],
    )
    await runner.run(command, context)
    branch = await read_head_branch(context.with_working_directory(target), runner)
    return InitResult(path=target, initial_branch=branch, bare=options.bare)
