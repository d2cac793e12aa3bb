"""Branch, checkout, merge, rebase and cherry-pick orchestration.

Merge-family steps (merge, rebase, cherry-pick) report content conflicts as
results with ``conflicts=True`` rather than errors. Refusals to start (local
changes would be overwritten, unknown revisions) stay errors.
"""

from __future__ import annotations

from vcs_gateway.context import OperationContext
from vcs_gateway.errors import ValidationError
from vcs_gateway.git_cli.command import FlagValue, build_git_command
from vcs_gateway.git_cli.operations.working_tree import conflicted_files_after
from vcs_gateway.git_cli.parsers.refs import BRANCH_FORMAT, parse_branch_list
from vcs_gateway.git_cli.parsers.transfer import is_fast_forward
from vcs_gateway.git_cli.runner import GitRunner
from vcs_gateway.options import (
    BranchOptions,
    CheckoutOptions,
    CherryPickOptions,
    MergeOptions,
    RebaseOptions,
)
from vcs_gateway.results import (
    BranchResult,
    CheckoutResult,
    CherryPickResult,
    MergeResult,
    RebaseResult,
)


def _require(value: str | None, what: str, operation: str) -> str:
    if not value:
        raise ValidationError(f"{operation} requires {what}")
    return value


async def _list_branches(
    options: BranchOptions, context: OperationContext, runner: GitRunner
) -> BranchResult:
    command = build_git_command(
        "branch",
        flags={
            "--format": BRANCH_FORMAT,
            "--all": options.all,
            "--remotes": options.remote and not options.all,
        },
    )
    result = await runner.run(command, context)
    branches = parse_branch_list(result.stdout)
    current = next((b.name for b in branches if b.is_current), None)
    return BranchResult(branches=branches, current=current)


async def execute_branch(
    options: BranchOptions, context: OperationContext, runner: GitRunner
) -> BranchResult:
    """List or change branches.

    Mutating modes (create, delete, rename) return the branch listing as it
    stands after the change.
    """
    if options.mode == "list":
        return await _list_branches(options, context, runner)

    if options.mode == "current":
        result = await runner.run(
            build_git_command("branch", flags={"--show-current": True}), context
        )
        return BranchResult(branches=(), current=result.stdout.strip() or None)

    name = _require(options.name, "a branch name", f"branch {options.mode}")
    if options.mode == "create":
        command = build_git_command(
            "branch",
            flags={"--force": options.force},
            positionals=[name, options.start_point] if options.start_point else [name],
        )
    elif options.mode == "delete":
        command = build_git_command(
            "branch",
            flags={"--delete": True, "--force": options.force, "--remotes": options.remote},
            positionals=[name],
        )
    else:
        new_name = _require(options.new_name, "new_name", "branch rename")
        command = build_git_command(
            "branch",
            flags={"--move": True, "--force": options.force},
            positionals=[name, new_name],
        )
    await runner.run(command, context)
    return await _list_branches(BranchOptions(), context, runner)


async def execute_checkout(
    options: CheckoutOptions, context: OperationContext, runner: GitRunner
) -> CheckoutResult:
    if options.create_branch and options.paths:
        raise ValidationError("checkout cannot create a branch and restore paths at once")

    # "-b" consumes the following positional as the new branch name
    command = build_git_command(
        "checkout",
        flags={"--force": options.force, "-b": options.create_branch},
        positionals=[options.target],
        paths=options.paths,
    )
    await runner.run(command, context)
    return CheckoutResult(
        target=options.target,
        created_branch=options.create_branch,
        paths=options.paths,
    )


async def execute_merge(
    options: MergeOptions, context: OperationContext, runner: GitRunner
) -> MergeResult:
    if options.abort:
        await runner.run(build_git_command("merge", flags={"--abort": True}), context)
        return MergeResult(
            success=True,
            fast_forward=False,
            conflicts=False,
            conflicted_files=(),
            merged_branch=None,
        )

    branch = _require(options.branch, "a branch", "merge")
    if options.ff_only and options.no_ff:
        raise ValidationError("merge options ff_only and no_ff are mutually exclusive")

    flags: dict[str, FlagValue] = {
        "--no-edit": True,
        "--no-ff": options.no_ff,
        "--ff-only": options.ff_only,
        "--squash": options.squash,
        "--message": options.message,
    }
    result = await runner.execute(
        build_git_command("merge", flags=flags, positionals=[branch]), context
    )
    if result.ok:
        return MergeResult(
            success=True,
            fast_forward=is_fast_forward(result.stdout),
            conflicts=False,
            conflicted_files=(),
            merged_branch=branch,
        )

    conflicted = await conflicted_files_after(result, runner, context)
    return MergeResult(
        success=False,
        fast_forward=False,
        conflicts=True,
        conflicted_files=conflicted,
        merged_branch=branch,
    )


async def execute_rebase(
    options: RebaseOptions, context: OperationContext, runner: GitRunner
) -> RebaseResult:
    if options.mode == "start":
        upstream = _require(options.upstream, "an upstream", "rebase")
        command = build_git_command(
            "rebase",
            flags={"--onto": options.onto},
            positionals=[upstream],
        )
    else:
        command = build_git_command("rebase", flags={f"--{options.mode}": True})

    result = await runner.execute(command, context)
    if result.ok:
        return RebaseResult(success=True, conflicts=False, conflicted_files=())

    conflicted = await conflicted_files_after(result, runner, context)
    return RebaseResult(success=False, conflicts=True, conflicted_files=conflicted)


async def execute_cherry_pick(
    options: CherryPickOptions, context: OperationContext, runner: GitRunner
) -> CherryPickResult:
    if options.mode == "pick":
        if not options.commits:
            raise ValidationError("cherry-pick requires at least one commit")
        command = build_git_command(
            "cherry-pick",
            flags={"--no-commit": options.no_commit},
            positionals=options.commits,
        )
    else:
        command = build_git_command("cherry-pick", flags={f"--{options.mode}": True})

    result = await runner.execute(command, context)
    if result.ok:
        return CherryPickResult(
            success=True,
            conflicts=False,
            conflicted_files=(),
            picked=options.commits,
        )

    conflicted = await conflicted_files_after(result, runner, context)
    return CherryPickResult(
        success=False,
        conflicts=True,
        conflicted_files=conflicted,
        picked=(),
    )
