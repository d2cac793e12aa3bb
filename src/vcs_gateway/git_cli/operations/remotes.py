"""Remote management and network operations: remote, fetch, push, pull, clone.

Fetch, push, pull and clone run with the network timeout. Push always uses
``--porcelain`` so ref updates can be parsed; a rejected push exits non-zero
and is classified as a conflict by the error mapper.
"""

from __future__ import annotations

import logging
from pathlib import Path

from vcs_gateway.context import OperationContext
from vcs_gateway.errors import ValidationError
from vcs_gateway.git_cli.command import build_git_command
from vcs_gateway.git_cli.operations.working_tree import conflicted_files_after
from vcs_gateway.git_cli.parsers.refs import parse_remote_list
from vcs_gateway.git_cli.parsers.transfer import (
    is_fast_forward,
    is_up_to_date,
    parse_fetch_updates,
    parse_push_porcelain,
)
from vcs_gateway.git_cli.runner import GitRunner
from vcs_gateway.options import (
    CloneOptions,
    FetchOptions,
    PullOptions,
    PushOptions,
    RemoteOptions,
)
from vcs_gateway.results import (
    CloneResult,
    FetchResult,
    PullResult,
    PushResult,
    RemoteResult,
)

logger = logging.getLogger(__name__)

# Transports that run arbitrary commands on behalf of a URL
_FORBIDDEN_URL_PREFIXES = ("ext::", "fd::")


def validate_remote_url(url: str) -> str:
    """Reject URLs using command-executing transports.

    Raises:
        ValidationError: If the URL uses a forbidden transport
    """
    if url.strip().lower().startswith(_FORBIDDEN_URL_PREFIXES):
        raise ValidationError(f"Remote URL transport is not allowed: {url!r}")
    return url


def _require(value: str | None, what: str, operation: str) -> str:
    if not value:
        raise ValidationError(f"{operation} requires {what}")
    return value


async def _list_remotes(context: OperationContext, runner: GitRunner) -> RemoteResult:
    result = await runner.run(build_git_command("remote", flags={"--verbose": True}), context)
    return RemoteResult(remotes=parse_remote_list(result.stdout), url=None)


async def execute_remote(
    options: RemoteOptions, context: OperationContext, runner: GitRunner
) -> RemoteResult:
    """List, inspect or change remotes.

    Mutating modes return the remote listing as it stands after the change.
    """
    if options.mode == "list":
        return await _list_remotes(context, runner)

    name = _require(options.name, "a remote name", f"remote {options.mode}")

    if options.mode == "get_url":
        result = await runner.run(
            build_git_command(("remote", "get-url"), positionals=[name]), context
        )
        return RemoteResult(remotes=(), url=result.stdout.strip() or None)

    if options.mode == "add":
        url = validate_remote_url(_require(options.url, "a url", "remote add"))
        command = build_git_command(("remote", "add"), positionals=[name, url])
    elif options.mode == "set_url":
        url = validate_remote_url(_require(options.url, "a url", "remote set_url"))
        command = build_git_command(("remote", "set-url"), positionals=[name, url])
    elif options.mode == "rename":
        new_name = _require(options.new_name, "new_name", "remote rename")
        command = build_git_command(("remote", "rename"), positionals=[name, new_name])
    else:
        command = build_git_command(("remote", "remove"), positionals=[name])

    await runner.run(command, context)
    return await _list_remotes(context, runner)


async def execute_fetch(
    options: FetchOptions, context: OperationContext, runner: GitRunner
) -> FetchResult:
    if options.all and options.remote:
        raise ValidationError("fetch cannot combine all=True with a named remote")
    if options.refspec and not options.remote:
        raise ValidationError("fetch with a refspec requires a remote")

    positionals = [p for p in (options.remote, options.refspec) if p]
    command = build_git_command(
        "fetch",
        flags={
            "--prune": options.prune,
            "--all": options.all,
            "--tags": options.tags,
            "--depth": options.depth,
        },
        positionals=positionals,
    )
    result = await runner.run(command, context, network=True)
    # git reports ref updates on stderr
    return FetchResult(remote=options.remote, updated=parse_fetch_updates(result.stderr))


async def execute_push(
    options: PushOptions, context: OperationContext, runner: GitRunner
) -> PushResult:
    if options.delete and not options.branch:
        raise ValidationError("push delete requires a branch")
    if options.force and options.force_with_lease:
        raise ValidationError("push options force and force_with_lease are mutually exclusive")

    command = build_git_command(
        "push",
        flags={
            "--porcelain": True,
            "--force": options.force,
            "--force-with-lease": options.force_with_lease,
            "--set-upstream": options.set_upstream,
            "--tags": options.tags,
            "--delete": options.delete,
        },
        positionals=[options.remote, options.branch] if options.branch else [options.remote],
    )
    result = await runner.run(command, context, network=True)
    return PushResult(
        remote=options.remote,
        branch=options.branch,
        updates=parse_push_porcelain(result.stdout),
    )


async def execute_pull(
    options: PullOptions, context: OperationContext, runner: GitRunner
) -> PullResult:
    if options.branch and not options.remote:
        raise ValidationError("pull with a branch requires a remote")
    if options.rebase and options.ff_only:
        raise ValidationError("pull options rebase and ff_only are mutually exclusive")

    command = build_git_command(
        "pull",
        flags={
            "--rebase": options.rebase,
            # Explicit merge strategy so git never stops to ask how to reconcile
            "--no-rebase": not options.rebase and not options.ff_only,
            "--ff-only": options.ff_only,
            "--no-edit": True,
        },
        positionals=[p for p in (options.remote, options.branch) if p],
    )
    result = await runner.execute(command, context, network=True)
    if result.ok:
        return PullResult(
            remote=options.remote,
            branch=options.branch,
            fast_forward=is_fast_forward(result.stdout),
            up_to_date=is_up_to_date(result.stdout),
            conflicts=False,
            conflicted_files=(),
        )

    conflicted = await conflicted_files_after(result, runner, context)
    return PullResult(
        remote=options.remote,
        branch=options.branch,
        fast_forward=False,
        up_to_date=False,
        conflicts=True,
        conflicted_files=conflicted,
    )


async def read_head_branch(context: OperationContext, runner: GitRunner) -> str | None:
    """Branch HEAD points at (born or unborn), or None when HEAD is detached."""
    result = await runner.execute(
        build_git_command("symbolic-ref", flags={"--short": True}, positionals=["HEAD"]),
        context,
    )
    if not result.ok:
        return None
    return result.stdout.strip() or None


async def execute_clone(
    options: CloneOptions, context: OperationContext, runner: GitRunner
) -> CloneResult:
    """Clone into ``options.path``, resolved against the working directory.

    The clone runs from the context's working directory, which need not be a
    repository.
    """
    url = validate_remote_url(options.url)
    if options.bare and options.mirror:
        raise ValidationError("clone options bare and mirror are mutually exclusive")

    destination = Path(options.path)
    if not destination.is_absolute():
        destination = context.working_directory / destination

    command = build_git_command(
        "clone",
        flags={
            "--branch": options.branch,
            "--depth": options.depth,
            "--bare": options.bare,
            "--mirror": options.mirror,
        },
        positionals=[url, str(destination)],
    )
    await runner.run(command, context, network=True)

    branch = options.branch
    if branch is None:
        branch = await read_head_branch(context.with_working_directory(destination), runner)
    logger.debug("Cloned %s into %s", url, destination, extra=context.log_extra())
    return CloneResult(path=destination, url=url, branch=branch)
