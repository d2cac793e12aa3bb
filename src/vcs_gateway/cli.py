"""Operator command line for inspecting repositories through the gateway.

Usage:
    vcs-gateway [--config PATH] [--cwd DIR] [--provider TYPE] <command> ...

Output:
    JSON result on stdout; JSON error (VcsError.as_dict()) on stderr

Exit Codes:
    0: Success
    1: Classified error
"""

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import NoReturn, TypeVar

import click

from vcs_gateway.capabilities import Capability, CapabilitySet
from vcs_gateway.config import load_config
from vcs_gateway.context import OperationContext, resolve_working_directory
from vcs_gateway.errors import VcsError
from vcs_gateway.options import BlameOptions, DiffOptions, LogOptions, StatusOptions
from vcs_gateway.provider.abc import ProviderType, VcsProvider
from vcs_gateway.provider.factory import ProviderFactory, ProviderSelection

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])

T = TypeVar("T")


@dataclass(frozen=True)
class CliState:
    factory: ProviderFactory
    working_directory: Path
    provider_type: ProviderType | None


def _emit(data: object) -> None:
    click.echo(json.dumps(data, indent=2, default=str))


def _fail(error: VcsError) -> NoReturn:
    click.echo(json.dumps(error.as_dict(), default=str), err=True)
    raise SystemExit(1)


def _run_operation(
    state: CliState,
    required: CapabilitySet,
    operation: Callable[[VcsProvider, OperationContext], Awaitable[T]],
) -> T:
    async def run() -> T:
        provider = await state.factory.get_provider(
            ProviderSelection(preferred_type=state.provider_type, required_capabilities=required)
        )
        context = OperationContext(working_directory=state.working_directory)
        return await operation(provider, context)

    try:
        return asyncio.run(run())
    except VcsError as e:
        _fail(e)


@click.group("vcs-gateway", context_settings=CONTEXT_SETTINGS)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="TOML file with a [vcs_gateway] section",
)
@click.option(
    "--cwd",
    "cwd",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Repository directory (default: current directory)",
)
@click.option(
    "--provider",
    "provider_name",
    type=click.Choice([t.value for t in ProviderType]),
    default=None,
    help="Provider type (default: from config)",
)
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Path | None,
    cwd: Path | None,
    provider_name: str | None,
    verbose: bool,
) -> None:
    """Run version-control operations and print typed results as JSON."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    # Tests inject a prepared factory through ``obj``
    factory = ctx.obj if isinstance(ctx.obj, ProviderFactory) else None
    if factory is None:
        factory = ProviderFactory(load_config(config_path))

    raw_directory = str(cwd.absolute()) if cwd is not None else str(Path.cwd())
    try:
        working_directory = resolve_working_directory(raw_directory, session_directory=None)
    except VcsError as e:
        _fail(e)

    ctx.obj = CliState(
        factory=factory,
        working_directory=working_directory,
        provider_type=ProviderType(provider_name) if provider_name else None,
    )


@cli.command("capabilities")
@click.pass_obj
def capabilities_cmd(state: CliState) -> None:
    """List the capabilities of the selected provider."""

    async def resolve() -> VcsProvider:
        return await state.factory.get_provider(
            ProviderSelection(preferred_type=state.provider_type)
        )

    try:
        provider = asyncio.run(resolve())
    except VcsError as e:
        _fail(e)
    _emit(
        {
            "provider": provider.provider_type.value,
            "capabilities": provider.capabilities().names(),
        }
    )


@cli.command("health")
@click.pass_obj
def health_cmd(state: CliState) -> None:
    """Report whether the selected provider is usable."""
    try:
        selection = ProviderSelection(preferred_type=state.provider_type)
        asyncio.run(state.factory.get_provider(selection))
    except VcsError as e:
        _emit({"healthy": False, "error": e.message})
        raise SystemExit(1) from e
    _emit({"healthy": True})


@cli.command("status")
@click.option("--no-untracked", is_flag=True, help="Do not list untracked files")
@click.pass_obj
def status_cmd(state: CliState, no_untracked: bool) -> None:
    """Show working tree status."""
    options = StatusOptions(include_untracked=not no_untracked)
    result = _run_operation(
        state, CapabilitySet.of(), lambda provider, context: provider.status(options, context)
    )
    data = asdict(result)
    data["is_clean"] = result.is_clean
    _emit(data)


@cli.command("diff")
@click.argument("refs", nargs=-1)
@click.option("--path", "path", default=None, help="Limit the diff to this path")
@click.option("--staged", is_flag=True, help="Compare the index against HEAD")
@click.option("--stat", is_flag=True, help="Only show the diffstat")
@click.option("--name-only", is_flag=True, help="Only show changed file names")
@click.option("--include-untracked", is_flag=True, help="Include untracked files")
@click.pass_obj
def diff_cmd(
    state: CliState,
    refs: tuple[str, ...],
    path: str | None,
    staged: bool,
    stat: bool,
    name_only: bool,
    include_untracked: bool,
) -> None:
    """Show changes, optionally between up to two REFS."""
    if len(refs) > 2:
        raise click.UsageError("diff accepts at most two refs")
    options = DiffOptions(
        source=refs[0] if len(refs) > 0 else None,
        target=refs[1] if len(refs) > 1 else None,
        path=path,
        staged=staged,
        stat=stat,
        name_only=name_only,
        include_untracked=include_untracked,
    )
    result = _run_operation(
        state, CapabilitySet.of(), lambda provider, context: provider.diff(options, context)
    )
    _emit(asdict(result))


@cli.command("log")
@click.option("-n", "--max-count", type=int, default=20, show_default=True)
@click.option("--ref", default=None, help="Start from this ref instead of HEAD")
@click.option("--path", "path", default=None, help="Only commits touching this path")
@click.pass_obj
def log_cmd(state: CliState, max_count: int, ref: str | None, path: str | None) -> None:
    """Show commit history."""
    options = LogOptions(max_count=max_count, ref=ref, path=path)
    result = _run_operation(
        state, CapabilitySet.of(), lambda provider, context: provider.log(options, context)
    )
    _emit(asdict(result))


@cli.command("blame")
@click.argument("path")
@click.option("--ref", default=None)
@click.option("-L", "--lines", "line_range", default=None, help="Line range as START,END")
@click.pass_obj
def blame_cmd(state: CliState, path: str, ref: str | None, line_range: str | None) -> None:
    """Show who last changed each line of PATH."""
    start_line: int | None = None
    end_line: int | None = None
    if line_range is not None:
        start_raw, _, end_raw = line_range.partition(",")
        if not start_raw.isdigit() or (end_raw and not end_raw.isdigit()):
            raise click.BadParameter("expected START,END", param_hint="--lines")
        start_line = int(start_raw)
        end_line = int(end_raw) if end_raw else None

    options = BlameOptions(path=path, ref=ref, start_line=start_line, end_line=end_line)
    result = _run_operation(
        state,
        CapabilitySet.of(Capability.BLAME),
        lambda provider, context: provider.blame(options, context),
    )
    _emit(asdict(result))
