"""Git provider backed by the git command line."""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from vcs_gateway.capabilities import GIT_CLI_CAPABILITIES, Capability, CapabilitySet
from vcs_gateway.config import GatewayConfig
from vcs_gateway.context import OperationContext
from vcs_gateway.errors import VcsError
from vcs_gateway.executor.abc import (
    Executor,
    ProcessFailedError,
    ProcessSpawnError,
    ProcessTimeoutError,
)
from vcs_gateway.git_cli.command import build_git_command
from vcs_gateway.git_cli.error_mapper import map_git_error
from vcs_gateway.git_cli.operations.branches import (
    execute_branch,
    execute_checkout,
    execute_cherry_pick,
    execute_merge,
    execute_rebase,
)
from vcs_gateway.git_cli.operations.diff import execute_diff
from vcs_gateway.git_cli.operations.history import (
    execute_blame,
    execute_log,
    execute_reflog,
    execute_show,
)
from vcs_gateway.git_cli.operations.remotes import (
    execute_clone,
    execute_fetch,
    execute_pull,
    execute_push,
    execute_remote,
)
from vcs_gateway.git_cli.operations.repository import (
    execute_init,
    execute_stash,
    execute_tag,
    execute_worktree,
)
from vcs_gateway.git_cli.operations.working_tree import (
    execute_add,
    execute_clean,
    execute_commit,
    execute_reset,
    execute_status,
)
from vcs_gateway.git_cli.runner import GitRunner
from vcs_gateway.options import (
    AddOptions,
    BlameOptions,
    BranchOptions,
    CheckoutOptions,
    CherryPickOptions,
    CleanOptions,
    CloneOptions,
    CommitOptions,
    DiffOptions,
    FetchOptions,
    InitOptions,
    LogOptions,
    MergeOptions,
    PullOptions,
    PushOptions,
    RebaseOptions,
    ReflogOptions,
    RemoteOptions,
    ResetOptions,
    ShowOptions,
    StashOptions,
    StatusOptions,
    TagOptions,
    WorktreeOptions,
)
from vcs_gateway.provider.abc import ProviderType
from vcs_gateway.provider.base import BaseProvider
from vcs_gateway.results import (
    AddResult,
    BlameResult,
    BranchResult,
    CheckoutResult,
    CherryPickResult,
    CleanResult,
    CloneResult,
    CommitResult,
    DiffResult,
    FetchResult,
    InitResult,
    LogResult,
    MergeResult,
    PullResult,
    PushResult,
    RebaseResult,
    ReflogResult,
    RemoteResult,
    ResetResult,
    ShowResult,
    StashResult,
    StatusResult,
    TagResult,
    WorktreeResult,
)

logger = logging.getLogger(__name__)


class GitCliProvider(BaseProvider):
    """Runs every operation as one or more ``git`` subprocesses.

    Holds only immutable configuration and a shared executor; it keeps no
    per-repository state, so one instance serves concurrent calls against any
    number of working directories.
    """

    def __init__(self, config: GatewayConfig, executor: Executor) -> None:
        self._config = config
        self._runner = GitRunner(
            executor,
            binary=config.git_binary,
            default_timeout=config.default_timeout,
            network_timeout=config.network_timeout,
        )

    @property
    def provider_type(self) -> ProviderType:
        return ProviderType.CLI

    def capabilities(self) -> CapabilitySet:
        return GIT_CLI_CAPABILITIES

    async def health_check(self) -> bool:
        """Run ``git version``; False if git cannot be started or fails."""
        context = OperationContext(working_directory=Path(tempfile.gettempdir()))
        try:
            result = await self._runner.run(build_git_command("version"), context)
        except (ProcessSpawnError, ProcessTimeoutError, ProcessFailedError) as e:
            logger.warning("git health check failed: %s", e)
            return False
        logger.debug("git health check: %s", result.stdout.strip())
        return True

    def _map_error(self, error: Exception, operation: str) -> VcsError:
        return map_git_error(error, operation)

    # Working tree and index

    async def status(self, options: StatusOptions, context: OperationContext) -> StatusResult:
        return await self._invoke(
            "status", context, lambda: execute_status(options, context, self._runner)
        )

    async def add(self, options: AddOptions, context: OperationContext) -> AddResult:
        return await self._invoke(
            "add", context, lambda: execute_add(options, context, self._runner)
        )

    async def commit(self, options: CommitOptions, context: OperationContext) -> CommitResult:
        if options.sign:
            self._assert_capability(Capability.SIGNING, "commit")
        return await self._invoke(
            "commit", context, lambda: execute_commit(options, context, self._runner)
        )

    async def diff(self, options: DiffOptions, context: OperationContext) -> DiffResult:
        return await self._invoke(
            "diff", context, lambda: execute_diff(options, context, self._runner)
        )

    async def reset(self, options: ResetOptions, context: OperationContext) -> ResetResult:
        return await self._invoke(
            "reset", context, lambda: execute_reset(options, context, self._runner)
        )

    async def clean(self, options: CleanOptions, context: OperationContext) -> CleanResult:
        return await self._invoke(
            "clean", context, lambda: execute_clean(options, context, self._runner)
        )

    # History

    async def log(self, options: LogOptions, context: OperationContext) -> LogResult:
        return await self._invoke(
            "log", context, lambda: execute_log(options, context, self._runner)
        )

    async def show(self, options: ShowOptions, context: OperationContext) -> ShowResult:
        return await self._invoke(
            "show", context, lambda: execute_show(options, context, self._runner)
        )

    async def blame(self, options: BlameOptions, context: OperationContext) -> BlameResult:
        return await self._invoke(
            "blame", context, lambda: execute_blame(options, context, self._runner)
        )

    async def reflog(self, options: ReflogOptions, context: OperationContext) -> ReflogResult:
        return await self._invoke(
            "reflog", context, lambda: execute_reflog(options, context, self._runner)
        )

    # Branches and integration

    async def branch(self, options: BranchOptions, context: OperationContext) -> BranchResult:
        return await self._invoke(
            "branch", context, lambda: execute_branch(options, context, self._runner)
        )

    async def checkout(self, options: CheckoutOptions, context: OperationContext) -> CheckoutResult:
        return await self._invoke(
            "checkout", context, lambda: execute_checkout(options, context, self._runner)
        )

    async def merge(self, options: MergeOptions, context: OperationContext) -> MergeResult:
        return await self._invoke(
            "merge", context, lambda: execute_merge(options, context, self._runner)
        )

    async def rebase(self, options: RebaseOptions, context: OperationContext) -> RebaseResult:
        return await self._invoke(
            "rebase", context, lambda: execute_rebase(options, context, self._runner)
        )

    async def cherry_pick(
        self, options: CherryPickOptions, context: OperationContext
    ) -> CherryPickResult:
        return await self._invoke(
            "cherry_pick", context, lambda: execute_cherry_pick(options, context, self._runner)
        )

    # Remotes

    async def remote(self, options: RemoteOptions, context: OperationContext) -> RemoteResult:
        return await self._invoke(
            "remote", context, lambda: execute_remote(options, context, self._runner)
        )

    async def fetch(self, options: FetchOptions, context: OperationContext) -> FetchResult:
        return await self._invoke(
            "fetch", context, lambda: execute_fetch(options, context, self._runner)
        )

    async def push(self, options: PushOptions, context: OperationContext) -> PushResult:
        return await self._invoke(
            "push", context, lambda: execute_push(options, context, self._runner)
        )

    async def pull(self, options: PullOptions, context: OperationContext) -> PullResult:
        return await self._invoke(
            "pull", context, lambda: execute_pull(options, context, self._runner)
        )

    async def clone(self, options: CloneOptions, context: OperationContext) -> CloneResult:
        return await self._invoke(
            "clone", context, lambda: execute_clone(options, context, self._runner)
        )

    # Refs, stashes, worktrees, repositories

    async def tag(self, options: TagOptions, context: OperationContext) -> TagResult:
        if options.sign:
            self._assert_capability(Capability.SIGNING, "tag")
        return await self._invoke(
            "tag", context, lambda: execute_tag(options, context, self._runner)
        )

    async def stash(self, options: StashOptions, context: OperationContext) -> StashResult:
        return await self._invoke(
            "stash", context, lambda: execute_stash(options, context, self._runner)
        )

    async def worktree(self, options: WorktreeOptions, context: OperationContext) -> WorktreeResult:
        return await self._invoke(
            "worktree", context, lambda: execute_worktree(options, context, self._runner)
        )

    async def init(self, options: InitOptions, context: OperationContext) -> InitResult:
        return await self._invoke(
            "init", context, lambda: execute_init(options, context, self._runner)
        )
