"""Fake provider for testing.

FakeProvider is an in-memory backend that returns canned results. It runs
through the same BaseProvider funnel as the real providers (capability
re-assertion, working-directory validation, error mapping), so it can stand
in for any backend type in factory and contract tests.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from vcs_gateway.capabilities import GIT_CLI_CAPABILITIES, Capability, CapabilitySet
from vcs_gateway.context import OperationContext
from vcs_gateway.errors import OperationFailedError, VcsError
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


@dataclass(frozen=True)
class FakeCall:
    operation: str
    options: object
    context: OperationContext


class FakeProvider(BaseProvider):
    """In-memory provider with canned results and call tracking.

    Constructor Injection: results and errors are keyed by operation name
    ("status", "cherry_pick", ...). An operation with neither configured
    fails with an internal OperationFailedError.
    """

    def __init__(
        self,
        *,
        provider_type: ProviderType = ProviderType.LIBRARY,
        capabilities: CapabilitySet = GIT_CLI_CAPABILITIES,
        healthy: bool = True,
        results: Mapping[str, object] | None = None,
        errors: Mapping[str, VcsError] | None = None,
    ) -> None:
        self._provider_type = provider_type
        self._capabilities = capabilities
        self._healthy = healthy
        self._results = dict(results) if results is not None else {}
        self._errors = dict(errors) if errors is not None else {}
        self._calls: list[FakeCall] = []
        self._health_checks = 0

    @property
    def provider_type(self) -> ProviderType:
        return self._provider_type

    def capabilities(self) -> CapabilitySet:
        return self._capabilities

    async def health_check(self) -> bool:
        self._health_checks += 1
        return self._healthy

    @property
    def calls(self) -> list[FakeCall]:
        """Operations that passed the capability and context checks.

        This property is for test assertions only.
        """
        return list(self._calls)

    @property
    def health_checks(self) -> int:
        return self._health_checks

    def set_result(self, operation: str, result: object) -> None:
        self._results[operation] = result

    async def _respond(
        self, operation: str, options: object, context: OperationContext, result_type: type
    ) -> Any:
        async def canned() -> object:
            self._calls.append(FakeCall(operation=operation, options=options, context=context))
            if operation in self._errors:
                raise self._errors[operation]
            if operation not in self._results:
                raise OperationFailedError(
                    f"FakeProvider has no result configured for {operation}", internal=True
                )
            result = self._results[operation]
            if not isinstance(result, result_type):
                raise TypeError(
                    f"Configured {operation} result is {type(result).__name__}, "
                    f"expected {result_type.__name__}"
                )
            return result

        return await self._invoke(operation, context, canned)

    async def status(self, options: StatusOptions, context: OperationContext) -> StatusResult:
        return await self._respond("status", options, context, StatusResult)

    async def add(self, options: AddOptions, context: OperationContext) -> AddResult:
        return await self._respond("add", options, context, AddResult)

    async def commit(self, options: CommitOptions, context: OperationContext) -> CommitResult:
        if options.sign:
            self._assert_capability(Capability.SIGNING, "commit")
        return await self._respond("commit", options, context, CommitResult)

    async def diff(self, options: DiffOptions, context: OperationContext) -> DiffResult:
        return await self._respond("diff", options, context, DiffResult)

    async def reset(self, options: ResetOptions, context: OperationContext) -> ResetResult:
        return await self._respond("reset", options, context, ResetResult)

    async def clean(self, options: CleanOptions, context: OperationContext) -> CleanResult:
        return await self._respond("clean", options, context, CleanResult)

    async def log(self, options: LogOptions, context: OperationContext) -> LogResult:
        return await self._respond("log", options, context, LogResult)

    async def show(self, options: ShowOptions, context: OperationContext) -> ShowResult:
        return await self._respond("show", options, context, ShowResult)

    async def blame(self, options: BlameOptions, context: OperationContext) -> BlameResult:
        return await self._respond("blame", options, context, BlameResult)

    async def reflog(self, options: ReflogOptions, context: OperationContext) -> ReflogResult:
        return await self._respond("reflog", options, context, ReflogResult)

    async def branch(self, options: BranchOptions, context: OperationContext) -> BranchResult:
        return await self._respond("branch", options, context, BranchResult)

    async def checkout(self, options: CheckoutOptions, context: OperationContext) -> CheckoutResult:
        return await self._respond("checkout", options, context, CheckoutResult)

    async def merge(self, options: MergeOptions, context: OperationContext) -> MergeResult:
        return await self._respond("merge", options, context, MergeResult)

    async def rebase(self, options: RebaseOptions, context: OperationContext) -> RebaseResult:
        return await self._respond("rebase", options, context, RebaseResult)

    async def cherry_pick(
        self, options: CherryPickOptions, context: OperationContext
    ) -> CherryPickResult:
        return await self._respond("cherry_pick", options, context, CherryPickResult)

    async def remote(self, options: RemoteOptions, context: OperationContext) -> RemoteResult:
        return await self._respond("remote", options, context, RemoteResult)

    async def fetch(self, options: FetchOptions, context: OperationContext) -> FetchResult:
        return await self._respond("fetch", options, context, FetchResult)

    async def push(self, options: PushOptions, context: OperationContext) -> PushResult:
        return await self._respond("push", options, context, PushResult)

    async def pull(self, options: PullOptions, context: OperationContext) -> PullResult:
        return await self._respond("pull", options, context, PullResult)

    async def clone(self, options: CloneOptions, context: OperationContext) -> CloneResult:
        return await self._respond("clone", options, context, CloneResult)

    async def tag(self, options: TagOptions, context: OperationContext) -> TagResult:
        if options.sign:
            self._assert_capability(Capability.SIGNING, "tag")
        return await self._respond("tag", options, context, TagResult)

    async def stash(self, options: StashOptions, context: OperationContext) -> StashResult:
        return await self._respond("stash", options, context, StashResult)

    async def worktree(self, options: WorktreeOptions, context: OperationContext) -> WorktreeResult:
        return await self._respond("worktree", options, context, WorktreeResult)

    async def init(self, options: InitOptions, context: OperationContext) -> InitResult:
        return await self._respond("init", options, context, InitResult)
