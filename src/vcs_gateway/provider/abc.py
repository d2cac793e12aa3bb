"""Provider contract.

Every backend (local CLI, in-process library, remote API) implements this
interface. Operations take ``(options, context)`` and return a typed result or
raise a VcsError subclass.

Provider instances are cached and shared by the factory, so every operation
must be safe to call concurrently with itself and with other operations on the
same instance.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

from vcs_gateway.capabilities import CapabilitySet
from vcs_gateway.context import OperationContext
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


class ProviderType(Enum):
    CLI = "cli"
    LIBRARY = "library"
    REMOTE = "remote"


class VcsProvider(ABC):
    """Abstract interface for version-control operations.

    All implementations (CLI-backed and fake) must implement this interface.
    """

    @property
    @abstractmethod
    def provider_type(self) -> ProviderType:
        """Backend kind of this provider."""
        ...

    @abstractmethod
    def capabilities(self) -> CapabilitySet:
        """Optional features this provider can execute.

        A provider must never advertise a capability it cannot execute.
        """
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """Check that the backend is usable (e.g. the binary runs)."""
        ...

    # ============================================================================
    # Working tree and index
    # ============================================================================

    @abstractmethod
    async def status(self, options: StatusOptions, context: OperationContext) -> StatusResult:
        """Get staged, unstaged, untracked and conflicted paths and the current branch.

        Raises:
            NotARepositoryError: If the working directory is not a repository
        """
        ...

    @abstractmethod
    async def add(self, options: AddOptions, context: OperationContext) -> AddResult:
        """Stage files.

        Raises:
            ValidationError: If neither paths nor all/update were given
        """
        ...

    @abstractmethod
    async def commit(self, options: CommitOptions, context: OperationContext) -> CommitResult:
        """Create a commit from the index.

        Raises:
            ValidationError: If the message is empty
            OperationFailedError: If there is nothing to commit
        """
        ...

    @abstractmethod
    async def diff(self, options: DiffOptions, context: OperationContext) -> DiffResult:
        """Show changes between refs, the index and the working tree.

        With ``include_untracked``, untracked files are appended as synthetic
        added-file diffs, in enumeration order, after the primary diff. This
        issues one extra invocation per untracked file.
        """
        ...

    @abstractmethod
    async def reset(self, options: ResetOptions, context: OperationContext) -> ResetResult:
        """Reset HEAD, the index or the working tree to a target."""
        ...

    @abstractmethod
    async def clean(self, options: CleanOptions, context: OperationContext) -> CleanResult:
        """Remove untracked files.

        Raises:
            ValidationError: If neither force nor dry_run was requested
        """
        ...

    # ============================================================================
    # History
    # ============================================================================

    @abstractmethod
    async def log(self, options: LogOptions, context: OperationContext) -> LogResult:
        """List commits, newest first."""
        ...

    @abstractmethod
    async def show(self, options: ShowOptions, context: OperationContext) -> ShowResult:
        """Show an object (commit, tag, tree or blob).

        Raises:
            ReferenceNotFoundError: If the object does not exist
        """
        ...

    @abstractmethod
    async def blame(self, options: BlameOptions, context: OperationContext) -> BlameResult:
        """Attribute each line of a file to the commit that last changed it."""
        ...

    @abstractmethod
    async def reflog(self, options: ReflogOptions, context: OperationContext) -> ReflogResult:
        """List reflog entries for a ref, newest first."""
        ...

    # ============================================================================
    # Branches and integration
    # ============================================================================

    @abstractmethod
    async def branch(self, options: BranchOptions, context: OperationContext) -> BranchResult:
        """List, create, delete or rename branches, or report the current one.

        Raises:
            ConflictError: If creating or renaming onto an existing branch
            ReferenceNotFoundError: If deleting or renaming a missing branch
        """
        ...

    @abstractmethod
    async def checkout(self, options: CheckoutOptions, context: OperationContext) -> CheckoutResult:
        """Switch branches or restore paths.

        Raises:
            ReferenceNotFoundError: If the target does not exist
            ConflictError: If local changes would be overwritten
        """
        ...

    @abstractmethod
    async def merge(self, options: MergeOptions, context: OperationContext) -> MergeResult:
        """Merge a branch into the current branch.

        Merge conflicts are reported in the result, not raised.
        """
        ...

    @abstractmethod
    async def rebase(self, options: RebaseOptions, context: OperationContext) -> RebaseResult:
        """Start, continue, skip or abort a rebase.

        Conflicts are reported in the result, not raised.
        """
        ...

    @abstractmethod
    async def cherry_pick(
        self, options: CherryPickOptions, context: OperationContext
    ) -> CherryPickResult:
        """Apply commits onto the current branch.

        Conflicts are reported in the result, not raised.
        """
        ...

    # ============================================================================
    # Remotes
    # ============================================================================

    @abstractmethod
    async def remote(self, options: RemoteOptions, context: OperationContext) -> RemoteResult:
        """List, add, remove or rename remotes, or get/set a remote URL."""
        ...

    @abstractmethod
    async def fetch(self, options: FetchOptions, context: OperationContext) -> FetchResult:
        """Download objects and refs from a remote."""
        ...

    @abstractmethod
    async def push(self, options: PushOptions, context: OperationContext) -> PushResult:
        """Update remote refs.

        Raises:
            ConflictError: If the remote rejected a ref update
        """
        ...

    @abstractmethod
    async def pull(self, options: PullOptions, context: OperationContext) -> PullResult:
        """Fetch and integrate a remote branch.

        Conflicts are reported in the result, not raised.
        """
        ...

    @abstractmethod
    async def clone(self, options: CloneOptions, context: OperationContext) -> CloneResult:
        """Clone a repository into ``options.path``.

        Raises:
            ConflictError: If the destination already exists and is not empty
        """
        ...

    # ============================================================================
    # Refs, stashes, worktrees, repositories
    # ============================================================================

    @abstractmethod
    async def tag(self, options: TagOptions, context: OperationContext) -> TagResult:
        """List, create or delete tags."""
        ...

    @abstractmethod
    async def stash(self, options: StashOptions, context: OperationContext) -> StashResult:
        """List, push, pop, apply, drop or clear stashes."""
        ...

    @abstractmethod
    async def worktree(self, options: WorktreeOptions, context: OperationContext) -> WorktreeResult:
        """List, add, remove, move, prune, lock or unlock worktrees.

        Raises:
            ConflictError: If the path is already a worktree or the branch is
                checked out elsewhere
        """
        ...

    @abstractmethod
    async def init(self, options: InitOptions, context: OperationContext) -> InitResult:
        """Create an empty repository."""
        ...
