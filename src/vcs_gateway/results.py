"""Typed, backend-independent operation results.

Result shapes are identical regardless of the provider that produced them.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

# Branch name reported by status when HEAD is detached
DETACHED_HEAD = "HEAD (detached)"


@dataclass(frozen=True)
class StatusResult:
    """Working tree status.

    Attributes:
        current_branch: Branch name, DETACHED_HEAD, or None on an unborn branch
            with no name on record
        upstream: Upstream tracking branch (e.g. "origin/main"), if any
        ahead: Commits ahead of upstream
        behind: Commits behind upstream
        staged: Paths with index changes
        unstaged: Paths with working tree changes
        untracked: Untracked paths
        conflicted: Paths with unmerged (conflict) status codes
    """

    current_branch: str | None
    upstream: str | None
    ahead: int
    behind: int
    staged: tuple[str, ...]
    unstaged: tuple[str, ...]
    untracked: tuple[str, ...]
    conflicted: tuple[str, ...]

    @property
    def is_clean(self) -> bool:
        return not (self.staged or self.unstaged or self.untracked or self.conflicted)


@dataclass(frozen=True)
class AddResult:
    staged_files: tuple[str, ...]


@dataclass(frozen=True)
class CommitResult:
    commit_hash: str
    message: str
    branch: str | None
    files_changed: int
    insertions: int
    deletions: int


@dataclass(frozen=True)
class CommitInfo:
    hash: str
    short_hash: str
    author_name: str
    author_email: str
    timestamp: int
    parents: tuple[str, ...]
    refs: tuple[str, ...]
    subject: str
    body: str


@dataclass(frozen=True)
class LogResult:
    commits: tuple[CommitInfo, ...]


@dataclass(frozen=True)
class ShowResult:
    object: str
    content: str


@dataclass(frozen=True)
class DiffResult:
    """Diff output with aggregate counts.

    ``insertions`` and ``deletions`` are None in name-only mode, where no
    stat pass runs.
    """

    diff: str
    files_changed: int
    insertions: int | None
    deletions: int | None
    binary: bool


@dataclass(frozen=True)
class FileStat:
    path: str
    additions: int
    deletions: int
    binary: bool


@dataclass(frozen=True)
class DiffStat:
    files: tuple[FileStat, ...]
    total_additions: int
    total_deletions: int


@dataclass(frozen=True)
class BranchInfo:
    name: str
    commit: str
    is_current: bool
    upstream: str | None
    ahead: int
    behind: int


@dataclass(frozen=True)
class BranchResult:
    branches: tuple[BranchInfo, ...]
    current: str | None


@dataclass(frozen=True)
class CheckoutResult:
    target: str
    created_branch: bool
    paths: tuple[str, ...]


@dataclass(frozen=True)
class MergeResult:
    success: bool
    fast_forward: bool
    conflicts: bool
    conflicted_files: tuple[str, ...]
    merged_branch: str | None


@dataclass(frozen=True)
class RebaseResult:
    success: bool
    conflicts: bool
    conflicted_files: tuple[str, ...]


@dataclass(frozen=True)
class CherryPickResult:
    success: bool
    conflicts: bool
    conflicted_files: tuple[str, ...]
    picked: tuple[str, ...]


@dataclass(frozen=True)
class RemoteInfo:
    name: str
    fetch_url: str | None
    push_url: str | None


@dataclass(frozen=True)
class RemoteResult:
    remotes: tuple[RemoteInfo, ...]
    url: str | None


@dataclass(frozen=True)
class FetchResult:
    remote: str | None
    updated: tuple[str, ...]


@dataclass(frozen=True)
class PushRefUpdate:
    """One line of ``git push --porcelain`` output.

    ``flag`` is git's status character: " " fast-forward, "+" forced update,
    "-" deleted, "*" new ref, "!" rejected, "=" up to date.
    """

    flag: str
    source: str
    destination: str
    summary: str

    @property
    def rejected(self) -> bool:
        return self.flag == "!"


@dataclass(frozen=True)
class PushResult:
    remote: str
    branch: str | None
    updates: tuple[PushRefUpdate, ...]

    @property
    def rejected(self) -> tuple[PushRefUpdate, ...]:
        return tuple(u for u in self.updates if u.rejected)


@dataclass(frozen=True)
class PullResult:
    remote: str | None
    branch: str | None
    fast_forward: bool
    up_to_date: bool
    conflicts: bool
    conflicted_files: tuple[str, ...]


@dataclass(frozen=True)
class TagInfo:
    name: str
    commit: str
    subject: str
    annotated: bool


@dataclass(frozen=True)
class TagResult:
    tags: tuple[TagInfo, ...]
    created: str | None
    deleted: str | None


@dataclass(frozen=True)
class StashEntry:
    index: int
    ref: str
    commit: str
    branch: str | None
    message: str


@dataclass(frozen=True)
class StashResult:
    mode: str
    stashes: tuple[StashEntry, ...]
    conflicts: bool


@dataclass(frozen=True)
class WorktreeInfo:
    path: Path
    head: str | None
    branch: str | None
    is_bare: bool
    is_detached: bool
    is_locked: bool
    is_prunable: bool
    is_main: bool


@dataclass(frozen=True)
class WorktreeResult:
    mode: str
    worktrees: tuple[WorktreeInfo, ...]


@dataclass(frozen=True)
class ResetResult:
    mode: str
    target: str
    unstaged_files: tuple[str, ...]


@dataclass(frozen=True)
class BlameLine:
    commit_hash: str
    author: str
    author_email: str
    timestamp: int
    line_number: int
    content: str


@dataclass(frozen=True)
class BlameResult:
    path: str
    lines: tuple[BlameLine, ...]


@dataclass(frozen=True)
class ReflogEntry:
    commit_hash: str
    selector: str
    action: str
    message: str
    timestamp: int


@dataclass(frozen=True)
class ReflogResult:
    ref: str
    entries: tuple[ReflogEntry, ...]


@dataclass(frozen=True)
class CleanResult:
    files: tuple[str, ...]
    dry_run: bool


@dataclass(frozen=True)
class InitResult:
    path: Path
    initial_branch: str | None
    bare: bool


@dataclass(frozen=True)
class CloneResult:
    path: Path
    url: str
    branch: str | None
