"""Per-operation option bags.

All options are frozen; providers never mutate them. Sequences are tuples.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

BranchMode = Literal["list", "create", "delete", "rename", "current"]
RebaseMode = Literal["start", "continue", "abort", "skip"]
CherryPickMode = Literal["pick", "continue", "abort"]
RemoteMode = Literal["list", "add", "remove", "rename", "get_url", "set_url"]
TagMode = Literal["list", "create", "delete"]
StashMode = Literal["list", "push", "pop", "apply", "drop", "clear"]
WorktreeMode = Literal["list", "add", "remove", "move", "prune", "lock", "unlock"]
ResetMode = Literal["soft", "mixed", "hard", "merge", "keep"]


@dataclass(frozen=True)
class StatusOptions:
    include_untracked: bool = True


@dataclass(frozen=True)
class AddOptions:
    """Files to stage. ``all`` stages every change (``git add --all``)."""

    paths: tuple[str, ...] = ()
    all: bool = False
    update: bool = False
    force: bool = False


@dataclass(frozen=True)
class CommitOptions:
    message: str
    author: str | None = None
    amend: bool = False
    allow_empty: bool = False
    no_verify: bool = False
    sign: bool = False


@dataclass(frozen=True)
class LogOptions:
    max_count: int | None = None
    skip: int | None = None
    ref: str | None = None
    author: str | None = None
    since: str | None = None
    until: str | None = None
    grep: str | None = None
    path: str | None = None
    first_parent: bool = False


@dataclass(frozen=True)
class ShowOptions:
    object: str = "HEAD"
    stat: bool = False
    path: str | None = None


@dataclass(frozen=True)
class DiffOptions:
    """Options for diff.

    Attributes:
        source: First ref to compare
        target: Second ref to compare
        path: Path filter, always placed after the ``--`` separator
        staged: Compare the index against HEAD (``--cached``)
        unified: Lines of context (``--unified=N``)
        stat: Return only the ``--stat`` summary
        name_only: Return only changed file names
        include_untracked: Append synthetic added-file diffs for untracked files
    """

    source: str | None = None
    target: str | None = None
    path: str | None = None
    staged: bool = False
    unified: int | None = None
    stat: bool = False
    name_only: bool = False
    include_untracked: bool = False


@dataclass(frozen=True)
class BranchOptions:
    mode: BranchMode = "list"
    name: str | None = None
    new_name: str | None = None
    start_point: str | None = None
    force: bool = False
    all: bool = False
    remote: bool = False


@dataclass(frozen=True)
class CheckoutOptions:
    target: str
    create_branch: bool = False
    force: bool = False
    paths: tuple[str, ...] = ()


@dataclass(frozen=True)
class MergeOptions:
    branch: str | None = None
    no_ff: bool = False
    ff_only: bool = False
    squash: bool = False
    message: str | None = None
    abort: bool = False


@dataclass(frozen=True)
class RebaseOptions:
    mode: RebaseMode = "start"
    upstream: str | None = None
    onto: str | None = None


@dataclass(frozen=True)
class CherryPickOptions:
    commits: tuple[str, ...] = ()
    mode: CherryPickMode = "pick"
    no_commit: bool = False


@dataclass(frozen=True)
class RemoteOptions:
    mode: RemoteMode = "list"
    name: str | None = None
    url: str | None = None
    new_name: str | None = None


@dataclass(frozen=True)
class FetchOptions:
    remote: str | None = None
    refspec: str | None = None
    prune: bool = False
    all: bool = False
    tags: bool = False
    depth: int | None = None


@dataclass(frozen=True)
class PushOptions:
    remote: str = "origin"
    branch: str | None = None
    force: bool = False
    force_with_lease: bool = False
    set_upstream: bool = False
    tags: bool = False
    delete: bool = False


@dataclass(frozen=True)
class PullOptions:
    remote: str | None = None
    branch: str | None = None
    rebase: bool = False
    ff_only: bool = False


@dataclass(frozen=True)
class TagOptions:
    mode: TagMode = "list"
    name: str | None = None
    target: str | None = None
    message: str | None = None
    sign: bool = False
    pattern: str | None = None


@dataclass(frozen=True)
class StashOptions:
    mode: StashMode = "list"
    message: str | None = None
    stash_ref: str | None = None
    include_untracked: bool = False
    keep_index: bool = False
    paths: tuple[str, ...] = ()


@dataclass(frozen=True)
class WorktreeOptions:
    mode: WorktreeMode = "list"
    path: Path | None = None
    new_path: Path | None = None
    branch: str | None = None
    commit_ish: str | None = None
    create_branch: bool = False
    force: bool = False
    reason: str | None = None


@dataclass(frozen=True)
class ResetOptions:
    mode: ResetMode = "mixed"
    target: str = "HEAD"
    paths: tuple[str, ...] = ()


@dataclass(frozen=True)
class BlameOptions:
    path: str
    ref: str | None = None
    start_line: int | None = None
    end_line: int | None = None
    ignore_whitespace: bool = False


@dataclass(frozen=True)
class ReflogOptions:
    ref: str = "HEAD"
    max_count: int | None = None


@dataclass(frozen=True)
class CleanOptions:
    """Options for clean. One of ``force`` or ``dry_run`` is required."""

    force: bool = False
    dry_run: bool = False
    directories: bool = False
    ignored: bool = False
    paths: tuple[str, ...] = ()


@dataclass(frozen=True)
class InitOptions:
    path: Path | None = None
    initial_branch: str | None = None
    bare: bool = False


@dataclass(frozen=True)
class CloneOptions:
    url: str
    path: Path
    branch: str | None = None
    depth: int | None = None
    bare: bool = False
    mirror: bool = False
