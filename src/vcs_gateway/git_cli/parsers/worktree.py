"""Parser for ``git worktree list --porcelain``."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from vcs_gateway.results import WorktreeInfo


@dataclass
class _Pending:
    path: Path
    head: str | None = None
    branch: str | None = None
    flags: set[str] = field(default_factory=set)

    def finish(self, *, is_main: bool) -> WorktreeInfo:
        return WorktreeInfo(
            path=self.path,
            head=self.head,
            branch=self.branch,
            is_bare="bare" in self.flags,
            is_detached="detached" in self.flags,
            is_locked="locked" in self.flags,
            is_prunable="prunable" in self.flags,
            is_main=is_main,
        )


def parse_worktree_list(output: str) -> tuple[WorktreeInfo, ...]:
    """Parse blank-line separated worktree stanzas.

    The first stanza is the main worktree (git guarantees this ordering).
    Attribute lines appearing before any ``worktree`` line are ignored.
    """
    stanzas: list[_Pending] = []
    current: _Pending | None = None

    for raw in output.split("\n"):
        line = raw.strip()
        if line == "":
            current = None
            continue
        if line.startswith("worktree "):
            current = _Pending(path=Path(line.split(maxsplit=1)[1]))
            stanzas.append(current)
            continue
        if current is None:
            continue

        if line.startswith("HEAD "):
            current.head = line.split(maxsplit=1)[1]
        elif line.startswith("branch "):
            current.branch = line.split(maxsplit=1)[1].removeprefix("refs/heads/")
        else:
            # bare, detached, "locked [reason]", "prunable [reason]"
            current.flags.add(line.split(maxsplit=1)[0])

    return tuple(pending.finish(is_main=index == 0) for index, pending in enumerate(stanzas))
