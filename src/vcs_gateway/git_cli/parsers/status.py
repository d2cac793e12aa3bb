"""Parser for ``git status --porcelain=v1 --branch -z``."""

from __future__ import annotations

import re

from vcs_gateway.results import DETACHED_HEAD, StatusResult

CONFLICT_CODES = frozenset({"UU", "AA", "DD", "AU", "UA", "DU", "UD"})

_TRACKING = re.compile(r"\[(?P<info>[^\]]*)\]\s*$")
_AHEAD = re.compile(r"ahead (\d+)")
_BEHIND = re.compile(r"behind (\d+)")


def _parse_branch_header(header: str) -> tuple[str | None, str | None, int, int]:
    """Parse the ``## ...`` header into (branch, upstream, ahead, behind)."""
    text = header[3:].strip()
    ahead = behind = 0

    tracking = _TRACKING.search(text)
    if tracking is not None:
        info = tracking.group("info")
        ahead_match = _AHEAD.search(info)
        behind_match = _BEHIND.search(info)
        ahead = int(ahead_match.group(1)) if ahead_match else 0
        behind = int(behind_match.group(1)) if behind_match else 0
        text = text[: tracking.start()].strip()

    if text.startswith("HEAD (no branch)"):
        return DETACHED_HEAD, None, ahead, behind

    for prefix in ("No commits yet on ", "Initial commit on "):
        if text.startswith(prefix):
            return text[len(prefix) :].strip() or None, None, ahead, behind

    if "..." in text:
        branch, upstream = text.split("...", 1)
        return branch or None, upstream or None, ahead, behind

    return text or None, None, ahead, behind


def parse_status(output: str) -> StatusResult:
    """Split ``-z`` status records into staged, unstaged, untracked and conflicted paths.

    Records are NUL-terminated and paths are unquoted. A rename or copy record
    holds the new path and is followed by a record with the old path, which
    is skipped. Unknown or malformed records are skipped. Empty input yields
    an empty result.
    """
    current_branch: str | None = None
    upstream: str | None = None
    ahead = behind = 0
    staged: list[str] = []
    unstaged: list[str] = []
    untracked: list[str] = []
    conflicted: list[str] = []

    records = iter(output.split("\0"))
    for record in records:
        if record.startswith("## "):
            current_branch, upstream, ahead, behind = _parse_branch_header(record)
            continue
        if len(record) < 4 or record[2] != " ":
            continue

        code = record[:2]
        path = record[3:]
        if "R" in code or "C" in code:
            next(records, None)

        if code == "??":
            untracked.append(path)
            continue
        if code == "!!":
            continue
        if code in CONFLICT_CODES:
            conflicted.append(path)
            continue
        if code[0] not in (" ", "?"):
            staged.append(path)
        if code[1] not in (" ", "?"):
            unstaged.append(path)

    return StatusResult(
        current_branch=current_branch,
        upstream=upstream,
        ahead=ahead,
        behind=behind,
        staged=tuple(staged),
        unstaged=tuple(unstaged),
        untracked=tuple(untracked),
        conflicted=tuple(conflicted),
    )


def parse_conflicted_files(output: str) -> tuple[str, ...]:
    """Conflicted paths from ``git status --porcelain -z`` output."""
    return parse_status(output).conflicted
