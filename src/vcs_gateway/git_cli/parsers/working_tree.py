"""Parsers for add, commit, clean and reset output."""

from __future__ import annotations

import re

_ADD_LINE = re.compile(r"^(?:add|remove) '(?P<path>.+)'$")
_CLEAN_PREFIXES = ("Would remove ", "Removing ")
_RESET_LINE = re.compile(r"^[A-Z]\t(?P<path>.+)$")
_COMMIT_HEADER = re.compile(
    r"^\[(?P<branch>.+?)(?: \(root-commit\))? (?P<hash>[0-9a-f]{4,})\] (?P<subject>.*)$"
)


def parse_add_verbose(output: str) -> tuple[str, ...]:
    """Paths from ``git add --verbose`` ("add 'path'" / "remove 'path'")."""
    paths: list[str] = []
    for line in output.split("\n"):
        match = _ADD_LINE.match(line.strip())
        if match is not None:
            paths.append(match.group("path"))
    return tuple(paths)


def parse_clean(output: str) -> tuple[str, ...]:
    """Paths from ``git clean`` ("Would remove x" in dry runs, "Removing x" otherwise)."""
    paths: list[str] = []
    for line in output.split("\n"):
        for prefix in _CLEAN_PREFIXES:
            if line.startswith(prefix):
                paths.append(line[len(prefix) :])
                break
    return tuple(paths)


def parse_reset_unstaged(output: str) -> tuple[str, ...]:
    """Paths listed after "Unstaged changes after reset:" by a mixed reset."""
    return tuple(
        match.group("path")
        for match in (_RESET_LINE.match(line) for line in output.split("\n"))
        if match is not None
    )


def parse_commit_header(output: str) -> tuple[str | None, str | None]:
    """(branch, short hash) from the "[main 1a2b3c4] subject" line of ``git commit``.

    Commits on a detached HEAD report a branch of None.
    """
    for line in output.split("\n"):
        match = _COMMIT_HEADER.match(line.strip())
        if match is None:
            continue
        branch = match.group("branch")
        return (None if branch == "detached HEAD" else branch), match.group("hash")
    return None, None
