"""Parsers for branch, tag and remote listings."""

from __future__ import annotations

import re

from vcs_gateway.results import BranchInfo, RemoteInfo, TagInfo

FIELD_SEP = "\x1f"

BRANCH_FORMAT = (
    "%(HEAD)%1f%(refname:short)%1f%(objectname)%1f%(upstream:short)%1f%(upstream:track)"
)

TAG_FORMAT = (
    "%(refname:short)%1f%(objectname)%1f%(objecttype)%1f%(*objectname)%1f%(contents:subject)"
)

_AHEAD = re.compile(r"ahead (\d+)")
_BEHIND = re.compile(r"behind (\d+)")
_REMOTE_LINE = re.compile(r"^(?P<name>\S+)\s+(?P<url>.+?)\s+\((?P<kind>fetch|push)\)$")


def _track_counts(track: str) -> tuple[int, int]:
    ahead = _AHEAD.search(track)
    behind = _BEHIND.search(track)
    return (int(ahead.group(1)) if ahead else 0, int(behind.group(1)) if behind else 0)


def parse_branch_list(output: str) -> tuple[BranchInfo, ...]:
    """Parse ``git branch --format=BRANCH_FORMAT`` output.

    Detached-HEAD pseudo entries ("(HEAD detached at ...)") are skipped.
    """
    branches: list[BranchInfo] = []
    for line in output.split("\n"):
        fields = line.split(FIELD_SEP)
        if len(fields) < 5:
            continue
        head, name, commit, upstream, track = fields[:5]
        if not name or name.startswith("("):
            continue
        ahead, behind = _track_counts(track)
        branches.append(
            BranchInfo(
                name=name,
                commit=commit,
                is_current=head.strip() == "*",
                upstream=upstream or None,
                ahead=ahead,
                behind=behind,
            )
        )
    return tuple(branches)


def parse_tag_list(output: str) -> tuple[TagInfo, ...]:
    """Parse ``git tag --list --format=TAG_FORMAT`` output.

    Annotated tags report the commit they peel to rather than the tag object.
    """
    tags: list[TagInfo] = []
    for line in output.split("\n"):
        fields = line.split(FIELD_SEP)
        if len(fields) < 5 or not fields[0]:
            continue
        name, object_name, object_type, peeled, subject = fields[:5]
        annotated = object_type == "tag"
        tags.append(
            TagInfo(
                name=name,
                commit=peeled if annotated and peeled else object_name,
                subject=subject,
                annotated=annotated,
            )
        )
    return tuple(tags)


def parse_remote_list(output: str) -> tuple[RemoteInfo, ...]:
    """Parse ``git remote -v`` into one entry per remote, in first-seen order."""
    order: list[str] = []
    urls: dict[str, dict[str, str]] = {}
    for line in output.split("\n"):
        match = _REMOTE_LINE.match(line.strip())
        if match is None:
            continue
        name = match.group("name")
        if name not in urls:
            order.append(name)
            urls[name] = {}
        urls[name][match.group("kind")] = match.group("url")

    return tuple(
        RemoteInfo(name=name, fetch_url=urls[name].get("fetch"), push_url=urls[name].get("push"))
        for name in order
    )
