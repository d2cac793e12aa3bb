"""Parsers for push, fetch, pull and merge output."""

from __future__ import annotations

import re

from vcs_gateway.results import PushRefUpdate

_CONFLICT_LINE = re.compile(r"^CONFLICT \([^)]*\): Merge conflict in (?P<path>.+)$")


def parse_push_porcelain(output: str) -> tuple[PushRefUpdate, ...]:
    """Parse ``git push --porcelain`` ref lines.

    Each ref line is "<flag><TAB><src>:<dst><TAB><summary>". The "To <url>"
    header and trailing "Done" line are ignored.
    """
    updates: list[PushRefUpdate] = []
    for line in output.split("\n"):
        if len(line) < 3 or line[1] != "\t":
            continue
        fields = line[2:].split("\t", 1)
        refspec = fields[0]
        summary = fields[1].strip() if len(fields) > 1 else ""
        source, _, destination = refspec.partition(":")
        updates.append(
            PushRefUpdate(flag=line[0], source=source, destination=destination, summary=summary)
        )
    return tuple(updates)


def parse_fetch_updates(output: str) -> tuple[str, ...]:
    """Ref update lines ("<summary> <from> -> <to>") from fetch/pull stderr."""
    return tuple(line.strip() for line in output.split("\n") if " -> " in line)


def is_fast_forward(output: str) -> bool:
    return "Fast-forward" in output or "Fast forward" in output


def is_up_to_date(output: str) -> bool:
    return "Already up to date" in output or "Already up-to-date" in output


def has_conflict_markers(output: str) -> bool:
    """True if git reported a content conflict (as opposed to a refusal)."""
    return any(line.startswith("CONFLICT") for line in output.split("\n")) or (
        "could not apply" in output.lower()
    )


def parse_conflict_paths(output: str) -> tuple[str, ...]:
    """Paths named in "CONFLICT (<kind>): Merge conflict in <path>" lines."""
    paths: list[str] = []
    for line in output.split("\n"):
        match = _CONFLICT_LINE.match(line.strip())
        if match is not None and match.group("path") not in paths:
            paths.append(match.group("path"))
    return tuple(paths)
