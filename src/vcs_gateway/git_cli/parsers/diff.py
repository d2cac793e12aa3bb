"""Parsers for diff output: ``--numstat``, ``--name-only``, ``-z`` listings and summaries."""

from __future__ import annotations

import re

from vcs_gateway.results import DiffStat, FileStat

_SUMMARY_FILES = re.compile(r"(\d+) files? changed")
_SUMMARY_INSERTIONS = re.compile(r"(\d+) insertions?\(\+\)")
_SUMMARY_DELETIONS = re.compile(r"(\d+) deletions?\(-\)")


def parse_numstat(output: str) -> DiffStat:
    """Parse ``--numstat`` output into per-file stats and totals.

    Lines are "added<TAB>deleted<TAB>path"; binary files report "-" for both
    counts and contribute 0/0 while still appearing in ``files``. Counts are
    exact regardless of change size. Summary lines and anything else that is
    not a numstat record are skipped.
    """
    files: list[FileStat] = []
    for line in output.split("\n"):
        parts = line.split("\t", 2)
        if len(parts) != 3 or not parts[2]:
            continue
        added, deleted, path = parts
        if added == "-" and deleted == "-":
            files.append(FileStat(path=path, additions=0, deletions=0, binary=True))
            continue
        if not (added.isdigit() and deleted.isdigit()):
            continue
        files.append(
            FileStat(path=path, additions=int(added), deletions=int(deleted), binary=False)
        )

    return DiffStat(
        files=tuple(files),
        total_additions=sum(f.additions for f in files if not f.binary),
        total_deletions=sum(f.deletions for f in files if not f.binary),
    )


def parse_name_only(output: str) -> tuple[str, ...]:
    return tuple(line for line in output.split("\n") if line)


def parse_nul_separated(output: str) -> tuple[str, ...]:
    """Entries of a ``-z`` listing, verbatim and in order."""
    return tuple(entry for entry in output.split("\0") if entry)


def parse_change_summary(output: str) -> tuple[int, int, int]:
    """Extract (files changed, insertions, deletions) from a summary line.

    Matches lines like "3 files changed, 10 insertions(+), 2 deletions(-)"
    anywhere in the output. Missing parts count as zero.
    """
    files = insertions = deletions = 0
    for line in output.split("\n"):
        files_match = _SUMMARY_FILES.search(line)
        if files_match is None:
            continue
        files = int(files_match.group(1))
        insertions_match = _SUMMARY_INSERTIONS.search(line)
        deletions_match = _SUMMARY_DELETIONS.search(line)
        insertions = int(insertions_match.group(1)) if insertions_match else 0
        deletions = int(deletions_match.group(1)) if deletions_match else 0
    return files, insertions, deletions


def has_binary_changes(diff_text: str) -> bool:
    return "Binary files " in diff_text or "GIT binary patch" in diff_text
