"""Parsers for record-delimited history output: log, reflog and stash list.

Formats put RECORD_SEP (0x1e) before every record and FIELD_SEP (0x1f)
between fields, so commit bodies containing newlines parse unambiguously.
"""

from __future__ import annotations

import re

from vcs_gateway.results import CommitInfo, ReflogEntry, StashEntry

RECORD_SEP = "\x1e"
FIELD_SEP = "\x1f"

LOG_FORMAT = "%x1e%H%x1f%h%x1f%an%x1f%ae%x1f%at%x1f%P%x1f%D%x1f%s%x1f%b"
LOG_FIELD_COUNT = 9

# Used with --date=unix so %gd renders as "<ref>@{<unix time>}"
REFLOG_FORMAT = "%x1e%H%x1f%gd%x1f%gs"

STASH_FORMAT = "%x1e%gd%x1f%H%x1f%gs"

_SELECTOR_BRACES = re.compile(r"@\{(?P<value>[^}]*)\}$")
_STASH_SUBJECT = re.compile(r"^(?:WIP on|On) (?P<branch>[^:]+): (?P<message>.*)$", re.DOTALL)


def _records(output: str) -> list[str]:
    return [chunk for chunk in output.split(RECORD_SEP) if chunk.strip()]


def _to_int(raw: str) -> int:
    raw = raw.strip()
    return int(raw) if raw.isdigit() else 0


def parse_log(output: str) -> tuple[CommitInfo, ...]:
    """Parse output produced with ``--format=LOG_FORMAT``.

    Records with too few fields are skipped.
    """
    commits: list[CommitInfo] = []
    for record in _records(output):
        fields = record.split(FIELD_SEP, LOG_FIELD_COUNT - 1)
        if len(fields) < LOG_FIELD_COUNT:
            continue
        full_hash, short_hash, name, email, timestamp, parents, refs, subject, body = fields
        commits.append(
            CommitInfo(
                hash=full_hash.strip(),
                short_hash=short_hash,
                author_name=name,
                author_email=email,
                timestamp=_to_int(timestamp),
                parents=tuple(parents.split()),
                refs=tuple(r.strip() for r in refs.split(",") if r.strip()),
                subject=subject,
                body=body.strip(),
            )
        )
    return tuple(commits)


def _split_reflog_subject(subject: str) -> tuple[str, str]:
    if ": " in subject:
        action, message = subject.split(": ", 1)
        return action, message
    return subject, ""


def parse_reflog(output: str, ref: str) -> tuple[ReflogEntry, ...]:
    """Parse output produced with ``--date=unix --format=REFLOG_FORMAT``.

    Selectors are reported positionally (``HEAD@{0}`` is the newest entry).
    """
    entries: list[ReflogEntry] = []
    for record in _records(output):
        fields = record.split(FIELD_SEP, 2)
        if len(fields) < 3:
            continue
        commit_hash, selector, subject = fields
        braces = _SELECTOR_BRACES.search(selector.strip())
        timestamp = _to_int(braces.group("value")) if braces else 0
        action, message = _split_reflog_subject(subject.strip())
        entries.append(
            ReflogEntry(
                commit_hash=commit_hash.strip(),
                selector=f"{ref}@{{{len(entries)}}}",
                action=action,
                message=message,
                timestamp=timestamp,
            )
        )
    return tuple(entries)


def parse_stash_list(output: str) -> tuple[StashEntry, ...]:
    """Parse output produced with ``git stash list --format=STASH_FORMAT``."""
    stashes: list[StashEntry] = []
    for record in _records(output):
        fields = record.split(FIELD_SEP, 2)
        if len(fields) < 3:
            continue
        selector, commit_hash, subject = (f.strip() for f in fields)
        braces = _SELECTOR_BRACES.search(selector)
        index = _to_int(braces.group("value")) if braces else len(stashes)
        subject_match = _STASH_SUBJECT.match(subject)
        stashes.append(
            StashEntry(
                index=index,
                ref=selector,
                commit=commit_hash,
                branch=subject_match.group("branch") if subject_match else None,
                message=subject_match.group("message") if subject_match else subject,
            )
        )
    return tuple(stashes)
