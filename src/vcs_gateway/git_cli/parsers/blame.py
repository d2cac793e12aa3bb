"""Parser for ``git blame --line-porcelain``."""

from __future__ import annotations

import re

from vcs_gateway.results import BlameLine

_HEADER = re.compile(r"^(?P<sha>[0-9a-f]{40}|[0-9a-f]{64}) \d+ (?P<final>\d+)(?: \d+)?$")


def parse_blame(output: str) -> tuple[BlameLine, ...]:
    """Map each source line to the commit, author and time that last changed it.

    ``--line-porcelain`` repeats the full header for every line, so each
    content line (prefixed with a TAB) closes one record.
    """
    lines: list[BlameLine] = []
    commit_hash: str | None = None
    line_number = 0
    author = ""
    author_email = ""
    timestamp = 0

    for raw in output.split("\n"):
        if raw.startswith("\t"):
            if commit_hash is not None:
                lines.append(
                    BlameLine(
                        commit_hash=commit_hash,
                        author=author,
                        author_email=author_email,
                        timestamp=timestamp,
                        line_number=line_number,
                        content=raw[1:],
                    )
                )
            commit_hash = None
            continue

        header = _HEADER.match(raw)
        if header is not None:
            commit_hash = header.group("sha")
            line_number = int(header.group("final"))
            author = ""
            author_email = ""
            timestamp = 0
            continue

        if raw.startswith("author "):
            author = raw[len("author ") :]
        elif raw.startswith("author-mail "):
            author_email = raw[len("author-mail ") :].strip("<>")
        elif raw.startswith("author-time "):
            value = raw[len("author-time ") :].strip()
            timestamp = int(value) if value.isdigit() else 0

    return tuple(lines)
