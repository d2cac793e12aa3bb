"""Tests for the --line-porcelain blame parser."""

from vcs_gateway.git_cli.parsers.blame import parse_blame
from tests.test_utils.builders import FULL_SHA, OTHER_SHA

LINE_PORCELAIN = f"""\
{FULL_SHA} 1 1 2
author Alice Example
author-mail <alice@example.com>
author-time 1700000000
author-tz +0000
committer Alice Example
committer-mail <alice@example.com>
committer-time 1700000000
committer-tz +0000
summary Add file
boundary
filename notes.txt
\tfirst line
{FULL_SHA} 2 2
author Alice Example
author-mail <alice@example.com>
author-time 1700000000
author-tz +0000
summary Add file
filename notes.txt
\t
{OTHER_SHA} 3 3 1
author Bob
author-mail <bob@example.com>
author-time 1700000500
author-tz +0100
summary Edit
previous {FULL_SHA} notes.txt
filename notes.txt
\tthird line\twith tab
"""


def _record(sha: str, line_number: int, content: str) -> str:
    return (
        f"{sha} {line_number} {line_number} 1\n"
        "author Alice Example\n"
        "author-mail <alice@example.com>\n"
        "author-time 1700000000\n"
        "filename notes.txt\n"
        f"\t{content}\n"
    )


def test_parse_blame_one_entry_per_source_line() -> None:
    """Verify every content line closes exactly one record in order."""
    lines = parse_blame(LINE_PORCELAIN)

    assert [line.line_number for line in lines] == [1, 2, 3]
    assert [line.content for line in lines] == ["first line", "", "third line\twith tab"]


def test_parse_blame_reads_commit_author_and_time() -> None:
    """Verify header fields are attached to the record they precede."""
    lines = parse_blame(LINE_PORCELAIN)

    assert lines[0].commit_hash == FULL_SHA
    assert lines[0].author == "Alice Example"
    assert lines[0].author_email == "alice@example.com"
    assert lines[0].timestamp == 1700000000
    assert lines[2].commit_hash == OTHER_SHA
    assert lines[2].author == "Bob"
    assert lines[2].timestamp == 1700000500


def test_parse_blame_keeps_control_characters_in_content() -> None:
    """Verify form feeds, lone carriage returns and separators stay inside one line."""
    contents = ["b = 1 \x0c c", "\x0c", "x\ry", "a\x1cb\x1dc\x1ed", "p q"]
    output = "".join(_record(FULL_SHA, n, c) for n, c in enumerate(contents, start=1))

    lines = parse_blame(output)

    assert [line.content for line in lines] == contents
    assert [line.line_number for line in lines] == [1, 2, 3, 4, 5]


def test_parse_blame_empty_input() -> None:
    """Verify empty output parses to no lines."""
    assert parse_blame("") == ()


def test_parse_blame_ignores_content_without_header() -> None:
    """Verify content lines without a preceding header are dropped."""
    assert parse_blame("\torphan content\n") == ()
