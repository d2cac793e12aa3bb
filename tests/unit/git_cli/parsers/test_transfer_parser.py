"""Tests for push, fetch and merge output parsers."""

from vcs_gateway.git_cli.parsers.transfer import (
    has_conflict_markers,
    is_fast_forward,
    is_up_to_date,
    parse_conflict_paths,
    parse_fetch_updates,
    parse_push_porcelain,
)

PUSH_PORCELAIN = """\
To https://example.com/repo.git
=\trefs/heads/main:refs/heads/main\t[up to date]
!\trefs/heads/dev:refs/heads/dev\t[rejected] (non-fast-forward)
*\trefs/heads/new:refs/heads/new\t[new branch]
 \trefs/heads/ff:refs/heads/ff\t1f2e3d4..aabbccd
Done
"""


def test_parse_push_porcelain_ref_lines() -> None:
    """Verify push porcelain ref lines are parsed."""
    updates = parse_push_porcelain(PUSH_PORCELAIN)

    assert [u.flag for u in updates] == ["=", "!", "*", " "]
    assert updates[1].source == "refs/heads/dev"
    assert updates[1].destination == "refs/heads/dev"
    assert updates[1].summary == "[rejected] (non-fast-forward)"
    assert [u.rejected for u in updates] == [False, True, False, False]


def test_parse_push_porcelain_ignores_header_and_done() -> None:
    """Verify the To header and Done line are ignored."""
    assert parse_push_porcelain("To origin\nDone\n") == ()


def test_parse_fetch_updates_keeps_arrow_lines() -> None:
    """Verify only ref update lines are kept from fetch output."""
    stderr = (
        "From https://example.com/repo\n"
        " * [new branch]      feature    -> origin/feature\n"
        "   1f2e3d4..aabbccd  main       -> origin/main\n"
    )

    assert parse_fetch_updates(stderr) == (
        "* [new branch]      feature    -> origin/feature",
        "1f2e3d4..aabbccd  main       -> origin/main",
    )


def test_merge_outcome_predicates() -> None:
    """Verify merge outcome predicates on sample output."""
    assert is_fast_forward("Updating 1f2e3d4..aabbccd\nFast-forward\n a.txt | 1 +\n")
    assert not is_fast_forward("Merge made by the 'ort' strategy.\n")
    assert is_up_to_date("Already up to date.\n")


def test_conflict_markers_and_paths() -> None:
    """Verify CONFLICT lines are detected and their paths read."""
    output = (
        "Auto-merging notes.txt\n"
        "CONFLICT (content): Merge conflict in notes.txt\n"
        "CONFLICT (modify/delete): src/app.py deleted in HEAD and modified in feature. "
        "Version feature of src/app.py left in tree.\n"
        "Automatic merge failed; fix conflicts and then commit the result.\n"
    )

    assert has_conflict_markers(output)
    assert parse_conflict_paths(output) == ("notes.txt",)


def test_cherry_pick_failure_counts_as_conflict() -> None:
    """Verify a cherry-pick failure message counts as a conflict."""
    assert has_conflict_markers("error: could not apply 1f2e3d4... Edit notes\n")


def test_refusal_is_not_a_conflict() -> None:
    """Verify a refusal to merge is not a conflict."""
    stderr = (
        "error: Your local changes to the following files would be overwritten by merge:\n"
        "\tnotes.txt\n"
    )

    assert not has_conflict_markers(stderr)
