"""Integration tests for GitCliProvider against real repositories."""

from pathlib import Path

import pytest

from vcs_gateway.context import OperationContext
from vcs_gateway.errors import (
    ConflictError,
    NotARepositoryError,
    ReferenceNotFoundError,
)
from vcs_gateway.git_cli.provider import GitCliProvider
from vcs_gateway.options import (
    AddOptions,
    BlameOptions,
    BranchOptions,
    CheckoutOptions,
    CleanOptions,
    CloneOptions,
    CommitOptions,
    DiffOptions,
    InitOptions,
    LogOptions,
    MergeOptions,
    ReflogOptions,
    ResetOptions,
    StashOptions,
    StatusOptions,
    TagOptions,
    WorktreeOptions,
)
from tests.test_utils.git_repo import git, init_git_repo, requires_git

pytestmark = [pytest.mark.integration, requires_git]


def _context(directory: Path) -> OperationContext:
    return OperationContext(working_directory=directory, request_id="integration")


@pytest.mark.asyncio
async def test_status_buckets(repo: Path, provider: GitCliProvider) -> None:
    """Staged, unstaged and untracked files land in their own buckets."""
    (repo / "added.txt").write_text("added\n", encoding="utf-8")
    git(repo, "add", "added.txt")
    (repo / "README.md").write_text("# Changed\n", encoding="utf-8")
    (repo / "new.txt").write_text("new\n", encoding="utf-8")

    result = await provider.status(StatusOptions(), _context(repo))

    assert result.current_branch == "main"
    assert result.staged == ("added.txt",)
    assert result.unstaged == ("README.md",)
    assert result.untracked == ("new.txt",)
    assert not result.is_clean


@pytest.mark.asyncio
async def test_status_names_with_spaces_quotes_and_renames(
    repo: Path, provider: GitCliProvider
) -> None:
    """Names git would quote in porcelain output come back exactly as on disk."""
    (repo / "old name.txt").write_text("old\n", encoding="utf-8")
    git(repo, "add", "old name.txt")
    git(repo, "commit", "-m", "Add old name")
    git(repo, "mv", "old name.txt", "new -> name.txt")
    (repo / "a b.txt").write_text("a\n", encoding="utf-8")
    git(repo, "add", "a b.txt")
    (repo / "c d.txt").write_text("c\n", encoding="utf-8")
    (repo / 'we"ird.txt').write_text("w\n", encoding="utf-8")

    result = await provider.status(StatusOptions(), _context(repo))

    assert sorted(result.staged) == ["a b.txt", "new -> name.txt"]
    assert result.unstaged == ()
    assert sorted(result.untracked) == ["c d.txt", 'we"ird.txt']
    for name in (*result.staged, *result.untracked):
        assert (repo / name).exists()


@pytest.mark.asyncio
async def test_diff_includes_untracked_file(repo: Path, provider: GitCliProvider) -> None:
    (repo / "new.txt").write_text("hello\n", encoding="utf-8")

    result = await provider.diff(DiffOptions(include_untracked=True), _context(repo))

    assert "+++ b/new.txt" in result.diff
    assert "+hello" in result.diff
    assert result.files_changed == 1


@pytest.mark.asyncio
async def test_diff_outside_repository(tmp_path: Path, provider: GitCliProvider) -> None:
    plain = tmp_path / "plain"
    plain.mkdir()

    with pytest.raises(NotARepositoryError):
        await provider.diff(DiffOptions(), _context(plain))


@pytest.mark.asyncio
async def test_add_commit_log(repo: Path, provider: GitCliProvider) -> None:
    (repo / "notes.txt").write_text("one\ntwo\n", encoding="utf-8")
    context = _context(repo)

    added = await provider.add(AddOptions(paths=("notes.txt",)), context)
    commit = await provider.commit(CommitOptions(message="Add notes\n\nWith a body"), context)
    log = await provider.log(LogOptions(max_count=2), context)

    assert added.staged_files == ("notes.txt",)
    assert len(commit.commit_hash) == 40
    assert commit.branch == "main"
    assert commit.insertions == 2
    assert [c.subject for c in log.commits] == ["Add notes", "Initial commit"]
    assert log.commits[0].hash == commit.commit_hash
    assert log.commits[0].body == "With a body"
    assert log.commits[0].author_email == "test@example.com"


@pytest.mark.asyncio
async def test_log_on_empty_repository(tmp_path: Path, provider: GitCliProvider) -> None:
    empty = tmp_path / "empty"
    empty.mkdir()
    git(empty, "init", "-b", "main")

    result = await provider.log(LogOptions(), _context(empty))

    assert result.commits == ()


@pytest.mark.asyncio
async def test_blame_and_reflog(repo: Path, provider: GitCliProvider) -> None:
    context = _context(repo)

    blame = await provider.blame(BlameOptions(path="README.md"), context)
    reflog = await provider.reflog(ReflogOptions(), context)

    assert [line.content for line in blame.lines] == ["# Test"]
    assert blame.lines[0].author == "Test User"
    assert reflog.entries[0].selector == "HEAD@{0}"
    assert reflog.entries[0].timestamp > 0


@pytest.mark.asyncio
async def test_branch_checkout_and_missing_ref(repo: Path, provider: GitCliProvider) -> None:
    context = _context(repo)

    created = await provider.branch(BranchOptions(mode="create", name="topic"), context)
    await provider.checkout(CheckoutOptions(target="topic"), context)
    current = await provider.branch(BranchOptions(mode="current"), context)

    assert [b.name for b in created.branches] == ["main", "topic"]
    assert current.current == "topic"
    with pytest.raises(ReferenceNotFoundError):
        await provider.checkout(CheckoutOptions(target="does-not-exist"), context)
    with pytest.raises(ConflictError):
        await provider.branch(BranchOptions(mode="create", name="topic"), context)


@pytest.mark.asyncio
async def test_merge_conflict_reported_as_result(repo: Path, provider: GitCliProvider) -> None:
    git(repo, "checkout", "-b", "topic")
    (repo / "README.md").write_text("# Topic\n", encoding="utf-8")
    git(repo, "commit", "-am", "Topic edit")
    git(repo, "checkout", "main")
    (repo / "README.md").write_text("# Main\n", encoding="utf-8")
    git(repo, "commit", "-am", "Main edit")

    result = await provider.merge(MergeOptions(branch="topic"), _context(repo))

    assert not result.success
    assert result.conflicts
    assert result.conflicted_files == ("README.md",)

    aborted = await provider.merge(MergeOptions(abort=True), _context(repo))
    assert aborted.success


@pytest.mark.asyncio
async def test_stash_push_and_pop(repo: Path, provider: GitCliProvider) -> None:
    context = _context(repo)
    (repo / "README.md").write_text("# Work in progress\n", encoding="utf-8")

    pushed = await provider.stash(StashOptions(mode="push", message="wip"), context)
    popped = await provider.stash(StashOptions(mode="pop"), context)

    assert len(pushed.stashes) == 1
    assert pushed.stashes[0].message == "wip"
    assert popped.stashes == ()
    assert not popped.conflicts
    assert (repo / "README.md").read_text(encoding="utf-8") == "# Work in progress\n"


@pytest.mark.asyncio
async def test_worktree_add_and_list(
    repo: Path, tmp_path: Path, provider: GitCliProvider
) -> None:
    target = tmp_path / "wt-topic"

    result = await provider.worktree(
        WorktreeOptions(mode="add", path=target, branch="topic", create_branch=True),
        _context(repo),
    )

    assert [w.is_main for w in result.worktrees] == [True, False]
    assert result.worktrees[1].branch == "topic"
    assert (target / "README.md").exists()


@pytest.mark.asyncio
async def test_tags(repo: Path, provider: GitCliProvider) -> None:
    context = _context(repo)

    await provider.tag(TagOptions(mode="create", name="v1.0", message="Release 1.0"), context)
    await provider.tag(TagOptions(mode="create", name="light"), context)
    listed = await provider.tag(TagOptions(), context)

    by_name = {t.name: t for t in listed.tags}
    assert by_name["v1.0"].annotated
    assert by_name["v1.0"].subject == "Release 1.0"
    assert not by_name["light"].annotated
    assert by_name["v1.0"].commit == by_name["light"].commit


@pytest.mark.asyncio
async def test_init_and_local_clone(
    tmp_path: Path, repo: Path, provider: GitCliProvider
) -> None:
    workspace = tmp_path / "workspace"
    workspace.mkdir()
    context = _context(workspace)

    initialized = await provider.init(
        InitOptions(path=Path("fresh"), initial_branch="trunk"), context
    )
    cloned = await provider.clone(CloneOptions(url=str(repo), path=Path("copy")), context)

    assert initialized.path == workspace / "fresh"
    assert initialized.initial_branch == "trunk"
    assert (workspace / "fresh" / ".git").is_dir()
    assert cloned.path == workspace / "copy"
    assert cloned.branch == "main"
    assert (workspace / "copy" / "README.md").exists()


@pytest.mark.asyncio
async def test_clean_dry_run_and_reset(repo: Path, provider: GitCliProvider) -> None:
    context = _context(repo)
    (repo / "scratch.txt").write_text("tmp\n", encoding="utf-8")
    (repo / "README.md").write_text("# Staged\n", encoding="utf-8")
    git(repo, "add", "README.md")

    cleaned = await provider.clean(CleanOptions(dry_run=True), context)
    reset = await provider.reset(ResetOptions(), context)

    assert cleaned.files == ("scratch.txt",)
    assert (repo / "scratch.txt").exists()
    assert reset.unstaged_files == ("README.md",)


@pytest.mark.asyncio
async def test_diff_untracked_names_git_would_quote(repo: Path, provider: GitCliProvider) -> None:
    """Untracked files with quotes or spaces still get synthetic diffs."""
    (repo / 'we"ird.txt').write_text("hello\n", encoding="utf-8")
    (repo / "a b.txt").write_text("spaced\n", encoding="utf-8")

    result = await provider.diff(DiffOptions(include_untracked=True), _context(repo))

    assert "+hello" in result.diff
    assert "+spaced" in result.diff
    assert result.files_changed == 2


@pytest.mark.asyncio
async def test_diff_stat_mode_exact_counts_for_large_change(
    repo: Path, provider: GitCliProvider
) -> None:
    """A change wider than the --stat graph still reports exact counts."""
    target = repo / "src" / "very" / "deeply" / "nested" / "module" / "with_a_long_name"
    target.mkdir(parents=True)
    big = target / "big_file_with_a_rather_long_name.txt"
    big.write_text("".join(f"old {i}\n" for i in range(7)), encoding="utf-8")
    git(repo, "add", ".")
    git(repo, "commit", "-m", "Add big file")
    big.write_text("".join(f"new {i}\n" for i in range(200)), encoding="utf-8")

    stat = await provider.diff(DiffOptions(stat=True), _context(repo))
    full = await provider.diff(DiffOptions(), _context(repo))

    assert (stat.files_changed, stat.insertions, stat.deletions) == (1, 200, 7)
    assert (full.insertions, full.deletions) == (200, 7)
    assert "200 insertions(+), 7 deletions(-)" in stat.diff


@pytest.mark.asyncio
async def test_blame_keeps_control_characters(repo: Path, provider: GitCliProvider) -> None:
    """Form feeds and similar characters stay inside their source line."""
    lines = ["a = 0", "b = 1 \x0c c", "\x0c", "x\x1cy"]
    (repo / "ctrl.py").write_bytes("".join(f"{line}\n" for line in lines).encode("utf-8"))
    git(repo, "add", "ctrl.py")
    git(repo, "commit", "-m", "Add control characters")

    result = await provider.blame(BlameOptions(path="ctrl.py"), _context(repo))

    assert [line.content for line in result.lines] == lines
    assert [line.line_number for line in result.lines] == [1, 2, 3, 4]


def test_init_git_repo_helper(tmp_path: Path) -> None:
    """The setup helper leaves one commit on the requested branch."""
    init_git_repo(tmp_path, "trunk")

    assert git(tmp_path, "branch", "--show-current").strip() == "trunk"
