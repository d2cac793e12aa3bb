"""Classification of failed git invocations into the closed error taxonomy.

Classification precedence:
  1. spawn failure / binary not found   -> ToolUnavailableError
  2. "not a git repository"             -> NotARepositoryError
  3. existing conflicting state          -> ConflictError
  4. missing ref, branch, tag or remote  -> ReferenceNotFoundError
  5. anything else                       -> OperationFailedError

Matching uses short, stable fragments of git's messages (lower-cased) rather
than full sentences so that wording changes between git versions do not break
classification. Invocations always run under the C locale.
"""

from __future__ import annotations

from vcs_gateway.errors import (
    ConflictError,
    NotARepositoryError,
    OperationFailedError,
    ReferenceNotFoundError,
    ToolUnavailableError,
    VcsError,
    redact_credentials,
    sanitize_command,
    stderr_excerpt,
)
from vcs_gateway.executor.abc import (
    ProcessFailedError,
    ProcessSpawnError,
    ProcessTimeoutError,
)

NOT_A_REPOSITORY_PATTERNS: tuple[str, ...] = (
    "not a git repository",
    "must be run in a work tree",
)

CONFLICT_PATTERNS: tuple[str, ...] = (
    "already exists",
    "is already a worktree",
    "already checked out",
    "is already used by worktree",
    "would be overwritten",
    "[rejected]",
    "non-fast-forward",
    "not possible to fast-forward",
    "diverging branches",
    "you have unmerged paths",
    "unmerged files",
    "is not empty",
    "another git process seems to be running",
)

REFERENCE_NOT_FOUND_PATTERNS: tuple[str, ...] = (
    "unknown revision",
    "bad revision",
    "not a valid object name",
    "not a valid ref",
    "invalid reference",
    "did not match any",
    "couldn't find remote ref",
    "no such remote",
    "no such ref",
    "no such branch",
    # "branch 'x' not found." and "tag 'x' not found."
    "' not found.",
    "no stash entries found",
    "is not a valid reference",
    "remote ref does not exist",
    "does not exist in '",
    "no such path",
    "unknown commit",
    "bad object",
    "invalid upstream",
    "not something we can merge",
)


def _matches(text: str, patterns: tuple[str, ...]) -> bool:
    return any(pattern in text for pattern in patterns)


def classify_failure(
    operation: str, failure: ProcessFailedError
) -> VcsError:
    """Classify a process that exited with an unaccepted code."""
    result = failure.result
    haystack = f"{result.stderr}\n{result.stdout}".lower()
    kwargs = {
        "command": sanitize_command(list(result.argv)),
        "exit_code": result.exit_code,
        "cwd": result.cwd,
        "stderr": stderr_excerpt(result.stderr),
    }
    first_line = redact_credentials(
        _first_meaningful_line(result.stderr) or _first_meaningful_line(result.stdout)
    )

    if _matches(haystack, NOT_A_REPOSITORY_PATTERNS):
        return NotARepositoryError(f"{operation}: not a git repository: {result.cwd}", **kwargs)
    if _matches(haystack, CONFLICT_PATTERNS):
        return ConflictError(f"{operation}: {first_line}", **kwargs)
    if _matches(haystack, REFERENCE_NOT_FOUND_PATTERNS):
        return ReferenceNotFoundError(f"{operation}: {first_line}", **kwargs)
    return OperationFailedError(
        f"{operation} failed with exit code {result.exit_code}: {first_line}", **kwargs
    )


def _first_meaningful_line(text: str) -> str:
    for line in text.splitlines():
        stripped = line.strip()
        if stripped and not stripped.startswith("hint:"):
            return stripped
    return ""


def map_git_error(error: BaseException, operation: str) -> VcsError:
    """Convert any failure raised while running an operation into a VcsError.

    Args:
        error: Exception raised by the executor, a parser or orchestration code
        operation: Logical operation name used in the message (e.g. "diff")

    Returns:
        Exactly one classified error. Already-classified errors pass through.
    """
    if isinstance(error, VcsError):
        return error

    if isinstance(error, ProcessSpawnError):
        if error.tool_missing:
            return ToolUnavailableError(
                f"{operation}: git could not be started: {error.reason}",
                command=sanitize_command(list(error.argv)),
                cwd=error.cwd,
            )
        return OperationFailedError(
            f"{operation}: {error.reason}",
            command=sanitize_command(list(error.argv)),
            cwd=error.cwd,
        )

    if isinstance(error, ProcessTimeoutError):
        return OperationFailedError(
            f"{operation} timed out after {error.timeout:g}s",
            command=sanitize_command(list(error.argv)),
            cwd=error.cwd,
            timed_out=True,
        )

    if isinstance(error, ProcessFailedError):
        return classify_failure(operation, error)

    return OperationFailedError(
        f"{operation}: internal error: {type(error).__name__}: {error}",
        internal=True,
    )
