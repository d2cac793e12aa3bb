"""Git argument vector construction.

Every command follows one grammar:

    <binary> <global flags> <subcommand...> <flags> <positionals> -- <paths>

Path filters only ever appear after the single ``--`` separator, so they can
never be read as refs or options. Every argument is its own argv element and
processes are started without a shell.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from vcs_gateway.errors import ValidationError

FlagValue = str | int | bool | None

SEPARATOR = "--"

# Global options that keep output machine-stable regardless of user config
DEFAULT_GLOBAL_FLAGS: tuple[str, ...] = (
    "-c",
    "core.quotepath=false",
    "-c",
    "color.ui=false",
    "-c",
    "log.showSignature=false",
    "--no-pager",
)

_FORBIDDEN_CHARS = ("\x00",)
_FORBIDDEN_POSITIONAL_CHARS = ("\x00", "\n", "\r")


def _check_no_forbidden(value: str, what: str, forbidden: Sequence[str]) -> None:
    for char in forbidden:
        if char in value:
            raise ValidationError(f"{what} contains a forbidden control character: {value!r}")


def validate_positional(value: str, what: str = "argument") -> str:
    """Validate a caller-supplied ref, name or URL used as a positional argument.

    Raises:
        ValidationError: If the value is empty, starts with '-' (option
            injection) or contains NUL/newline characters
    """
    if not value:
        raise ValidationError(f"{what} must not be empty")
    if value.startswith("-"):
        raise ValidationError(f"{what} must not start with '-': {value!r}")
    _check_no_forbidden(value, what, _FORBIDDEN_POSITIONAL_CHARS)
    return value


def validate_path(value: str) -> str:
    if not value:
        raise ValidationError("path filter must not be empty")
    _check_no_forbidden(value, "path", _FORBIDDEN_CHARS)
    return value


def render_flags(flags: Mapping[str, FlagValue]) -> tuple[str, ...]:
    """Render flags in insertion order.

    ``{"--cached": True}`` -> ``--cached``; ``{"--unified": 3}`` ->
    ``--unified=3``; short flags take their value as a separate element
    (``{"-b": "topic"}`` -> ``-b topic``). False and None omit the flag.
    """
    tokens: list[str] = []
    for name, value in flags.items():
        if not name.startswith("-"):
            raise ValueError(f"Flag names must start with '-': {name!r}")
        if value is None or value is False:
            continue
        if value is True:
            tokens.append(name)
            continue
        rendered = str(value)
        _check_no_forbidden(rendered, f"value of {name}", _FORBIDDEN_CHARS)
        if name.startswith("--"):
            tokens.append(f"{name}={rendered}")
        else:
            tokens.extend([name, rendered])
    return tuple(tokens)


@dataclass(frozen=True)
class GitCommand:
    """A validated git invocation, independent of binary and global flags.

    Build instances with build_git_command().
    """

    command: tuple[str, ...]
    flags: tuple[str, ...]
    positionals: tuple[str, ...]
    paths: tuple[str, ...]

    def to_args(self) -> list[str]:
        args = [*self.command, *self.flags, *self.positionals]
        if self.paths:
            args.append(SEPARATOR)
            args.extend(self.paths)
        return args

    def to_argv(
        self, binary: str, global_flags: Sequence[str] = DEFAULT_GLOBAL_FLAGS
    ) -> list[str]:
        return [binary, *global_flags, *self.to_args()]

    @property
    def name(self) -> str:
        return " ".join(self.command)


def build_git_command(
    command: str | Sequence[str],
    *,
    flags: Mapping[str, FlagValue] | None = None,
    positionals: Sequence[str] = (),
    paths: Sequence[str] = (),
) -> GitCommand:
    """Build a GitCommand following the fixed argument grammar.

    Args:
        command: Subcommand, e.g. "diff" or ("worktree", "add")
        flags: Subcommand flags in the order they should appear
        positionals: Refs and other positional arguments (validated against
            option injection)
        paths: Path filters, placed after a single "--" separator

    Raises:
        ValidationError: If a positional or path fails validation
    """
    command_tokens = (command,) if isinstance(command, str) else tuple(command)
    return GitCommand(
        command=command_tokens,
        flags=render_flags(flags or {}),
        positionals=tuple(validate_positional(p) for p in positionals),
        paths=tuple(validate_path(p) for p in paths),
    )
