"""Tests for capability sets."""

import pytest

from vcs_gateway.capabilities import (
    EMPTY_CAPABILITIES,
    GIT_CLI_CAPABILITIES,
    Capability,
    CapabilitySet,
)


def test_missing_in_stable_order() -> None:
    """Verify missing capabilities are reported in a stable order."""
    declared = CapabilitySet.of(Capability.TAGS)
    required = CapabilitySet.of(Capability.WORKTREE, Capability.BLAME, Capability.TAGS)

    assert declared.missing(required) == [Capability.BLAME, Capability.WORKTREE]
    assert not declared.satisfies(required)


def test_empty_requirement_always_satisfied() -> None:
    """Verify an empty requirement is always satisfied."""
    assert EMPTY_CAPABILITIES.satisfies(EMPTY_CAPABILITIES)
    assert CapabilitySet.of(Capability.TAGS).missing(EMPTY_CAPABILITIES) == []


def test_parse_names() -> None:
    """Verify capability names parse into capabilities."""
    parsed = CapabilitySet.parse(["blame", "cherry_pick"])

    assert Capability.CHERRY_PICK in parsed
    assert parsed.names() == ["blame", "cherry_pick"]
    assert len(parsed) == 2


def test_parse_unknown_name() -> None:
    """Verify an unknown capability name is rejected."""
    with pytest.raises(ValueError):
        CapabilitySet.parse(["teleport"])


def test_git_cli_declares_all() -> None:
    """Verify the git CLI capability set declares every capability."""
    assert GIT_CLI_CAPABILITIES.satisfies(CapabilitySet(items=frozenset(Capability)))
