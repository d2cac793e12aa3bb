"""Capability model for providers.

Core operations (status, add, commit, log, show, diff, branch, checkout,
merge, reset, init) are required of every provider. The capabilities below
name the optional features a backend may or may not support.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum


class Capability(Enum):
    BLAME = "blame"
    REFLOG = "reflog"
    WORKTREE = "worktree"
    SIGNING = "signing"
    STASH = "stash"
    REBASE = "rebase"
    CHERRY_PICK = "cherry_pick"
    CLEAN = "clean"
    TAGS = "tags"
    REMOTES = "remotes"
    CLONE = "clone"


@dataclass(frozen=True)
class CapabilitySet:
    """Immutable set of capabilities a provider declares."""

    items: frozenset[Capability]

    @classmethod
    def of(cls, *capabilities: Capability) -> CapabilitySet:
        return cls(items=frozenset(capabilities))

    @classmethod
    def parse(cls, names: Iterable[str]) -> CapabilitySet:
        """Build a set from capability names.

        Raises:
            ValueError: If a name is not a known capability
        """
        return cls(items=frozenset(Capability(name) for name in names))

    def __contains__(self, capability: object) -> bool:
        return capability in self.items

    def __iter__(self) -> Iterator[Capability]:
        return iter(sorted(self.items, key=lambda c: c.value))

    def __len__(self) -> int:
        return len(self.items)

    def satisfies(self, required: CapabilitySet) -> bool:
        """True if every required capability is declared here."""
        return required.items <= self.items

    def missing(self, required: CapabilitySet) -> list[Capability]:
        """Required capabilities not declared here, in stable order."""
        return sorted(required.items - self.items, key=lambda c: c.value)

    def names(self) -> list[str]:
        return [c.value for c in self]


EMPTY_CAPABILITIES = CapabilitySet(items=frozenset())

GIT_CLI_CAPABILITIES = CapabilitySet(items=frozenset(Capability))
