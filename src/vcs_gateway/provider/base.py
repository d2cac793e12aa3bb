"""Shared behavior for concrete providers.

BaseProvider runs every operation through one funnel:

  1. re-assert the capability the operation needs
  2. validate the working directory
  3. run the backend call under timed_operation()
  4. convert any failure into exactly one VcsError

Subclasses implement the operation methods by calling ``_invoke`` and
override ``_map_error`` with their backend's classification.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from vcs_gateway.capabilities import Capability
from vcs_gateway.context import OperationContext
from vcs_gateway.debug_timing import timed_operation
from vcs_gateway.errors import (
    OperationFailedError,
    ProviderUnavailableError,
    ValidationError,
    VcsError,
)
from vcs_gateway.provider.abc import VcsProvider

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Optional capability each operation depends on. Operations not listed are
# core operations every provider supports.
OPERATION_CAPABILITIES: dict[str, Capability] = {
    "blame": Capability.BLAME,
    "reflog": Capability.REFLOG,
    "worktree": Capability.WORKTREE,
    "stash": Capability.STASH,
    "rebase": Capability.REBASE,
    "cherry_pick": Capability.CHERRY_PICK,
    "clean": Capability.CLEAN,
    "tag": Capability.TAGS,
    "remote": Capability.REMOTES,
    "fetch": Capability.REMOTES,
    "push": Capability.REMOTES,
    "pull": Capability.REMOTES,
    "clone": Capability.CLONE,
}


class BaseProvider(VcsProvider):
    """Template for providers: capability checks, validation, timing, error funnel."""

    def _assert_capability(self, capability: Capability, operation: str) -> None:
        """Raise if this provider does not declare ``capability``.

        The factory already gates on required capabilities; this catches
        callers that skip the gate.
        """
        if capability not in self.capabilities():
            raise ProviderUnavailableError(
                f"{operation}: provider '{self.provider_type.value}' does not support "
                f"capability '{capability.value}'"
            )

    def _validate_context(self, context: OperationContext) -> None:
        directory = context.working_directory
        if not directory.is_absolute():
            raise ValidationError(f"Working directory must be absolute: {directory}")
        if not directory.is_dir():
            raise ValidationError(f"Working directory does not exist: {directory}")

    def _map_error(self, error: Exception, operation: str) -> VcsError:
        """Classify a failure. Subclasses override with backend-specific rules."""
        if isinstance(error, VcsError):
            return error
        return OperationFailedError(
            f"{operation}: internal error: {type(error).__name__}: {error}",
            internal=True,
        )

    async def _invoke(
        self,
        operation: str,
        context: OperationContext,
        call: Callable[[], Awaitable[T]],
    ) -> T:
        capability = OPERATION_CAPABILITIES.get(operation)
        if capability is not None:
            self._assert_capability(capability, operation)
        self._validate_context(context)

        description = f"{self.provider_type.value} {operation} in {context.working_directory}"
        with timed_operation(description, request_id=context.request_id):
            try:
                return await call()
            except Exception as e:
                mapped = self._map_error(e, operation)
                if mapped is e:
                    raise
                raise mapped from e
