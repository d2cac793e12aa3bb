"""Provider selection, instantiation and caching.

The factory is the sole capability gate: callers declare the capabilities
they need in a ProviderSelection and either get a provider that declares all
of them or a ProviderUnavailableError.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from vcs_gateway.capabilities import EMPTY_CAPABILITIES, CapabilitySet
from vcs_gateway.config import GatewayConfig
from vcs_gateway.errors import ProviderUnavailableError
from vcs_gateway.executor.abc import Executor
from vcs_gateway.executor.real import AsyncProcessExecutor
from vcs_gateway.git_cli.provider import GitCliProvider
from vcs_gateway.provider.abc import ProviderType, VcsProvider

logger = logging.getLogger(__name__)

ProviderConstructor = Callable[[GatewayConfig, Executor], VcsProvider]

# Provider types that spawn local processes
_PROCESS_SPAWNING_TYPES = frozenset({ProviderType.CLI})


@dataclass(frozen=True)
class ProviderSelection:
    """What a caller needs from a provider.

    Attributes:
        preferred_type: Backend to use; None means the configured default
        required_capabilities: Capabilities the provider must declare
        edge_runtime: Caller runs in a sandbox that forbids spawning processes
    """

    preferred_type: ProviderType | None = None
    required_capabilities: CapabilitySet = EMPTY_CAPABILITIES
    edge_runtime: bool = False


def default_registry() -> dict[ProviderType, ProviderConstructor]:
    """Implemented backends. LIBRARY and REMOTE have no implementation yet."""
    return {ProviderType.CLI: GitCliProvider}


class ProviderFactory:
    """Creates providers on first use and caches one instance per provider type.

    Concurrent first access for the same type shares a single in-flight
    creation task, so at most one instance per type is ever retained.
    """

    def __init__(
        self,
        config: GatewayConfig,
        *,
        registry: Mapping[ProviderType, ProviderConstructor] | None = None,
        executor: Executor | None = None,
    ) -> None:
        self._config = config
        self._registry = dict(registry) if registry is not None else default_registry()
        self._executor = executor if executor is not None else AsyncProcessExecutor()
        self._instances: dict[ProviderType, VcsProvider] = {}
        self._pending: dict[ProviderType, asyncio.Task[VcsProvider]] = {}

    def resolve_type(self, selection: ProviderSelection) -> ProviderType:
        """Provider type a selection resolves to; deterministic for a given config.

        Raises:
            ProviderUnavailableError: If the configured default is not a known type
        """
        if selection.preferred_type is not None:
            return selection.preferred_type
        try:
            return ProviderType(self._config.default_provider)
        except ValueError:
            raise ProviderUnavailableError(
                f"Unknown default provider type: {self._config.default_provider!r}"
            ) from None

    def cached_types(self) -> list[ProviderType]:
        return sorted(self._instances, key=lambda t: t.value)

    async def get_provider(self, selection: ProviderSelection) -> VcsProvider:
        """Return a healthy provider that declares every required capability.

        Raises:
            ProviderUnavailableError: If the type is unimplemented or disabled in
                this environment, its health check fails, or it lacks a
                required capability
        """
        provider_type = self.resolve_type(selection)

        if provider_type in _PROCESS_SPAWNING_TYPES and (
            selection.edge_runtime or self._config.edge_runtime
        ):
            raise ProviderUnavailableError(
                f"Provider '{provider_type.value}' spawns processes and is disabled "
                "in an edge runtime"
            )
        if provider_type not in self._registry:
            raise ProviderUnavailableError(
                f"Provider '{provider_type.value}' is not implemented"
            )

        provider = self._instances.get(provider_type)
        if provider is None:
            provider = await self._get_or_create(provider_type)

        missing = provider.capabilities().missing(selection.required_capabilities)
        if missing:
            names = ", ".join(c.value for c in missing)
            raise ProviderUnavailableError(
                f"Provider '{provider_type.value}' lacks required capabilities: {names}"
            )
        return provider

    async def _get_or_create(self, provider_type: ProviderType) -> VcsProvider:
        task = self._pending.get(provider_type)
        if task is None:
            task = asyncio.get_running_loop().create_task(self._create(provider_type))
            self._pending[provider_type] = task
            task.add_done_callback(lambda done: self._forget_pending(provider_type, done))
        # A cancelled caller must not cancel creation for the callers sharing it
        return await asyncio.shield(task)

    def _forget_pending(self, provider_type: ProviderType, task: asyncio.Task[VcsProvider]) -> None:
        if self._pending.get(provider_type) is task:
            del self._pending[provider_type]

    async def _create(self, provider_type: ProviderType) -> VcsProvider:
        provider = self._registry[provider_type](self._config, self._executor)
        if not await provider.health_check():
            raise ProviderUnavailableError(
                f"Provider '{provider_type.value}' failed its health check"
            )

        existing = self._instances.get(provider_type)
        if existing is not None:
            # Late duplicate; the instance already cached wins
            return existing
        self._instances[provider_type] = provider
        logger.info(
            "Created %s provider with capabilities: %s",
            provider_type.value,
            ", ".join(provider.capabilities().names()) or "(none)",
        )
        return provider
