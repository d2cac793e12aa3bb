import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

DEFAULT_TIMEOUT_SECONDS = 60.0

# Timeout for network-touching operations (fetch, push, pull, clone).
# Prevents indefinite hangs on network issues or credential prompts.
DEFAULT_NETWORK_TIMEOUT_SECONDS = 120.0


@dataclass(frozen=True)
class GatewayConfig:
    """Execution configuration shared by all providers.

    Example config.toml:
      [vcs_gateway]
      git_binary = "/usr/bin/git"
      default_timeout = 30
      network_timeout = 300
      default_provider = "cli"
      edge_runtime = false
    """

    git_binary: str
    default_timeout: float
    network_timeout: float
    default_provider: str
    edge_runtime: bool

    @classmethod
    def defaults(cls) -> "GatewayConfig":
        return cls(
            git_binary="git",
            default_timeout=DEFAULT_TIMEOUT_SECONDS,
            network_timeout=DEFAULT_NETWORK_TIMEOUT_SECONDS,
            default_provider="cli",
            edge_runtime=False,
        )


def _parse_bool(raw: str) -> bool:
    return raw.strip().lower() in ("1", "true", "yes", "on")


def load_config(path: Path | None) -> GatewayConfig:
    """Load [vcs_gateway] from a TOML file if present; otherwise return defaults.

    Environment variables override file values:
    VCS_GATEWAY_GIT_BINARY, VCS_GATEWAY_TIMEOUT, VCS_GATEWAY_NETWORK_TIMEOUT,
    VCS_GATEWAY_PROVIDER, VCS_GATEWAY_EDGE_RUNTIME.
    """
    config = GatewayConfig.defaults()

    if path is not None and path.exists():
        data = tomllib.loads(path.read_text(encoding="utf-8")).get("vcs_gateway", {})
        config = GatewayConfig(
            git_binary=str(data.get("git_binary", config.git_binary)),
            default_timeout=float(data.get("default_timeout", config.default_timeout)),
            network_timeout=float(data.get("network_timeout", config.network_timeout)),
            default_provider=str(data.get("default_provider", config.default_provider)),
            edge_runtime=bool(data.get("edge_runtime", config.edge_runtime)),
        )

    return apply_env_overrides(config, os.environ)


def apply_env_overrides(config: GatewayConfig, env: Mapping[str, str]) -> GatewayConfig:
    binary = env.get("VCS_GATEWAY_GIT_BINARY")
    if binary:
        config = replace(config, git_binary=binary)

    timeout = env.get("VCS_GATEWAY_TIMEOUT")
    if timeout:
        config = replace(config, default_timeout=float(timeout))

    network_timeout = env.get("VCS_GATEWAY_NETWORK_TIMEOUT")
    if network_timeout:
        config = replace(config, network_timeout=float(network_timeout))

    provider = env.get("VCS_GATEWAY_PROVIDER")
    if provider:
        config = replace(config, default_provider=provider)

    edge = env.get("VCS_GATEWAY_EDGE_RUNTIME")
    if edge is not None:
        config = replace(config, edge_runtime=_parse_bool(edge))

    return config
