"""Fixtures for integration tests that run the real git binary."""

from pathlib import Path

import pytest

from vcs_gateway.config import GatewayConfig
from vcs_gateway.executor.real import AsyncProcessExecutor, copied_env_for_git_subprocess
from vcs_gateway.git_cli.provider import GitCliProvider
from tests.test_utils.git_repo import init_git_repo


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    path = tmp_path / "repo"
    path.mkdir()
    init_git_repo(path, "main")
    return path


@pytest.fixture
def provider(tmp_path: Path) -> GitCliProvider:
    """Provider over real processes that never discovers repositories above tmp_path."""
    env = copied_env_for_git_subprocess()
    env["GIT_CEILING_DIRECTORIES"] = str(tmp_path)
    return GitCliProvider(GatewayConfig.defaults(), AsyncProcessExecutor(env=env))
