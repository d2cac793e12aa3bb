"""Tests for FakeProvider and the shape of results across providers."""

import dataclasses
from pathlib import Path

import pytest

from vcs_gateway.capabilities import Capability, CapabilitySet
from vcs_gateway.errors import ConflictError, OperationFailedError, ProviderUnavailableError
from vcs_gateway.executor.fake import FakeResponse
from vcs_gateway.options import CommitOptions, StatusOptions, TagOptions
from vcs_gateway.provider.fake import FakeProvider
from vcs_gateway.results import StatusResult
from tests.test_utils.builders import make_cli_provider, make_context

CLEAN_MAIN = StatusResult(
    current_branch="main",
    upstream=None,
    ahead=0,
    behind=0,
    staged=(),
    unstaged=(),
    untracked=(),
    conflicted=(),
)


@pytest.mark.asyncio
async def test_returns_configured_result_and_records_call(tmp_path: Path) -> None:
    """Verify a configured result is returned and the call is recorded."""
    provider = FakeProvider(results={"status": CLEAN_MAIN})
    context = make_context(tmp_path)

    result = await provider.status(StatusOptions(), context)

    assert result is CLEAN_MAIN
    assert [call.operation for call in provider.calls] == ["status"]
    assert provider.calls[0].context is context


@pytest.mark.asyncio
async def test_configured_error_is_raised(tmp_path: Path) -> None:
    """Verify a configured error is raised for its operation."""
    provider = FakeProvider(errors={"status": ConflictError("index.lock exists")})

    with pytest.raises(ConflictError, match="index.lock"):
        await provider.status(StatusOptions(), make_context(tmp_path))


@pytest.mark.asyncio
async def test_unconfigured_operation_is_internal_failure(tmp_path: Path) -> None:
    """Verify an operation with nothing configured fails as internal."""
    provider = FakeProvider()

    with pytest.raises(OperationFailedError) as exc_info:
        await provider.status(StatusOptions(), make_context(tmp_path))

    assert exc_info.value.internal


@pytest.mark.asyncio
async def test_wrong_result_type_is_internal_failure(tmp_path: Path) -> None:
    """Verify a result of the wrong type fails as internal."""
    provider = FakeProvider(results={"status": "not a status"})

    with pytest.raises(OperationFailedError) as exc_info:
        await provider.status(StatusOptions(), make_context(tmp_path))

    assert exc_info.value.internal
    assert isinstance(exc_info.value.__cause__, TypeError)


@pytest.mark.asyncio
async def test_signing_requires_capability(tmp_path: Path) -> None:
    """Verify signed operations need the signing capability."""
    provider = FakeProvider(capabilities=CapabilitySet.of(Capability.TAGS))

    with pytest.raises(ProviderUnavailableError, match="signing"):
        await provider.commit(CommitOptions(message="x", sign=True), make_context(tmp_path))
    with pytest.raises(ProviderUnavailableError, match="signing"):
        await provider.tag(
            TagOptions(mode="create", name="v1", message="m", sign=True), make_context(tmp_path)
        )


@pytest.mark.asyncio
async def test_health_checks_counted() -> None:
    """Verify health checks are counted."""
    provider = FakeProvider(healthy=False)

    assert not await provider.health_check()
    assert provider.health_checks == 1


@pytest.mark.asyncio
async def test_same_result_shape_as_cli_provider(tmp_path: Path) -> None:
    """Both providers answer status with the same structure for the same state."""
    cli, _ = make_cli_provider(FakeResponse(match=("status",), stdout="## main\0"))
    fake = FakeProvider(results={"status": CLEAN_MAIN})
    context = make_context(tmp_path)

    from_cli = await cli.status(StatusOptions(), context)
    from_fake = await fake.status(StatusOptions(), context)

    assert dataclasses.asdict(from_cli) == dataclasses.asdict(from_fake)
