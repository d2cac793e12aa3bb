"""Tests for the vcs-gateway command line."""

import json
from pathlib import Path

from click.testing import CliRunner, Result

from vcs_gateway.capabilities import Capability, CapabilitySet
from vcs_gateway.cli import cli
from vcs_gateway.config import GatewayConfig
from vcs_gateway.errors import ReferenceNotFoundError
from vcs_gateway.executor.fake import FakeExecutor
from vcs_gateway.options import BlameOptions, LogOptions
from vcs_gateway.provider.abc import ProviderType
from vcs_gateway.provider.factory import ProviderFactory
from vcs_gateway.provider.fake import FakeProvider
from vcs_gateway.results import BlameLine, BlameResult, LogResult, StatusResult


def _factory_with(fake: FakeProvider) -> ProviderFactory:
    return ProviderFactory(
        GatewayConfig.defaults(),
        registry={ProviderType.LIBRARY: lambda config, executor: fake},
        executor=FakeExecutor(),
    )


def _invoke(fake: FakeProvider, directory: Path, *args: str) -> Result:
    runner = CliRunner()
    return runner.invoke(
        cli,
        ["--cwd", str(directory), "--provider", "library", *args],
        obj=_factory_with(fake),
    )


def test_status_prints_json_with_is_clean(tmp_path: Path) -> None:
    """Verify status prints the result as JSON including is_clean."""
    fake = FakeProvider(
        results={
            "status": StatusResult(
                current_branch="main",
                upstream=None,
                ahead=0,
                behind=0,
                staged=(),
                unstaged=("notes.txt",),
                untracked=(),
                conflicted=(),
            )
        }
    )

    result = _invoke(fake, tmp_path, "status")

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["current_branch"] == "main"
    assert data["unstaged"] == ["notes.txt"]
    assert data["is_clean"] is False
    assert fake.calls[0].context.working_directory == tmp_path


def test_log_passes_options(tmp_path: Path) -> None:
    """Verify log command options reach the provider."""
    fake = FakeProvider(results={"log": LogResult(commits=())})

    result = _invoke(fake, tmp_path, "log", "-n", "5", "--ref", "main")

    assert result.exit_code == 0, result.output
    assert fake.calls[0].options == LogOptions(max_count=5, ref="main")
    assert json.loads(result.stdout) == {"commits": []}


def test_classified_error_goes_to_stderr(tmp_path: Path) -> None:
    """Verify a classified error is printed to stderr as JSON with exit code 1."""
    fake = FakeProvider(errors={"log": ReferenceNotFoundError("log: unknown revision")})

    result = _invoke(fake, tmp_path, "log", "--ref", "nope")

    assert result.exit_code == 1
    error = json.loads(result.stderr)
    assert error["kind"] == "ReferenceNotFound"
    assert error["message"] == "log: unknown revision"


def test_blame_requires_capability(tmp_path: Path) -> None:
    """Verify blame fails when the provider lacks the capability."""
    fake = FakeProvider(capabilities=CapabilitySet.of(Capability.TAGS))

    result = _invoke(fake, tmp_path, "blame", "notes.txt")

    assert result.exit_code == 1
    assert json.loads(result.stderr)["kind"] == "ProviderUnavailable"
    assert fake.calls == []


def test_blame_line_range(tmp_path: Path) -> None:
    """Verify a START,END range is passed through to blame."""
    fake = FakeProvider(
        results={
            "blame": BlameResult(
                path="notes.txt",
                lines=(
                    BlameLine(
                        commit_hash="a" * 40,
                        author="A",
                        author_email="a@x",
                        timestamp=1,
                        line_number=2,
                        content="two",
                    ),
                ),
            )
        }
    )

    result = _invoke(fake, tmp_path, "blame", "notes.txt", "-L", "2,3")

    assert result.exit_code == 0, result.output
    assert fake.calls[0].options == BlameOptions(path="notes.txt", start_line=2, end_line=3)


def test_blame_rejects_malformed_range(tmp_path: Path) -> None:
    """Verify a malformed line range is a usage error."""
    result = _invoke(FakeProvider(), tmp_path, "blame", "notes.txt", "-L", "two")

    assert result.exit_code == 2


def test_diff_accepts_at_most_two_refs(tmp_path: Path) -> None:
    """Verify diff rejects more than two refs."""
    result = _invoke(FakeProvider(), tmp_path, "diff", "a", "b", "c")

    assert result.exit_code == 2
    assert "at most two refs" in result.output


def test_capabilities_command(tmp_path: Path) -> None:
    """Verify capabilities lists the provider's declared capabilities."""
    fake = FakeProvider(capabilities=CapabilitySet.of(Capability.TAGS))

    result = _invoke(fake, tmp_path, "capabilities")

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {"provider": "library", "capabilities": ["tags"]}


def test_health_reports_unhealthy_provider(tmp_path: Path) -> None:
    """Verify health reports an unhealthy provider with a non-zero exit."""
    result = _invoke(FakeProvider(healthy=False), tmp_path, "health")

    assert result.exit_code == 1
    data = json.loads(result.stdout)
    assert data["healthy"] is False
    assert "health check" in data["error"]
