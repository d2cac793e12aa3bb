"""Per-call operation context and working-directory resolution."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from pathlib import Path

from vcs_gateway.errors import ValidationError

# Path token meaning "use the session's current working directory"
SESSION_DIRECTORY_TOKEN = "."


@dataclass(frozen=True)
class OperationContext:
    """Data that accompanies a single operation call.

    Constructed fresh per call by the caller and never mutated by providers.

    Attributes:
        working_directory: Absolute directory the operation runs in
        request_id: Correlation id used in log records
        tenant_id: Tenant the call is made on behalf of
        metadata: Extra correlation metadata from the transport layer
    """

    working_directory: Path
    request_id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    tenant_id: str | None = None
    metadata: dict[str, str] = field(default_factory=dict)

    def with_working_directory(self, path: Path) -> OperationContext:
        """Copy of this context bound to another directory (used by clone/init)."""
        return OperationContext(
            working_directory=path,
            request_id=self.request_id,
            tenant_id=self.tenant_id,
            metadata=dict(self.metadata),
        )

    def log_extra(self) -> dict[str, str | None]:
        return {"request_id": self.request_id, "tenant_id": self.tenant_id}


def _contains_traversal(raw: str) -> bool:
    return any(part == ".." for part in Path(raw).parts)


def resolve_working_directory(
    path_token: str,
    *,
    session_directory: Path | None,
) -> Path:
    """Resolve a caller-supplied path token to a validated absolute directory.

    Args:
        path_token: SESSION_DIRECTORY_TOKEN or an absolute path
        session_directory: Directory on record for the caller's session, if any

    Returns:
        Absolute, normalized directory path

    Raises:
        ValidationError: If no session directory is on record for the token,
            the path is relative, or it contains traversal segments or NUL bytes
    """
    if "\x00" in path_token:
        raise ValidationError("Working directory contains a NUL byte")

    if path_token == SESSION_DIRECTORY_TOKEN:
        if session_directory is None:
            raise ValidationError(
                "No session working directory is set; supply an absolute path"
            )
        return _validate_absolute(str(session_directory))

    return _validate_absolute(path_token)


def _validate_absolute(raw: str) -> Path:
    path = Path(raw)
    if not path.is_absolute():
        raise ValidationError(f"Working directory must be an absolute path: {raw}")
    if _contains_traversal(raw):
        raise ValidationError(f"Working directory must not contain '..' segments: {raw}")
    return path
