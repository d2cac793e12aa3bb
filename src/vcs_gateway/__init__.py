"""vcs-gateway: typed version-control operations over interchangeable backends.

The ``vcs-gateway`` console script exposes a few read-only operations for
manual inspection; see ``vcs-gateway --help``.
"""

from vcs_gateway.cli import cli


def main() -> None:
    """CLI entry point used by the `vcs-gateway` console script."""
    cli()
