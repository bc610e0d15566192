"""Main entry point for the nsx-netpol CLI.

Commands:
    nsx-netpol convert: Convert an NSX services export into NetworkPolicies

Example:
    $ nsx-netpol --help
    $ nsx-netpol convert -f services.json -n payments
"""

from __future__ import annotations

import sys
from importlib.metadata import version as get_version

import click

from nsx_netpol.cli.convert import convert_command


def _get_version() -> str:
    """Get the installed package version, or 'unknown' if not installed."""
    try:
        return get_version("nsx-netpol")
    except Exception:
        return "unknown"


@click.group(
    name="nsx-netpol",
    help="nsx-netpol - Translate NSX service definitions into Kubernetes NetworkPolicies.",
    epilog="Use 'nsx-netpol <command> --help' for command-specific help.",
    context_settings={
        "help_option_names": ["-h", "--help"],
    },
)
@click.version_option(
    version=_get_version(),
    prog_name="nsx-netpol",
    message="%(prog)s %(version)s",
)
def cli() -> None:
    """Root command group for the nsx-netpol CLI."""


cli.add_command(convert_command)


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the nsx-netpol CLI.

    Args:
        argv: Command-line arguments (uses sys.argv if None).
    """
    try:
        cli(args=argv, standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except click.Abort:
        click.echo("Aborted!", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
