"""Convert command implementation.

This module implements the ``nsx-netpol convert`` command which:
- Reads an NSX services export (JSON)
- Generates one Kubernetes NetworkPolicy per service
- Writes the policies as a multi-document YAML stream to stdout or a file

Example:
    $ nsx-netpol convert -f services.json
    $ nsx-netpol convert -f services.json -n payments > policies.yaml
    $ nsx-netpol convert -f services.json --port-mode passthrough -o policies.yaml
    $ nsx-netpol convert -f services.json --strict
"""

from __future__ import annotations

from pathlib import Path

import click
import structlog

from nsx_netpol.assembler import translate_services
from nsx_netpol.cli.utils import ExitCode, error_exit, info, warn
from nsx_netpol.config import get_settings
from nsx_netpol.emitter import render_policies, write_policies
from nsx_netpol.exceptions import ConfigurationError, InputError
from nsx_netpol.loader import load_services
from nsx_netpol.ports import PortMode
from nsx_netpol.telemetry.logging import configure_logging

logger = structlog.get_logger(__name__)

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@click.command(
    name="convert",
    help="""\b
Convert an NSX services export into NetworkPolicy manifests.

Generates one NetworkPolicy per service. Destination ports become ingress
rules and source ports become egress rules. Policies are written to stdout
as YAML documents separated by '---'.

Examples:
    $ nsx-netpol convert -f services.json
    $ nsx-netpol convert -f services.json -n payments -o policies.yaml
    $ nsx-netpol convert -f services.json --port-mode passthrough
""",
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option(
    "--file",
    "-f",
    "input_file",
    type=click.Path(dir_okay=True, path_type=Path),
    default=None,
    help="Path to the JSON file containing service data.",
    metavar="PATH",
)
@click.option(
    "--namespace",
    "-n",
    type=str,
    default=None,
    help="Kubernetes namespace for the NetworkPolicies [default: default].",
    metavar="TEXT",
)
@click.option(
    "--port-mode",
    type=click.Choice([m.value for m in PortMode]),
    default=None,
    help="numeric: emit integer ports, drop invalid tokens. "
    "passthrough: emit tokens unchanged.",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write YAML to this file instead of stdout.",
    metavar="PATH",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Fail without writing output if any port token was dropped.",
)
@click.option(
    "--log-level",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Log level for diagnostics on stderr [default: WARNING].",
)
@click.option(
    "--log-format",
    type=click.Choice(["console", "json"]),
    default=None,
    help="Log output format [default: console].",
)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    hidden=True,
    help="Show verbose error messages with tracebacks.",
)
def convert_command(
    input_file: Path | None,
    namespace: str | None,
    port_mode: str | None,
    output: Path | None,
    strict: bool,
    log_level: str | None,
    log_format: str | None,
    debug: bool,
) -> None:
    """Convert an NSX services export into NetworkPolicy manifests."""
    try:
        settings = get_settings()
    except ConfigurationError as e:
        error_exit(str(e), exit_code=ExitCode.USAGE_ERROR)

    configure_logging(
        log_level=log_level or settings.log_level,
        log_format="json" if (log_format or settings.log_format) == "json" else "console",
    )

    if input_file is None:
        error_exit(
            "Missing --file option. Provide path to the services JSON file.",
            exit_code=ExitCode.USAGE_ERROR,
        )

    target_namespace = namespace if namespace is not None else settings.namespace
    mode = PortMode(port_mode) if port_mode is not None else settings.port_mode

    try:
        document = load_services(input_file)
        result = translate_services(document, namespace=target_namespace, mode=mode)
    except InputError as e:
        if debug:
            import traceback

            traceback.print_exc()
        error_exit(str(e), exit_code=e.exit_code)
    except Exception as e:
        if debug:
            import traceback

            traceback.print_exc()
        error_exit(
            f"NetworkPolicy generation failed: {type(e).__name__}: {e}",
            exit_code=ExitCode.GENERAL_ERROR,
        )

    if result.has_diagnostics:
        warn(f"Dropped {result.dropped_ports_count} invalid port token(s)")
        if strict:
            error_exit(
                "Strict mode: refusing to write incomplete policies",
                exit_code=ExitCode.VALIDATION_ERROR,
                dropped=result.dropped_ports_count,
            )

    if output is not None:
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            with output.open("w", encoding="utf-8") as f:
                write_policies(result.policies, f)
        except OSError as e:
            error_exit(
                f"Cannot write output file: {e}",
                exit_code=ExitCode.IO_ERROR,
                path=str(output),
            )
        info(f"Wrote {result.policies_count} NetworkPolicy manifest(s) to {output}")
    else:
        click.echo(render_policies(result.policies), nl=False)
        info(f"Generated {result.policies_count} NetworkPolicy manifest(s)")

    logger.debug("convert.completed", namespace=target_namespace, **result.summary())


__all__: list[str] = ["convert_command"]
