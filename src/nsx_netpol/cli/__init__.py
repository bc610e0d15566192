"""Command-line interface for nsx-netpol."""

from __future__ import annotations

from nsx_netpol.cli.main import cli, main

__all__: list[str] = ["cli", "main"]
