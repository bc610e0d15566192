"""Allow running the CLI with ``python -m nsx_netpol``."""

from __future__ import annotations

from nsx_netpol.cli.main import main

if __name__ == "__main__":
    main()
