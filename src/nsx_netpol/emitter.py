"""YAML rendering of generated NetworkPolicies.

Policies are rendered as a multi-document stream. Each document starts with
a ``---`` line and ends with a blank line, in the order the policies are
given.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TextIO

import yaml

from nsx_netpol.schemas import NetworkPolicy

DOCUMENT_SEPARATOR = "---\n"


def render_policy(policy: NetworkPolicy) -> str:
    """Render one policy as a YAML document without separator."""
    # SECURITY: safe_dump prevents arbitrary Python object serialization
    return yaml.safe_dump(
        policy.to_k8s_manifest(),
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )


def render_policies(policies: Iterable[NetworkPolicy]) -> str:
    """Render policies as a ``---`` separated YAML stream.

    Example:
        >>> render_policies([])
        ''
    """
    return "".join(f"{DOCUMENT_SEPARATOR}{render_policy(p)}\n" for p in policies)


def write_policies(policies: Iterable[NetworkPolicy], stream: TextIO) -> int:
    """Write policies to a text stream.

    Returns:
        Number of documents written.
    """
    count = 0
    for policy in policies:
        stream.write(f"{DOCUMENT_SEPARATOR}{render_policy(policy)}\n")
        count += 1
    return count


__all__ = ["DOCUMENT_SEPARATOR", "render_policies", "render_policy", "write_policies"]
