"""Translate NSX service exports into Kubernetes NetworkPolicy manifests.

Example:
    >>> from pathlib import Path
    >>> from nsx_netpol import load_services, translate_services, render_policies
    >>> document = load_services(Path("services.json"))
    >>> result = translate_services(document, namespace="payments")
    >>> print(render_policies(result.policies))
"""

from __future__ import annotations

from typing import Any

__version__ = "0.1.0"

__all__ = [
    # Core translation
    "assemble_policy",
    "build_rules",
    "parse_port",
    "sanitize_name",
    "translate_services",
    "PortMode",
    "TranslationResult",
    # Models
    "NetworkPolicy",
    "PortGroup",
    "Service",
    "ServiceEntry",
    "ServicesDocument",
    "PortDiagnostic",
    # Boundary
    "load_services",
    "render_policies",
]

_LAZY_IMPORTS: dict[str, str] = {
    "assemble_policy": "nsx_netpol.assembler",
    "translate_services": "nsx_netpol.assembler",
    "TranslationResult": "nsx_netpol.assembler",
    "build_rules": "nsx_netpol.rules",
    "parse_port": "nsx_netpol.ports",
    "PortMode": "nsx_netpol.ports",
    "sanitize_name": "nsx_netpol.naming",
    "NetworkPolicy": "nsx_netpol.schemas",
    "PortGroup": "nsx_netpol.schemas",
    "Service": "nsx_netpol.schemas",
    "ServiceEntry": "nsx_netpol.schemas",
    "ServicesDocument": "nsx_netpol.schemas",
    "PortDiagnostic": "nsx_netpol.diagnostics",
    "load_services": "nsx_netpol.loader",
    "render_policies": "nsx_netpol.emitter",
}


def __getattr__(name: str) -> Any:
    """Lazy import of public components."""
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is not None:
        import importlib

        return getattr(importlib.import_module(module_name), name)
    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
