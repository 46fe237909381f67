"""
Common helpers shared across storekit packages.
"""

from .utils import now_ms, namespace_key, strip_namespace, NAMESPACE_SEPARATOR

__all__ = [
    "now_ms",
    "namespace_key",
    "strip_namespace",
    "NAMESPACE_SEPARATOR",
]
