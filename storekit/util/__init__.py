"""
Utility helpers for storekit: obfuscation encoding and configuration loading.
"""

from .encoding import (
    obfuscate,
    deobfuscate,
    uri_component_encode,
    uri_component_decode,
)

from .config import (
    get_config_value,
    parse_duration_string,
    parse_duration_ms,
    load_config_file,
)

__all__ = [
    "obfuscate",
    "deobfuscate",
    "uri_component_encode",
    "uri_component_decode",
    "get_config_value",
    "parse_duration_string",
    "parse_duration_ms",
    "load_config_file",
]
