"""
Encoding and decoding utilities for storekit.
Provides the reversible, keyless obfuscation transform applied to persisted
envelopes, and the URI component quoting used by the cookie adapter.

Obfuscation is NOT encryption: anyone holding the encoded text can recover
the original without any secret.
"""

import base64
import binascii
import logging
from typing import Union
from urllib.parse import quote, unquote


logger = logging.getLogger(__name__)

# Characters left untouched by JavaScript's encodeURIComponent
URI_COMPONENT_SAFE = "-_.!~*'()"


def base64_encode(data: Union[str, bytes]) -> str:
    """Encode data to base64 string."""
    if isinstance(data, str):
        data = data.encode('utf-8')

    return base64.b64encode(data).decode('ascii')


def base64_decode(encoded: str) -> bytes:
    """Decode base64 string to bytes."""
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Invalid base64 data: {e}")


def uri_component_encode(text: str) -> str:
    """Percent-encode text with URI component rules."""
    return quote(text, safe=URI_COMPONENT_SAFE)


def uri_component_decode(encoded: str) -> str:
    """Decode a percent-encoded URI component; malformed UTF-8 raises ValueError."""
    return unquote(encoded, errors='strict')


def obfuscate(text: str) -> str:
    """
    Apply the reversible obfuscation transform.

    The text is percent-encoded first so the base64 step only ever sees
    ASCII, whatever characters the original text contains.
    """
    return base64_encode(uri_component_encode(text))


def deobfuscate(text: str) -> str:
    """
    Reverse ``obfuscate``.

    Malformed input is returned unchanged instead of raising, so callers
    decoding untrusted storage contents never fail at this step.
    """
    try:
        return uri_component_decode(base64_decode(text).decode('ascii'))
    except (ValueError, UnicodeDecodeError) as e:
        logger.debug(f"Deobfuscation skipped, input is not obfuscated text: {e}")
        return text
