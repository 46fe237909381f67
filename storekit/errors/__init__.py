"""
Error taxonomy for storekit.

Every error raised by the storage facade derives from ``StorageError`` and
carries a structured ``ErrorCode``, the name of the adapter involved (when
there is one) and the underlying cause.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Structured error codes for storage operations."""

    STORAGE_ERROR = "storage_error"
    BACKEND_UNAVAILABLE = "backend_unavailable"
    ADAPTER_NOT_FOUND = "adapter_not_found"
    WRITE_FAILED = "write_failed"
    DECODE_FAILED = "decode_failed"


class StorageError(Exception):
    """
    Base exception class for all storage errors.

    Provides structured error information with an error code, the
    adapter that produced the error and the original exception.
    """

    code: ErrorCode = ErrorCode.STORAGE_ERROR

    def __init__(
        self,
        message: str,
        adapter: Optional[str] = None,
        cause: Optional[BaseException] = None,
        code: Optional[ErrorCode] = None,
    ):
        self.message = message
        self.adapter = adapter
        self.cause = cause
        if code is not None:
            self.code = code

        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "error": self.code.value,
            "error_description": self.message,
        }

        if self.adapter:
            result["adapter"] = self.adapter

        if self.cause:
            result["caused_by"] = str(self.cause)

        return result

    def is_retryable(self) -> bool:
        """Storage errors are never resolved by retrying the same call."""
        return False


class BackendUnavailableError(StorageError):
    """Raised when an operation is routed to an adapter whose raw store is not usable."""

    code = ErrorCode.BACKEND_UNAVAILABLE


class AdapterNotFoundError(StorageError):
    """Raised when a name or alias does not resolve to a registered adapter."""

    code = ErrorCode.ADAPTER_NOT_FOUND

    def __init__(self, name: str, **kwargs):
        self.name = name
        super().__init__(f"Adapter '{name}' not found", **kwargs)


class StorageWriteError(StorageError):
    """Raised when a raw store rejects a write (quota exceeded, unserializable value)."""

    code = ErrorCode.WRITE_FAILED


class DecodeError(StorageError):
    """Raised by the strict envelope decoder when text is not a valid envelope."""

    code = ErrorCode.DECODE_FAILED


__all__ = [
    "ErrorCode",
    "StorageError",
    "BackendUnavailableError",
    "AdapterNotFoundError",
    "StorageWriteError",
    "DecodeError",
]
