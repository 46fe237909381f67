"""
Tests for the storage error taxonomy.
"""

import pytest

from storekit.errors import (
    AdapterNotFoundError,
    BackendUnavailableError,
    DecodeError,
    ErrorCode,
    StorageError,
    StorageWriteError,
)


class TestStorageErrors:
    """Test error codes and structured output"""

    def test_base_error_has_generic_code(self):
        error = StorageError("something went wrong")

        assert error.code is ErrorCode.STORAGE_ERROR
        assert error.to_dict() == {
            "error": "storage_error",
            "error_description": "something went wrong",
        }

    @pytest.mark.parametrize("error_class,code", [
        (BackendUnavailableError, ErrorCode.BACKEND_UNAVAILABLE),
        (StorageWriteError, ErrorCode.WRITE_FAILED),
        (DecodeError, ErrorCode.DECODE_FAILED),
    ])
    def test_subclass_codes(self, error_class, code):
        error = error_class("failed", adapter="memory")

        assert isinstance(error, StorageError)
        assert error.code is code
        assert error.to_dict()["adapter"] == "memory"

    def test_explicit_code_overrides_class_default(self):
        error = StorageError("failed", code=ErrorCode.DECODE_FAILED)
        assert error.to_dict()["error"] == "decode_failed"

    def test_adapter_not_found(self):
        error = AdapterNotFoundError("redis")

        assert error.name == "redis"
        assert error.code is ErrorCode.ADAPTER_NOT_FOUND
        assert "redis" in str(error)

    def test_cause_reported(self):
        cause = OSError("disk full")
        error = StorageWriteError("Failed to set item 'k'", cause=cause)

        assert error.to_dict()["caused_by"] == "disk full"
        assert error.is_retryable() is False
