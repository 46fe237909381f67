"""
Configuration module for storekit.

``StorageManagerOptions`` is resolved once, when a manager is constructed.
It can be built directly, from environment variables or from a JSON/YAML
file.
"""

from dataclasses import dataclass, fields
from datetime import timedelta
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..util.config import (
    DEFAULT_ENV_PREFIX,
    get_config_value,
    load_config_file,
    parse_duration_ms,
)


# camelCase spellings accepted in configuration files
_OPTION_ALIASES = {
    "defaultadapter": "default_adapter",
    "defaultexpires": "default_expires",
    "defaultencrypt": "default_encrypt",
}


@dataclass
class StorageManagerOptions:
    """Configuration for a StorageManager"""
    default_adapter: Optional[str] = None
    default_expires: Optional[Union[int, str, timedelta]] = 0  # ms, 0 = never expires
    default_encrypt: bool = False
    namespace: str = ""

    def __post_init__(self):
        if self.default_expires is None:
            self.default_expires = 0
        self.default_expires = parse_duration_ms(self.default_expires)
        if self.namespace is None:
            self.namespace = ""

    @classmethod
    def from_env(cls, env_prefix: str = DEFAULT_ENV_PREFIX) -> "StorageManagerOptions":
        """Create options from environment variables"""
        return cls(
            default_adapter=get_config_value("default_adapter", env_prefix=env_prefix),
            default_expires=get_config_value("default_expires", "0", env_prefix=env_prefix),
            default_encrypt=get_config_value("default_encrypt", False, bool, env_prefix=env_prefix),
            namespace=get_config_value("namespace", "", env_prefix=env_prefix),
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StorageManagerOptions":
        """
        Create options from a mapping.

        Keys may be snake_case or camelCase; unknown keys are ignored.
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = str(key).replace("-", "_")
            name = _OPTION_ALIASES.get(name.lower(), name)
            if name in known:
                kwargs[name] = value
        return cls(**kwargs)

    @classmethod
    def from_file(cls, file_path: Union[str, Path]) -> "StorageManagerOptions":
        """Create options from a JSON or YAML file"""
        data = load_config_file(file_path)
        # Allow the options to sit under a top-level "storage" section
        if isinstance(data.get("storage"), dict):
            data = data["storage"]
        return cls.from_dict(data)

    def validate(self) -> bool:
        """Validate the configuration"""
        if self.default_expires < 0:
            raise ValueError("default_expires must be >= 0")
        if self.default_adapter is not None and not str(self.default_adapter).strip():
            raise ValueError("default_adapter must not be empty")
        if not isinstance(self.namespace, str):
            raise ValueError("namespace must be a string")
        return True
