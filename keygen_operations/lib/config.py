"""Key generation configuration dataclasses."""

import os
import tempfile
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any

DEFAULT_EXECUTABLE = "ssh-keygen"
EXECUTABLE_ENV_VAR = "KEYGEN_PATH"

# Path("") renders as "."
EMPTY_LOCATIONS = ("", ".")

# Option names accepted alongside the dataclass field names
OPTION_ALIASES = {
    "type": "key_type",
    "size": "bit_size",
    "password": "passphrase",
    "format": "output_format",
    "sshKeygenPath": "executable_path",
}


class KeyFormat(StrEnum):
    """On-disk key encodings understood by ssh-keygen -m."""

    RFC4716 = "RFC4716"
    PKCS8 = "PKCS8"
    PEM = "PEM"


def default_location() -> Path:
    """Return the default private key path inside the system temp dir."""
    return Path(tempfile.gettempdir()) / "id_rsa"


def default_executable() -> str:
    """Return the executable from KEYGEN_PATH, else the bare command name."""
    return os.environ.get(EXECUTABLE_ENV_VAR) or DEFAULT_EXECUTABLE


@dataclass(frozen=True)
class KeygenConfig:
    """Configuration for one key pair generation."""

    location: Path = field(default_factory=default_location)
    executable_path: str = field(default_factory=default_executable)
    key_type: str = "rsa"
    bit_size: str = "2048"
    comment: str = ""
    passphrase: str = ""
    output_format: KeyFormat = KeyFormat.RFC4716
    read: bool = True
    force: bool = True
    destroy: bool = False
    timeout: float | None = None

    def __post_init__(self) -> None:
        # Frozen: normalise via object.__setattr__
        location = Path(self.location)
        if str(self.location) in EMPTY_LOCATIONS:
            raise ValueError("location must not be empty")
        object.__setattr__(self, "location", location)
        object.__setattr__(self, "bit_size", str(self.bit_size))
        try:
            object.__setattr__(self, "output_format", KeyFormat(self.output_format))
        except ValueError as e:
            allowed = ", ".join(f.value for f in KeyFormat)
            raise ValueError(
                f"unsupported key format {self.output_format!r} (expected one of {allowed})"
            ) from e
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be positive")

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None = None) -> "KeygenConfig":
        """Build a config from loosely specified options, applying defaults.

        Toggles (read, force, destroy, timeout) fall back to their defaults
        only when missing or None. String options fall back when falsy, so an
        empty comment and a missing comment are the same thing.

        Args:
            options: Option mapping; keys are field names or their aliases
                (type, size, password, format, sshKeygenPath)

        Returns:
            Fully defaulted KeygenConfig

        Raises:
            ValueError: If an option is unknown or a value is invalid
        """
        normalised: dict[str, Any] = {}
        for key, value in (options or {}).items():
            name = OPTION_ALIASES.get(key, key)
            if name not in _FIELD_NAMES:
                raise ValueError(f"unknown option: {key}")
            normalised[name] = value

        kwargs: dict[str, Any] = {}
        for name in ("read", "force", "destroy", "timeout"):
            if normalised.get(name) is not None:
                kwargs[name] = normalised[name]
        for name in (
            "location",
            "executable_path",
            "key_type",
            "bit_size",
            "comment",
            "passphrase",
            "output_format",
        ):
            if normalised.get(name):
                kwargs[name] = normalised[name]

        # Path("") is truthy but still means no location
        if str(kwargs.get("location", "")) in EMPTY_LOCATIONS:
            kwargs.pop("location", None)

        return cls(**kwargs)


_FIELD_NAMES = frozenset(KeygenConfig.__dataclass_fields__)
