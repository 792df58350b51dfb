"""Result models for key generation operations."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class KeyFilePair:
    """Private and public key paths derived from one base location.

    The two paths are always handled together for existence and removal.
    """

    private_key_path: Path
    public_key_path: Path

    @classmethod
    def from_location(cls, location: Path | str) -> "KeyFilePair":
        """Derive the pair: private key at location, public key at location + '.pub'."""
        return cls(
            private_key_path=Path(location),
            public_key_path=Path(f"{location}.pub"),
        )

    def __iter__(self):
        yield self.private_key_path
        yield self.public_key_path


@dataclass
class KeyPairResult:
    """Key material read back from disk, as opaque text."""

    private_key: str
    public_key: str

    def to_dict(self) -> dict[str, str]:
        """Serialise using the key/pubKey field names."""
        return {"key": self.private_key, "pubKey": self.public_key}


@dataclass
class SubprocessOutcome:
    """Exit code and error-stream text collected from one executable run."""

    exit_code: int
    stderr: str
