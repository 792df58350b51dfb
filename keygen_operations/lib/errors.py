"""Errors raised by key generation operations."""

from pathlib import Path


class KeygenError(Exception):
    """Base class for key generation failures."""


class BinaryUnavailableError(KeygenError):
    """No candidate key generation executable could be started."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"ssh-keygen binary not available: {path}")


class AlreadyExistsError(KeygenError):
    """Output file is present and overwriting is not permitted."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"{path} already exists")


class FilesystemError(KeygenError):
    """Probe, read or delete of an output file failed."""

    def __init__(self, path: Path, error: OSError) -> None:
        self.path = path
        self.error = error
        super().__init__(f"{path}: {error.strerror or error}")


class GenerationFailedError(KeygenError):
    """Executable wrote to its error stream; message is that output verbatim."""

    def __init__(self, stderr: str) -> None:
        self.stderr = stderr
        super().__init__(stderr)


class ExitCodeError(KeygenError):
    """Executable exited non-zero without writing to its error stream."""

    def __init__(self, exit_code: int) -> None:
        self.exit_code = exit_code
        super().__init__(f"ssh-keygen exited with code {exit_code}")


class GenerationTimeoutError(KeygenError):
    """Executable did not exit within the configured timeout."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"ssh-keygen did not exit within {timeout} seconds")
