"""Locate a startable ssh-keygen executable."""

import platform
import subprocess
from pathlib import Path

from .errors import BinaryUnavailableError
from .logging_config import get_logger

LOGGER = get_logger("binary_resolver")

BUNDLED_BIN_DIR = Path(__file__).resolve().parent.parent / "bin"

# Bundled Windows builds, tried after the supplied path
BUNDLED_BINARIES = {
    "x86": "ssh-keygen-32.exe",
    "i386": "ssh-keygen-32.exe",
    "i686": "ssh-keygen-32.exe",
    "amd64": "ssh-keygen-64.exe",
    "x86_64": "ssh-keygen-64.exe",
}

PROBE_ARGS = ["-?"]
PROBE_TIMEOUT_SECONDS = 10.0


def candidate_paths(
    executable_path: str,
    system: str | None = None,
    machine: str | None = None,
) -> list[str]:
    """Build the ordered list of executables to try.

    Args:
        executable_path: Caller-supplied path or command name, always first
        system: Host OS name as reported by platform.system()
        machine: Host CPU architecture as reported by platform.machine()

    Returns:
        Candidate paths, supplied path first then any bundled fallback
    """
    system = platform.system() if system is None else system
    machine = platform.machine() if machine is None else machine

    candidates = [executable_path]
    if system == "Windows":
        bundled = BUNDLED_BINARIES.get(machine.lower())
        if bundled is not None:
            fallback = str(BUNDLED_BIN_DIR / bundled)
            if fallback not in candidates:
                candidates.append(fallback)
    return candidates


def probe(candidate: str) -> bool:
    """Return True if the candidate can be started at all.

    The exit code is ignored; ssh-keygen exits non-zero on a usage request.
    """
    try:
        subprocess.run(
            [candidate, *PROBE_ARGS],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
            timeout=PROBE_TIMEOUT_SECONDS,
        )
    except subprocess.TimeoutExpired:
        # Started, so usable
        return True
    except OSError as e:
        LOGGER.debug("probe failed for %s: %s", candidate, e)
        return False
    return True


def resolve_binary(
    executable_path: str,
    system: str | None = None,
    machine: str | None = None,
) -> str:
    """Resolve the executable to run for key generation.

    Args:
        executable_path: Caller-supplied path or command name
        system: Host OS override (defaults to the running host)
        machine: Host architecture override (defaults to the running host)

    Returns:
        First candidate path that could be started

    Raises:
        BinaryUnavailableError: If no candidate could be started
    """
    for candidate in candidate_paths(executable_path, system=system, machine=machine):
        LOGGER.debug("probing %s", candidate)
        if probe(candidate):
            LOGGER.debug("resolved %s", candidate)
            return candidate

    raise BinaryUnavailableError(executable_path)
