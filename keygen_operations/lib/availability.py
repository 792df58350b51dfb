"""Availability gate: enforce the overwrite policy before generation."""

import asyncio
import os
from pathlib import Path

from .errors import AlreadyExistsError, FilesystemError
from .logging_config import get_logger
from .models import KeyFilePair

LOGGER = get_logger("availability")


def key_file_exists(path: Path) -> bool:
    """Return True if the file is readable and writable.

    Any probe failure, permission denied included, counts as absent.
    """
    return os.access(path, os.R_OK | os.W_OK)


def _remove(path: Path) -> None:
    LOGGER.debug("removing %s", path)
    try:
        os.unlink(path)
    except OSError as e:
        raise FilesystemError(path, e) from e


async def check_availability(pair: KeyFilePair, force: bool) -> None:
    """Make sure neither key file exists before generation starts.

    Existence is checked then acted on without locking; another writer can
    slip in between. Callers must not share a location across concurrent runs.

    Args:
        pair: Private/public key paths to check
        force: Remove existing files instead of failing

    Raises:
        AlreadyExistsError: If a file exists and force is False; the private
            key is reported before the public key
        FilesystemError: If removing an existing file fails
    """
    LOGGER.debug("checking availability: %s", pair.private_key_path)
    LOGGER.debug("checking availability: %s", pair.public_key_path)
    key_exists, pub_key_exists = await asyncio.gather(
        asyncio.to_thread(key_file_exists, pair.private_key_path),
        asyncio.to_thread(key_file_exists, pair.public_key_path),
    )

    if not force:
        if key_exists:
            raise AlreadyExistsError(pair.private_key_path)
        if pub_key_exists:
            raise AlreadyExistsError(pair.public_key_path)
        return

    existing = [
        path
        for path, exists in zip(pair, (key_exists, pub_key_exists), strict=True)
        if exists
    ]
    if not existing:
        return

    # Removals are independent; first failure is raised once both settle
    results = await asyncio.gather(
        *(asyncio.to_thread(_remove, path) for path in existing),
        return_exceptions=True,
    )
    for result in results:
        if isinstance(result, BaseException):
            raise result
