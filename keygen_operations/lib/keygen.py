"""Public entry points for generating ssh key pairs."""

import asyncio
from collections.abc import Callable, Mapping
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

from .availability import check_availability
from .binary_resolver import resolve_binary
from .config import KeygenConfig
from .logging_config import get_logger
from .models import KeyFilePair, KeyPairResult
from .orchestrator import KeygenOrchestrator

LOGGER = get_logger("keygen")

KeygenCallback = Callable[[BaseException | None, KeyPairResult | None], None]

_EXECUTOR = ThreadPoolExecutor(thread_name_prefix="keygen")


async def generate_keypair(config: KeygenConfig) -> KeyPairResult | None:
    """Generate a key pair: resolve binary, clear the way, run, post-process.

    Args:
        config: Fully defaulted generation config

    Returns:
        KeyPairResult when config.read is set, None otherwise

    Raises:
        BinaryUnavailableError: Before any file is touched
        AlreadyExistsError: If a key file exists and config.force is False
        FilesystemError: If a probe, read or delete fails
        GenerationFailedError: If ssh-keygen wrote to stderr
        ExitCodeError: If ssh-keygen exited non-zero silently
    """
    executable = await asyncio.to_thread(resolve_binary, config.executable_path)

    try:
        await check_availability(KeyFilePair.from_location(config.location), config.force)
    except Exception as e:
        LOGGER.debug("availability err %s", e)
        raise

    return await KeygenOrchestrator(config, executable).generate()


def _run(config: KeygenConfig) -> KeyPairResult | None:
    return asyncio.run(generate_keypair(config))


def keygen(
    options: Mapping[str, Any] | None = None,
    callback: KeygenCallback | None = None,
    **kwargs: Any,
) -> "Future[KeyPairResult | None] | None":
    """Generate a key pair on a worker thread.

    Without a callback a Future is returned; result() gives the KeyPairResult
    (None when read is off) or raises the failure. With a callback, it is
    called once as callback(error, None) or callback(None, result).

    Args:
        options: Option mapping, see KeygenConfig.from_options
        callback: Optional completion callback
        **kwargs: Options given as keywords; they override options

    Returns:
        Future when no callback is given, None otherwise

    Raises:
        ValueError: If the options are invalid (raised immediately)
    """
    config = KeygenConfig.from_options({**(options or {}), **kwargs})
    future = _EXECUTOR.submit(_run, config)

    if callback is None:
        return future

    def _done(done: "Future[KeyPairResult | None]") -> None:
        error = done.exception()
        if error is not None:
            callback(error, None)
        else:
            callback(None, done.result())

    future.add_done_callback(_done)
    return None
