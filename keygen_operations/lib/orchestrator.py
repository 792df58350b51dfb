"""Run ssh-keygen and realise the read/destroy semantics on its output."""

import asyncio
import logging
import os
from pathlib import Path

from .config import KeygenConfig
from .errors import (
    BinaryUnavailableError,
    ExitCodeError,
    FilesystemError,
    GenerationFailedError,
    GenerationTimeoutError,
)
from .logging_config import get_logger
from .models import KeyFilePair, KeyPairResult, SubprocessOutcome

LOGGER = get_logger("orchestrator")

STREAM_CHUNK_SIZE = 4096


def trim_key_text(text: str) -> str:
    """Drop everything from the last newline on, then strip surrounding whitespace.

    Text without any newline trims to an empty string.
    """
    return text[: max(text.rfind("\n"), 0)].strip()


def classify_outcome(outcome: SubprocessOutcome) -> None:
    """Raise if the run failed; error-stream output wins over the exit code.

    Raises:
        GenerationFailedError: If anything was written to stderr
        ExitCodeError: If the exit code is non-zero and stderr was empty
    """
    if outcome.stderr:
        raise GenerationFailedError(outcome.stderr)
    if outcome.exit_code != 0:
        raise ExitCodeError(outcome.exit_code)


async def _drain_stdout(stream: asyncio.StreamReader) -> None:
    while chunk := await stream.read(STREAM_CHUNK_SIZE):
        if LOGGER.isEnabledFor(logging.DEBUG):
            LOGGER.debug("stdout: %s", chunk.decode("utf-8", errors="replace").rstrip())


async def _collect_stderr(stream: asyncio.StreamReader) -> str:
    chunks: list[bytes] = []
    while chunk := await stream.read(STREAM_CHUNK_SIZE):
        if LOGGER.isEnabledFor(logging.DEBUG):
            LOGGER.debug("stderr: %s", chunk.decode("utf-8", errors="replace").rstrip())
        chunks.append(chunk)
    # Decoded once; multi-byte characters may span chunks
    return b"".join(chunks).decode("utf-8", errors="replace")


class KeygenOrchestrator:
    """Drives one ssh-keygen run and the post-processing of its key files."""

    def __init__(self, config: KeygenConfig, executable: str) -> None:
        """Initialize orchestrator.

        Args:
            config: Fully defaulted generation config
            executable: Resolved executable path (see resolve_binary)
        """
        self.config = config
        self.executable = executable
        self.pair = KeyFilePair.from_location(config.location)

    def build_arguments(self) -> list[str]:
        """Map the config onto ssh-keygen flags, one flag and one value per field."""
        return [
            "-t",
            self.config.key_type,
            "-b",
            self.config.bit_size,
            "-C",
            self.config.comment,
            "-N",
            self.config.passphrase,
            "-f",
            str(self.pair.private_key_path),
            "-m",
            self.config.output_format.value,
        ]

    async def run_keygen(self) -> SubprocessOutcome:
        """Spawn ssh-keygen and wait for it while draining both streams.

        Returns:
            SubprocessOutcome with exit code and accumulated stderr text

        Raises:
            BinaryUnavailableError: If the process cannot be started
            GenerationTimeoutError: If a timeout is configured and expires
        """
        LOGGER.debug("spawning %s for %s", self.executable, self.pair.private_key_path)
        try:
            process = await asyncio.create_subprocess_exec(
                self.executable,
                *self.build_arguments(),
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise BinaryUnavailableError(self.executable) from e

        waiting = asyncio.gather(
            _drain_stdout(process.stdout),
            _collect_stderr(process.stderr),
            process.wait(),
        )
        try:
            _, stderr, exit_code = await asyncio.wait_for(waiting, timeout=self.config.timeout)
        except TimeoutError:
            LOGGER.debug("timed out after %ss, killing pid %s", self.config.timeout, process.pid)
            if process.returncode is None:
                process.kill()
            await process.wait()
            raise GenerationTimeoutError(self.config.timeout or 0) from None

        LOGGER.debug("exited with code %s", exit_code)
        return SubprocessOutcome(exit_code=exit_code, stderr=stderr)

    async def _read_key(self, path: Path) -> str:
        """Read one key file, deleting it afterwards when destroy is set."""
        LOGGER.debug("reading key %s", path)
        try:
            text = await asyncio.to_thread(path.read_text, encoding="utf-8")
        except OSError as e:
            raise FilesystemError(path, e) from e

        if self.config.destroy:
            LOGGER.debug("destroying key %s", path)
            try:
                await asyncio.to_thread(os.unlink, path)
            except OSError as e:
                raise FilesystemError(path, e) from e

        return text

    async def generate(self) -> KeyPairResult | None:
        """Run ssh-keygen, then read and optionally destroy the key pair.

        Files are processed one after the other, private key first. Deletions
        already done are not undone when a later step fails.

        Returns:
            KeyPairResult when read is set, None otherwise

        Raises:
            KeygenError: On any generation or file failure
        """
        outcome = await self.run_keygen()
        classify_outcome(outcome)

        if not self.config.read:
            return None

        private_key = await self._read_key(self.pair.private_key_path)
        public_key = await self._read_key(self.pair.public_key_path)

        if self.config.destroy:
            private_key = trim_key_text(private_key)
            public_key = trim_key_text(public_key)

        return KeyPairResult(private_key=private_key, public_key=public_key)
