"""Process Invocation Adapter.

Starts the external tool, accumulates stdout/stderr as they arrive and
resolves with the exit code. The orchestrator only sees `ProcessRunner`, so
tests can swap in a fake.
"""

import asyncio
import codecs
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from ..core import get_logger
from .errors import ProcessSpawnError

logger = get_logger(__name__)

CHUNK_SIZE = 4096

OutputCallback = Callable[[str, str], None]


@dataclass(frozen=True)
class ProcessOutput:
    """Finished child process."""

    exit_code: int
    stdout: str = ""
    stderr: str = ""


class ProcessRunner(Protocol):
    """Runs an executable to completion."""

    async def run(self, executable: str | Path, args: Sequence[str]) -> ProcessOutput:
        """
        Raises:
            ProcessSpawnError: If the process could not be started
        """
        ...


class AsyncProcessRunner:
    """
    asyncio-backed runner.

    Both pipes are drained concurrently so a chatty child cannot block on a
    full pipe. No timeout: a hung tool blocks the build until it exits.
    """

    def __init__(self, on_output: OutputCallback | None = None, encoding: str = "utf-8") -> None:
        """
        Args:
            on_output: Called with (stream_name, text) for every chunk read
            encoding: Encoding of the child's output
        """
        self.on_output = on_output
        self.encoding = encoding

    async def run(self, executable: str | Path, args: Sequence[str]) -> ProcessOutput:
        logger.info("process_start", executable=str(executable), args=list(args))
        try:
            process = await asyncio.create_subprocess_exec(
                str(executable),
                *args,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            logger.error("process_spawn_failed", executable=str(executable), error=str(e))
            raise ProcessSpawnError(str(e)) from e

        stdout, stderr = await asyncio.gather(
            self._drain(process.stdout, "stdout"),
            self._drain(process.stderr, "stderr"),
        )
        exit_code = await process.wait()

        logger.info("process_exit", exit_code=exit_code)
        return ProcessOutput(exit_code=exit_code, stdout=stdout, stderr=stderr)

    async def _drain(self, stream: asyncio.StreamReader | None, name: str) -> str:
        if stream is None:
            return ""

        decoder = codecs.getincrementaldecoder(self.encoding)(errors="replace")
        chunks: list[str] = []
        while True:
            data = await stream.read(CHUNK_SIZE)
            if not data:
                break
            text = decoder.decode(data)
            if text:
                self._emit(name, text, chunks)

        tail = decoder.decode(b"", final=True)
        if tail:
            self._emit(name, tail, chunks)
        return "".join(chunks)

    def _emit(self, name: str, text: str, chunks: list[str]) -> None:
        chunks.append(text)
        logger.debug("process_output", stream=name, text=text)
        if self.on_output is not None:
            self.on_output(name, text)


def run_sync(runner: ProcessRunner, executable: str | Path, args: Sequence[str]) -> ProcessOutput:
    """Blocking wrapper for callers outside an event loop."""
    return asyncio.run(runner.run(executable, args))
