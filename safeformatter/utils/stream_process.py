"""Asynchronous process execution with streamed output handling.

Both output streams of the child are drained concurrently and every line is
handed to an output middleware as it arrives, then collected into a single
ordered buffer.

Example:
    ```python
    from safeformatter.utils.stream_process import run_command, OutputMiddleware

    class PrefixMiddleware(OutputMiddleware[str]):
        def process(self, line: str, stream_type: str) -> str:
            return f"[{stream_type}] {line}"

    return_code, lines = await run_command(["diskpart.exe", "/?"], PrefixMiddleware())
    ```
"""

import asyncio
import contextlib
import shlex
import subprocess
import sys
from collections.abc import Sequence
from typing import Any, Generic, TypeAlias, TypeVar, cast


T = TypeVar("T")  # Type of processed output

# (return_code, combined output lines in arrival order)
ProcessResult: TypeAlias = tuple[int, list[T]]


class OutputMiddleware(Generic[T]):
    """Base class for processing command output streams.

    Type parameter T represents the return type of the process method,
    allowing middleware to transform lines into other types if needed.
    Returning None drops the line from the collected output.
    """

    def process(self, line: str, stream_type: str) -> T:
        """Process a line of output from a subprocess stream.

        Args:
            line: A line of text from the process output
            stream_type: Either "stdout" or "stderr"

        Returns:
            Processed output of type T
        """
        raise NotImplementedError()


class PassthroughMiddleware(OutputMiddleware[str]):
    """Collects lines unchanged."""

    def process(self, line: str, stream_type: str) -> str:
        return line


def split_args(args: str | Sequence[str]) -> list[str]:
    """Turn an argument string or sequence into an argument list."""
    if isinstance(args, str):
        # Windows paths must keep their backslashes
        return shlex.split(args, posix=sys.platform != "win32")
    return list(args)


def default_encoding() -> str:
    """Codec of child console output; diskpart writes the OEM code page."""
    return "oem" if sys.platform == "win32" else "utf-8"


def _creation_flags() -> int:
    """Suppress the console window for children on Windows."""
    return getattr(subprocess, "CREATE_NO_WINDOW", 0) if sys.platform == "win32" else 0


async def run_command(
    cmd: Sequence[str],
    middleware: OutputMiddleware[T] | None = None,
    encoding: str | None = None,
) -> ProcessResult[T]:
    """Run a command and process its output through middleware.

    Args:
        cmd: Program and arguments
        middleware: Optional middleware for processing output lines
        encoding: Encoding used to decode child output, defaults to
            default_encoding()

    Returns:
        Tuple of the return code and the processed lines of both streams
        in the order they were received

    Raises:
        OSError: If the process cannot be started
    """
    if middleware is None:
        # Cast is needed because T is unbound at this point
        middleware = cast(OutputMiddleware[T], PassthroughMiddleware())
    codec = encoding or default_encoding()

    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdin=asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        creationflags=_creation_flags(),
    )

    captured: list[T] = []

    async def stream_output(stream: Any, stream_type: str) -> None:
        while True:
            raw = await stream.readline()
            if not raw:
                break
            line = raw.decode(codec, errors="replace").rstrip("\r\n")
            processed = middleware.process(line, stream_type)
            if processed is not None:
                captured.append(processed)

    try:
        await asyncio.gather(
            stream_output(process.stdout, "stdout"),
            stream_output(process.stderr, "stderr"),
        )
        return_code = await process.wait()
    except BaseException:
        # Never leave the child running or unreaped
        if process.returncode is None:
            with contextlib.suppress(ProcessLookupError):
                process.kill()
            await process.wait()
        raise

    return return_code, captured
