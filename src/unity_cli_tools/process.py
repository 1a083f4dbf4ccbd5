"""Command execution for Unity Hub and Unity Editor processes.

execute_command never raises for process failures: spawn errors, timeouts
and non-zero exits all come back as a CommandResult with ``success=False``.
"""

import asyncio
import logging
import os
import re
from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

LineCallback = Callable[[str], None]

REDACTED = "[REDACTED]"
DEFAULT_SENSITIVE_KEYS = ("password", "token", "secret")

_KEY_VALUE_ARG = re.compile(r"^--?([^=]+)=(.+)$")
_READ_SIZE = 64 * 1024


@dataclass
class CommandResult:
    """Outcome of one external command."""

    success: bool
    stdout: str
    stderr: str
    exit_code: int | None = None

    @classmethod
    def failure(cls, stderr: str, stdout: str = "") -> "CommandResult":
        """Result for a command that could not run to completion."""
        return cls(success=False, stdout=stdout, stderr=stderr, exit_code=-1)


def _deliver(raw: bytes, sink: list[str], callback: LineCallback | None) -> None:
    text = raw.decode("utf-8", errors="replace")
    sink.append(text)
    line = text.rstrip("\r\n")
    if callback and line.strip():
        try:
            callback(line)
        except Exception:
            logger.exception("Output callback failed")


async def _pump_lines(stream: asyncio.StreamReader, sink: list[str], callback: LineCallback | None) -> None:
    # read() instead of readline(): installer lines can exceed the StreamReader limit
    pending = b""
    while True:
        chunk = await stream.read(_READ_SIZE)
        if not chunk:
            break
        pending += chunk
        if b"\n" not in chunk:
            continue
        *lines, pending = pending.split(b"\n")
        for raw in lines:
            _deliver(raw + b"\n", sink, callback)
    if pending:
        _deliver(pending, sink, callback)


async def _terminate(process: asyncio.subprocess.Process) -> None:
    if process.returncode is None:
        try:
            process.kill()
        except ProcessLookupError:
            pass
    await process.wait()


async def execute_command(
    executable: str | Path,
    args: Iterable[str],
    *,
    timeout: float | None = None,
    env: Mapping[str, str] | None = None,
    cwd: str | Path | None = None,
    on_stdout: LineCallback | None = None,
    on_stderr: LineCallback | None = None,
) -> CommandResult:
    """
    Run an executable and collect its output.

    Each non-blank output line is passed to ``on_stdout`` / ``on_stderr`` as
    soon as it is read, so long-running installers can be tracked live.

    Args:
        executable: Program to run
        args: Command-line arguments
        timeout: Seconds before the process is killed (None: no limit)
        env: Extra environment variables, merged over os.environ
        cwd: Working directory
        on_stdout: Called with each stdout line
        on_stderr: Called with each stderr line

    Returns:
        CommandResult; ``success`` is True only for exit code 0
    """
    argv = [str(arg) for arg in args]
    merged_env = {**os.environ, **env} if env else None

    try:
        process = await asyncio.create_subprocess_exec(
            str(executable),
            *argv,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env=merged_env,
            cwd=str(cwd) if cwd else None,
        )
    except OSError as e:
        logger.error(f"Failed to start {executable}: {e}")
        return CommandResult.failure(str(e))

    logger.debug(f"Started {executable} (pid {process.pid})")

    stdout_lines: list[str] = []
    stderr_lines: list[str] = []

    async def communicate() -> int:
        assert process.stdout is not None and process.stderr is not None
        await asyncio.gather(
            _pump_lines(process.stdout, stdout_lines, on_stdout),
            _pump_lines(process.stderr, stderr_lines, on_stderr),
        )
        return await process.wait()

    try:
        exit_code = await asyncio.wait_for(communicate(), timeout)
    except TimeoutError:
        await _terminate(process)
        logger.warning(f"{executable} timed out after {timeout}s")
        return CommandResult.failure(
            f"Command timed out after {timeout}s",
            stdout="".join(stdout_lines),
        )
    except Exception as e:
        await _terminate(process)
        logger.exception(f"Reading output of {executable} failed")
        return CommandResult.failure(str(e), stdout="".join(stdout_lines))

    stdout = "".join(stdout_lines).strip()
    stderr = "".join(stderr_lines).strip()
    if exit_code != 0:
        logger.debug(f"{executable} exited with code {exit_code}")

    return CommandResult(success=exit_code == 0, stdout=stdout, stderr=stderr, exit_code=exit_code)


def redact_sensitive_args(
    argv: Iterable[str],
    sensitive_keys: Iterable[str] = DEFAULT_SENSITIVE_KEYS,
) -> list[str]:
    """
    Mask credential values in an argument list before logging it.

    Handles both ``-password value`` and ``--password=value`` forms.

    Args:
        argv: Command-line arguments
        sensitive_keys: Option names (case-insensitive, without dashes) to mask

    Returns:
        New list with sensitive values replaced by "[REDACTED]"

    Example:
        >>> redact_sensitive_args(["-username", "dev", "-password", "hunter2"])
        ['-username', 'dev', '-password', '[REDACTED]']
    """
    keys = {key.lower() for key in sensitive_keys}
    original = list(argv)
    redacted = list(original)

    for i, arg in enumerate(original):
        match = _KEY_VALUE_ARG.match(arg)
        if match:
            if match.group(1).lower() in keys:
                redacted[i] = f"{arg[: match.start(2)]}{REDACTED}"
            continue

        if arg.startswith("-") and arg.lstrip("-").lower() in keys:
            # Values may start with "-" too, so the next argument is always masked
            if i + 1 < len(redacted):
                redacted[i + 1] = REDACTED

    return redacted
