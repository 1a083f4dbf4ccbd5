"""Protocols for injecting command execution.

UnityHub and UnityEditor build argument lists; running them is delegated to
a runner. The default is process.execute_command. Tests and hosts with their
own process management can pass any object matching this protocol.
"""

from collections.abc import Iterable
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol

from .process import CommandResult
from .process import LineCallback


class CommandRunnerProtocol(Protocol):
    """Protocol for running an external command.

    Example implementations:
    - execute_command: asyncio subprocess (default)
    - A fake that records argv and replays canned output (tests)
    """

    async def __call__(
        self,
        executable: str | Path,
        args: Iterable[str],
        *,
        timeout: float | None = None,
        env: Mapping[str, str] | None = None,
        cwd: str | Path | None = None,
        on_stdout: LineCallback | None = None,
        on_stderr: LineCallback | None = None,
    ) -> CommandResult:
        """Run ``executable`` with ``args``.

        Must not raise for process failures; report them in the CommandResult.
        Must call ``on_stdout`` / ``on_stderr`` with output lines in order.
        """
        ...
