"""Shared fixtures: temporary Unity layouts and a fake command runner."""

import tempfile
from pathlib import Path

import pytest
from unity_cli_tools import CommandResult
from unity_cli_tools import resolve_unity_paths


class FakeRunner:
    """Command runner that records calls and replays canned output."""

    def __init__(self, stdout_lines=(), stderr: str = "", exit_code: int = 0):
        self.stdout_lines = list(stdout_lines)
        self.stderr = stderr
        self.exit_code = exit_code
        self.calls: list[tuple[Path, list[str]]] = []

    async def __call__(
        self,
        executable,
        args,
        *,
        timeout=None,
        env=None,
        cwd=None,
        on_stdout=None,
        on_stderr=None,
    ) -> CommandResult:
        self.calls.append((Path(executable), list(args)))

        for line in self.stdout_lines:
            if on_stdout:
                on_stdout(line)
        if self.stderr and on_stderr:
            for line in self.stderr.splitlines():
                on_stderr(line)

        return CommandResult(
            success=self.exit_code == 0,
            stdout="\n".join(self.stdout_lines),
            stderr=self.stderr,
            exit_code=self.exit_code,
        )

    @property
    def last_args(self) -> list[str]:
        return self.calls[-1][1]


class RaisingRunner(FakeRunner):
    """Command runner that fails after recording the call."""

    def __init__(self, error: Exception):
        super().__init__()
        self.error = error

    async def __call__(self, executable, args, **options) -> CommandResult:
        self.calls.append((Path(executable), list(args)))
        raise self.error


@pytest.fixture
def unity_root():
    """Temporary directory standing in for a machine with Unity installed."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def make_paths(root: Path, platform: str = "linux", create_hub: bool = True):
    """Resolve paths rooted in ``root`` (hub executable optionally created)."""
    hub_executable = root / "UnityHub"
    if create_hub:
        hub_executable.write_text("#!/bin/sh\n")

    return resolve_unity_paths(
        platform=platform,
        environ={
            "UNITY_HUB_PATH": str(hub_executable),
            "UNITY_EDITOR_PATH": str(root / "editors"),
        },
        home=root / "home",
    )


@pytest.fixture
def linux_paths(unity_root):
    return make_paths(unity_root)


@pytest.fixture
def make_unity_paths(unity_root):
    """Factory fixture: make_unity_paths(platform="darwin", create_hub=False)."""

    def factory(platform: str = "linux", create_hub: bool = True):
        return make_paths(unity_root, platform=platform, create_hub=create_hub)

    return factory
