"""Tests for command execution and argument redaction."""

import sys

import pytest
from unity_cli_tools import execute_command
from unity_cli_tools import redact_sensitive_args


def python_script(code: str) -> list[str]:
    return ["-c", code]


@pytest.mark.asyncio
async def test_execute_command_collects_output():
    """Test stdout and stderr are captured and exit code 0 is success."""
    result = await execute_command(
        sys.executable,
        python_script("import sys; print('hello'); print('warn', file=sys.stderr)"),
    )

    assert result.success
    assert result.exit_code == 0
    assert result.stdout == "hello"
    assert result.stderr == "warn"


@pytest.mark.asyncio
async def test_execute_command_streams_lines():
    """Test callbacks receive each non-blank line in order."""
    stdout_lines = []
    stderr_lines = []

    result = await execute_command(
        sys.executable,
        python_script(
            "import sys\n"
            "print('[Android] Downloading 10%')\n"
            "print('')\n"
            "print('[Android] Installed 100%')\n"
            "print('oops', file=sys.stderr)\n"
        ),
        on_stdout=stdout_lines.append,
        on_stderr=stderr_lines.append,
    )

    assert result.success
    assert stdout_lines == ["[Android] Downloading 10%", "[Android] Installed 100%"]
    assert stderr_lines == ["oops"]


@pytest.mark.asyncio
async def test_execute_command_line_longer_than_stream_limit():
    """Test an oversized line is delivered whole and later lines still arrive."""
    lines = []

    result = await execute_command(
        sys.executable,
        python_script(
            "import sys\n"
            "sys.stdout.write('x' * 200000 + '\\n[Android] Installed 100%\\n')\n"
        ),
        on_stdout=lines.append,
    )

    assert result.success
    assert lines == ["x" * 200000, "[Android] Installed 100%"]


@pytest.mark.asyncio
async def test_execute_command_output_without_trailing_newline():
    lines = []

    result = await execute_command(
        sys.executable,
        python_script("import sys; sys.stdout.write('[Android] Downloading 10%\\n[Android] Installed 100%')"),
        on_stdout=lines.append,
    )

    assert result.success
    assert lines == ["[Android] Downloading 10%", "[Android] Installed 100%"]
    assert result.stdout == "[Android] Downloading 10%\n[Android] Installed 100%"


@pytest.mark.asyncio
async def test_execute_command_nonzero_exit():
    """Test a failing process is reported, not raised."""
    result = await execute_command(sys.executable, python_script("import sys; sys.exit(3)"))

    assert not result.success
    assert result.exit_code == 3


@pytest.mark.asyncio
async def test_execute_command_missing_executable():
    """Test a missing executable yields a failed result."""
    result = await execute_command("/nonexistent/unity", ["-version"])

    assert not result.success
    assert result.exit_code == -1
    assert result.stderr


@pytest.mark.asyncio
async def test_execute_command_timeout():
    """Test the process is killed when the timeout elapses."""
    result = await execute_command(sys.executable, python_script("import time; time.sleep(10)"), timeout=0.5)

    assert not result.success
    assert result.exit_code == -1
    assert "timed out" in result.stderr


@pytest.mark.asyncio
async def test_execute_command_env_and_cwd(unity_root):
    """Test extra environment variables and working directory are applied."""
    result = await execute_command(
        sys.executable,
        python_script("import os; print(os.environ['UNITY_TEST_VAR']); print(os.getcwd())"),
        env={"UNITY_TEST_VAR": "42"},
        cwd=unity_root,
    )

    lines = result.stdout.splitlines()
    assert lines[0] == "42"
    assert lines[1] == str(unity_root.resolve())


def test_redact_separate_value():
    """Test values following sensitive flags are masked."""
    argv = ["-quit", "-serial", "SC-123", "-username", "dev@example.com", "-password", "hunter2"]

    assert redact_sensitive_args(argv) == [
        "-quit",
        "-serial",
        "SC-123",
        "-username",
        "dev@example.com",
        "-password",
        "[REDACTED]",
    ]


def test_redact_key_value_form():
    """Test --key=value forms are masked."""
    assert redact_sensitive_args(["--token=abc", "--Secret=xyz", "--name=game"]) == [
        "--token=[REDACTED]",
        "--Secret=[REDACTED]",
        "--name=game",
    ]


def test_redact_value_starting_with_dash():
    """Test a secret that looks like a flag is still masked."""
    assert redact_sensitive_args(["-password", "-Xy9!", "-quit"]) == ["-password", "[REDACTED]", "-quit"]
    assert redact_sensitive_args(["-password", "-token", "abc"]) == ["-password", "[REDACTED]", "[REDACTED]"]


def test_redact_flag_without_value():
    assert redact_sensitive_args(["-password"]) == ["-password"]


def test_redact_custom_keys_and_input_untouched():
    """Test custom keys and that the input list is not modified."""
    argv = ["-serial", "SC-123"]

    assert redact_sensitive_args(argv, sensitive_keys=["serial"]) == ["-serial", "[REDACTED]"]
    assert argv == ["-serial", "SC-123"]
