"""Tests for the Unity Hub installer output parser."""

from unity_cli_tools import HUB_MODULE
from unity_cli_tools import InstallerEvent
from unity_cli_tools import InstallerStatus
from unity_cli_tools import parse_installer_output


def test_noise_yields_no_events():
    """Test text without status or error lines is dropped."""
    raw = "Starting Unity Hub...\nChecking for updates\n\n  [not a status line\n"

    assert parse_installer_output(raw) == []
    assert parse_installer_output("") == []


def test_status_line_with_progress():
    """Test a status line with a percentage."""
    events = parse_installer_output("[ModuleA] Downloading 42%")

    assert events == [InstallerEvent(module="ModuleA", status=InstallerStatus.DOWNLOADING, progress=42)]


def test_fractional_progress():
    """Test fractional percentages are kept."""
    events = parse_installer_output("[Android Build Support] Downloading 45.32%")

    assert events[0].progress == 45.32
    assert events[0].module == "Android Build Support"


def test_downloading_without_progress_defaults_to_zero():
    """Test Downloading with no percentage reports 0."""
    events = parse_installer_output("[ModuleA] Downloading")

    assert events == [InstallerEvent(module="ModuleA", status=InstallerStatus.DOWNLOADING, progress=0)]


def test_other_status_without_progress_is_none():
    """Test non-Downloading statuses without a percentage leave progress unset."""
    events = parse_installer_output("[ModuleA] Installed")

    assert len(events) == 1
    assert events[0].status == InstallerStatus.INSTALLED
    assert events[0].progress is None


def test_error_line():
    """Test an Error: line becomes a hub-level error event."""
    events = parse_installer_output("Error: disk full")

    assert events == [
        InstallerEvent(module=HUB_MODULE, status=InstallerStatus.ERROR, error="Error: disk full"),
    ]


def test_error_line_is_trimmed():
    """Test trailing whitespace is removed from the error text."""
    events = parse_installer_output("Error: network unreachable   \n")

    assert events[0].error == "Error: network unreachable"


def test_trailing_dots_stripped():
    """Test trailing ellipsis is not part of the status."""
    events = parse_installer_output("[Documentation] Installing...\n[Android] Validating 12.5%...")

    assert events[0].status == InstallerStatus.INSTALLING
    assert events[0].progress is None
    assert events[1].status == InstallerStatus.VALIDATING
    assert events[1].progress == 12.5


def test_module_name_trimmed():
    """Test whitespace inside the brackets is trimmed."""
    events = parse_installer_output("[  iOS Build Support ] Queued")

    assert events[0].module == "iOS Build Support"
    assert events[0].status == InstallerStatus.QUEUED


def test_multi_word_statuses():
    """Test statuses made of several words."""
    events = parse_installer_output(
        "[A] In Progress 5%\n[B] Queued For Install\n[C] Validating Installation\n[D] Verifying"
    )

    assert [e.status for e in events] == [
        InstallerStatus.IN_PROGRESS,
        InstallerStatus.QUEUED_INSTALL,
        InstallerStatus.VALIDATING_INSTALL,
        InstallerStatus.VERIFYING,
    ]
    assert events[0].progress == 5


def test_status_case_insensitive():
    """Test hub versions printing lowercase statuses still map to the enum."""
    events = parse_installer_output("[Android] installed 100%")

    assert events[0].status is InstallerStatus.INSTALLED


def test_unknown_status_kept_as_text():
    """Test statuses outside the enum are carried as raw text."""
    events = parse_installer_output("[Android] Extracting 30%")

    assert events[0].status == "Extracting"
    assert not isinstance(events[0].status, InstallerStatus)
    assert events[0].progress == 30


def test_progress_capped_at_100():
    """Test out-of-range percentages are capped."""
    events = parse_installer_output("[Android] Downloading 150%")

    assert events[0].progress == 100


def test_mixed_line_endings_keep_source_order():
    """Test CRLF, CR and LF are all treated as line breaks."""
    raw = "[A] Downloading 10%\r\n[B] Queued\r[C] Installed 100%\n"

    events = parse_installer_output(raw)

    assert [e.module for e in events] == ["A", "B", "C"]


def test_error_pass_runs_before_status_pass():
    """Test error events come first, then status events, each in source order."""
    raw = "[A] Downloading 5%\nError: first\n[B] Installing\nError: second"

    events = parse_installer_output(raw)

    assert [e.module for e in events] == [HUB_MODULE, HUB_MODULE, "A", "B"]
    assert [e.error for e in events[:2]] == ["Error: first", "Error: second"]


def test_indented_error_not_matched():
    """Test only lines starting with Error: are hub errors."""
    assert parse_installer_output("  Error: nested log output") == []
