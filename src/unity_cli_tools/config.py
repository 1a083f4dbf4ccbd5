"""Platform paths for Unity Hub and Unity Editor.

Paths are resolved once into an immutable UnityPaths and injected into
UnityHub, UnityEditor and UnityTemplates. Nothing here is module-level
mutable state, so tests can build paths for any platform.

Environment overrides:
    UNITY_HUB_PATH               Unity Hub executable
    UNITY_EDITOR_PATH            Directory holding one folder per editor version
    UNITY_PROJECT_TEMPLATE_PATH  Template directory, relative to an editor version folder
"""

import logging
import os
import platform as platform_module
import sys
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel
from pydantic import ConfigDict

from .exceptions import UnsupportedPlatformError

logger = logging.getLogger(__name__)


class HubPaths(BaseModel):
    """Unity Hub locations."""

    model_config = ConfigDict(frozen=True)

    executable: Path
    projects_file: Path
    project_dir_file: Path


class EditorPaths(BaseModel):
    """Unity Editor locations; ``executable`` and ``project_templates`` are relative to ``base / version``."""

    model_config = ConfigDict(frozen=True)

    base: Path
    executable: Path
    project_templates: Path


class UnityPaths(BaseModel):
    """Resolved paths for one platform."""

    model_config = ConfigDict(frozen=True)

    hub: HubPaths
    editor: EditorPaths
    platform: str
    architecture: str

    def editor_executable(self, version: str) -> Path:
        return self.editor.base / version / self.editor.executable

    def editor_templates(self, version: str) -> Path:
        return self.editor.base / version / self.editor.project_templates


_HUB_EXECUTABLES = {
    "win32": "C:\\Program Files\\Unity Hub\\Unity Hub.exe",
    "darwin": "/Applications/Unity Hub.app/Contents/MacOS/Unity Hub",
    "linux": "/opt/UnityHub/UnityHub",
}

# Hub settings directory, relative to the user's home
_HUB_SETTINGS_DIRS = {
    "win32": ("AppData", "Roaming", "UnityHub"),
    "darwin": ("Library", "Application Support", "UnityHub"),
    "linux": (".config", "UnityHub"),
}

_EDITOR_PATHS = {
    "win32": {
        "base": "C:/Program Files/Unity/Hub/Editor",
        "executable": "Editor/Unity.exe",
        "project_templates": "Editor/Data/Resources/PackageManager/ProjectTemplates",
    },
    "darwin": {
        "base": "/Applications/Unity/Hub/Editor",
        "executable": "Unity.app/Contents/MacOS/Unity",
        "project_templates": "Unity.app/Contents/Resources/PackageManager/ProjectTemplates",
    },
    "linux": {
        "base": "/opt/unity/editor",
        "executable": "Editor/Unity",
        "project_templates": "Editor/Data/Resources/PackageManager/ProjectTemplates",
    },
}

SUPPORTED_PLATFORMS = tuple(_EDITOR_PATHS)


def _normalize_platform(name: str) -> str:
    # sys.platform reports "linux" on current Pythons but "linux2" on old ones
    if name.startswith("linux"):
        return "linux"
    return name


def resolve_unity_paths(
    platform: str | None = None,
    environ: Mapping[str, str] | None = None,
    home: Path | None = None,
) -> UnityPaths:
    """
    Resolve Unity paths for a platform, applying environment overrides.

    Args:
        platform: "win32", "darwin" or "linux" (default: current platform)
        environ: Environment to read overrides from (default: os.environ)
        home: User home directory (default: Path.home())

    Returns:
        UnityPaths for the platform

    Raises:
        UnsupportedPlatformError: If the platform has no path table

    Example:
        >>> paths = resolve_unity_paths(platform="linux", environ={}, home=Path("/home/dev"))
        >>> paths.hub.projects_file
        PosixPath('/home/dev/.config/UnityHub/projects-v1.json')
    """
    platform = _normalize_platform(platform or sys.platform)
    environ = os.environ if environ is None else environ
    home = home or Path.home()

    if platform not in _EDITOR_PATHS:
        raise UnsupportedPlatformError(
            f"Unsupported platform '{platform}'. Supported: {', '.join(SUPPORTED_PLATFORMS)}",
            context={"platform": platform},
        )

    settings_dir = home.joinpath(*_HUB_SETTINGS_DIRS[platform])
    editor_defaults = _EDITOR_PATHS[platform]

    hub = HubPaths(
        executable=Path(environ.get("UNITY_HUB_PATH") or _HUB_EXECUTABLES[platform]),
        projects_file=settings_dir / "projects-v1.json",
        project_dir_file=settings_dir / "projectDir.json",
    )
    editor = EditorPaths(
        base=Path(environ.get("UNITY_EDITOR_PATH") or editor_defaults["base"]),
        executable=Path(editor_defaults["executable"]),
        project_templates=Path(environ.get("UNITY_PROJECT_TEMPLATE_PATH") or editor_defaults["project_templates"]),
    )

    paths = UnityPaths(
        hub=hub,
        editor=editor,
        platform=platform,
        architecture=platform_module.machine(),
    )
    logger.debug(f"Resolved Unity paths for {platform}: hub={hub.executable}, editor base={editor.base}")
    return paths
