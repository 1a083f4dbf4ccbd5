"""Unity data model - installer events, module ids, project records.

Installer events are immutable value records: one is produced per parsed
line of hub output and never mutated afterwards.
"""

import json
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic.alias_generators import to_camel


class InstallerStatus(StrEnum):
    """Lifecycle stage of a module installation, as printed by Unity Hub."""

    QUEUED = "Queued"
    VALIDATING = "Validating"
    IN_PROGRESS = "In Progress"
    DOWNLOADING = "Downloading"
    QUEUED_INSTALL = "Queued For Install"
    VALIDATING_INSTALL = "Validating Installation"
    INSTALLING = "Installing"
    VERIFYING = "Verifying"
    INSTALLED = "Installed"
    ERROR = "Error"

    @classmethod
    def _missing_(cls, value: object) -> "InstallerStatus | None":
        # Hub versions differ in capitalization ("installed", "Queued for install")
        if isinstance(value, str):
            folded = value.casefold()
            for member in cls:
                if member.value.casefold() == folded:
                    return member
        return None


class InstallerEventType(StrEnum):
    """Notification kinds raised by an installation pipeline."""

    PROGRESS = "progress"
    ERROR = "error"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class InstallerEvent(BaseModel):
    """One parsed line of installation progress.

    ``status`` is an InstallerStatus when the hub printed a known status text,
    otherwise the raw text. ``progress`` is None when the line carried no
    percentage (except Downloading, which defaults to 0).
    """

    model_config = ConfigDict(frozen=True)

    module: str
    status: InstallerStatus | str = Field(union_mode="left_to_right")
    progress: float | None = Field(default=None, ge=0, le=100)
    error: str | None = None

    @property
    def is_error(self) -> bool:
        return self.status == InstallerStatus.ERROR


class UnityModules(StrEnum):
    """Module ids accepted by ``install --module`` / ``install-modules --module``."""

    DOCUMENTATION = "documentation"
    ANDROID_BUILD_SUPPORT = "android"
    ANDROID_SDK_NDK_TOOLS = "android-sdk-ndk-tools"
    OPEN_JDK = "android-open-jdk"
    IOS_BUILD_SUPPORT = "ios"
    TVOS_BUILD_SUPPORT = "appletv"
    LINUX_BUILD_SUPPORT_MONO = "linux-mono"
    LINUX_BUILD_SUPPORT_IL2CPP = "linux-il2cpp"
    WEBGL_BUILD_SUPPORT = "webgl"
    WINDOWS_BUILD_SUPPORT = "windows"
    VUFORIA_AR = "vuforia-ar"
    WINDOWS_BUILD_SUPPORT_MONO = "windows-mono"
    LUMIN_BUILD_SUPPORT = "lumin"
    VISUAL_STUDIO_COMMUNITY = "visualstudio"
    MAC_BUILD_SUPPORT_MONO = "mac-mono"
    MAC_BUILD_SUPPORT_IL2CPP = "mac-il2cpp"
    UNIVERSAL_WINDOWS_PLATFORM = "universal-windows-platform"
    UWP_BUILD_SUPPORT_IL2CPP = "uwp-il2cpp"
    UWP_BUILD_SUPPORT_DOTNET = "uwp-.net"


class UnityEditorLanguages(StrEnum):
    """Editor language pack module ids."""

    JAPANESE = "language-ja"
    KOREAN = "language-ko"
    CHINESE_SIMPLIFIED = "language-zh-hans"
    CHINESE_TRADITIONAL = "language-zh-hant"
    CHINESE = "language-zh-cn"


ModuleId = UnityModules | UnityEditorLanguages | str


class EditorArchitecture(StrEnum):
    X86_64 = "x86_64"
    ARM64 = "arm64"


class TestMode(StrEnum):
    """Test platforms for ``-runTests -testPlatform``."""

    __test__ = False  # keep pytest from collecting this as a test class

    EDIT_MODE = "editmode"
    PLAY_MODE = "playmode"


class UnityBuildTarget(StrEnum):
    """Build targets, also accepted as a ``-testPlatform`` value."""

    STANDALONE_OSX = "StandaloneOSX"
    STANDALONE_WINDOWS = "StandaloneWindows"
    IOS = "iOS"
    ANDROID = "Android"
    STANDALONE_WINDOWS64 = "StandaloneWindows64"
    WEBGL = "WebGL"
    WSA_PLAYER = "WSAPlayer"
    STANDALONE_LINUX64 = "StandaloneLinux64"
    PS4 = "PS4"
    XBOX_ONE = "XboxOne"
    TVOS = "tvOS"
    SWITCH = "Switch"
    LINUX_HEADLESS_SIMULATION = "LinuxHeadlessSimulation"
    PS5 = "PS5"
    VISION_OS = "VisionOS"


class ProjectInfo(BaseModel):
    """Project a Unity Editor command operates on."""

    model_config = ConfigDict(frozen=True)

    project_name: str
    project_path: Path
    editor_version: str
    scenes: list[str] | None = None


class ProjectTemplate(BaseModel):
    """Project template package shipped with an editor version."""

    model_config = ConfigDict(frozen=True)

    template_name: str
    template_path: Path


class UnityHubProject(BaseModel):
    """Entry of Unity Hub's projects-v1.json (camelCase on disk)."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    title: str
    path: str
    version: str = ""
    last_modified: int | None = None
    is_custom_editor: bool = False
    containing_folder_path: str = ""
    architecture: str = ""
    changeset: str = ""
    is_favorite: bool = False
    local_project_id: str = ""
    cloud_enabled: bool = False


class UnityHubProjectsList(BaseModel):
    """Contents of projects-v1.json: project entries keyed by project path."""

    model_config = ConfigDict(frozen=True)

    data: dict[str, UnityHubProject] = Field(default_factory=dict)

    @classmethod
    def from_file(cls, projects_path: Path) -> "UnityHubProjectsList":
        """
        Load the projects list from Unity Hub's projects file.

        Args:
            projects_path: Path to projects-v1.json

        Returns:
            UnityHubProjectsList instance

        Raises:
            FileNotFoundError: If the file doesn't exist
            json.JSONDecodeError: If the file is not valid JSON
            pydantic.ValidationError: If entries are missing required fields
        """
        if not projects_path.exists():
            raise FileNotFoundError(f"Projects file not found: {projects_path}")

        with open(projects_path, encoding="utf-8") as f:
            data = json.load(f)

        return cls.model_validate(data)

    def projects(self) -> list[UnityHubProject]:
        return list(self.data.values())
