"""unity-cli-tools - Script Unity Hub and Unity Editor from Python.

Public API: hub/editor wrappers, the installation event pipeline, the data
model and the exception hierarchy. Paths are resolved once and injected.
"""

from .config import EditorPaths
from .config import HubPaths
from .config import UnityPaths
from .config import resolve_unity_paths
from .editor import TestRunResult
from .editor import UnityEditor
from .events import InstallerEventEmitter
from .exceptions import InstallationCancelledError
from .exceptions import InvalidArgumentError
from .exceptions import UnityCommandError
from .exceptions import UnityEditorNotFoundError
from .exceptions import UnityError
from .exceptions import UnityHubNotFoundError
from .exceptions import UnityInstallationError
from .exceptions import UnityProjectError
from .exceptions import UnsupportedPlatformError
from .hub import UnityHub
from .parser import HUB_MODULE
from .parser import parse_installer_output
from .process import CommandResult
from .process import execute_command
from .process import redact_sensitive_args
from .protocols import CommandRunnerProtocol
from .schema import EditorArchitecture
from .schema import InstallerEvent
from .schema import InstallerEventType
from .schema import InstallerStatus
from .schema import ModuleId
from .schema import ProjectInfo
from .schema import ProjectTemplate
from .schema import TestMode
from .schema import UnityBuildTarget
from .schema import UnityEditorLanguages
from .schema import UnityHubProject
from .schema import UnityHubProjectsList
from .schema import UnityModules
from .templates import UnityTemplates

__all__ = [
    # Wrappers
    "UnityHub",
    "UnityEditor",
    "UnityTemplates",
    "TestRunResult",
    # Installation events
    "InstallerEventEmitter",
    "InstallerEvent",
    "InstallerEventType",
    "InstallerStatus",
    "parse_installer_output",
    "HUB_MODULE",
    # Data model
    "EditorArchitecture",
    "ModuleId",
    "ProjectInfo",
    "ProjectTemplate",
    "TestMode",
    "UnityBuildTarget",
    "UnityEditorLanguages",
    "UnityHubProject",
    "UnityHubProjectsList",
    "UnityModules",
    # Configuration
    "EditorPaths",
    "HubPaths",
    "UnityPaths",
    "resolve_unity_paths",
    # Process execution
    "CommandResult",
    "CommandRunnerProtocol",
    "execute_command",
    "redact_sensitive_args",
    # Exceptions
    "UnityError",
    "UnityHubNotFoundError",
    "UnityEditorNotFoundError",
    "UnityCommandError",
    "UnityInstallationError",
    "InstallationCancelledError",
    "UnityProjectError",
    "InvalidArgumentError",
    "UnsupportedPlatformError",
]

__version__ = "0.1.0"
