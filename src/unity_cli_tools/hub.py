"""Unity Hub command-line wrapper.

Drives ``Unity Hub --headless`` for editor installation, module
installation and install-path management, and reads the hub's JSON
settings files for project listings.

Installs are long-running: add_editor / add_module start the hub in a
background task and return an InstallerEventEmitter right away. Hub stdout
is streamed into the emitter line by line; callers subscribe to it or await
``emitter.wait()``.
"""

import asyncio
import json
import logging
from collections.abc import Iterable
from pathlib import Path

from pydantic import ValidationError

from .config import UnityPaths
from .config import resolve_unity_paths
from .events import InstallerEventEmitter
from .exceptions import InvalidArgumentError
from .exceptions import UnityCommandError
from .exceptions import UnityHubNotFoundError
from .exceptions import UnityInstallationError
from .process import CommandResult
from .process import execute_command
from .process import redact_sensitive_args
from .protocols import CommandRunnerProtocol
from .schema import EditorArchitecture
from .schema import ModuleId
from .schema import UnityEditorLanguages
from .schema import UnityHubProject
from .schema import UnityHubProjectsList
from .schema import UnityModules

logger = logging.getLogger(__name__)

INSTALLATION_FILTERS = {"i": "installed", "a": "all", "r": "available releases"}

_INSTALLED_AT = "installed at"


class UnityHub:
    """
    Unity Hub wrapper (with injected paths and command runner).

    Example:
        >>> hub = UnityHub(resolve_unity_paths())
        >>> emitter = await hub.add_editor("2022.3.60f1", modules=[UnityModules.ANDROID_BUILD_SUPPORT])
        >>> emitter.on(InstallerEventType.PROGRESS, print)
        >>> installed = await emitter.wait(timeout=3600)
    """

    Modules = UnityModules
    Languages = UnityEditorLanguages

    def __init__(
        self,
        paths: UnityPaths | None = None,
        runner: CommandRunnerProtocol = execute_command,
    ):
        """Initialize with resolved paths and a command runner.

        Args:
            paths: Platform paths (default: resolve_unity_paths())
            runner: Command runner (default: asyncio subprocess execution)
        """
        self.paths = paths or resolve_unity_paths()
        self.runner = runner
        self._installations: set[asyncio.Task[CommandResult]] = set()

    @property
    def executable(self) -> Path:
        return self.paths.hub.executable

    def is_available(self) -> bool:
        """Check whether the Unity Hub executable exists."""
        return self.executable.exists()

    async def exec_command(self, args: Iterable[str], **options) -> CommandResult:
        """
        Run a headless Unity Hub command.

        Args:
            args: Hub arguments (``--headless`` is added)
            **options: Passed to the command runner (timeout, env, cwd, on_stdout, on_stderr)

        Returns:
            CommandResult; a failed result if the hub is not available
            or the runner raised
        """
        if not self.is_available():
            logger.error(f"Unity Hub is not available at {self.executable}")
            return CommandResult.failure("Unity Hub is not available.")

        # Electron needs "--" before app arguments everywhere except Linux
        separator = [] if self.paths.platform == "linux" else ["--"]
        hub_args = [*separator, "--headless", *args]
        logger.debug(f"Executing Unity Hub command: {self.executable} {' '.join(redact_sensitive_args(hub_args))}")

        try:
            return await self.runner(self.executable, hub_args, **options)
        except Exception as e:
            logger.exception("Unity Hub command failed")
            return CommandResult.failure(str(e))

    async def get_install_path(self) -> str:
        """
        Get the directory Unity Hub installs editors into.

        Raises:
            UnityCommandError: If the hub reports an error
        """
        result = await self.exec_command(["install-path", "-g"])
        if result.stderr:
            raise UnityCommandError(
                f"Error getting install path: {result.stderr}",
                stdout=result.stdout,
                stderr=result.stderr,
                exit_code=result.exit_code,
            )
        return result.stdout

    async def set_install_path(self, path: str | Path) -> None:
        """
        Set the directory Unity Hub installs editors into.

        Raises:
            UnityCommandError: If the hub reports an error
        """
        result = await self.exec_command(["install-path", "-s", str(path)])
        if result.stderr:
            raise UnityCommandError(
                f"Error setting install path: {result.stderr}",
                stdout=result.stdout,
                stderr=result.stderr,
                exit_code=result.exit_code,
                context={"path": str(path)},
            )
        logger.debug(f"Install path set to: {result.stdout}")

    async def get_installations(self, filter: str = "i") -> dict[str, str]:
        """
        List editor versions known to Unity Hub.

        Args:
            filter: "i" installed editors, "a" all, "r" available releases

        Returns:
            Mapping of version to install location ("" for releases not installed)

        Raises:
            InvalidArgumentError: If filter is not i, a or r
            UnityCommandError: If the hub reports an error
            UnityInstallationError: If the hub lists no editors
        """
        if filter not in INSTALLATION_FILTERS:
            raise InvalidArgumentError(
                f'Invalid filter "{filter}". Use "i" for installed, "a" for all, or "r" for available releases.',
                context={"filter": filter},
            )

        result = await self.exec_command(["editors", f"-{filter}"])
        if result.stderr:
            raise UnityCommandError(
                f"Get installations command warning/error: {result.stderr}",
                stdout=result.stdout,
                stderr=result.stderr,
                exit_code=result.exit_code,
            )

        installations: dict[str, str] = {}
        for line in result.stdout.splitlines():
            if not line.strip():
                continue
            version, _, location = line.partition(_INSTALLED_AT)
            installations[version.strip().rstrip(",").strip()] = location.strip()

        if not installations:
            raise UnityInstallationError(
                "No Unity installations found. Consider installing a Unity version using Unity Hub.",
                context={"filter": filter},
            )

        return installations

    async def add_module(
        self,
        editor_version: str,
        modules: Iterable[ModuleId],
        child_modules: bool = False,
    ) -> InstallerEventEmitter:
        """
        Add modules to an installed editor.

        Args:
            editor_version: Editor version (e.g. "2022.3.60f1")
            modules: Module ids to install
            child_modules: Also install child modules

        Returns:
            Emitter tracking the installation

        Raises:
            InvalidArgumentError: If no modules are given
            UnityHubNotFoundError: If the hub is not available
        """
        module_ids = [str(m) for m in modules]
        if not module_ids:
            raise InvalidArgumentError("No module IDs provided.", context={"editor_version": editor_version})

        args = ["install-modules", "-v", editor_version, "--module", *module_ids]
        if child_modules:
            args.append("--child-modules")

        logger.info(f"Adding modules {', '.join(module_ids)} to Unity {editor_version}")
        return self._start_installation(args, f"install-modules {editor_version}")

    async def add_editor(
        self,
        version: str,
        changeset: str | None = None,
        modules: Iterable[ModuleId] = (),
        architecture: EditorArchitecture = EditorArchitecture.X86_64,
    ) -> InstallerEventEmitter:
        """
        Install an editor version, optionally with modules.

        Args:
            version: Editor version (e.g. "2022.3.60f1")
            changeset: Specific changeset to install
            modules: Module ids to install with the editor
            architecture: Editor architecture (only passed on macOS)

        Returns:
            Emitter tracking the installation

        Raises:
            UnityHubNotFoundError: If the hub is not available
        """
        args = ["install", "-v", version]
        if changeset:
            args.extend(["--changeset", changeset])

        module_ids = [str(m) for m in modules]
        if module_ids:
            args.extend(["--module", *module_ids])

        if self.paths.platform == "darwin":
            args.extend(["--architecture", str(architecture)])

        label = f"{version} (changeset: {changeset})" if changeset else version
        logger.info(f"Installing Unity {label}")
        return self._start_installation(args, f"install {version}")

    async def join_installations(self) -> list[CommandResult]:
        """Wait for every installer process started by this hub to exit."""
        if not self._installations:
            return []
        return list(await asyncio.gather(*self._installations))

    def _start_installation(self, args: list[str], description: str) -> InstallerEventEmitter:
        if not self.is_available():
            raise UnityHubNotFoundError(context={"path": str(self.executable)})

        emitter = InstallerEventEmitter()
        task = asyncio.create_task(self._run_installation(args, emitter, description))
        self._installations.add(task)
        task.add_done_callback(self._installations.discard)
        return emitter

    async def _run_installation(
        self,
        args: list[str],
        emitter: InstallerEventEmitter,
        description: str,
    ) -> CommandResult:
        def on_stderr(line: str) -> None:
            logger.warning(f"{description}: {line}")

        result = await self.exec_command(args, on_stdout=emitter.progress, on_stderr=on_stderr)

        if result.success:
            logger.info(f"{description}: installer exited")
        else:
            logger.warning(f"{description}: installer exited with code {result.exit_code}")
        return result

    def get_projects(self) -> list[UnityHubProject]:
        """
        List projects recorded by Unity Hub.

        Returns:
            Projects from projects-v1.json; empty if the file is missing or unreadable
        """
        projects_file = self.paths.hub.projects_file
        if not projects_file.exists():
            logger.debug(f"Projects file not found at: {projects_file}")
            return []

        try:
            return UnityHubProjectsList.from_file(projects_file).projects()
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            logger.error(f"Error reading Unity Hub projects from {projects_file}: {e}")
            return []

    def get_default_projects_directory(self) -> Path | None:
        """
        Get the default directory for new projects.

        Returns:
            Directory from projectDir.json, or None if not configured
        """
        project_dir_file = self.paths.hub.project_dir_file
        if not project_dir_file.exists():
            logger.debug(f"Project directory file not found at: {project_dir_file}")
            return None

        try:
            with open(project_dir_file, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error reading default project directory from {project_dir_file}: {e}")
            return None

        directory = data.get("directoryPath") if isinstance(data, dict) else None
        return Path(directory) if directory else None
