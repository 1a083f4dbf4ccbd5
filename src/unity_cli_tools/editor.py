"""Unity Editor command-line wrapper.

Runs the editor in batch mode for tests, licensing, packages and projects.
Pass/fail is decided by looking for the failure messages the editor prints;
the output is not interpreted beyond that.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from .config import UnityPaths
from .config import resolve_unity_paths
from .process import CommandResult
from .process import execute_command
from .process import redact_sensitive_args
from .protocols import CommandRunnerProtocol
from .schema import ProjectInfo
from .schema import TestMode
from .schema import UnityBuildTarget

logger = logging.getLogger(__name__)


@dataclass
class TestRunResult:
    """Outcome of ``-runTests``."""

    __test__ = False

    success: bool
    output: str


def _mentions(result: CommandResult, *messages: str) -> bool:
    return any(message in result.stdout or message in result.stderr for message in messages)


def _did_not_run(result: CommandResult) -> bool:
    # exit_code -1: executable missing, spawn failure or timeout
    return not result.success and result.exit_code == -1


class UnityEditor:
    """
    Unity Editor wrapper (with injected paths and command runner).

    Example:
        >>> editor = UnityEditor(resolve_unity_paths())
        >>> project = ProjectInfo(project_name="Game", project_path=Path("/src/game"), editor_version="2022.3.60f1")
        >>> result = await editor.run_tests(project, TestMode.PLAY_MODE, test_category="Performance")
        >>> result.success
        True
    """

    def __init__(
        self,
        paths: UnityPaths | None = None,
        runner: CommandRunnerProtocol = execute_command,
    ):
        self.paths = paths or resolve_unity_paths()
        self.runner = runner

    def get_executable_path(self, version: str) -> Path:
        """Path of the editor executable for ``version`` (e.g. "2022.3.60f1")."""
        return self.paths.editor_executable(version)

    def get_templates_path(self, version: str) -> Path:
        """Path of the project templates directory for ``version``."""
        return self.paths.editor_templates(version)

    def is_version_installed(self, version: str) -> bool:
        return self.get_executable_path(version).exists()

    async def exec_command(self, version: str, args: Iterable[str], **options) -> CommandResult:
        """
        Run the editor for ``version`` with raw arguments.

        Credential arguments are redacted in the debug log.

        Returns:
            CommandResult; a failed result if the executable does not exist
            or the runner raised
        """
        executable = self.get_executable_path(version)
        if not executable.exists():
            return CommandResult.failure(f"Unity executable not found at path: {executable}")

        editor_args = list(args)
        logger.debug(f"Executing Unity Editor command: {executable} {' '.join(redact_sensitive_args(editor_args))}")

        try:
            return await self.runner(executable, editor_args, **options)
        except Exception as e:
            logger.exception("Unity Editor command failed")
            return CommandResult.failure(str(e))

    async def execute_method(
        self,
        project: ProjectInfo,
        method: str,
        args: Iterable[str] = (),
        **options,
    ) -> CommandResult:
        """
        Invoke a static C# method in the project (``-executeMethod``).

        Args:
            project: Project to open
            method: Fully qualified method name (e.g. "MyCompany.BuildTools.PerformBuild")
            args: Extra editor arguments
            **options: Passed to the command runner

        Returns:
            CommandResult; failed if the editor wrote anything to stderr
        """
        logger.debug(f"Executing method {method} in Unity Editor")
        editor_args = ["-projectPath", str(project.project_path), "-executeMethod", method, *args]

        result = await self.exec_command(project.editor_version, editor_args, **options)
        if result.stderr:
            logger.error(f"Error executing method {method}: {result.stderr}")
            return CommandResult(success=False, stdout="", stderr=result.stderr, exit_code=-1)

        return CommandResult(success=True, stdout=result.stdout, stderr="", exit_code=0)

    async def run_tests(
        self,
        project: ProjectInfo,
        test_platform: TestMode | UnityBuildTarget = TestMode.EDIT_MODE,
        test_category: str | None = None,
    ) -> TestRunResult:
        """
        Run the project's test suites.

        Args:
            project: Project to test
            test_platform: EditMode, PlayMode or a build target
            test_category: Only run tests in this category

        Returns:
            TestRunResult with the editor's stdout
        """
        category = f" in category {test_category}" if test_category else ""
        logger.debug(f"Running {test_platform} tests for {project.project_name}{category}")

        args = [
            "-batchmode",
            "-quit",
            "-projectPath",
            str(project.project_path),
            "-runTests",
            "-testPlatform",
            str(test_platform),
        ]
        if test_category:
            args.extend(["-testCategory", test_category])

        result = await self.exec_command(project.editor_version, args)
        tests_failed = (
            _did_not_run(result) or "Some tests failed" in result.stdout or _mentions(result, "Test run failed")
        )

        return TestRunResult(success=not tests_failed, output=result.stdout)

    async def activate_license(self, project: ProjectInfo, serial: str, username: str, password: str) -> bool:
        """
        Activate a serial-based license for the project's editor version.

        Prefer passing credentials from the environment over hard-coding them.
        """
        logger.debug(f"Activating Unity license for version {project.editor_version}")
        args = ["-quit", "-serial", serial, "-username", username, "-password", password]

        result = await self.exec_command(project.editor_version, args)
        activated = not _did_not_run(result) and (
            "successfully activated" in result.stdout or not _mentions(result, "License activation failed")
        )

        if activated:
            logger.debug(f"Successfully activated license for Unity {project.editor_version}")
        else:
            logger.error(f"Failed to activate license: {result.stderr or result.stdout}")
        return activated

    async def return_license(self, project: ProjectInfo) -> bool:
        logger.debug(f"Returning Unity license for version {project.editor_version}")

        result = await self.exec_command(project.editor_version, ["-quit", "-returnlicense"])
        returned = not _did_not_run(result) and (
            "license return succeeded" in result.stdout or not _mentions(result, "Failed to return license")
        )

        if returned:
            logger.debug(f"Successfully returned license for Unity {project.editor_version}")
        else:
            logger.error(f"Failed to return license: {result.stderr or result.stdout}")
        return returned

    async def export_package(self, project: ProjectInfo, asset_paths: Iterable[str], output_path: str | Path) -> bool:
        """Export assets to a .unitypackage file."""
        logger.debug(f"Exporting package from {project.project_name}")
        args = [
            "-projectPath",
            str(project.project_path),
            "-exportPackage",
            *asset_paths,
            str(output_path),
            "-quit",
        ]

        result = await self.exec_command(project.editor_version, args)
        exported = not _did_not_run(result) and not _mentions(result, "Failed to export package")

        if exported:
            logger.debug(f"Successfully exported package to {output_path}")
        else:
            logger.error(f"Failed to export package: {result.stderr or result.stdout}")
        return exported

    async def import_package(self, project: ProjectInfo, package_path: str | Path) -> bool:
        logger.debug(f"Importing package {package_path} into {project.project_name}")
        args = ["-projectPath", str(project.project_path), "-importPackage", str(package_path), "-quit"]

        result = await self.exec_command(project.editor_version, args)
        imported = not _did_not_run(result) and not _mentions(result, "Failed to import package")

        if imported:
            logger.debug(f"Successfully imported package {package_path}")
        else:
            logger.error(f"Failed to import package: {result.stderr or result.stdout}")
        return imported

    async def create_project(self, project: ProjectInfo, wait_for_exit: bool = True) -> bool:
        """Create a new project; the parent directory is created if needed."""
        logger.debug(f"Creating new project at {project.project_path}")
        project.project_path.parent.mkdir(parents=True, exist_ok=True)

        args = ["-createProject", str(project.project_path)]
        if wait_for_exit:
            args.append("-quit")

        result = await self.exec_command(project.editor_version, args)
        created = not _did_not_run(result) and not _mentions(result, "Failed to create project")

        if created:
            logger.debug(f"Successfully created project at {project.project_path}")
        else:
            logger.error(f"Failed to create project: {result.stderr or result.stdout}")
        return created

    async def open_project(
        self,
        project: ProjectInfo,
        use_hub: bool = True,
        batchmode: bool = False,
        wait_for_exit: bool = True,
    ) -> bool:
        logger.debug(f"Opening project at {project.project_path}")

        args = ["-projectPath", str(project.project_path)]
        if wait_for_exit:
            args.append("-quit")
        if batchmode:
            args.append("-batchmode")
        if use_hub:
            args.extend(["-useHub", "-hubIPC"])

        result = await self.exec_command(project.editor_version, args)
        opened = not _did_not_run(result) and not _mentions(result, "Failed to open project")

        if opened:
            logger.debug("Successfully opened project")
        else:
            logger.error(f"Failed to open project: {result.stderr or result.stdout}")
        return opened
