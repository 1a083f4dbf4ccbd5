"""Project templates shipped with an editor version."""

import logging

from .config import UnityPaths
from .config import resolve_unity_paths
from .exceptions import UnityEditorNotFoundError
from .exceptions import UnityProjectError
from .schema import ProjectTemplate

logger = logging.getLogger(__name__)


class UnityTemplates:
    """Lists the ``*.tgz`` project templates of installed editors."""

    def __init__(self, paths: UnityPaths | None = None):
        self.paths = paths or resolve_unity_paths()

    def get_project_templates(self, version: str) -> list[ProjectTemplate]:
        """
        List project templates for an editor version.

        Args:
            version: Editor version (e.g. "2022.3.60f1")

        Returns:
            Templates sorted by name

        Raises:
            UnityEditorNotFoundError: If the editor version is not installed
            UnityProjectError: If the version has no template directory
        """
        version_dir = self.paths.editor.base / version
        if not version_dir.is_dir():
            raise UnityEditorNotFoundError(version, str(version_dir))

        templates_dir = self.paths.editor_templates(version)
        if not templates_dir.is_dir():
            raise UnityProjectError(
                f"Template path does not exist: {templates_dir}",
                context={"version": version, "path": str(templates_dir)},
            )

        templates = sorted(f for f in templates_dir.glob("*.tgz") if f.is_file())
        logger.debug(f"Found {len(templates)} project templates in {templates_dir}")

        return [ProjectTemplate(template_name=f.stem, template_path=f) for f in templates]
