"""Tests for project template discovery."""

import pytest
from unity_cli_tools import UnityEditorNotFoundError
from unity_cli_tools import UnityProjectError
from unity_cli_tools import UnityTemplates

VERSION = "2022.3.60f1"


def test_get_project_templates(linux_paths):
    """Test only .tgz files are listed, sorted by name."""
    templates_dir = linux_paths.editor_templates(VERSION)
    templates_dir.mkdir(parents=True)
    (templates_dir / "com.unity.template.3d-9.1.0.tgz").write_text("")
    (templates_dir / "com.unity.template.2d-8.0.0.tgz").write_text("")
    (templates_dir / "manifest.json").write_text("{}")

    templates = UnityTemplates(linux_paths).get_project_templates(VERSION)

    assert [t.template_name for t in templates] == [
        "com.unity.template.2d-8.0.0",
        "com.unity.template.3d-9.1.0",
    ]
    assert templates[0].template_path == templates_dir / "com.unity.template.2d-8.0.0.tgz"


def test_get_project_templates_empty(linux_paths):
    templates_dir = linux_paths.editor_templates(VERSION)
    templates_dir.mkdir(parents=True)

    assert UnityTemplates(linux_paths).get_project_templates(VERSION) == []


def test_editor_not_installed(linux_paths):
    """Test error when the editor version folder doesn't exist."""
    with pytest.raises(UnityEditorNotFoundError, match=VERSION):
        UnityTemplates(linux_paths).get_project_templates(VERSION)


def test_templates_dir_missing(linux_paths):
    """Test error when the editor has no template directory."""
    (linux_paths.editor.base / VERSION).mkdir(parents=True)

    with pytest.raises(UnityProjectError, match="Template path does not exist"):
        UnityTemplates(linux_paths).get_project_templates(VERSION)
