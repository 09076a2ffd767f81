from __future__ import annotations

import os

from pathlib import Path

import pytest

from venvlock.config.config import Config
from venvlock.config.config import boolean_normalizer
from venvlock.config.settings import ProjectSettings
from venvlock.toml import TOMLError
from venvlock.toml import TOMLFile


def test_defaults() -> None:
    config = Config()

    assert config.get("production") is False
    assert config.get("system-site-packages") is False
    assert config.get("virtualenvs.in-project") is True
    assert config.get("python") == ""


def test_virtualenvs_path_defaults_to_data_dir(tmp_path: Path) -> None:
    config = Config()
    config.merge({"data-dir": str(tmp_path)})

    assert config.virtualenvs_path == tmp_path / "virtualenvs"


def test_environment_overrides_files(tmp_path: Path) -> None:
    config = Config()
    config.merge({"virtualenvs": {"in-project": True}})
    os.environ["VENVLOCK_VIRTUALENVS_IN_PROJECT"] = "false"

    assert config.get("virtualenvs.in-project") is False


def test_environment_is_ignored_when_disabled() -> None:
    os.environ["VENVLOCK_PRODUCTION"] = "1"

    assert Config(use_environment=False).get("production") is False
    assert Config().get("production") is True


@pytest.mark.parametrize(
    ("value", "expected"),
    [("true", True), ("True", True), ("1", True), ("false", False), ("0", False)],
)
def test_boolean_normalizer(value: str, expected: bool) -> None:
    assert boolean_normalizer(value) is expected


def test_create_loads_user_then_project_config(
    tmp_path: Path, mocker
) -> None:
    config_dir = tmp_path / "user"
    config_dir.mkdir()
    (config_dir / "config.toml").write_text(
        'python = "python3.8"\nproduction = true\n', encoding="utf-8"
    )
    mocker.patch("venvlock.config.config.CONFIG_DIR", config_dir)

    project = tmp_path / "project"
    project.mkdir()
    (project / "venvlock.toml").write_text('python = "python3.11"\n', encoding="utf-8")

    config = Config.create(project)

    assert config.get("python") == "python3.11"
    assert config.get("production") is True


def test_invalid_config_file(tmp_path: Path) -> None:
    path = tmp_path / "venvlock.toml"
    path.write_text("python = \n", encoding="utf-8")

    with pytest.raises(TOMLError):
        Config().load_file(TOMLFile(path))


def test_settings_from_config(tmp_path: Path) -> None:
    config = Config()
    config.merge(
        {
            "production": True,
            "python": "/usr/bin/python3",
            "virtualenvs": {"in-project": False, "path": str(tmp_path)},
        }
    )

    settings = ProjectSettings.from_config(config)

    assert settings == ProjectSettings(
        production=True,
        python="/usr/bin/python3",
        venvs_in_project=False,
        venvs_path=tmp_path,
    )
    assert settings.mode == "prod"


def test_settings_override() -> None:
    settings = ProjectSettings(python="/usr/bin/python3")

    overridden = settings.override({"system-site-packages": True, "production": True})

    assert overridden == ProjectSettings(
        production=True, system_site_packages=True, python="/usr/bin/python3"
    )
    assert settings.production is False


def test_settings_expand_user_in_virtualenvs_path() -> None:
    config = Config(use_environment=False)
    config.merge({"virtualenvs": {"path": "~/envs"}})

    settings = ProjectSettings.from_config(config)

    assert settings.venvs_path == Path("~/envs").expanduser()
