"""Tests for configuration loading."""
import tempfile
from pathlib import Path

import pytest
from unittest.mock import patch

from sitewright.config import AppConfig, BuildConfig, ConfigManager, output_root


@pytest.fixture
def config_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "config.toml"


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "SITEWRIGHT_OUTPUT_ROOT",
        "SITEWRIGHT_DOWNLOAD_DIR",
        "SITEWRIGHT_INSTALL_TIMEOUT",
        "SITEWRIGHT_BUILD_TIMEOUT",
        "SITEWRIGHT_DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)
    with patch("sitewright.config.load_dotenv"):
        yield monkeypatch


def test_defaults(config_file, clean_env):
    config = ConfigManager(config_file).load_config()

    assert config.output.root == Path("output")
    assert config.build.install_command == ["npm", "install"]
    assert config.build.build_command == ["npm", "run", "build"]
    assert config.build.install_timeout == 60
    assert config.build.build_timeout == 120
    assert config.debug is False


def test_toml_file_is_loaded(config_file, clean_env):
    config_file.write_text(
        '[output]\nroot = "/srv/generated"\n\n[build]\nbuild_timeout = 300\n',
        encoding="utf-8",
    )

    config = ConfigManager(config_file).load_config()

    assert config.output.root == Path("/srv/generated")
    assert config.build.build_timeout == 300
    assert config.build.install_timeout == 60


def test_environment_overrides_file(config_file, clean_env):
    config_file.write_text('[output]\nroot = "/from/file"\n', encoding="utf-8")
    clean_env.setenv("SITEWRIGHT_OUTPUT_ROOT", "/from/env")
    clean_env.setenv("SITEWRIGHT_INSTALL_TIMEOUT", "45")
    clean_env.setenv("SITEWRIGHT_DEBUG", "true")

    config = ConfigManager(config_file).load_config()

    assert config.output.root == Path("/from/env")
    assert config.build.install_timeout == 45
    assert config.debug is True


@pytest.mark.parametrize("value", ["soon", "-5", "0"])
def test_invalid_timeout_env_ignored(config_file, clean_env, value):
    clean_env.setenv("SITEWRIGHT_BUILD_TIMEOUT", value)

    config = ConfigManager(config_file).load_config()

    assert config.build.build_timeout == 120


def test_broken_toml_falls_back_to_defaults(config_file, clean_env):
    config_file.write_text("[output\nroot = ", encoding="utf-8")

    config = ConfigManager(config_file).load_config()

    assert config == AppConfig()


def test_invalid_values_fall_back_to_defaults(config_file, clean_env):
    config_file.write_text("[build]\nbuild_timeout = -1\n", encoding="utf-8")

    config = ConfigManager(config_file).load_config()

    assert config.build == BuildConfig()


def test_save_and_reload(config_file, clean_env):
    manager = ConfigManager(config_file)
    manager.load_config()
    manager.config.output.root = Path("/tmp/sites")
    manager.config.build.build_timeout = 200

    manager.save_config()
    reloaded = ConfigManager(config_file).load_config()

    assert reloaded.output.root == Path("/tmp/sites")
    assert reloaded.build.build_timeout == 200


def test_output_root_override_is_absolute():
    resolved = output_root(Path("relative/out"))

    assert resolved.is_absolute()
    assert resolved.parts[-2:] == ("relative", "out")
