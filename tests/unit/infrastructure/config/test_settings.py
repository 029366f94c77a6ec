import logging
import os
from pathlib import Path

import pytest

from fcmclient.infrastructure.config import settings


@pytest.fixture
def config_files(tmp_path: Path):
    """A YAML config file and a .env file in a temporary directory."""
    yaml_file = tmp_path / "config.yaml"
    yaml_file.write_text(
        "fcm:\n"
        "  api_key: yaml-key\n"
        "  server_url: https://yaml.test/send\n"
        "  connection_timeout: 3\n"
        "logging:\n"
        "  level: debug\n"
    )
    env_file = tmp_path / ".env"
    env_file.write_text("FCM_SERVER_URL=https://dotenv.test/send\n")
    return yaml_file, env_file


def test_yaml_values_are_flattened_to_dotted_keys(config_files, monkeypatch):
    yaml_file, _ = config_files
    settings.load_configuration(config_file=yaml_file, env_file=yaml_file.parent / "missing.env", force=True)

    assert settings.get_fcm_api_key() == "yaml-key"
    assert settings.get_server_url() == "https://yaml.test/send"
    assert settings.get_connection_timeout() == 3.0
    assert settings.get_log_level() == "DEBUG"


def test_dotenv_overrides_yaml(config_files, monkeypatch):
    yaml_file, env_file = config_files
    monkeypatch.delenv("FCM_SERVER_URL", raising=False)
    settings.load_configuration(config_file=yaml_file, env_file=env_file, force=True)
    try:
        assert settings.get_server_url() == "https://dotenv.test/send"
    finally:
        # load_dotenv writes os.environ directly, outside monkeypatch's bookkeeping
        os.environ.pop("FCM_SERVER_URL", None)


def test_environment_overrides_dotenv_and_yaml(config_files, monkeypatch):
    yaml_file, env_file = config_files
    monkeypatch.setenv("FCM_SERVER_URL", "https://env.test/send")
    settings.load_configuration(config_file=yaml_file, env_file=env_file, force=True)
    assert settings.get_server_url() == "https://env.test/send"


def test_test_config_has_highest_priority(monkeypatch):
    monkeypatch.setenv("FCM_API_KEY", "env-key")
    settings.set_config_for_testing({"fcm.api_key": "test-key"})
    assert settings.get_fcm_api_key() == "test-key"
    settings.clear_test_config()
    assert settings.get_fcm_api_key() == "env-key"


def test_defaults_when_nothing_is_configured():
    assert settings.get_fcm_api_key() is None
    assert settings.get_server_url() == "https://fcm.googleapis.com/fcm/send"
    assert settings.get_connection_timeout() == 5.0
    assert settings.get_log_level() == "INFO"
    assert settings.get_config("fcm.unknown", "fallback") == "fallback"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("true", True),
        ("False", False),
        ("42", 42),
        ("2.5", 2.5),
        ("plain", "plain"),
    ]
)
def test_environment_values_are_type_converted(monkeypatch, raw, expected):
    monkeypatch.setenv("FCM_SOME_SETTING", raw)
    assert settings.get_config("fcm.some_setting") == expected


def test_api_key_from_environment_is_not_converted(monkeypatch):
    monkeypatch.setenv("FCM_API_KEY", "000123")
    assert settings.get_fcm_api_key() == "000123"


@pytest.mark.parametrize("value", ["soon", 0, -1])
def test_invalid_connection_timeout_falls_back_to_default(value, caplog):
    settings.set_config_for_testing({"fcm.connection_timeout": value})
    with caplog.at_level(logging.WARNING):
        assert settings.get_connection_timeout() == 5.0
    assert "fcm.connection_timeout" in caplog.text


def test_set_config_is_visible_but_environment_still_wins(monkeypatch):
    settings.set_config("logging.level", "warning")
    assert settings.get_log_level() == "WARNING"
    monkeypatch.setenv("LOGGING_LEVEL", "error")
    assert settings.get_log_level() == "ERROR"


def test_non_mapping_yaml_is_ignored(tmp_path: Path, caplog):
    yaml_file = tmp_path / "config.yaml"
    yaml_file.write_text("- just\n- a list\n")
    with caplog.at_level(logging.WARNING):
        settings.load_configuration(config_file=yaml_file, env_file=tmp_path / "none.env", force=True)
    assert "did not contain a dictionary" in caplog.text
    assert settings.get_fcm_api_key() is None


def test_broken_yaml_is_logged_not_raised(tmp_path: Path, caplog):
    yaml_file = tmp_path / "config.yaml"
    yaml_file.write_text("fcm: [unclosed\n")
    with caplog.at_level(logging.ERROR):
        settings.load_configuration(config_file=yaml_file, env_file=tmp_path / "none.env", force=True)
    assert "Failed to load or parse YAML config" in caplog.text


def test_load_is_skipped_once_loaded(tmp_path: Path, config_files):
    yaml_file, _ = config_files
    settings.load_configuration(config_file=yaml_file, env_file=tmp_path / "none.env")
    # isolated_config marks configuration as loaded, so the YAML file is not read
    assert settings.get_fcm_api_key() is None


def test_find_dotenv_path_walks_up(tmp_path: Path, monkeypatch):
    (tmp_path / ".env").write_text("X=1\n")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    monkeypatch.chdir(nested)
    assert settings.find_dotenv_path() == tmp_path / ".env"
