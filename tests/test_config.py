"""Tests for sshd_shell.config."""

import json

import pytest

from sshd_shell.config import DEFAULTS, load_config


class TestDefaults:
    """Tests for built-in defaults."""

    def test_defaults(self, tmp_path):
        config = load_config(tmp_path, environ={})
        assert config.enabled is True
        assert config.plugin_package == DEFAULTS["PLUGIN_PACKAGE"]
        assert config.prompt == "app"
        assert config.log_level is None
        assert config.log_file_path is None
        assert config.verbose_errors is None
        assert config.strict_commands is False
        assert config.show_banner is True
        assert config.newline == "\r\n"
        assert config.extra == {}


class TestSources:
    """Tests for file and environment precedence."""

    def test_toml_nested_tables_are_flattened(self, tmp_path):
        (tmp_path / "config.toml").write_text(
            'prompt = "ops"\n[log]\nlevel = "debug"\nfile_path = "logs/shell.log"\n')
        config = load_config(tmp_path, environ={})
        assert config.prompt == "ops"
        assert config.log_level == "DEBUG"
        assert config.log_file_path == (tmp_path / "logs" / "shell.log").resolve()

    def test_json_file(self, tmp_path):
        (tmp_path / "config.json").write_text(json.dumps({"verbose_errors": True}))
        assert load_config(tmp_path, environ={}).verbose_errors is True

    def test_ini_file(self, tmp_path):
        (tmp_path / "config.ini").write_text("[shell]\nstrict_commands = yes\n")
        assert load_config(tmp_path, environ={}).strict_commands is True

    def test_env_file(self, tmp_path):
        (tmp_path / ".env").write_text("# comment\nPROMPT='edge'\nNEWLINE=lf\n")
        config = load_config(tmp_path, environ={})
        assert config.prompt == "edge"
        assert config.newline == "\n"

    def test_toml_overrides_env_file(self, tmp_path):
        (tmp_path / ".env").write_text("PROMPT=from-env-file\n")
        (tmp_path / "config.toml").write_text('PROMPT = "from-toml"\n')
        assert load_config(tmp_path, environ={}).prompt == "from-toml"

    def test_environment_overrides_files(self, tmp_path):
        (tmp_path / "config.toml").write_text('PROMPT = "from-toml"\n')
        environ = {"SSHD_SHELL_PROMPT": "from-env", "PROMPT": "ignored"}
        assert load_config(tmp_path, environ=environ).prompt == "from-env"

    def test_unknown_keys_kept_in_extra(self, tmp_path):
        config = load_config(tmp_path, environ={"SSHD_SHELL_PORT": "8022"})
        assert config.extra == {"PORT": "8022"}


class TestValidation:
    """Tests for value validation."""

    @pytest.mark.parametrize("key, value", [
        ("SSHD_SHELL_ENABLED", "maybe"),
        ("SSHD_SHELL_LOG_LEVEL", "LOUD"),
        ("SSHD_SHELL_NEWLINE", "cr"),
        ("SSHD_SHELL_PLUGIN_PACKAGE", "not a module"),
        ("SSHD_SHELL_PROMPT", " "),
        ("SSHD_SHELL_VERBOSE_ERRORS", "sometimes"),
    ])
    def test_invalid_values(self, tmp_path, key, value):
        with pytest.raises(ValueError):
            load_config(tmp_path, environ={key: value})

    def test_verbose_errors_none_string(self, tmp_path):
        config = load_config(tmp_path, environ={"SSHD_SHELL_VERBOSE_ERRORS": "none"})
        assert config.verbose_errors is None

    def test_disabled(self, tmp_path):
        assert load_config(tmp_path, environ={"SSHD_SHELL_ENABLED": "off"}).enabled is False

    def test_broken_toml_is_reported(self, tmp_path):
        (tmp_path / "config.toml").write_text("prompt = \n")
        with pytest.raises(ValueError, match="Invalid TOML"):
            load_config(tmp_path, environ={})
