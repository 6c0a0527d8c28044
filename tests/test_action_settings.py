"""Tests for reading action inputs from the environment."""

from pathlib import Path

import pytest

from pnpm_snyk.action.settings import (
    ActionSettings,
    ConfigError,
    resolve_log_level,
    validate_snyk_args,
    validate_snyk_token,
)

TOKEN = "0f1e2d3c-4b5a-6978-8a9b-0c1d2e3f4a5b"


class TestFromEnv:
    def test_defaults(self):
        settings = ActionSettings.from_env({"INPUT_SNYKTOKEN": TOKEN})
        assert settings.snyk_token == TOKEN
        assert settings.snyk_organization == ""
        assert settings.lockfile_dir == Path(".")
        assert settings.snyk_arguments == ()
        assert not (settings.debug or settings.show_deps or settings.full_scan or settings.break_build)

    def test_all_inputs(self):
        settings = ActionSettings.from_env(
            {
                "INPUT_SNYKTOKEN": TOKEN,
                "INPUT_SNYKORGANIZATION": "acme",
                "INPUT_PNPMLOCKFILEPATH": "frontend",
                "INPUT_DEBUGMODE": "true",
                "INPUT_SHOWDEPSINFO": "TRUE",
                "INPUT_SNYKARGUMENTS": "--severity-threshold=high --dev",
                "INPUT_FULLSCAN": "yes",
                "INPUT_BREAKBUILD": "1",
            }
        )
        assert settings.snyk_organization == "acme"
        assert settings.lockfile_path == Path("frontend") / "pnpm-lock.yaml"
        assert settings.package_lock_path == Path("frontend") / "package-lock.json"
        assert settings.snyk_arguments == ("--severity-threshold=high", "--dev")
        assert settings.debug and settings.show_deps and settings.full_scan and settings.break_build

    @pytest.mark.parametrize("value", ["false", "0", "", "no"])
    def test_falsy_flags(self, value):
        settings = ActionSettings.from_env({"INPUT_SNYKTOKEN": TOKEN, "INPUT_BREAKBUILD": value})
        assert settings.break_build is False

    def test_missing_token(self):
        with pytest.raises(ConfigError, match="snykToken"):
            ActionSettings.from_env({})

    def test_token_with_forbidden_characters(self):
        with pytest.raises(ConfigError, match="snyk token"):
            ActionSettings.from_env({"INPUT_SNYKTOKEN": f"{TOKEN}; rm -rf /"})

    def test_organization_with_forbidden_characters(self):
        with pytest.raises(ConfigError, match="organization"):
            ActionSettings.from_env({"INPUT_SNYKTOKEN": TOKEN, "INPUT_SNYKORGANIZATION": "acme&&x"})


class TestValidators:
    def test_uppercase_token_is_rejected(self):
        with pytest.raises(ConfigError):
            validate_snyk_token("ABCDEF")

    def test_token_is_returned(self):
        assert validate_snyk_token(TOKEN) == TOKEN

    def test_args_split_on_whitespace(self):
        assert validate_snyk_args("  --all-projects   --file=pnpm-lock.yaml ") == (
            "--all-projects",
            "--file=pnpm-lock.yaml",
        )

    @pytest.mark.parametrize("arg", ["--org=$(id)", "a;b", "`x`", "--x|y", "a>b"])
    def test_args_with_shell_characters(self, arg):
        with pytest.raises(ConfigError, match="snyk args"):
            validate_snyk_args(arg)


class TestLogLevel:
    def test_debug_mode_wins(self):
        settings = ActionSettings(snyk_token=TOKEN, snyk_organization="", lockfile_dir=Path("."), debug=True)
        assert resolve_log_level(settings, {"PNPM_SNYK_LOG_LEVEL": "warning"}) == "DEBUG"

    def test_env_override(self):
        assert resolve_log_level(None, {"PNPM_SNYK_LOG_LEVEL": "warning"}) == "WARNING"

    def test_default(self):
        assert resolve_log_level(None, {}) == "INFO"
