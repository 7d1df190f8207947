from pathlib import Path

import pytest

from phasebank import ConfigError, Settings


def test_defaults_without_user_file(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("PHASEBANK_BANK_ROOT", raising=False)
    settings = Settings.load(env={})
    assert settings.phases_file == Path("phases.yaml")
    assert settings.generate_banks is True
    assert settings.log_level == "INFO"
    assert settings.bank_root.name == "banks"


def test_user_file_overrides_defaults(tmp_path: Path):
    user = tmp_path / "settings.yaml"
    user.write_text(
        f"bank_root: {tmp_path / 'data'}\ngenerate_banks: false\nlog_level: debug\n",
        encoding="utf-8",
    )
    settings = Settings.load(user, env={})
    assert settings.bank_root == tmp_path / "data"
    assert settings.generate_banks is False
    assert settings.log_level == "DEBUG"
    assert settings.resolved_phases_file == tmp_path / "data" / "phases.yaml"


def test_env_overrides_user_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    user = tmp_path / "settings.yaml"
    user.write_text("generate_banks: true\n", encoding="utf-8")
    monkeypatch.setenv("PHASEBANK_BANK_ROOT", str(tmp_path / "env"))
    monkeypatch.setenv("PHASEBANK_GENERATE_BANKS", "off")
    monkeypatch.setenv("PHASEBANK_PHASES_FILE", str(tmp_path / "elsewhere.yaml"))
    monkeypatch.setenv("PHASEBANK_LOG_LEVEL", "warning")

    settings = Settings.load(user)
    assert settings.bank_root == tmp_path / "env"
    assert settings.generate_banks is False
    assert settings.resolved_phases_file == tmp_path / "elsewhere.yaml"
    assert settings.log_level == "WARNING"


def test_missing_user_file_logs_warning(tmp_path: Path, caplog):
    Settings.load(tmp_path / "missing.yaml", env={})
    assert "User settings file not found" in caplog.text


def test_invalid_values_raise_config_error(tmp_path: Path):
    with pytest.raises(ConfigError):
        Settings.load(env={"PHASEBANK_GENERATE_BANKS": "maybe"})
    with pytest.raises(ConfigError):
        Settings.load(env={"PHASEBANK_LOG_LEVEL": "chatty"})

    user = tmp_path / "settings.yaml"
    user.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        Settings.load(user, env={})


def test_save_and_reload(tmp_path: Path):
    settings = Settings(bank_root=tmp_path / "banks", phases_file=None, generate_banks=False, log_level="debug")
    path = tmp_path / "out" / "settings.yaml"
    settings.save(path)

    loaded = Settings.load(path, env={})
    assert loaded == settings
    assert loaded.resolved_phases_file is None


def test_default_bank_root_follows_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("PHASEBANK_BANK_ROOT", str(tmp_path / "banks"))
    assert Settings().bank_root == tmp_path / "banks"
