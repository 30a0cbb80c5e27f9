"""Settings loading: YAML file, environment overrides, validation."""

from decimal import Decimal

import pytest
import yaml

from ledger_config import DEFAULT_SETTINGS_FILE, get_active_settings
from ledger_config.loader import env_overrides, load_settings, parse_settings
from ledger_config.schema import LedgerSettings


def _write(tmp_path, data):
    path = tmp_path / "settings.yaml"
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


def test_defaults_without_file():
    assert load_settings(environ={}) == LedgerSettings()


def test_bundled_default_set_matches_schema():
    assert load_settings(DEFAULT_SETTINGS_FILE, environ={}) == LedgerSettings()


def test_file_values(tmp_path):
    path = _write(tmp_path, {
        "database_url": "sqlite:///other.db",
        "deposit_limit_ratio": "0.5",
        "best_clients_default_limit": 5,
        "echo_sql": True,
        "log_level": "debug",
    })
    settings = load_settings(path, environ={})
    assert settings.database_url == "sqlite:///other.db"
    assert settings.deposit_limit_ratio == Decimal("0.5")
    assert settings.best_clients_default_limit == 5
    assert settings.echo_sql is True
    assert settings.log_level == "DEBUG"


def test_environment_wins_over_file(tmp_path):
    path = _write(tmp_path, {"best_clients_default_limit": 5})
    settings = load_settings(path, environ={
        "LEDGER_BEST_CLIENTS_LIMIT": "7",
        "LEDGER_ECHO_SQL": "yes",
        "UNRELATED": "x",
    })
    assert settings.best_clients_default_limit == 7
    assert settings.echo_sql is True


def test_env_overrides_only_picks_ledger_keys():
    assert env_overrides({"LEDGER_LOG_LEVEL": "WARNING", "PATH": "/bin"}) == {
        "log_level": "WARNING"
    }


@pytest.mark.parametrize(
    "raw",
    [
        {"deposit_limit_ratio": "1.5"},
        {"deposit_limit_ratio": "lots"},
        {"best_clients_default_limit": 0},
        {"best_clients_default_limit": True},
        {"echo_sql": "maybe"},
        {"log_level": "LOUD"},
        {"database_url": "  "},
        {"surprise": 1},
    ],
)
def test_invalid_values_rejected(raw):
    with pytest.raises(ValueError):
        parse_settings(raw)


def test_top_level_must_be_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_settings(path, environ={})


def test_missing_file_propagates(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "absent.yaml", environ={})


def test_get_active_settings_reads_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("LEDGER_DEPOSIT_LIMIT_RATIO", "0.1")
    path = _write(tmp_path, {"deposit_limit_ratio": "0.3"})
    assert get_active_settings(path).deposit_limit_ratio == Decimal("0.1")
