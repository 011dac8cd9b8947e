"""Tests for YAML configuration loading."""

from pathlib import Path

import pytest

from portfolio_api import config_manager as api_config_manager
from portfolio_config import ConfigManager, get_config, reset_config

REPO_CONFIG = Path(__file__).resolve().parent.parent / "config"


def write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def test_environment_overrides_are_deep_merged(tmp_path):
    write(tmp_path / "limits.yaml", "limits:\n  related:\n    default_results: 5\n    max_results: 20\n")
    write(tmp_path / "environments" / "staging.yaml", "limits:\n  related:\n    max_results: 10\n")

    config = ConfigManager(config_dir=tmp_path, environment="staging")

    assert config.get("limits.related.max_results") == 10
    assert config.get("limits.related.default_results") == 5


def test_missing_key_raises_without_default(tmp_path):
    write(tmp_path / "limits.yaml", "limits:\n  related:\n    max_results: 20\n")
    config = ConfigManager(config_dir=tmp_path, environment="none")

    with pytest.raises(KeyError):
        config.get("limits.related.nope")
    assert config.get("limits.related.nope", 7) == 7
    assert config.has("limits.related.max_results")
    assert not config.has("limits.unknown")


def test_environment_variables_are_expanded(tmp_path, monkeypatch):
    monkeypatch.setenv("PORTFOLIO_SITE_URL", "https://example.dev")
    write(tmp_path / "endpoints.yaml", "cors:\n  allowed_origins:\n    - \"${PORTFOLIO_SITE_URL}\"\n")

    config = ConfigManager(config_dir=tmp_path, environment="none")

    assert config.get("cors.allowed_origins") == ["https://example.dev"]


def test_validate_required_keys(tmp_path):
    write(tmp_path / "endpoints.yaml", "api:\n  base_url: http://localhost\n")
    config = ConfigManager(config_dir=tmp_path, environment="none")

    config.validate_required_keys(["api.base_url"])
    with pytest.raises(KeyError):
        config.validate_required_keys(["api.base_url", "internal.postgres_url"])


def test_reload_picks_up_changes(tmp_path):
    write(tmp_path / "limits.yaml", "limits:\n  related:\n    max_results: 20\n")
    config = ConfigManager(config_dir=tmp_path, environment="none")
    write(tmp_path / "limits.yaml", "limits:\n  related:\n    max_results: 15\n")

    config.reload()

    assert config.get("limits.related.max_results") == 15


def test_repository_config_defaults():
    config = ConfigManager(config_dir=REPO_CONFIG, environment="test")

    assert config.get("limits.related.default_results") == 5
    assert config.get("limits.related.max_results") == 20
    assert config.get("http.cache.related.max_age") == 300
    assert config.get("http.cache.related.stale_while_revalidate") == 600


def test_api_config_reads_database_url_from_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///override.db")

    assert api_config_manager.get_api_config().database_url == "sqlite:///override.db"


def test_api_config_rejects_incomplete_configuration(tmp_path, monkeypatch):
    write(tmp_path / "endpoints.yaml", "api:\n  base_url: http://localhost\n")
    monkeypatch.setenv("PORTFOLIO_CONFIG_DIR", str(tmp_path))
    reset_config()
    api_config_manager.reset_api_config()
    try:
        with pytest.raises(RuntimeError):
            api_config_manager.get_api_config()
    finally:
        monkeypatch.setenv("PORTFOLIO_CONFIG_DIR", str(REPO_CONFIG))
        reset_config()
        api_config_manager.reset_api_config()
        get_config()


def test_every_base_file_in_repository_is_loaded():
    assert sorted(ConfigManager.CONFIG_FILES) == sorted(path.name for path in REPO_CONFIG.glob("*.yaml"))
