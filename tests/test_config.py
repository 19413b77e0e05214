"""
Tests for config loading and the runtime_config.yaml overrides.
"""

from pathlib import Path

import pytest
import yaml

from fathom import config as cfg_mod


@pytest.fixture
def fresh_config():
    """Clear the cached config and restore it afterwards."""
    orig = cfg_mod._config
    cfg_mod._config = None
    yield
    cfg_mod._config = orig


@pytest.fixture
def runtime_path(tmp_path):
    """Point runtime_config.yaml at a temp file."""
    rt_path = tmp_path / "runtime_config.yaml"
    orig_path = cfg_mod._RUNTIME_CONFIG_PATH
    orig_cfg = cfg_mod._runtime_config
    cfg_mod._RUNTIME_CONFIG_PATH = rt_path
    cfg_mod._runtime_mtime = 0.0
    cfg_mod._runtime_config = {}
    yield rt_path
    cfg_mod._RUNTIME_CONFIG_PATH = orig_path
    cfg_mod._runtime_config = orig_cfg
    cfg_mod._runtime_mtime = 0.0


class TestLoadConfig:
    def test_missing_file_raises(self, fresh_config, tmp_path):
        with pytest.raises(FileNotFoundError):
            cfg_mod.load_config(tmp_path / "nope.yaml")

    def test_defaults_fill_missing_sections(self, fresh_config, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("server:\n  port: 9000\n")
        cfg = cfg_mod.load_config(path)
        assert cfg["server"]["port"] == 9000
        assert cfg["server"]["host"] == "0.0.0.0"
        assert cfg["history"]["limit"] == 50
        assert cfg["storage"]["sqlite_path"].endswith("maritime_history.db")

    def test_env_vars_resolved(self, fresh_config, tmp_path, monkeypatch):
        monkeypatch.setenv("FATHOM_TEST_DB", "/tmp/x.db")
        path = tmp_path / "config.yaml"
        path.write_text("storage:\n  sqlite_path: ${FATHOM_TEST_DB}\n")
        assert cfg_mod.load_config(path)["storage"]["sqlite_path"] == "/tmp/x.db"

    def test_unset_env_var_becomes_empty(self, fresh_config, tmp_path, monkeypatch):
        monkeypatch.delenv("FATHOM_TEST_UNSET", raising=False)
        path = tmp_path / "config.yaml"
        path.write_text("logging:\n  file: \"logs/${FATHOM_TEST_UNSET}fathom.log\"\n")
        assert cfg_mod.load_config(path)["logging"]["file"] == "logs/fathom.log"

    def test_empty_file_is_all_defaults(self, fresh_config, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert cfg_mod.load_config(path)["logging"]["level"] == "INFO"

    def test_cached_after_first_load(self, fresh_config, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("history:\n  limit: 5\n")
        first = cfg_mod.load_config(path)
        path.write_text("history:\n  limit: 99\n")
        assert cfg_mod.get_config() is first

    def test_repo_config_loads(self, fresh_config):
        repo_cfg = Path(__file__).parent.parent / "config.yaml"
        cfg = cfg_mod.load_config(repo_cfg)
        assert cfg["server"]["port"] == 3000
        assert cfg["history"]["enabled"] is True


class TestRuntimeConfig:
    def test_missing_file_is_empty(self, runtime_path):
        assert cfg_mod.get_runtime_config() == {}

    def test_reads_runtime_block(self, runtime_path):
        runtime_path.write_text("runtime:\n  history_enabled: false\n")
        assert cfg_mod.get_runtime_config() == {"history_enabled": False}

    def test_update_creates_runtime_key(self, runtime_path):
        runtime_path.write_text("# empty\n")
        assert cfg_mod.update_runtime_config("history_enabled", False) is True
        data = yaml.safe_load(runtime_path.read_text())
        assert data["runtime"]["history_enabled"] is False

    def test_update_preserves_other_keys(self, runtime_path):
        runtime_path.write_text("runtime:\n  other: 1\n")
        cfg_mod.update_runtime_config("history_enabled", True)
        data = yaml.safe_load(runtime_path.read_text())
        assert data["runtime"] == {"other": 1, "history_enabled": True}

    def test_update_busts_mtime_cache(self, runtime_path):
        runtime_path.write_text("runtime:\n  history_enabled: true\n")
        cfg_mod._runtime_mtime = 999999.0
        cfg_mod.update_runtime_config("history_enabled", False)
        assert cfg_mod._runtime_mtime == 0.0
        assert cfg_mod.get_runtime_config()["history_enabled"] is False

    def test_update_unwritable_path_returns_false(self, runtime_path):
        cfg_mod._RUNTIME_CONFIG_PATH = Path("/nonexistent/path/runtime_config.yaml")
        assert cfg_mod.update_runtime_config("history_enabled", True) is False


class TestHistoryEnabled:
    def test_falls_back_to_config(self, runtime_path):
        orig = cfg_mod._config
        cfg_mod._config = {"history": {"enabled": False}}
        try:
            assert cfg_mod.history_enabled() is False
        finally:
            cfg_mod._config = orig

    def test_runtime_override_wins(self, runtime_path):
        orig = cfg_mod._config
        cfg_mod._config = {"history": {"enabled": False}}
        runtime_path.write_text("runtime:\n  history_enabled: true\n")
        try:
            assert cfg_mod.history_enabled() is True
        finally:
            cfg_mod._config = orig
