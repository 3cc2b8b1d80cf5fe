"""Tests for riemann-fs configuration management."""

import json
from unittest.mock import patch

from riemann_fs.config import (
    DEFAULT_HOST, DEFAULT_PORT, RiemannFSConfig, StoreConfig,
    get_config_path, load_config, read_config_file,
)


class TestDataClasses:
    """Tests for config data classes."""

    def test_store_defaults(self):
        store = StoreConfig()
        assert store.host == "localhost"
        assert store.port == 5555
        assert store.timeout is None
        assert store.address == "localhost:5555"

    def test_config_defaults(self):
        cfg = RiemannFSConfig()
        assert cfg.mountpoint == ""
        assert cfg.debug is False
        assert cfg.strict_queries is False

    def test_store_defaults_isolated(self):
        a = RiemannFSConfig()
        b = RiemannFSConfig()
        a.store.port = 1
        assert b.store.port == DEFAULT_PORT


class TestConfigPath:

    def test_respects_xdg_config_home(self, tmp_path):
        with patch.dict("os.environ", {"XDG_CONFIG_HOME": str(tmp_path)}):
            assert get_config_path() == tmp_path / "riemann-fs" / "config.json"


class TestReadConfigFile:
    """Tests for reading config.json."""

    def test_returns_none_when_missing(self, tmp_path):
        assert read_config_file(tmp_path / "missing.json") is None

    def test_reads_valid_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"host": "riemann.internal", "port": 5556}))
        assert read_config_file(path) == {"host": "riemann.internal", "port": 5556}

    def test_returns_none_on_invalid_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("not json {{{")
        assert read_config_file(path) is None

    def test_returns_none_on_non_object(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2]")
        assert read_config_file(path) is None


class TestLoadConfig:
    """Tests for CLI > file > default precedence."""

    def test_defaults_without_file(self, tmp_path):
        cfg = load_config(mountpoint="/mnt/r", config_path=tmp_path / "missing.json")
        assert cfg.mountpoint == "/mnt/r"
        assert cfg.store.host == DEFAULT_HOST
        assert cfg.store.port == DEFAULT_PORT
        assert cfg.strict_queries is False

    def test_file_values_used(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({
            "host": "riemann.internal", "port": 5556, "timeout": 2.5,
            "strict_queries": True, "debug": True,
        }))
        cfg = load_config(config_path=path)
        assert cfg.store.host == "riemann.internal"
        assert cfg.store.port == 5556
        assert cfg.store.timeout == 2.5
        assert cfg.strict_queries is True
        assert cfg.debug is True

    def test_cli_overrides_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"host": "riemann.internal", "port": 5556, "timeout": 2.5}))
        cfg = load_config(cli_host="other", cli_port=6000, cli_timeout=1.0, config_path=path)
        assert cfg.store.host == "other"
        assert cfg.store.port == 6000
        assert cfg.store.timeout == 1.0

    def test_cli_flags_enable_booleans(self, tmp_path):
        cfg = load_config(cli_strict=True, cli_debug=True, config_path=tmp_path / "none.json")
        assert cfg.strict_queries is True
        assert cfg.debug is True

    def test_invalid_port_falls_back(self, tmp_path, caplog):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"host": "riemann.internal", "port": "not-a-port"}))
        cfg = load_config(config_path=path)
        assert cfg.store.host == "riemann.internal"
        assert cfg.store.port == DEFAULT_PORT
        assert "Ignoring invalid port" in caplog.text

    def test_invalid_timeout_falls_back(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"port": "5556", "timeout": "soon"}))
        cfg = load_config(config_path=path)
        assert cfg.store.port == 5556
        assert cfg.store.timeout is None

    def test_numeric_string_timeout_converted(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"timeout": "2.5"}))
        assert load_config(config_path=path).store.timeout == 2.5
