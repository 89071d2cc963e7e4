"""Tests for the config module."""

import pytest

from src.config import ENV_VARS, LOG_LEVELS, Config, load_config, load_yaml_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for env_var in ENV_VARS.values():
        monkeypatch.delenv(env_var, raising=False)
    monkeypatch.delenv("CONFIG_PATH", raising=False)


class TestConfigDefaults:
    def test_defaults(self):
        cfg = Config()
        assert cfg.namespace == "default"
        assert cfg.scrape_interval == 30
        assert cfg.log_lines == 100
        assert cfg.pod_selector == ""
        assert cfg.host == "0.0.0.0"
        assert cfg.port == 8080
        assert cfg.scrape_timeout == 10
        assert cfg.log_level == "INFO"

    def test_frozen(self):
        cfg = Config()
        with pytest.raises(AttributeError):
            cfg.port = 9090

    def test_log_levels(self):
        assert LOG_LEVELS == ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class TestLoadConfig:
    def test_no_env_no_yaml(self):
        assert load_config() == Config()

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("TARGET_NAMESPACE", "shop")
        monkeypatch.setenv("SCRAPE_INTERVAL_SECONDS", "15")
        monkeypatch.setenv("LOG_LINES_LIMIT", "500")
        monkeypatch.setenv("POD_SELECTOR", "app=web")
        monkeypatch.setenv("PORT", "9100")
        monkeypatch.setenv("LISTEN_HOST", "127.0.0.1")
        monkeypatch.setenv("SCRAPE_TIMEOUT_SECONDS", "5")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        cfg = load_config()
        assert cfg == Config(
            namespace="shop",
            scrape_interval=15,
            log_lines=500,
            pod_selector="app=web",
            host="127.0.0.1",
            port=9100,
            scrape_timeout=5,
            log_level="DEBUG",
        )

    def test_empty_env_uses_default(self, monkeypatch):
        monkeypatch.setenv("TARGET_NAMESPACE", "")
        assert load_config().namespace == "default"

    def test_invalid_integer_falls_back(self, monkeypatch):
        monkeypatch.setenv("SCRAPE_INTERVAL_SECONDS", "often")
        monkeypatch.setenv("LOG_LINES_LIMIT", "1e3")
        cfg = load_config()
        assert cfg.scrape_interval == 30
        assert cfg.log_lines == 100

    def test_non_positive_values_fall_back(self, monkeypatch):
        monkeypatch.setenv("SCRAPE_INTERVAL_SECONDS", "0")
        monkeypatch.setenv("LOG_LINES_LIMIT", "-5")
        cfg = load_config()
        assert cfg.scrape_interval == 30
        assert cfg.log_lines == 100

    def test_unknown_log_level_falls_back(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "chatty")
        assert load_config().log_level == "INFO"

    def test_yaml_values_used(self):
        cfg = load_config({"namespace": "from-yaml", "log_lines": 50, "pod_selector": "tier=api"})
        assert cfg.namespace == "from-yaml"
        assert cfg.log_lines == 50
        assert cfg.pod_selector == "tier=api"
        assert cfg.port == 8080

    def test_env_beats_yaml(self, monkeypatch):
        monkeypatch.setenv("TARGET_NAMESPACE", "from-env")
        cfg = load_config({"namespace": "from-yaml", "port": 9000})
        assert cfg.namespace == "from-env"
        assert cfg.port == 9000

    def test_config_path_env(self, monkeypatch, tmp_path):
        path = tmp_path / "exporter.yaml"
        path.write_text("namespace: staging\nscrape_interval: 60\n")
        monkeypatch.setenv("CONFIG_PATH", str(path))
        cfg = load_config()
        assert cfg.namespace == "staging"
        assert cfg.scrape_interval == 60


class TestLoadYamlConfig:
    def test_no_path(self):
        assert load_yaml_config(None) == {}

    def test_missing_file(self, tmp_path):
        assert load_yaml_config(str(tmp_path / "nope.yaml")) == {}

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_yaml_config(str(path)) == {}

    def test_non_mapping_ignored(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        assert load_yaml_config(str(path)) == {}
