"""Tests for configuration system."""

from dataclasses import dataclass
from pathlib import Path

import pytest

from cachepool.core.config import Config, config_properties
from cachepool.kernel.exceptions import CacheInvalidConfigurationException


class TestConfig:
    def test_load_from_dict(self):
        config = Config({"app": {"name": "test-service", "port": 8080}})
        assert config.get("app.name") == "test-service"
        assert config.get("app.port") == 8080

    def test_get_with_default(self):
        config = Config({})
        assert config.get("missing.key", "default") == "default"

    def test_get_nested_value(self):
        config = Config({"cachepool": {"cache": {"default_ttl": 10}}})
        assert config.get("cachepool.cache.default_ttl") == 10

    def test_load_from_yaml_file(self, tmp_path: Path):
        config_file = tmp_path / "cachepool.yaml"
        config_file.write_text("cachepool:\n  cache:\n    driver: memory\n")
        config = Config.from_file(config_file)
        assert config.get("cachepool.cache.driver") == "memory"
        assert str(config_file) in config.loaded_sources

    def test_load_from_toml_file(self, tmp_path: Path):
        config_file = tmp_path / "cachepool.toml"
        config_file.write_text('[cachepool.cache]\ndriver = "diskcache"\n')
        config = Config.from_file(config_file)
        assert config.get("cachepool.cache.driver") == "diskcache"

    def test_library_defaults_are_loaded(self):
        config = Config.from_file(None)
        assert config.get("cachepool.cache.default_ttl") == 900
        assert config.get("cachepool.cache.fallback") == "memory"

    def test_missing_file_keeps_defaults(self, tmp_path: Path):
        config = Config.from_file(tmp_path / "absent.yaml")
        assert config.get("cachepool.cache.driver") == "auto"

    def test_env_var_override(self, monkeypatch):
        monkeypatch.setenv("CACHEPOOL_CACHE_DRIVER", "memory")
        config = Config({"cachepool": {"cache": {"driver": "diskcache"}}})
        assert config.get("cachepool.cache.driver") == "memory"

    def test_placeholder_from_env(self, monkeypatch):
        monkeypatch.setenv("CACHE_DIR", "/var/cache/app")
        config = Config({"cachepool": {"cache": {"path": "${CACHE_DIR}"}}})
        assert config.get("cachepool.cache.path") == "/var/cache/app"

    def test_placeholder_default(self):
        config = Config({"cachepool": {"cache": {"path": "${UNSET_CACHE_DIR_XYZ:/tmp/cachepool}"}}})
        assert config.get("cachepool.cache.path") == "/tmp/cachepool"

    def test_unresolvable_placeholder(self):
        config = Config({"a": "${UNSET_CACHE_DIR_XYZ}"})
        with pytest.raises(CacheInvalidConfigurationException):
            config.get("a")


class TestConfigProperties:
    def test_bind_to_dataclass(self):
        @config_properties(prefix="database")
        @dataclass
        class DatabaseConfig:
            url: str = "sqlite:///test.db"
            pool_size: int = 5

        config = Config({"database": {"url": "postgresql://localhost/mydb", "pool_size": "20"}})
        db_config = config.bind(DatabaseConfig)
        assert db_config.url == "postgresql://localhost/mydb"
        assert db_config.pool_size == 20

    def test_bind_uses_defaults(self):
        @config_properties(prefix="database")
        @dataclass
        class DatabaseConfig:
            url: str = "sqlite:///default.db"
            pool_size: int = 5

        db_config = Config({}).bind(DatabaseConfig)
        assert db_config.url == "sqlite:///default.db"
        assert db_config.pool_size == 5

    def test_bind_undecorated_class(self):
        @dataclass
        class Plain:
            x: int = 1

        with pytest.raises(CacheInvalidConfigurationException):
            Config({}).bind(Plain)
