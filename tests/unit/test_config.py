"""
Runtime Configuration Unit Tests
Tests for core/config/runtime.py
"""
import json

import pytest

from core.config import (
    HashingConfig,
    LedgerConfig,
    RuntimeConfig,
    get_default_config,
    set_default_config,
)


class TestRuntimeConfigDefaults:

    def test_defaults(self):
        config = RuntimeConfig()

        assert config.hashing.algorithm == "blake2s"
        assert config.ledger.backend == "memory"
        assert config.ledger.timeout == 30.0
        assert config.log_level == "INFO"

    def test_invalid_backend(self):
        with pytest.raises(ValueError, match="Unknown ledger backend"):
            LedgerConfig(backend="postgres")


class TestFromDict:

    def test_partial_data(self):
        config = RuntimeConfig.from_dict({"ledger": {"backend": "file", "path": "x.jsonl"}})

        assert config.ledger.backend == "file"
        assert config.ledger.path == "x.jsonl"
        assert config.hashing == HashingConfig()

    def test_empty_dict(self):
        assert RuntimeConfig.from_dict({}) == RuntimeConfig()

    def test_to_dict_omits_api_key(self):
        config = RuntimeConfig.from_dict({
            "ledger": {"backend": "http", "endpoint": "https://x.example", "api_key": "secret"},
        })
        data = config.to_dict()

        assert "api_key" not in data["ledger"]
        assert data["ledger"]["endpoint"] == "https://x.example"
        assert "secret" not in json.dumps(data)


class TestEnvOverrides:

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("ANCHOR_HASH_ALGORITHM", "sha256")
        monkeypatch.setenv("ANCHOR_LEDGER_BACKEND", "file")
        monkeypatch.setenv("ANCHOR_LEDGER_PATH", "/tmp/anchors.jsonl")
        monkeypatch.setenv("ANCHOR_LEDGER_TIMEOUT", "2.5")
        monkeypatch.setenv("ANCHOR_LOG_LEVEL", "DEBUG")

        config = RuntimeConfig.from_env()

        assert config.hashing.algorithm == "sha256"
        assert config.ledger.backend == "file"
        assert config.ledger.path == "/tmp/anchors.jsonl"
        assert config.ledger.timeout == 2.5
        assert config.log_level == "DEBUG"

    def test_with_env_overrides_does_not_mutate(self, monkeypatch):
        base = RuntimeConfig.from_dict({"ledger": {"backend": "memory"}})
        monkeypatch.setenv("ANCHOR_LEDGER_BACKEND", "http")
        monkeypatch.setenv("ANCHOR_LEDGER_ENDPOINT", "https://x.example")

        overridden = base.with_env_overrides()

        assert overridden.ledger.backend == "http"
        assert overridden.ledger.endpoint == "https://x.example"
        assert base.ledger.backend == "memory"

    def test_no_overrides_returns_same(self):
        config = RuntimeConfig()

        assert config.with_env_overrides() is config

    def test_invalid_backend_from_env(self, monkeypatch):
        monkeypatch.setenv("ANCHOR_LEDGER_BACKEND", "sqlite")

        with pytest.raises(ValueError):
            RuntimeConfig().with_env_overrides()


class TestConfigFiles:

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "anchor.yaml"
        path.write_text(
            "hashing:\n"
            "  algorithm: sha256\n"
            "ledger:\n"
            "  backend: file\n"
            "  path: data/anchors.jsonl\n"
            "log_level: WARNING\n"
        )

        config = RuntimeConfig.from_file(path)

        assert config.hashing.algorithm == "sha256"
        assert config.ledger.path == "data/anchors.jsonl"
        assert config.log_level == "WARNING"

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "anchor.yml"
        path.write_text("")

        assert RuntimeConfig.from_file(path) == RuntimeConfig()

    def test_from_json(self, tmp_path):
        path = tmp_path / "anchor.json"
        path.write_text(json.dumps({"ledger": {"backend": "http", "endpoint": "https://x.example"}}))

        config = RuntimeConfig.from_file(path)

        assert config.ledger.backend == "http"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RuntimeConfig.from_yaml(tmp_path / "missing.yaml")


class TestDefaultConfig:

    def test_set_and_reset(self):
        custom = RuntimeConfig.from_dict({"log_level": "ERROR"})
        set_default_config(custom)
        try:
            assert get_default_config() is custom
        finally:
            set_default_config(None)

        assert get_default_config().log_level == "INFO"
        set_default_config(None)
