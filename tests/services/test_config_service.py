"""Unit tests for services/config_service.py.

Uses a real ConfigService pointed at a tmp_path directory.
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from task_timer.models.config_models import AppConfig
from task_timer.models.exceptions import ConfigError
from task_timer.services.config_service import ConfigService, get_config_service


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def svc(tmp_path) -> ConfigService:
    """ConfigService backed by a temporary directory."""
    with patch("task_timer.services.config_service.user_config_dir", return_value=str(tmp_path)):
        with patch("task_timer.services.config_service.user_data_dir", return_value=str(tmp_path / "data")):
            yield ConfigService()


# ---------------------------------------------------------------------------
# Loading and saving
# ---------------------------------------------------------------------------


class TestLoadSave:
    def test_first_load_writes_defaults(self, svc, tmp_path):
        config = svc.config
        assert config == AppConfig()
        saved = json.loads((tmp_path / "config.json").read_text(encoding="utf-8"))
        assert saved["timer"]["default_minutes"] == 25
        assert saved["storage"]["backend"] == "file"

    def test_reads_existing_file(self, tmp_path):
        (tmp_path / "config.json").write_text(
            json.dumps({"timer": {"default_minutes": 50}}), encoding="utf-8"
        )
        with patch("task_timer.services.config_service.user_config_dir", return_value=str(tmp_path)):
            with patch("task_timer.services.config_service.user_data_dir", return_value=str(tmp_path)):
                service = ConfigService()
        assert service.config.timer.default_minutes == 50
        assert service.config.tasks.seed_sample_tasks is True

    def test_invalid_file_raises_config_error(self, tmp_path):
        (tmp_path / "config.json").write_text("{not json", encoding="utf-8")
        with patch("task_timer.services.config_service.user_config_dir", return_value=str(tmp_path)):
            with patch("task_timer.services.config_service.user_data_dir", return_value=str(tmp_path)):
                service = ConfigService()
        with pytest.raises(ConfigError):
            _ = service.config

    def test_reset(self, svc):
        svc.set("timer.default_minutes", 45)
        config = svc.reset_config()
        assert config.timer.default_minutes == 25
        assert svc.config.timer.default_minutes == 25


# ---------------------------------------------------------------------------
# get / set
# ---------------------------------------------------------------------------


class TestGetSet:
    def test_get_nested_value(self, svc):
        assert svc.get("timer.default_minutes") == 25
        assert svc.get("logging.level") == "INFO"

    def test_get_unknown_key(self, svc):
        with pytest.raises(KeyError):
            svc.get("timer.nope")

    def test_set_persists(self, svc, tmp_path):
        svc.set("timer.default_minutes", 30)
        saved = json.loads((tmp_path / "config.json").read_text(encoding="utf-8"))
        assert saved["timer"]["default_minutes"] == 30

    def test_set_normalizes_log_level(self, svc):
        svc.set("logging.level", "debug")
        assert svc.get("logging.level") == "DEBUG"

    def test_set_section_rejected(self, svc):
        with pytest.raises(KeyError):
            svc.set("timer", {"default_minutes": 10})

    @pytest.mark.parametrize(
        ("key", "value"),
        [
            ("timer.default_minutes", 0),
            ("storage.backend", "cloud"),
            ("logging.level", "LOUD"),
        ],
    )
    def test_set_invalid_value(self, svc, key, value):
        with pytest.raises(ConfigError):
            svc.set(key, value)
        assert svc.config == AppConfig()


# ---------------------------------------------------------------------------
# Data directory
# ---------------------------------------------------------------------------


class TestDataDir:
    def test_default_data_dir(self, svc, tmp_path):
        assert svc.data_dir == tmp_path / "data"

    def test_configured_data_dir(self, svc, tmp_path):
        svc.set("storage.data_dir", str(tmp_path / "custom"))
        assert svc.data_dir == Path(tmp_path / "custom")


def test_get_config_service_is_cached(tmp_config):
    assert get_config_service() is tmp_config
