"""Tests for engine settings lookup."""

import pytest

from engagement.config import get_setting


class TestSettings:
    def test_reads_custom_config_section(self):
        from engagement.domain import engagement

        assert get_setting("directory_page_size") == engagement.config["custom"]["directory_page_size"]

    def test_push_preview_length(self, monkeypatch):
        monkeypatch.delenv("ENGAGEMENT_CAMPAIGN_PUSH_PREVIEW_LENGTH", raising=False)
        assert get_setting("campaign_push_preview_length") == 200

    def test_environment_overrides_config(self, monkeypatch):
        monkeypatch.setenv("ENGAGEMENT_CAMPAIGN_SWEEP_INTERVAL", "15")
        assert get_setting("campaign_sweep_interval") == 15

    def test_boolean_coercion(self, monkeypatch):
        monkeypatch.setenv("ENGAGEMENT_SCHEDULER_ENABLED", "true")
        assert get_setting("scheduler_enabled") is True
        monkeypatch.setenv("ENGAGEMENT_SCHEDULER_ENABLED", "0")
        assert get_setting("scheduler_enabled") is False

    def test_unknown_setting(self):
        with pytest.raises(KeyError):
            get_setting("sweep_everything")
