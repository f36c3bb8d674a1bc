"""
PanelProxy Backend - Settings Tests
====================================
"""

import pytest
from pydantic import ValidationError

from app.config import Settings


class TestLicenseWhitelist:

    def test_unset_is_empty(self):
        assert Settings(license_tokens="").license_whitelist == ()

    def test_entries_are_trimmed(self):
        config = Settings(license_tokens="  a ,b  ,  c")
        assert config.license_whitelist == ("a", "b", "c")

    def test_blank_entries_dropped(self):
        assert Settings(license_tokens=",,a,, ,").license_whitelist == ("a",)

    def test_duplicates_removed_keeping_first_position(self):
        assert Settings(license_tokens="b,a,b,c,a").license_whitelist == ("b", "a", "c")


class TestDevelopmentMode:

    def test_defaults_to_off(self, monkeypatch):
        monkeypatch.delenv("DEVELOPMENT_MODE", raising=False)
        assert Settings().development_mode is False

    @pytest.mark.parametrize("raw", ["true", "1", "yes"])
    def test_read_from_environment(self, monkeypatch, raw):
        monkeypatch.setenv("DEVELOPMENT_MODE", raw)
        assert Settings().development_mode is True


class TestValidation:

    def test_log_level_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(log_level="LOUD")

    def test_upstream_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(upstream_timeout=0)


class TestMissingUpstreamKeys:

    def test_all_configured(self):
        config = Settings(gemini_api_key="g", youtube_api_key="y")
        assert config.missing_upstream_keys() == []

    def test_reports_names(self):
        config = Settings(gemini_api_key="", youtube_api_key="")
        assert config.missing_upstream_keys() == ["GEMINI_API_KEY", "YOUTUBE_API_KEY"]
