"""
PanelProxy Backend - License Guard Unit Tests
==============================================

What we test:
    ✅ Bearer header parsing (exact two-part shape, case-sensitive scheme)
    ✅ Missing / unknown / whitelisted tokens
    ✅ Development-mode bypass only with an empty whitelist
    ✅ Whitelist built from settings (trim, de-duplicate, keep order)
"""

import pytest

from app.config import Settings
from app.services.license_service import (
    INVALID_TOKEN_REASON,
    MISSING_TOKEN_REASON,
    LicenseGuard,
    extract_token,
)


class TestExtractToken:

    def test_valid_bearer_header(self):
        assert extract_token("Bearer tok-alpha") == "tok-alpha"

    @pytest.mark.parametrize("header", [None, ""])
    def test_missing_header(self, header):
        assert extract_token(header) is None

    @pytest.mark.parametrize(
        "header",
        [
            "bearer tok-alpha",        # scheme is case-sensitive
            "Basic dXNlcjpwYXNz",
            "Bearer",
            "tok-alpha",
            "Bearer tok alpha",        # three parts
            "Bearer  tok-alpha",       # double space → three parts
        ],
    )
    def test_other_shapes_yield_no_token(self, header):
        assert extract_token(header) is None

    def test_empty_token_part(self):
        """'Bearer ' splits into two parts; the token is the empty string."""
        assert extract_token("Bearer ") == ""


class TestValidateLicense:

    def test_missing_token(self, guard):
        result = guard.validate_license(None)
        assert result.valid is False
        assert result.reason == MISSING_TOKEN_REASON == "Missing authorization token"

    def test_empty_token_counts_as_missing(self, guard):
        result = guard.validate_license("")
        assert result.reason == MISSING_TOKEN_REASON

    def test_unknown_token(self, guard):
        result = guard.validate_license("tok-gamma")
        assert result.valid is False
        assert result.reason == INVALID_TOKEN_REASON == "Invalid license token"

    @pytest.mark.parametrize("token", ["tok-alpha", "tok-beta"])
    def test_whitelisted_token(self, guard, token):
        result = guard.validate_license(token)
        assert result.valid is True
        assert result.reason is None

    def test_membership_is_exact(self, guard):
        assert guard.validate_license("TOK-ALPHA").valid is False
        assert guard.validate_license("tok-alph").valid is False

    def test_check_header_combines_extract_and_validate(self, guard):
        assert guard.check_header("Bearer tok-beta").valid is True
        assert guard.check_header("Token tok-beta").reason == MISSING_TOKEN_REASON


class TestDevelopmentBypass:

    @pytest.mark.parametrize("token", [None, "", "anything"])
    def test_empty_whitelist_in_development_passes_everything(self, token):
        guard = LicenseGuard([], development_mode=True)
        assert guard.bypass_enabled is True
        assert guard.validate_license(token).valid is True

    def test_bypass_logs_warning(self, caplog):
        guard = LicenseGuard([], development_mode=True)
        with caplog.at_level("WARNING"):
            guard.validate_license(None)
        assert "development mode" in caplog.text

    def test_empty_whitelist_outside_development_rejects(self):
        guard = LicenseGuard([], development_mode=False)
        assert guard.bypass_enabled is False
        assert guard.validate_license("anything").reason == INVALID_TOKEN_REASON
        assert guard.validate_license(None).reason == MISSING_TOKEN_REASON

    def test_non_empty_whitelist_ignores_development_mode(self):
        guard = LicenseGuard(["tok-alpha"], development_mode=True)
        assert guard.bypass_enabled is False
        assert guard.validate_license("other").valid is False


class TestFromSettings:

    def test_whitelist_is_trimmed_ordered_and_unique(self):
        config = Settings(license_tokens=" tok-b , tok-a,tok-b,, ", development_mode=False)
        guard = LicenseGuard.from_settings(config)
        assert guard.whitelist == ("tok-b", "tok-a")
        assert guard.validate_license("tok-a").valid is True

    def test_whitelist_is_immutable(self):
        guard = LicenseGuard(["tok-a"])
        assert isinstance(guard.whitelist, tuple)

    def test_unset_tokens_with_development_flag(self):
        config = Settings(license_tokens="", development_mode=True)
        guard = LicenseGuard.from_settings(config)
        assert guard.bypass_enabled is True


class TestProcessWhitelist:
    """The module-level validate_license uses the whitelist loaded at import."""

    def test_singleton_loaded_from_environment(self):
        from app.services.license_service import license_guard
        assert license_guard.whitelist == ("tok-alpha", "tok-beta")
        assert license_guard.bypass_enabled is False

    @pytest.mark.parametrize(
        "token, valid, reason",
        [
            ("tok-alpha", True, None),
            ("tok-beta", True, None),
            ("tok-gamma", False, INVALID_TOKEN_REASON),
            (None, False, MISSING_TOKEN_REASON),
            ("", False, MISSING_TOKEN_REASON),
        ],
    )
    def test_module_level_validate_license(self, token, valid, reason):
        from app.services.license_service import validate_license
        result = validate_license(token)
        assert result.valid is valid
        assert result.reason == reason
