"""
PanelProxy Backend - License Guard
===================================

What:  Decides whether a request carries an accepted license token.
Why:   The proxy spends the operator's Gemini/YouTube quota; only licensed
       plugin installs may use it.
How:   Bearer token from the Authorization header, exact membership test
       against a whitelist read once from LICENSE_TOKENS.

Validation order:
    1. Empty whitelist + DEVELOPMENT_MODE → valid (warning logged)
    2. No token                           → "Missing authorization token"
    3. Token in whitelist                 → valid
    4. Otherwise                          → "Invalid license token"

Not supported: expiry, revocation, per-token rate limits.
"""

import logging
from typing import Iterable, Optional, Tuple

from app.config import Settings, settings
from app.schemas.proxy import LicenseCheckResult

logger = logging.getLogger(__name__)

BEARER_SCHEME = "Bearer"
MISSING_TOKEN_REASON = "Missing authorization token"
INVALID_TOKEN_REASON = "Invalid license token"


def extract_token(auth_header: Optional[str]) -> Optional[str]:
    """
    Extract the token from an `Authorization: Bearer <token>` header value.

    The value must split on single spaces into exactly two parts, the first
    being the literal "Bearer". "bearer x", "Bearer  x" and "Bearer a b" all
    yield None.
    """
    if not auth_header:
        return None

    parts = auth_header.split(" ")
    if len(parts) != 2 or parts[0] != BEARER_SCHEME:
        return None

    return parts[1]


class LicenseGuard:
    """
    Immutable whitelist plus the development-mode escape hatch.

    Built once per process by `from_settings`; tests build their own with an
    explicit whitelist.
    """

    def __init__(self, whitelist: Iterable[str] = (), development_mode: bool = False):
        self._whitelist: Tuple[str, ...] = tuple(dict.fromkeys(whitelist))
        self._development_mode = development_mode

    @classmethod
    def from_settings(cls, config: Settings) -> "LicenseGuard":
        guard = cls(config.license_whitelist, config.development_mode)
        if guard.bypass_enabled:
            logger.warning(
                "LICENSE_TOKENS is empty and DEVELOPMENT_MODE is on: "
                "all requests will pass the license check"
            )
        elif not guard.whitelist:
            logger.warning("LICENSE_TOKENS is empty: every request will be rejected")
        else:
            logger.info("License whitelist loaded with %d token(s)", len(guard.whitelist))
        return guard

    @property
    def whitelist(self) -> Tuple[str, ...]:
        return self._whitelist

    @property
    def bypass_enabled(self) -> bool:
        return not self._whitelist and self._development_mode

    def validate_license(self, token: Optional[str]) -> LicenseCheckResult:
        if self.bypass_enabled:
            logger.warning("No LICENSE_TOKENS set - allowing request in development mode")
            return LicenseCheckResult(valid=True)

        if not token:
            return LicenseCheckResult(valid=False, reason=MISSING_TOKEN_REASON)

        if token in self._whitelist:
            return LicenseCheckResult(valid=True)

        return LicenseCheckResult(valid=False, reason=INVALID_TOKEN_REASON)

    def check_header(self, auth_header: Optional[str]) -> LicenseCheckResult:
        """Shortcut for `validate_license(extract_token(auth_header))`."""
        return self.validate_license(extract_token(auth_header))


# ── Singleton Instance ────────────────────────────────────────────────────
# The whitelist is read here, once, when the module is first imported.
license_guard = LicenseGuard.from_settings(settings)


def validate_license(token: Optional[str]) -> LicenseCheckResult:
    """Validate against the process-wide whitelist."""
    return license_guard.validate_license(token)
