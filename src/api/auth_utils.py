"""HMAC-signed session cookie utilities for the dashboard gate.

# ─── HOW AUTH COOKIES WORK ───────────────────────────────────────────
#
# The dashboard is protected by one shared secret (SECURITY_TOKEN).  The
# secret itself never goes into the cookie; instead the cookie holds a
# signed issue time:
#
#   Cookie format:  {unix_timestamp}:{hmac_hex_digest}
#     - timestamp: when the cookie was issued (UTC epoch seconds)
#     - hmac:      HMAC-SHA256(secret, timestamp_str)
#
# Validation checks:
#   1. Cookie format matches expected pattern
#   2. Timestamp is within max-age
#   3. HMAC signature is valid (constant-time comparison)
#
# Rotating SECURITY_TOKEN invalidates every issued cookie at once.
# ─────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import hashlib
import hmac
import time

COOKIE_NAME = "kb_console_session"


def _sign(secret: str, payload: str) -> str:
    return hmac.new(secret.encode("utf-8"), payload.encode("utf-8"), hashlib.sha256).hexdigest()


def tokens_match(provided: str | None, expected: str) -> bool:
    """Constant-time comparison of a submitted token against the secret."""
    if not provided or not expected:
        return False
    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


def create_session_cookie(secret: str, now: float | None = None) -> str:
    """Create a signed cookie value issued at *now* (defaults to the current time)."""
    timestamp = str(int(time.time() if now is None else now))
    return f"{timestamp}:{_sign(secret, timestamp)}"


def validate_session_cookie(
    cookie: str | None,
    secret: str,
    max_age_seconds: int = 60 * 60 * 24 * 7,
    now: float | None = None,
) -> bool:
    """Return ``True`` if *cookie* was signed with *secret* and has not expired."""
    if not cookie or not secret or ":" not in cookie:
        return False

    timestamp_str, provided = cookie.split(":", 1)
    try:
        issued = int(timestamp_str)
    except ValueError:
        return False

    current = time.time() if now is None else now
    if current - issued > max_age_seconds or issued - current > 60:
        return False

    return hmac.compare_digest(provided, _sign(secret, timestamp_str))
