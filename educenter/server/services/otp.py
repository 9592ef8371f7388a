"""
One-time passwords for e-mail verification.

Codes are TOTP values derived from a per-email secret, so nothing has to
be stored between sending a code and verifying it. A code stays valid for
the current and the previous time step.
"""

from __future__ import annotations

import base64
import hashlib

import pyotp

from educenter.server.core.config import settings


def _secret_for(email: str) -> str:
    seed = f"{email.strip().lower()}{settings.otp_secret_salt}".encode("utf-8")
    return base64.b32encode(hashlib.sha256(seed).digest()[:20]).decode("ascii")


def _totp(email: str) -> pyotp.TOTP:
    return pyotp.TOTP(
        _secret_for(email),
        digits=settings.otp_digits,
        interval=settings.otp_interval_seconds,
    )


def generate_otp(email: str) -> str:
    """Current one-time password for ``email``."""
    return _totp(email).now()


def verify_otp(email: str, code: str) -> bool:
    """Check ``code`` against the current and the previous step for ``email``."""
    if not code or not code.isdigit():
        return False
    return _totp(email).verify(code, valid_window=1)
