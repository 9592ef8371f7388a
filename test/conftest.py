"""
Root test configuration.

Environment defaults are exported before any ``educenter`` module is
imported, because the settings object and the global engine are created at
import time.
"""

from __future__ import annotations

import os
import tempfile

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "4")
os.environ.setdefault("SMTP_ENABLED", "false")
os.environ.setdefault("LOGFIRE_ENABLED", "false")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="educenter-uploads-"))
os.environ.setdefault("DATABASE_AUTO_CREATE", "true")
