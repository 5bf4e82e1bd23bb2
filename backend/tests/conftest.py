"""
Test environment.

Settings are read once and cached, so the environment has to point at a
throwaway SQLite database and upload directory before any gymdir module
is imported.
"""

import os
import tempfile

_TMP_DIR = tempfile.mkdtemp(prefix="gymdir-tests-")

os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["STORAGE_LOCATION"] = os.path.join(_TMP_DIR, "uploads")
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["APP_ENV"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"
