"""
Test environment: in-memory SQLite, a fixed signing secret and cheap bcrypt.

Set before any app import because app.main builds a module-level app from
get_settings() at import time.
"""

import os

os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-signing-secret-at-least-32-bytes"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"
