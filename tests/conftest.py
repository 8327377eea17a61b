"""Test configuration: point settings at in-memory SQLite before youth_cms is imported."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-for-youth-cms-0123456789abcdef"
os.environ["AUTO_INIT_DB"] = "false"
os.environ["APP_ENV"] = "dev"
