"""Shared pytest setup: isolate the database and log files per test run."""

import os
import tempfile

_TMP_DIR = tempfile.mkdtemp(prefix="nutrition-goals-tests-")
os.environ.setdefault("WRITE_DATABASE_URL", "sqlite:///" + os.path.join(_TMP_DIR, "test.db"))
os.environ.setdefault("LOG_DIR", os.path.join(_TMP_DIR, "logs"))
