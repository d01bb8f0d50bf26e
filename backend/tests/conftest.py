"""Point the app at a throwaway SQLite database before anything imports it."""

import os
import tempfile
from pathlib import Path

_DB_DIR = Path(tempfile.mkdtemp(prefix="payplanner-tests-"))

os.environ["DATABASE_URL"] = f"sqlite:///{_DB_DIR / 'test.db'}"
os.environ["APP_ENV"] = "test"
os.environ["OVERDUE_SWEEP_ENABLED"] = "false"
os.environ["REGISTRATION_ENABLED"] = "true"
os.environ["SEED_ADMIN_EMAIL"] = "admin@payplanner.test"
os.environ["SEED_ADMIN_PASSWORD"] = "Admin123!"
