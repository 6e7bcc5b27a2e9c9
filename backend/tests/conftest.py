"""
Point the app at a throwaway SQLite file and create the schema.
Runs before any test module imports tracker.*, so settings pick it up.
"""
import os
import tempfile

import pytest

_tmp = tempfile.mkdtemp(prefix="tracker-tests-")
os.environ.setdefault("DB_URL", f"sqlite:///{os.path.join(_tmp, 'tracker.db')}")
os.environ.setdefault("STORAGE_PATH", os.path.join(_tmp, "storage.json"))

from tracker.db import Base, engine  # noqa: E402
from tracker import models  # noqa: E402,F401

Base.metadata.create_all(bind=engine)


@pytest.fixture
def storage(tmp_path):
    from tracker.client.storage import LocalStorage
    return LocalStorage(tmp_path / "storage.json")
