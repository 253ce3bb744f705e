import os
import tempfile

# Point the app at a throwaway database before notes_api.db is imported
_tmpdir = tempfile.mkdtemp(prefix="notes_api_tests_")
os.environ["DATABASE_URL"] = os.environ.get("TEST_DATABASE_URL", f"sqlite:///{os.path.join(_tmpdir, 'test.db')}")
os.environ.pop("ENV", None)

from notes_api.db import Base, engine  # noqa: E402
from notes_api import models  # noqa: E402,F401

Base.metadata.create_all(bind=engine)
