from importlib.metadata import PackageNotFoundError, version as dist_version
from pathlib import Path
import os

DIST_NAME = "notes-api"
VERSION_FILE = Path(__file__).resolve().parents[1] / "VERSION"


def get_version(default: str = "0.0.0-dev") -> str:
    """Version reported by /health and /version.

    APP_VERSION overrides everything; otherwise the installed notes-api
    distribution, then api/VERSION for a source checkout that was never
    installed.
    """
    if v := os.getenv("APP_VERSION"):
        return v
    try:
        return dist_version(DIST_NAME)
    except PackageNotFoundError:
        pass
    try:
        return VERSION_FILE.read_text().strip() or default
    except OSError:
        return default
