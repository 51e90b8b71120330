import sys
import os

import pytest

# Ensure the project root is in sys.path so `from meeting_analytics.main import app` works
# without installing the package
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from meeting_analytics.config import Settings, get_settings  # noqa: E402
from meeting_analytics.main import app  # noqa: E402


@pytest.fixture
def settings():
    """Configured settings with a tiny upload cap so oversize cases stay cheap."""
    return Settings(gemini_api_key="AIzaSyTEST-key-0123456789", max_upload_bytes=1024)


@pytest.fixture(autouse=True)
def override_settings(settings):
    app.dependency_overrides[get_settings] = lambda: settings
    yield
    app.dependency_overrides.clear()
