"""
Pytest configuration and fixtures
"""
import importlib.util
import os
import sys
from pathlib import Path

import pytest

# Add backend directory to path for imports
backend_dir = Path(__file__).parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

# Keep test runs from writing log files
os.environ.setdefault("LOG_FILE_ENABLED", "false")

from resultdemo.core.config import get_settings


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Drop cached settings so env patches made by a test don't leak"""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(scope="session")
def app():
    """Load the FastAPI application from main.py"""
    main_path = backend_dir / "main.py"
    spec = importlib.util.spec_from_file_location("main", main_path)
    main_module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(main_module)
    return main_module.app


@pytest.fixture(scope="function")
def client(app):
    """Test client that does not follow redirects"""
    from fastapi.testclient import TestClient

    with TestClient(app, follow_redirects=False) as test_client:
        yield test_client


@pytest.fixture(scope="function")
def sample_file(tmp_path):
    """Small binary file on disk"""
    path = tmp_path / "report.bin"
    path.write_bytes(b"\x00\x01sample\xff")
    return path
