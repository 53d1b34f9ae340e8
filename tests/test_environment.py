"""Environment validation tests for iso639-tables."""

import sys


def test_python_version() -> None:
    """Verify Python version is 3.12 or higher."""
    assert sys.version_info >= (3, 12), f"Python 3.12+ required, got {sys.version}"


def test_core_imports() -> None:
    """Verify core packages can be imported."""
    import dotenv  # noqa: F401
    import httpx  # noqa: F401
    import lxml.html  # noqa: F401
    import pandas as pd  # noqa: F401


def test_project_structure() -> None:
    """Verify project module structure."""
    from iso639_tables import __version__
    from iso639_tables.config import CONFIG_DIR, PROJECT_ROOT

    assert __version__ == "0.1.0"
    assert PROJECT_ROOT.exists()
    assert CONFIG_DIR.exists()


def test_config_loads() -> None:
    """Verify config.json can be loaded."""
    from iso639_tables.config import get_config

    config = get_config()
    assert "http" in config
    assert "output" in config
    assert "datasets" in config


def test_logs_directory_exists() -> None:
    """Verify the logs directory is created on import."""
    from iso639_tables.config import LOGS_DIR

    assert LOGS_DIR.exists()
