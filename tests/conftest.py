"""Shared test fixtures for Cosmoscale."""

import pytest
from pathlib import Path


@pytest.fixture
def tmp_config_dir(tmp_path):
    """Provide a temporary configuration directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def config_manager(tmp_config_dir):
    """Provide a ConfigManager with a temp directory."""
    from cosmoscale.config.manager import ConfigManager

    mgr = ConfigManager(config_dir=tmp_config_dir)
    mgr.load()
    return mgr


@pytest.fixture
def small_catalog():
    """A two-object catalog spanning 1 m to 100 m (zoom bounds 0.5 m to 5 km)."""
    from cosmoscale.core.catalog import RawEntry, build_catalog

    return build_catalog([
        RawEntry("Tree", 100.0, (0.3, 0.5, 0.4)),
        RawEntry("Door", 1.0, (0.1, 0.3, 0.5)),
    ])


@pytest.fixture
def project_root():
    """Return the project root directory."""
    return Path(__file__).parent.parent
