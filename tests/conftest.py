"""
Pytest fixtures shared across test modules.
"""
import pytest


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """
    Point the configuration file at a temporary location so tests never
    read or write the user's real configuration.
    """
    config_file = tmp_path / "texmaps_config.json"
    monkeypatch.setenv("TEXMAPS_CONFIG", str(config_file))
    return config_file
