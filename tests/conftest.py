import pytest

from diffplay.services.config_manager import ConfigManager


@pytest.fixture(autouse=True)
def config_dir(tmp_path, monkeypatch):
    """Keep every test away from the real ~/.diffplay directory."""
    directory = tmp_path / "diffplay-config"
    monkeypatch.setenv("DIFFPLAY_CONFIG_DIR", str(directory))
    ConfigManager.reset_instance()
    yield directory
    ConfigManager.reset_instance()
