import pytest
import structlog

from udp_ingest.settings import get_settings


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch, tmp_path):
    # Keep a developer's .env and UDP_INGEST_* vars out of the tests
    monkeypatch.chdir(tmp_path)
    for var in ("APP_ENV", "UDP_INGEST_CONFIG_PATH", "UDP_INGEST_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    structlog.reset_defaults()


@pytest.fixture
def write_config(tmp_path):
    """Write TOML text to a file and return its path."""
    def _write(text: str, name: str = "udp.toml"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write
