import pytest

from prospect_scanner.config.settings import Settings


@pytest.fixture()
def test_settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    monkeypatch.setenv("EXTRACTION_PROVIDER", "example")
    return Settings()
