import pytest


@pytest.fixture(autouse=True)
def idk_home(tmp_path, monkeypatch):
    """Keep every test's config in a throwaway directory."""
    home = tmp_path / "idk-home"
    monkeypatch.setenv("IDK_HOME", str(home))
    monkeypatch.delenv("IDK_API_URL", raising=False)
    return home
