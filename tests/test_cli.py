from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from idk import cli as cli_module
from idk.cli import cli
from idk.client import IdkAuth, MissingFieldError
from idk.core import config


class RecordingHandler:
    calls = []
    result = True

    def __init__(self, client, token, ui):
        self.client = client
        self.token = token

    def handle(self, prompt, readme_path=None, alias=None):
        RecordingHandler.calls.append(
            {"prompt": prompt, "readme": readme_path, "alias": alias, "token": self.token, "base_url": self.client.base_url}
        )
        return RecordingHandler.result


@pytest.fixture
def handler(monkeypatch: pytest.MonkeyPatch):
    RecordingHandler.calls = []
    RecordingHandler.result = True
    monkeypatch.setattr(cli_module, "PromptHandler", RecordingHandler)
    return RecordingHandler


def test_help() -> None:
    result = CliRunner().invoke(cli, ["-h"])

    assert result.exit_code == 0
    assert "--login" in result.output
    assert "--readme" in result.output


def test_no_prompt_shows_help() -> None:
    result = CliRunner().invoke(cli, [])

    assert result.exit_code == 0
    assert "Usage" in result.output


def test_prompt_requires_login(handler) -> None:
    result = CliRunner().invoke(cli, ["list", "files"])

    assert result.exit_code == 1
    assert "not logged in" in result.output
    assert handler.calls == []


def test_prompt_joins_words(handler, monkeypatch: pytest.MonkeyPatch) -> None:
    config.save_token("jwt")
    monkeypatch.setenv("IDK_API_URL", "https://api.example")

    result = CliRunner().invoke(cli, ["list", "all", "files"])

    assert result.exit_code == 0, result.output
    assert handler.calls == [
        {"prompt": "list all files", "readme": None, "alias": None, "token": "jwt", "base_url": "https://api.example"}
    ]


def test_prompt_with_readme_and_alias(handler, tmp_path: Path) -> None:
    config.save_token("jwt")
    readme = tmp_path / "README.md"
    readme.write_text("# app")

    result = CliRunner().invoke(cli, ["--readme", str(readme), "--alias", "start", "start", "it"])

    assert result.exit_code == 0, result.output
    assert handler.calls[0]["readme"] == readme
    assert handler.calls[0]["alias"] == "start"


def test_invalid_readme_path(handler, tmp_path: Path) -> None:
    config.save_token("jwt")

    result = CliRunner().invoke(cli, ["--readme", str(tmp_path / "missing.md"), "run"])

    assert result.exit_code == 2
    assert handler.calls == []


def test_failed_prompt_exits_non_zero(handler) -> None:
    config.save_token("jwt")
    handler.result = False

    result = CliRunner().invoke(cli, ["break", "things"])

    assert result.exit_code == 1


def test_login(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_login(self, *args, **kwargs):
        config.save_token("fresh")
        return "fresh"

    monkeypatch.setattr(IdkAuth, "login", fake_login)

    result = CliRunner().invoke(cli, ["--login"])

    assert result.exit_code == 0, result.output
    assert "Login Successful" in result.output
    assert config.get_token() == "fresh"


@pytest.mark.parametrize("error", [TimeoutError("slow"), MissingFieldError("url")])
def test_login_failure(monkeypatch: pytest.MonkeyPatch, error) -> None:
    def fake_login(self, *args, **kwargs):
        raise error

    monkeypatch.setattr(IdkAuth, "login", fake_login)

    result = CliRunner().invoke(cli, ["--login"])

    assert result.exit_code == 1
    assert "Login Successful" not in result.output


def test_logout() -> None:
    config.save_token("jwt")

    result = CliRunner().invoke(cli, ["--logout"])

    assert result.exit_code == 0
    assert "Logout Successful" in result.output
    assert config.get_token() is None


def test_corrupt_config(idk_home) -> None:
    idk_home.mkdir(parents=True)
    (idk_home / "config.json").write_text("{not json")

    result = CliRunner().invoke(cli, ["anything"])

    assert result.exit_code == 1
    assert "Cannot read config file" in result.output
    assert "Traceback" not in result.output


def test_login_port_in_use(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_login(self, *args, **kwargs):
        raise OSError(98, "Address already in use")

    monkeypatch.setattr(IdkAuth, "login", fake_login)

    result = CliRunner().invoke(cli, ["--login"])

    assert result.exit_code == 1
    assert not isinstance(result.exception, OSError)
    assert "Failed to Sign In With Google" in result.output
    assert config.get_token() is None
