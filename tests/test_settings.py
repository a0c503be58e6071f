"""Tests for environment-driven configuration."""

from pathlib import Path

from quiz_live.constants.network_constants import DEFAULT_PORT
from quiz_live.core.settings import Settings


def test_defaults(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    settings = Settings()
    assert settings.port == DEFAULT_PORT
    assert settings.manager_password == "PASSWORD"
    assert settings.questions_file == Path("data") / "questions.json"


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("QUIZ_LIVE_MANAGER_PASSWORD", "hunter2")
    monkeypatch.setenv("QUIZ_LIVE_PORT", "6000")
    monkeypatch.setenv("QUIZ_LIVE_QUESTIONS_FILE", str(tmp_path / "quiz.json"))

    settings = Settings()

    assert settings.manager_password == "hunter2"
    assert settings.port == 6000
    assert settings.questions_file == tmp_path / "quiz.json"


def test_dotenv_file(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text("QUIZ_LIVE_LOG_LEVEL=DEBUG\n", encoding="utf-8")
    assert Settings().log_level == "DEBUG"
