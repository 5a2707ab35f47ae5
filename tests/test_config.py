import pytest

from poemcraft.core.config import get_settings


def test_requires_api_key(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    with pytest.raises(RuntimeError):
        get_settings()


def test_defaults(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", " sk-abc ")
    for name in ("POEM_MODEL", "MAX_OUTPUT_TOKENS", "TEMPERATURE", "STORAGE_BACKEND", "CORS_ORIGINS"):
        monkeypatch.delenv(name, raising=False)
    cfg = get_settings()
    assert cfg.OPENAI_API_KEY == "sk-abc"
    assert cfg.POEM_MODEL == "gpt-4o"
    assert cfg.MAX_OUTPUT_TOKENS == 500
    assert cfg.TEMPERATURE == 0.8
    assert cfg.STORAGE_BACKEND == "memory"
    assert cfg.CORS_ORIGINS == ["*"]


def test_malformed_values_fall_back(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-abc")
    monkeypatch.setenv("MAX_OUTPUT_TOKENS", "lots")
    monkeypatch.setenv("TEMPERATURE", "warm")
    monkeypatch.setenv("STORAGE_BACKEND", "mongo")
    cfg = get_settings()
    assert cfg.MAX_OUTPUT_TOKENS == 500
    assert cfg.TEMPERATURE == 0.8
    assert cfg.STORAGE_BACKEND == "memory"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ('["https://a.test", "https://b.test"]', ["https://a.test", "https://b.test"]),
        ("https://a.test, https://b.test,", ["https://a.test", "https://b.test"]),
    ],
)
def test_cors_origins_json_or_csv(monkeypatch, raw, expected):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-abc")
    monkeypatch.setenv("CORS_ORIGINS", raw)
    assert get_settings().CORS_ORIGINS == expected
