"""Tests for configuration loading."""
import os

from bethistory.config.settings import DEFAULT_CLASSIFICATION_YAML, get_settings, load_classification_config
from bethistory.processing.classification import classify_bet, has_strong_prop_keyword
from bethistory.processors.wager_data import MarketCategory
from bethistory.utils.logger import get_module_logger, null_logger


def _write_yaml(tmp_path, body):
    path = tmp_path / "classification.yml"
    path.write_text(body, encoding="utf-8")
    return str(path)


def test_packaged_classification_config():
    cfg = load_classification_config()
    assert cfg.source_path == DEFAULT_CLASSIFICATION_YAML
    assert "rebounds" in cfg.strong_prop_keywords
    assert "points" not in cfg.strong_prop_keywords


def test_explicit_path_is_cleaned(tmp_path):
    path = _write_yaml(tmp_path, "strong_prop_keywords:\n  - ' Rebounds '\n  - Saves\n  - ''\n")
    cfg = load_classification_config(path)
    assert cfg.strong_prop_keywords == ("rebounds", "saves")
    assert cfg.source_path == path


def test_missing_path_falls_back_to_default(tmp_path):
    cfg = load_classification_config(str(tmp_path / "nope.yml"))
    assert cfg.source_path == DEFAULT_CLASSIFICATION_YAML


def test_env_override_drives_classification(tmp_path, monkeypatch):
    monkeypatch.setenv("CLASSIFICATION_YAML", _write_yaml(tmp_path, "strong_prop_keywords:\n  - assists\n"))
    get_settings.cache_clear()

    assert get_settings().classification.strong_prop_keywords == ("assists",)
    assert not has_strong_prop_keyword("Over 10.5 Rebounds")
    assert classify_bet({"bet_type": "single", "description": "Over 10.5 Rebounds"}) is MarketCategory.MAIN_MARKETS


def test_ingest_settings_from_environment(monkeypatch):
    monkeypatch.setenv("BOOK_TIMEZONE", "America/New_York")
    monkeypatch.setenv("RAW_EXCERPT_CHARS", "40")
    monkeypatch.setenv("DEFAULT_BOOK", "draftkings")
    get_settings.cache_clear()

    settings = get_settings()
    assert settings.ingest.book_timezone == "America/New_York"
    assert settings.ingest.raw_excerpt_chars == 40
    assert settings.ingest.default_book == "draftkings"
    assert get_settings() is settings


def test_ingest_defaults():
    ingest = get_settings().ingest
    assert ingest.log_level == os.getenv("LOG_LEVEL", "INFO")
    assert ingest.book_timezone == "UTC"
    assert ingest.raw_excerpt_chars == 300


def test_null_logger_accepts_calls():
    log = null_logger()
    log.info("event", key="value")
    log.warning("event")
    log.error("event", exc_info=True)
    assert get_module_logger(__name__) is not None
