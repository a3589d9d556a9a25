"""
Configuration management for bet history ingestion.
Handles environment variables and the classification YAML.
"""
import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, List, Optional, Tuple

import yaml
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

DEFAULT_CLASSIFICATION_YAML = os.path.join(os.path.dirname(__file__), "classification.yml")


@dataclass
class IngestConfig:
    """General ingestion configuration"""
    log_level: str = "INFO"
    log_file: Optional[str] = None
    default_book: str = "DraftKings"
    # Timezone the book displays placement times in
    book_timezone: str = "UTC"
    raw_excerpt_chars: int = 300


@dataclass
class ClassificationConfig:
    """Tunable keyword lists for the classification engine"""
    strong_prop_keywords: Tuple[str, ...] = ()
    source_path: Optional[str] = None


@dataclass
class Settings:
    ingest: IngestConfig = field(default_factory=IngestConfig)
    classification: ClassificationConfig = field(default_factory=ClassificationConfig)


def _load_yaml(path: str) -> Optional[Dict]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        return None
    if not isinstance(data, dict):
        return None
    return data


def _clean_keywords(values: List) -> Tuple[str, ...]:
    return tuple(str(v).strip().lower() for v in values if str(v).strip())


def load_classification_config(path: Optional[str] = None) -> ClassificationConfig:
    """Load the classification YAML.

    Search order: explicit path, CLASSIFICATION_YAML, packaged default.
    """
    candidates = [
        path,
        os.getenv("CLASSIFICATION_YAML", "").strip(),
        DEFAULT_CLASSIFICATION_YAML,
    ]
    for cand in candidates:
        if not cand:
            continue
        data = _load_yaml(cand)
        if data is not None:
            return ClassificationConfig(
                strong_prop_keywords=_clean_keywords(data.get("strong_prop_keywords") or []),
                source_path=cand,
            )
    return ClassificationConfig()


def _load_ingest_config() -> IngestConfig:
    return IngestConfig(
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_file=os.getenv("LOG_FILE") or None,
        default_book=os.getenv("DEFAULT_BOOK", "DraftKings"),
        book_timezone=os.getenv("BOOK_TIMEZONE", "UTC"),
        raw_excerpt_chars=int(os.getenv("RAW_EXCERPT_CHARS", "300")),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return process-wide settings (cached; call get_settings.cache_clear() to reload)."""
    return Settings(
        ingest=_load_ingest_config(),
        classification=load_classification_config(),
    )
