"""
Settings loader.

- load_settings(): MatchSettings read from OFFERFINDER_<FIELD> env vars,
  e.g. OFFERFINDER_MAX_SUGGESTIONS=20 (pydantic-settings does the parsing).
- load_sources(): the default dataset list rooted at a data dir
  (OFFERFINDER_DATA_DIR, default "data"). Order is the dedup priority order.
"""

from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from lexicon.patterns import DEFAULT_SOURCES
from offerfinder.models.schemas import MatchSettings, SourceSpec


class DataSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="OFFERFINDER_",
        case_sensitive=False,
        env_ignore_empty=True,
        extra="ignore",
    )

    data_dir: str = "data"


def load_settings() -> MatchSettings:
    return MatchSettings()


def load_sources(data_dir: Optional[str] = None) -> List[SourceSpec]:
    base = data_dir or DataSettings().data_dir
    out: List[SourceSpec] = []
    for entry in DEFAULT_SOURCES:
        # URLs are used as-is
        if "://" in base:
            location = base.rstrip("/") + "/" + entry["file"]
        else:
            location = str(Path(base) / entry["file"])
        out.append(SourceSpec(name=entry["name"], location=location, role=entry["role"], title=entry["title"]))
    return out
