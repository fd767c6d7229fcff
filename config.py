"""Configuration for the content engine.

These configuration models let callers tune loading and rendering behaviour,
such as the fallback locale, the result cap of the search panel, or which
language's solution code is shown.
"""

from pathlib import Path

from pydantic import BaseModel, Field


DEFAULT_DATA_DIR = Path(__file__).parent / "data"
DEFAULT_DB_PATH = DEFAULT_DATA_DIR / "preferences.db"


class LocaleInfo(BaseModel):
    """Display metadata for one selectable locale."""

    name: str
    flag: str


def _default_locales() -> dict[str, LocaleInfo]:
    return {
        "en": LocaleInfo(name="English", flag="🇬🇧"),
        "ua": LocaleInfo(name="Українська", flag="🇺🇦"),
    }


class SearchConfig(BaseModel):
    """Configuration for the search panel."""

    max_results: int = Field(default=8, ge=1)


class LoaderConfig(BaseModel):
    """Configuration for collection loading."""

    code_language: str = "javascript"
    probe_limit: int = Field(default=20, ge=0)


class AppConfig(BaseModel):
    """Master configuration for the application."""

    default_locale: str = "en"
    startup_locale: str = "ua"
    default_theme: str = "light"
    available_locales: dict[str, LocaleInfo] = Field(default_factory=_default_locales)
    data_dir: Path = DEFAULT_DATA_DIR
    base_url: str | None = None
    db_path: Path = DEFAULT_DB_PATH
    search: SearchConfig = Field(default_factory=SearchConfig)
    loader: LoaderConfig = Field(default_factory=LoaderConfig)
