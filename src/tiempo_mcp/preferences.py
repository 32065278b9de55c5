"""User preferences — app settings and favorite verbs, stored as JSON."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

# Default preferences file (override with TIEMPO_PREFS env var)
PREFS_PATH = Path(
    os.environ.get(
        "TIEMPO_PREFS", Path(__file__).parent.parent.parent / "data" / "preferences.json"
    )
)


class AppSettings(BaseModel):
    # True = European Spanish (with vosotros), False = Latin American
    use_vosotros: bool = True


class Preferences(BaseModel):
    settings: AppSettings = Field(default_factory=AppSettings)
    favorites: list[str] = Field(default_factory=list)


class PreferenceStore:
    """JSON file-based settings and favorites.

    Owned by the application shell; quiz code receives the current values
    (``settings.use_vosotros``, ``favorites()``) as plain arguments.
    """

    def __init__(self, path: Path | str = PREFS_PATH) -> None:
        self.path = Path(path)
        self._prefs = self._load()

    def _load(self) -> Preferences:
        if not self.path.exists():
            return Preferences()
        try:
            return Preferences.model_validate_json(self.path.read_text())
        except (OSError, ValidationError) as e:
            logger.warning("Failed to load preferences from %s: %s", self.path, e)
            return Preferences()

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(self._prefs.model_dump(), indent=2, ensure_ascii=False)
        )

    # --- Settings ---

    @property
    def settings(self) -> AppSettings:
        return self._prefs.settings.model_copy()

    def update_settings(self, **changes) -> AppSettings:
        settings = AppSettings.model_validate(
            {**self._prefs.settings.model_dump(), **changes}
        )
        self._prefs.settings = settings
        self._save()
        logger.info("Settings updated: %s", settings.model_dump())
        return self.settings

    def reset_settings(self) -> AppSettings:
        self._prefs.settings = AppSettings()
        self._save()
        return self.settings

    # --- Favorites ---

    def favorites(self) -> list[str]:
        return sorted(self._prefs.favorites)

    def is_favorite(self, infinitive: str) -> bool:
        return infinitive in self._prefs.favorites

    def favorite_count(self) -> int:
        return len(self._prefs.favorites)

    def add_favorite(self, infinitive: str) -> None:
        if infinitive not in self._prefs.favorites:
            self._prefs.favorites.append(infinitive)
            self._save()

    def remove_favorite(self, infinitive: str) -> None:
        if infinitive in self._prefs.favorites:
            self._prefs.favorites.remove(infinitive)
            self._save()

    def toggle_favorite(self, infinitive: str) -> bool:
        """Flip favorite status; returns whether the verb is now a favorite."""
        if self.is_favorite(infinitive):
            self.remove_favorite(infinitive)
            return False
        self.add_favorite(infinitive)
        return True
