"""Persisted form preferences.

FormPreferences is stored as JSON under the key "ttsSettings" using the same
field names as the web form (japaneseText, selectedVoices, speed, pitch).
There is no schema versioning: unknown keys are ignored and voice ids that
are no longer in the catalog are dropped on load.
"""

import json
import math
import os
import tempfile
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from jtts.core.voices import (
    DEFAULT_PITCH,
    DEFAULT_SELECTED_VOICES,
    DEFAULT_SPEED,
    clamp_pitch,
    clamp_speed,
    is_known_voice,
)
from jtts.utils.logging import get_logger

logger = get_logger("client")

STORAGE_KEY = "ttsSettings"


def _as_number(value: Any) -> float | None:
    """Numeric value of a number or numeric string; None leaves it to pydantic."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if isinstance(value, (int, float)) and math.isfinite(value):
        return float(value)
    return None


class FormPreferences(BaseModel):
    """The user's last-used text, voice selection, speed and pitch."""

    text: str = Field(default="", alias="japaneseText")
    selected_voice_ids: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SELECTED_VOICES),
        alias="selectedVoices",
    )
    speed: float = DEFAULT_SPEED
    pitch: int = DEFAULT_PITCH

    model_config = ConfigDict(
        populate_by_name=True,
        validate_assignment=True,
        extra="ignore",
    )

    @field_validator("selected_voice_ids")
    @classmethod
    def keep_known_unique(cls, v: list[str]) -> list[str]:
        """Drop ids missing from the catalog and duplicates, keeping selection order."""
        seen: list[str] = []
        for voice_id in v:
            if is_known_voice(voice_id) and voice_id not in seen:
                seen.append(voice_id)
        return seen

    @field_validator("speed", mode="before")
    @classmethod
    def clamp_speed_value(cls, v: Any) -> Any:
        number = _as_number(v)
        return v if number is None else clamp_speed(number)

    @field_validator("pitch", mode="before")
    @classmethod
    def clamp_pitch_value(cls, v: Any) -> Any:
        number = _as_number(v)
        return v if number is None else clamp_pitch(number)

    def select_voice(self, voice_id: str) -> None:
        """Append a voice to the selection; a no-op if already selected."""
        if not is_known_voice(voice_id):
            raise ValueError(f"Unknown voice: {voice_id}")
        if voice_id not in self.selected_voice_ids:
            self.selected_voice_ids = [*self.selected_voice_ids, voice_id]

    def deselect_voice(self, voice_id: str) -> None:
        self.selected_voice_ids = [v for v in self.selected_voice_ids if v != voice_id]

    def to_storage(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class PreferencesStore:
    """
    JSON-file backed store for FormPreferences.

    Other top-level keys in the file are preserved on save.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def _read_document(self) -> dict[str, Any]:
        try:
            document = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except ValueError:
            # UnicodeDecodeError and JSONDecodeError
            logger.warning("Ignoring unreadable preferences file", path=str(self.path))
            return {}
        if not isinstance(document, dict):
            logger.warning("Ignoring malformed preferences file", path=str(self.path))
            return {}
        return document

    def load(self) -> FormPreferences:
        """Load saved preferences merged over the defaults."""
        saved = self._read_document().get(STORAGE_KEY)
        if not isinstance(saved, dict):
            return FormPreferences()
        try:
            return FormPreferences.model_validate(saved)
        except ValidationError as e:
            invalid = {str(error["loc"][0]) for error in e.errors() if error["loc"]}
            logger.warning(
                "Ignoring invalid saved preferences",
                path=str(self.path),
                fields=sorted(invalid),
            )
            readable = {key: value for key, value in saved.items() if key not in invalid}
            return FormPreferences.model_validate(readable)

    def save(self, preferences: FormPreferences) -> None:
        """Overwrite the stored preferences atomically."""
        document = self._read_document()
        document[STORAGE_KEY] = preferences.to_storage()

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".jtts-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.debug("Saved preferences", path=str(self.path))

    def update(self, **changes: Any) -> FormPreferences:
        """Load, apply field changes, save, and return the new preferences."""
        preferences = self.load()
        for name, value in changes.items():
            setattr(preferences, name, value)
        self.save(preferences)
        return preferences
