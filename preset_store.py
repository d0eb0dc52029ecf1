"""
In-memory preset and gesture store.

Presets are named contexts (Home, Work, ...) that each own a map of
gesture id -> saved phrase. Nothing is persisted; the store lives as long
as the process.
"""

import logging
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Dict, List, Optional

from gesture_config import (
    DEFAULT_PRESET_DESCRIPTION,
    DEFAULT_PRESET_NAME,
    FINGER_NAMES,
    GESTURE_PREFIX,
)
from gesture_errors import (
    DuplicatePresetNameError,
    EmptyPhraseError,
    EmptyPresetNameError,
    EmptySelectionError,
    LastPresetError,
    NoActivePresetError,
    PresetNotFoundError,
)
from finger_utils import decode_gesture

logger = logging.getLogger(__name__)

EMPTY_GESTURE_ID = GESTURE_PREFIX + "0" * len(FINGER_NAMES)


@dataclass(frozen=True)
class Preset:
    """
    A named context bundling its own gesture-to-phrase mappings.

    Read-only; PresetStore.update_preset stores a changed copy.
    """
    id: str
    name: str
    description: str = ""
    created_at: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class SavedGesture:
    """A phrase mapped to a gesture id inside one preset. Read-only."""
    gesture_id: str
    phrase: str
    preset_id: str
    created_at: datetime
    updated_at: datetime

    @property
    def fingers(self) -> List[str]:
        return decode_gesture(self.gesture_id)


class PresetStore:
    """
    Presets plus one gesture map per preset.

    Invariants:
    - at least one preset exists once the store is initialized
    - every gesture map belongs to an existing preset
    - preset names are unique, ignoring case

    Failed operations leave the store untouched.
    """

    def __init__(self, create_default: bool = True, clock=None, id_factory=None):
        """
        Initialize the store.

        Args:
            create_default: Create and activate the default preset
            clock: Callable returning the current datetime (for tests)
            id_factory: Callable returning a fresh preset id (for tests)
        """
        self._clock = clock or datetime.now
        self._id_factory = id_factory or (lambda: uuid.uuid4().hex)

        self._presets: Dict[str, Preset] = {}
        self._gestures: Dict[str, Dict[str, SavedGesture]] = {}
        self._active_id: Optional[str] = None

        if create_default:
            self.create_preset(DEFAULT_PRESET_NAME, DEFAULT_PRESET_DESCRIPTION)

    # ------------------------------------------------------------------
    # Presets
    # ------------------------------------------------------------------

    @property
    def presets(self) -> List[Preset]:
        """All presets, oldest first (ties in creation order)."""
        return sorted(self._presets.values(), key=lambda p: p.created_at)

    @property
    def active_preset(self) -> Optional[Preset]:
        if self._active_id is None:
            return None
        return self._presets.get(self._active_id)

    def get_preset(self, preset_id: str) -> Preset:
        try:
            return self._presets[preset_id]
        except KeyError:
            raise PresetNotFoundError(f"Preset not found: {preset_id}") from None

    def find_preset(self, name: str) -> Optional[Preset]:
        """Look up a preset by name, ignoring case."""
        wanted = name.strip().lower()
        for preset in self._presets.values():
            if preset.name.lower() == wanted:
                return preset
        return None

    def _check_name(self, name, exclude_id=None):
        name = (name or "").strip()
        if not name:
            logger.debug("Rejected blank preset name")
            raise EmptyPresetNameError()
        existing = self.find_preset(name)
        if existing is not None and existing.id != exclude_id:
            logger.debug(f"Rejected preset name '{name}', already used by {existing.id}")
            raise DuplicatePresetNameError()
        return name

    def create_preset(self, name: str, description: str = "") -> Preset:
        """Create a preset and make it active."""
        name = self._check_name(name)

        preset_id = self._id_factory()
        while preset_id in self._presets:
            preset_id = self._id_factory()

        preset = Preset(
            id=preset_id,
            name=name,
            description=(description or "").strip(),
            created_at=self._clock(),
        )
        self._presets[preset_id] = preset
        self._gestures[preset_id] = {}
        self._active_id = preset_id

        logger.info(f"Preset '{name}' created ({preset_id})")
        return preset

    def select_preset(self, preset_id: str) -> Preset:
        preset = self.get_preset(preset_id)
        self._active_id = preset_id
        logger.info(f"Active preset: '{preset.name}'")
        return preset

    def update_preset(self, preset_id: str, name: Optional[str] = None,
                      description: Optional[str] = None) -> Preset:
        """Rename and/or re-describe a preset."""
        preset = self.get_preset(preset_id)
        if name is not None:
            name = self._check_name(name, exclude_id=preset_id)

        changes = {}
        if name is not None:
            changes["name"] = name
        if description is not None:
            changes["description"] = description.strip()
        preset = replace(preset, **changes)
        self._presets[preset_id] = preset

        logger.info(f"Preset {preset_id} updated: '{preset.name}'")
        return preset

    def delete_preset(self, preset_id: str) -> None:
        """
        Delete a preset and all of its gestures.

        If it was active, the oldest remaining preset becomes active.
        """
        preset = self.get_preset(preset_id)
        if len(self._presets) <= 1:
            logger.debug(f"Refused to delete '{preset.name}', it is the last preset")
            raise LastPresetError()

        del self._presets[preset_id]
        removed = self._gestures.pop(preset_id, {})

        if self._active_id == preset_id:
            self._active_id = self.presets[0].id

        logger.info(
            f"Preset '{preset.name}' deleted with {len(removed)} gesture(s), "
            f"active: '{self.active_preset.name}'"
        )

    # ------------------------------------------------------------------
    # Gestures
    # ------------------------------------------------------------------

    def save_gesture(self, preset_id: Optional[str], gesture_id: str, phrase: str) -> SavedGesture:
        """
        Insert or overwrite the phrase for a gesture in a preset.

        Overwrites unconditionally; warning about an existing phrase is
        up to the caller (see get_gesture).
        """
        decode_gesture(gesture_id)
        if gesture_id == EMPTY_GESTURE_ID:
            logger.debug("Rejected save of empty gesture G_00000")
            raise EmptySelectionError()

        phrase = (phrase or "").strip()
        if not phrase:
            logger.debug(f"Rejected blank phrase for {gesture_id}")
            raise EmptyPhraseError()

        if preset_id is None or preset_id not in self._presets:
            logger.debug(f"Rejected save of {gesture_id}, no preset {preset_id}")
            raise NoActivePresetError()

        now = self._clock()
        gestures = self._gestures[preset_id]
        overwritten = gesture_id in gestures

        # created_at is reset on overwrite as well
        saved = SavedGesture(
            gesture_id=gesture_id,
            phrase=phrase,
            preset_id=preset_id,
            created_at=now,
            updated_at=now,
        )
        gestures[gesture_id] = saved

        action = "overwritten" if overwritten else "saved"
        logger.info(f"Gesture {gesture_id} {action} in '{self._presets[preset_id].name}': \"{phrase}\"")
        return saved

    def get_gesture(self, preset_id: Optional[str], gesture_id: str) -> Optional[SavedGesture]:
        return self._gestures.get(preset_id, {}).get(gesture_id)

    def delete_gesture(self, preset_id: str, gesture_id: str) -> bool:
        """Remove a gesture; returns False if it was not there."""
        removed = self._gestures.get(preset_id, {}).pop(gesture_id, None)
        if removed is None:
            logger.debug(f"Gesture {gesture_id} not in preset {preset_id}, nothing to delete")
            return False
        logger.info(f"Gesture {gesture_id} deleted from preset {preset_id}")
        return True

    def _matches(self, gesture, search):
        preset_name = self._presets[gesture.preset_id].name
        if (search in gesture.phrase.lower()
                or search in gesture.gesture_id.lower()
                or search in preset_name.lower()):
            return True
        return any(search in finger.lower() for finger in gesture.fingers)

    def list_gestures(self, preset_id: Optional[str] = None,
                      search: Optional[str] = None) -> List[SavedGesture]:
        """
        Saved gestures, most recently updated first.

        Args:
            preset_id: Only this preset's gestures (None = all presets)
            search: Case-insensitive text matched against phrase, gesture id,
                preset name and finger names

        Returns:
            List of SavedGesture
        """
        if preset_id is None:
            gestures = [g for mapping in self._gestures.values() for g in mapping.values()]
        else:
            gestures = list(self._gestures.get(preset_id, {}).values())

        # Blank search means no filter; otherwise match the text as typed
        if search and search.strip():
            search = search.lower()
            gestures = [g for g in gestures if self._matches(g, search)]

        return sorted(gestures, key=lambda g: g.updated_at, reverse=True)

    def gesture_stats(self) -> Dict[str, int]:
        gestures = self.list_gestures()
        return {
            "total": len(gestures),
            "unique_gesture_ids": len({g.gesture_id for g in gestures}),
        }
