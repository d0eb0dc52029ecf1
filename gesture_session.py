"""
Editing session for the gesture configuration screen.

Tracks the logged-in user, the in-progress finger selection and phrase,
and the busy flag around the simulated save call.
"""

import logging
import time
from enum import Enum, auto
from typing import Optional, Set

from gesture_config import FINGER_NAMES, SAVE_DELAY
from gesture_errors import (
    EmptyCredentialsError,
    EmptyPhraseError,
    EmptySelectionError,
    GestureCraftError,
    NoActivePresetError,
    SaveFailedError,
    SaveInProgressError,
    UnknownFingerError,
)
from finger_utils import encode_gesture, suggest_phrase
from preset_store import PresetStore, SavedGesture
from speech import Speaker

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """Editing states of the configuration screen."""
    IDLE = auto()     # nothing typed yet, or phrase just saved
    EDITING = auto()  # unsaved phrase text
    SAVING = auto()   # save call pending


class GestureSession:
    """
    One user's editing session on top of a PresetStore.

    Switching preset discards the unsaved selection and phrase. A
    successful save clears only the phrase, the selection stays so the
    user can keep adjusting the same gesture.
    """

    def __init__(self, store: Optional[PresetStore] = None, speaker=None,
                 save_delay: float = SAVE_DELAY, sleep=time.sleep):
        """
        Initialize the session.

        Args:
            store: Preset store (a fresh one with the default preset if None)
            speaker: speech.Speaker or look-alike; created lazily if None
            save_delay: Seconds the simulated save call takes
            sleep: Sleep function used for the simulated call
        """
        self.store = store if store is not None else PresetStore()
        self._speaker = speaker
        self._save_delay = save_delay
        self._sleep = sleep

        self.username: Optional[str] = None
        self.selection: Set[str] = set()
        self.phrase = ""
        self.is_loading = False

    # ------------------------------------------------------------------
    # Login
    # ------------------------------------------------------------------

    @property
    def is_logged_in(self) -> bool:
        return self.username is not None

    def login(self, username, password):
        """Accept any non-empty credentials."""
        username = (username or "").strip()
        if not username or not password:
            raise EmptyCredentialsError()
        self.username = username
        logger.info(f"User '{username}' logged in")

    def logout(self):
        logger.info(f"User '{self.username}' logged out")
        self.username = None
        self.clear()

    # ------------------------------------------------------------------
    # Current gesture
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        if self.is_loading:
            return SessionState.SAVING
        if self.phrase.strip():
            return SessionState.EDITING
        return SessionState.IDLE

    @property
    def gesture_id(self) -> str:
        return encode_gesture(self.selection)

    @property
    def existing_phrase(self) -> Optional[str]:
        """Phrase already saved for the current gesture in the active preset."""
        preset = self.store.active_preset
        if preset is None:
            return None
        saved = self.store.get_gesture(preset.id, self.gesture_id)
        return saved.phrase if saved else None

    @property
    def suggestion(self) -> Optional[str]:
        if not self.selection:
            return None
        return suggest_phrase(self.selection)

    @property
    def can_save(self) -> bool:
        return bool(self.selection) and bool(self.phrase.strip()) and not self.is_loading

    def toggle_finger(self, finger):
        if finger not in FINGER_NAMES:
            raise UnknownFingerError(f"Unknown finger: {finger}")
        if finger in self.selection:
            self.selection.discard(finger)
        else:
            self.selection.add(finger)

    def set_selection(self, selection):
        encode_gesture(selection)  # validates finger names
        self.selection = set(selection)

    def set_phrase(self, text):
        self.phrase = text or ""

    def clear(self):
        """Forget the unsaved selection and phrase."""
        self.selection = set()
        self.phrase = ""

    # ------------------------------------------------------------------
    # Saving
    # ------------------------------------------------------------------

    def save(self) -> SavedGesture:
        """
        Save the current phrase for the current gesture in the active preset.

        Raises:
            SaveInProgressError: Another save is pending
            EmptySelectionError: No finger selected
            EmptyPhraseError: Phrase is blank
            NoActivePresetError: No preset to save into
            SaveFailedError: The simulated call failed
        """
        if self.is_loading:
            raise SaveInProgressError()
        if not self.selection:
            raise EmptySelectionError()
        if not self.phrase.strip():
            raise EmptyPhraseError()
        preset = self.store.active_preset
        if preset is None:
            raise NoActivePresetError()

        gesture_id = self.gesture_id
        self.is_loading = True
        try:
            # Simulated API call, cannot be cancelled
            self._sleep(self._save_delay)
            saved = self.store.save_gesture(preset.id, gesture_id, self.phrase)
        except GestureCraftError:
            raise
        except Exception as e:
            logger.error(f"Saving gesture {gesture_id} failed: {e}")
            raise SaveFailedError() from e
        finally:
            self.is_loading = False

        self.phrase = ""
        return saved

    # ------------------------------------------------------------------
    # Presets
    # ------------------------------------------------------------------

    def create_preset(self, name, description=""):
        return self.store.create_preset(name, description)

    def select_preset(self, preset_id):
        """Switch preset; unsaved selection and phrase are discarded."""
        preset = self.store.select_preset(preset_id)
        self.clear()
        return preset

    def update_preset(self, preset_id, name=None, description=None):
        return self.store.update_preset(preset_id, name=name, description=description)

    def delete_preset(self, preset_id):
        self.store.delete_preset(preset_id)

    def delete_gesture(self, preset_id, gesture_id):
        return self.store.delete_gesture(preset_id, gesture_id)

    # ------------------------------------------------------------------
    # Speech
    # ------------------------------------------------------------------

    @property
    def speaker(self):
        if self._speaker is None:
            self._speaker = Speaker()
        return self._speaker

    def test_phrase(self, phrase):
        """Speak a saved phrase so the user can hear it."""
        self.speaker.speak(phrase)

    def perform_gesture(self, selection) -> Optional[str]:
        """
        Speak the phrase mapped to a finger selection in the active preset.

        Returns:
            The mapped phrase, or None if the gesture has no phrase
        """
        preset = self.store.active_preset
        if preset is None or not selection:
            return None
        saved = self.store.get_gesture(preset.id, encode_gesture(selection))
        if saved is None:
            return None
        # Holding a gesture should not repeat the phrase every frame
        self.speaker.speak_if_new(saved.phrase)
        return saved.phrase
