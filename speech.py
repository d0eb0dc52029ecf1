# speech.py

import logging
import time

import pyttsx3

from gesture_config import TTS_RATE, TTS_VOLUME, SPEECH_COOLDOWN
from gesture_errors import EmptyPhraseError, SpeechUnavailableError

logger = logging.getLogger(__name__)


class Speaker:
    """Speaks phrases through the local pyttsx3 engine."""

    def __init__(self, rate=TTS_RATE, volume=TTS_VOLUME, cooldown=SPEECH_COOLDOWN):
        self.rate = rate
        self.volume = volume
        self.cooldown = cooldown

        # Engine is created on first use so a missing driver only matters when speaking
        self.engine = None

        # Repeat suppression for speak_if_new
        self.last_spoken = None
        self.last_spoken_time = 0.0

    def _get_engine(self):
        if self.engine is None:
            try:
                engine = pyttsx3.init()
            except Exception as e:
                # Driver load errors differ per platform (espeak, sapi5, nsss)
                logger.warning(f"Text-to-speech engine unavailable: {e}")
                raise SpeechUnavailableError() from e
            engine.setProperty('rate', self.rate)
            engine.setProperty('volume', self.volume)
            self.engine = engine
        return self.engine

    def speak(self, text):
        """Say the text and wait until it has been spoken."""
        text = (text or "").strip()
        if not text:
            raise EmptyPhraseError()

        engine = self._get_engine()
        try:
            engine.say(text)
            engine.runAndWait()
        except Exception as e:
            # pyttsx3 drivers raise RuntimeError, OSError or their own errors
            logger.warning(f"Speech failed for \"{text}\": {e}")
            raise SpeechUnavailableError() from e

        self.last_spoken = text
        self.last_spoken_time = time.time()
        logger.debug(f"Spoke: \"{text}\"")

    def speak_if_new(self, text):
        """Speak unless the same text was spoken within the cooldown. Returns True if spoken."""
        current_time = time.time()
        if text == self.last_spoken and current_time - self.last_spoken_time <= self.cooldown:
            return False
        self.speak(text)
        return True
