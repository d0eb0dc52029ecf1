# gesture_config.py
import logging

# Finger order is part of the gesture id format, do not reorder
FINGER_NAMES = ["Thumb", "Index", "Middle", "Ring", "Pinky"]
GESTURE_PREFIX = "G_"

# Preset created at startup
DEFAULT_PRESET_NAME = "Default"
DEFAULT_PRESET_DESCRIPTION = "Default gesture preset"

# Simulated save round-trip (seconds)
SAVE_DELAY = 1.0

# Text-to-speech
TTS_RATE = 150
TTS_VOLUME = 1.0
SPEECH_COOLDOWN = 2.0  # seconds before the same phrase is spoken again

# Camera input
CAMERA_INDEX = 0
MIN_DETECTION_CONFIDENCE = 0.7
MIN_TRACKING_CONFIDENCE = 0.5

# Starter phrases for well-known hand shapes, keyed by (Thumb, Index, Middle, Ring, Pinky)
PHRASE_SUGGESTIONS = {
    (1, 1, 1, 1, 1): "Hello there",
    (1, 0, 0, 0, 0): "Great job! Thumbs up!",
    (0, 1, 1, 0, 0): "Victory!",
    (0, 1, 0, 0, 0): "Look over there",
    (1, 1, 0, 0, 1): "I love you",
    (0, 0, 0, 0, 1): "I promise!",
    (1, 0, 0, 0, 1): "Call me later",
    (1, 1, 1, 0, 0): "Number three",
    (0, 1, 1, 1, 1): "Number four",
    (1, 0, 1, 0, 1): "Rock and roll!",
}

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(debug=False):
    """Configure logging format and level."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt='%H:%M:%S')
