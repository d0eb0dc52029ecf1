# finger_utils.py

from gesture_config import FINGER_NAMES, GESTURE_PREFIX, PHRASE_SUGGESTIONS
from gesture_errors import InvalidGestureIdError, UnknownFingerError

GESTURE_ID_LENGTH = len(GESTURE_PREFIX) + len(FINGER_NAMES)


def get_finger_states(landmarks):
    """
    Returns list indicating if each finger is open (1) or closed (0)
    Order: Thumb, Index, Middle, Ring, Pinky
    """
    finger_states = []

    # Thumb (check x-axis instead of y)
    if landmarks[4].x < landmarks[3].x:
        finger_states.append(1)
    else:
        finger_states.append(0)

    # Fingers: tip.y < pip.y means finger is up
    tips_ids = [8, 12, 16, 20]
    pip_ids = [6, 10, 14, 18]

    for tip, pip in zip(tips_ids, pip_ids):
        if landmarks[tip].y < landmarks[pip].y:
            finger_states.append(1)
        else:
            finger_states.append(0)

    return finger_states


def _check_fingers(selection):
    unknown = [name for name in selection if name not in FINGER_NAMES]
    if unknown:
        raise UnknownFingerError(f"Unknown finger: {', '.join(sorted(unknown))}")


def selection_to_states(selection):
    """Turn a set of finger names into a (Thumb, ..., Pinky) tuple of 0/1."""
    _check_fingers(selection)
    return tuple(1 if name in selection else 0 for name in FINGER_NAMES)


def states_to_selection(finger_states):
    """Turn five 0/1 finger states back into a set of finger names."""
    if len(finger_states) != len(FINGER_NAMES):
        raise ValueError(f"Expected {len(FINGER_NAMES)} finger states, got {len(finger_states)}")
    return {name for name, state in zip(FINGER_NAMES, finger_states) if state}


def encode_gesture(selection):
    """
    Build the gesture id for a finger selection.

    {"Index", "Middle"} -> "G_01100". The empty selection encodes to "G_00000";
    callers must reject it before saving.
    """
    states = selection_to_states(selection)
    return GESTURE_PREFIX + "".join(str(state) for state in states)


def _gesture_bits(gesture_id):
    if (not isinstance(gesture_id, str)
            or len(gesture_id) != GESTURE_ID_LENGTH
            or not gesture_id.startswith(GESTURE_PREFIX)):
        raise InvalidGestureIdError(f"Invalid gesture id: {gesture_id!r}")

    bits = gesture_id[len(GESTURE_PREFIX):]
    if any(bit not in "01" for bit in bits):
        raise InvalidGestureIdError(f"Invalid gesture id: {gesture_id!r}")
    return bits


def decode_gesture(gesture_id):
    """Finger names selected in a gesture id, in finger order."""
    bits = _gesture_bits(gesture_id)
    return [name for name, bit in zip(FINGER_NAMES, bits) if bit == "1"]


def format_gesture_binary(gesture_id):
    # "G_01100" -> "0 1 1 0 0"
    return " ".join(_gesture_bits(gesture_id))


def suggest_phrase(selection):
    """Starter phrase for a well-known hand shape, or None."""
    return PHRASE_SUGGESTIONS.get(selection_to_states(selection))
