# hand_reader.py
# Reads a finger selection from the webcam, standing in for the glove sensors.

import argparse
import logging

import cv2
import mediapipe as mp
import numpy as np

from gesture_config import (
    CAMERA_INDEX,
    MIN_DETECTION_CONFIDENCE,
    MIN_TRACKING_CONFIDENCE,
    PHRASE_SUGGESTIONS,
    setup_logging,
)
from finger_utils import get_finger_states, states_to_selection, encode_gesture
from gesture_errors import SpeechUnavailableError
from gesture_session import GestureSession

logger = logging.getLogger(__name__)


class HandReader:
    def __init__(self, static_image_mode=False,
                 min_detection_confidence=MIN_DETECTION_CONFIDENCE,
                 min_tracking_confidence=MIN_TRACKING_CONFIDENCE):
        # Initialize MediaPipe
        self.mp_hands = mp.solutions.hands
        self.hands = self.mp_hands.Hands(
            static_image_mode=static_image_mode,
            max_num_hands=1,
            min_detection_confidence=min_detection_confidence,
            min_tracking_confidence=min_tracking_confidence
        )
        self.mp_drawing = mp.solutions.drawing_utils

    def read_selection(self, frame):
        """
        Selection of extended fingers for the first hand in a BGR frame.
        Draws the landmarks on the frame. Returns None if no hand is visible.
        """
        # MediaPipe needs RGB
        results = self.hands.process(cv2.cvtColor(frame, cv2.COLOR_BGR2RGB))
        if not results.multi_hand_landmarks:
            return None

        hand_landmarks = results.multi_hand_landmarks[0]
        self.mp_drawing.draw_landmarks(frame, hand_landmarks, self.mp_hands.HAND_CONNECTIONS)
        finger_states = get_finger_states(hand_landmarks.landmark)
        return states_to_selection(finger_states)

    def read_image_bytes(self, data):
        """Decode an encoded image (PNG/JPEG bytes) and read its selection."""
        frame = cv2.imdecode(np.frombuffer(data, dtype=np.uint8), cv2.IMREAD_COLOR)
        if frame is None:
            raise ValueError("Could not decode image")
        return self.read_selection(frame)

    def close(self):
        self.hands.close()


def run_live(session, camera_index=CAMERA_INDEX):
    """Speak the mapped phrase for each gesture held in front of the webcam. 'q' quits."""
    reader = HandReader()
    cap = cv2.VideoCapture(camera_index)
    if not cap.isOpened():
        logger.error(f"Could not open webcam {camera_index}")
        reader.close()
        return

    preset = session.store.active_preset
    logger.info(f"Live mode on preset '{preset.name}', press 'q' to quit")

    try:
        while cap.isOpened():
            success, frame = cap.read()
            if not success:
                continue

            frame = cv2.flip(frame, 1)
            selection = reader.read_selection(frame)

            label = "No Hand Detected"
            if selection:
                try:
                    phrase = session.perform_gesture(selection)
                except SpeechUnavailableError as e:
                    logger.warning(str(e))
                    phrase = None
                label = f"{encode_gesture(selection)}: {phrase or 'Unknown'}"

            cv2.putText(frame, label, (10, 40),
                        cv2.FONT_HERSHEY_SIMPLEX, 1.0, (0, 255, 0), 2)
            cv2.imshow('GestureCraft Live', frame)

            if cv2.waitKey(1) & 0xFF == ord('q'):
                break
    finally:
        cap.release()
        cv2.destroyAllWindows()
        reader.close()


def main():
    parser = argparse.ArgumentParser(description='Speak phrases for gestures shown to the webcam')
    parser.add_argument('--camera', type=int, default=CAMERA_INDEX, help='Webcam device index')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    args = parser.parse_args()

    setup_logging(args.debug)

    # Demo mapping: starter phrases in the default preset
    session = GestureSession()
    for states, phrase in PHRASE_SUGGESTIONS.items():
        selection = states_to_selection(states)
        if selection:
            session.store.save_gesture(session.store.active_preset.id, encode_gesture(selection), phrase)

    run_live(session, camera_index=args.camera)


if __name__ == "__main__":
    main()
