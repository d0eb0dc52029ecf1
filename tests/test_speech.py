import pytest

import speech
from gesture_errors import EmptyPhraseError, SpeechUnavailableError
from speech import Speaker


class FakeEngine:
    def __init__(self, fail=False, say_error=None):
        self.properties = {}
        self.said = []
        self.fail = fail
        self.say_error = say_error

    def setProperty(self, name, value):
        self.properties[name] = value

    def say(self, text):
        if self.say_error is not None:
            raise self.say_error
        self.said.append(text)

    def runAndWait(self):
        if self.fail:
            raise RuntimeError("run loop already started")


@pytest.fixture
def engine(monkeypatch):
    engine = FakeEngine()
    monkeypatch.setattr(speech.pyttsx3, "init", lambda: engine)
    return engine


def test_speak_configures_engine_once(engine):
    speaker = Speaker(rate=120, volume=0.5)
    speaker.speak("Hello")
    speaker.speak("  Goodbye ")
    assert engine.said == ["Hello", "Goodbye"]
    assert engine.properties == {"rate": 120, "volume": 0.5}


def test_speak_rejects_blank_text(engine):
    with pytest.raises(EmptyPhraseError):
        Speaker().speak("  ")
    assert engine.said == []


def test_missing_driver_is_unavailable(monkeypatch):
    def broken_init():
        raise OSError("libespeak.so.1: cannot open shared object file")

    monkeypatch.setattr(speech.pyttsx3, "init", broken_init)
    with pytest.raises(SpeechUnavailableError):
        Speaker().speak("Hello")


def test_engine_failure_is_unavailable(monkeypatch):
    monkeypatch.setattr(speech.pyttsx3, "init", lambda: FakeEngine(fail=True))
    with pytest.raises(SpeechUnavailableError):
        Speaker().speak("Hello")


def test_audio_device_error_is_unavailable(monkeypatch):
    engine = FakeEngine(say_error=OSError("No such audio device"))
    monkeypatch.setattr(speech.pyttsx3, "init", lambda: engine)
    speaker = Speaker()
    with pytest.raises(SpeechUnavailableError):
        speaker.speak("Hello")
    assert speaker.last_spoken is None


def test_speak_if_new_skips_repeats_within_cooldown(engine, monkeypatch):
    now = [100.0]
    monkeypatch.setattr(speech.time, "time", lambda: now[0])
    speaker = Speaker(cooldown=2.0)

    assert speaker.speak_if_new("Water") is True
    now[0] += 1.0
    assert speaker.speak_if_new("Water") is False
    assert speaker.speak_if_new("Food") is True
    now[0] += 3.0
    assert speaker.speak_if_new("Food") is True
    assert engine.said == ["Water", "Food", "Food"]
