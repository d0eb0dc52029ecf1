"""
Custom exceptions for GestureCraft.

Every error carries the message shown to the user.
"""


class GestureCraftError(Exception):
    """Base exception for gesture and preset errors."""
    pass


class UnknownFingerError(GestureCraftError, ValueError):
    """Raised when a finger name is not one of the five known fingers."""
    pass


class InvalidGestureIdError(GestureCraftError, ValueError):
    """Raised when a gesture id is not G_ followed by five 0/1 digits."""
    pass


class EmptyPresetNameError(GestureCraftError):
    """Raised when a preset name is blank."""

    def __init__(self, message="Please enter a preset name"):
        super().__init__(message)


class DuplicatePresetNameError(GestureCraftError):
    """Raised when a preset name is already taken (case-insensitive)."""

    def __init__(self, message="A preset with this name already exists"):
        super().__init__(message)


class PresetNotFoundError(GestureCraftError, KeyError):
    """Raised when a preset id is unknown."""

    def __str__(self):
        # KeyError would repr() the message
        return str(self.args[0]) if self.args else "Preset not found"


class LastPresetError(GestureCraftError):
    """Raised when deleting the only remaining preset."""

    def __init__(self, message="Cannot delete the last preset"):
        super().__init__(message)


class EmptySelectionError(GestureCraftError):
    """Raised when saving a gesture with no fingers selected."""

    def __init__(self, message="Please select at least one finger"):
        super().__init__(message)


class EmptyPhraseError(GestureCraftError):
    """Raised when a phrase is blank after trimming."""

    def __init__(self, message="Please enter a phrase for this gesture"):
        super().__init__(message)


class NoActivePresetError(GestureCraftError):
    """Raised when saving without a valid target preset."""

    def __init__(self, message="Please select a preset first"):
        super().__init__(message)


class SaveInProgressError(GestureCraftError):
    """Raised when a save is requested while another one is pending."""

    def __init__(self, message="A save is already in progress"):
        super().__init__(message)


class SaveFailedError(GestureCraftError):
    """Raised when the simulated save call fails."""

    def __init__(self, message="Failed to save gesture. Please try again."):
        super().__init__(message)


class EmptyCredentialsError(GestureCraftError):
    """Raised when the username or password is blank."""

    def __init__(self, message="Please fill in all fields"):
        super().__init__(message)


class SpeechUnavailableError(GestureCraftError):
    """Raised when the host has no usable text-to-speech engine."""

    def __init__(self, message="Text-to-speech is not available on this system"):
        super().__init__(message)
