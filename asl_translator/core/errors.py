"""
Module: errors.py
Description: Exception types raised by the translator's collaborators
Author: Hackathon Team
Date: 2026
"""


class TranslatorError(Exception):
    """Base class for every failure the translator reports to the user."""


class ConfigurationError(TranslatorError):
    """Required configuration (such as the API key) is missing."""


class CaptureError(TranslatorError):
    """Camera unavailable, permission denied, or the stream was lost."""


class DetectionError(TranslatorError):
    """The sign detection request failed."""


class TranslationError(TranslatorError):
    """A translation request failed."""


class SynthesisError(TranslatorError):
    """Speech synthesis failed or returned no audio."""


class PlaybackError(TranslatorError):
    """Audio could not be decoded or played."""
