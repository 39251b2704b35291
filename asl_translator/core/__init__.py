# Core package
from .errors import (
    TranslatorError, ConfigurationError, CaptureError, DetectionError,
    TranslationError, SynthesisError, PlaybackError
)
from .state import AppState, SessionState, LoadingFlags, Language
from .in_flight import InFlightGuard
