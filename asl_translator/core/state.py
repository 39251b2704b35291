"""
Module: state.py
Description: Session state container for the sign translator
Author: Hackathon Team
Date: 2026

All detection, translation and speech components read immutable
SessionState snapshots and request changes through AppState methods.
Every transition replaces whole fields and publishes a new snapshot.

Session-scoped writes (detection and translation results) carry the
generation they were started under; AppState discards them once a camera
toggle has advanced the generation. Translation results additionally belong
to a TranslationRequest; only the most recently started request may write.
"""
import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Dict, List, Optional

# Setup logging
logger = logging.getLogger(__name__)


class Language(str, Enum):
    """Closed set of languages shown by the translator."""
    ENGLISH = 'English'
    HINDI = 'Hindi'
    GUJARATI = 'Gujarati'


SOURCE_LANGUAGE = Language.ENGLISH
TARGET_LANGUAGES = (Language.HINDI, Language.GUJARATI)


def empty_translations() -> Dict[Language, str]:
    return {language: '' for language in Language}


def idle_speech_flags() -> Dict[Language, bool]:
    return {language: False for language in Language}


@dataclass(frozen=True)
class LoadingFlags:
    detection: bool = False
    translation: bool = False
    speech: Dict[Language, bool] = field(default_factory=idle_speech_flags)


@dataclass(frozen=True)
class SessionState:
    """
    Snapshot of everything the presentation layer renders.

    Attributes:
        camera_active: Whether a capture session is running
        detected_symbol: Last accepted letter, None when nothing is held
        translations: Text per language, all three keys always present
        loading: In-progress flags per operation kind
        last_error: Single user-facing error message, if any
        generation: Session counter, advanced on every camera toggle
    """
    camera_active: bool = False
    detected_symbol: Optional[str] = None
    translations: Dict[Language, str] = field(default_factory=empty_translations)
    loading: LoadingFlags = field(default_factory=LoadingFlags)
    last_error: Optional[str] = None
    generation: int = 0

    @property
    def is_muted(self) -> bool:
        """Speaking is disabled while nothing is held or results are in flux."""
        return (not self.detected_symbol
                or self.loading.translation
                or self.loading.detection)

    @property
    def symbol_display(self) -> str:
        """Text for the detected-sign panel."""
        if self.loading.detection:
            return 'Analyzing...'
        if self.detected_symbol:
            return self.detected_symbol
        return '...' if self.camera_active else 'Camera off'


@dataclass(frozen=True, eq=False)
class TranslationRequest:
    """One translation run. Compared by identity, so repeats of a sign stay distinct."""
    generation: int
    text: str


StateListener = Callable[[SessionState], None]


class AppState:
    """
    Owner of the SessionState.

    Not thread-safe: all transitions must run on the session's event loop
    thread. Other threads only read snapshots through `snapshot`.
    """

    def __init__(self):
        self._state = SessionState()
        self._listeners: List[StateListener] = []
        self._translation_request: Optional[TranslationRequest] = None

    @property
    def snapshot(self) -> SessionState:
        return self._state

    @property
    def generation(self) -> int:
        return self._state.generation

    def is_current(self, generation: int) -> bool:
        """Check whether work started under `generation` may still write."""
        return generation == self._state.generation

    def subscribe(self, listener: StateListener) -> None:
        """Register a callback invoked with every new snapshot."""
        self._listeners.append(listener)

    def _commit(self, **changes) -> None:
        self._state = replace(self._state, **changes)
        for listener in list(self._listeners):
            listener(self._state)

    def _set_loading(self, **changes) -> None:
        self._commit(loading=replace(self._state.loading, **changes))

    def _guard(self, generation: int, action: str) -> bool:
        if self.is_current(generation):
            return True
        logger.debug(f"Discarding stale {action} from generation {generation} "
                     f"(current {self._state.generation})")
        return False

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------

    def set_error(self, message: str) -> None:
        self._commit(last_error=message)

    def clear_error(self) -> None:
        if self._state.last_error is not None:
            self._commit(last_error=None)

    # ------------------------------------------------------------------
    # Camera lifecycle
    # ------------------------------------------------------------------

    def camera_started(self) -> int:
        """
        Mark the camera active and open a new session.

        Returns:
            The generation of the new session
        """
        generation = self._state.generation + 1
        self._commit(camera_active=True, generation=generation)
        logger.info(f"Session {generation} started")
        return generation

    def camera_failed(self, message: str) -> None:
        self._commit(camera_active=False, last_error=message)

    def camera_stopped(self, error: Optional[str] = None) -> int:
        """
        Close the session and reset every session-scoped field.

        Speech flags are left alone: speech requests are not tied to a
        session and always clear their own flag.

        Args:
            error: Optional message to surface (e.g. camera lost)

        Returns:
            The new generation
        """
        generation = self._state.generation + 1
        self._translation_request = None
        self._commit(
            camera_active=False,
            detected_symbol=None,
            translations=empty_translations(),
            loading=replace(self._state.loading, detection=False, translation=False),
            last_error=error if error is not None else self._state.last_error,
            generation=generation,
        )
        logger.info(f"Session reset (generation {generation})")
        return generation

    # ------------------------------------------------------------------
    # Detection
    # ------------------------------------------------------------------

    def detection_started(self, generation: int) -> bool:
        if not self._guard(generation, 'detection start'):
            return False
        self._commit(loading=replace(self._state.loading, detection=True),
                     last_error=None)
        return True

    def detection_succeeded(self, generation: int, symbol: str) -> bool:
        """
        Apply a recognition result.

        Returns:
            True only when a non-empty symbol replaced a different one
        """
        if not self._guard(generation, 'detection result'):
            return False
        if not symbol or symbol == self._state.detected_symbol:
            return False
        self._commit(detected_symbol=symbol)
        logger.info(f"Detected new sign: {symbol}")
        return True

    def detection_failed(self, generation: int, message: str) -> None:
        if self._guard(generation, 'detection failure'):
            self._commit(last_error=message)

    def detection_finished(self, generation: int) -> None:
        if self._guard(generation, 'detection completion'):
            self._set_loading(detection=False)

    def clear_detection_loading(self) -> None:
        if self._state.loading.detection:
            self._set_loading(detection=False)

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------

    def _translation_is_current(self, request: TranslationRequest) -> bool:
        if not self._guard(request.generation, 'translation'):
            return False
        if request is not self._translation_request:
            logger.debug(f"Discarding superseded translation request for '{request.text}'")
            return False
        if request.text != self._state.detected_symbol:
            logger.debug(f"Discarding translation for superseded sign '{request.text}'")
            return False
        return True

    def translation_started(self, generation: int, text: str) -> Optional[TranslationRequest]:
        """
        Open a translation request for the current symbol.

        Any request still in flight is superseded: only the returned
        request may apply results or clear the loading flag.

        Returns:
            The new request, or None if `text` is stale
        """
        if not self._guard(generation, 'translation start'):
            return None
        if text != self._state.detected_symbol:
            logger.debug(f"Not translating superseded sign '{text}'")
            return None
        request = TranslationRequest(generation, text)
        self._translation_request = request
        self._commit(loading=replace(self._state.loading, translation=True),
                     last_error=None)
        return request

    def translations_resolved(self, request: TranslationRequest,
                              results: Dict[Language, str]) -> bool:
        """
        Replace all three translation entries at once.

        Args:
            request: Request returned by `translation_started`
            results: Translated text per target language

        Returns:
            True if applied, False if the results were stale
        """
        if not self._translation_is_current(request):
            return False
        translations = {SOURCE_LANGUAGE: request.text}
        for language in TARGET_LANGUAGES:
            translations[language] = results[language]
        self._commit(translations=translations)
        return True

    def translation_failed(self, request: TranslationRequest,
                           message: str, placeholder: str) -> bool:
        if not self._translation_is_current(request):
            return False
        translations = {SOURCE_LANGUAGE: request.text}
        for language in TARGET_LANGUAGES:
            translations[language] = placeholder
        self._commit(translations=translations, last_error=message)
        return True

    def translation_finished(self, request: TranslationRequest) -> None:
        if self._translation_is_current(request):
            self._translation_request = None
            self._set_loading(translation=False)

    # ------------------------------------------------------------------
    # Speech
    # ------------------------------------------------------------------

    def _speech_flags(self, language: Language, value: bool) -> LoadingFlags:
        speech = dict(self._state.loading.speech)
        speech[language] = value
        return replace(self._state.loading, speech=speech)

    def speech_started(self, language: Language) -> None:
        self._commit(loading=self._speech_flags(language, True), last_error=None)

    def speech_finished(self, language: Language) -> None:
        self._commit(loading=self._speech_flags(language, False))
