"""
Module: playback_controller.py
Description: On-demand speech for a language's translation
Author: Hackathon Team
Date: 2026
"""
import asyncio
import logging
from typing import Dict

import config
from asl_translator.core.in_flight import InFlightGuard
from asl_translator.core.state import AppState, Language

# Setup logging
logger = logging.getLogger(__name__)


class PlaybackController:
    """
    Synthesizes and plays speech, one request per language at a time.

    Languages are guarded independently: a pending English request does
    not block a Hindi one. A second request for a busy language is
    refused rather than queued, and nothing is ever interrupted.
    """

    def __init__(self, state: AppState, synthesizer, player):
        """
        Args:
            state: Shared application state
            synthesizer: Object with `async synthesize(text) -> bytes`
            player: Object with blocking `play(audio)`
        """
        self._state = state
        self._synthesizer = synthesizer
        self._player = player
        self._guards: Dict[Language, InFlightGuard] = {
            language: InFlightGuard(f"speech:{language.value}") for language in Language
        }

    def is_speaking(self, language: Language) -> bool:
        return self._guards[language].busy

    async def speak(self, language: Language, text: str) -> bool:
        """
        Speak `text` for `language`.

        Returns:
            True if audio was played, False if refused or failed
        """
        if not text:
            return False

        guard = self._guards[language]
        token = guard.try_acquire()
        if token is None:
            logger.debug(f"Speech for {language.value} already in progress")
            return False

        self._state.speech_started(language)
        try:
            audio = await self._synthesizer.synthesize(text)
            await asyncio.to_thread(self._player.play, audio)
            logger.info(f"Spoke {language.value}: {text}")
            return True
        except Exception as e:
            logger.error(f"TTS error: {e}")
            self._state.set_error(config.MESSAGES['speech'])
            return False
        finally:
            guard.release(token)
            self._state.speech_finished(language)
