"""
Module: translation_pipeline.py
Description: Translates each newly detected sign into the target languages
Author: Hackathon Team
Date: 2026
"""
import asyncio
import logging

import config
from asl_translator.core.state import AppState, TARGET_LANGUAGES

# Setup logging
logger = logging.getLogger(__name__)


class TranslationPipeline:
    """
    Issues one translation per target language concurrently and applies
    the combined result in a single state transition.
    """

    def __init__(self,
                 state: AppState,
                 translator,
                 failure_text: str = config.TRANSLATION_FAILED_TEXT):
        """
        Args:
            state: Shared application state
            translator: Object with `async translate(text, language_name) -> str`
            failure_text: Placeholder shown for targets when translation fails
        """
        self._state = state
        self._translator = translator
        self.failure_text = failure_text

    async def run(self, text: str, generation: int) -> bool:
        """
        Translate `text` and publish the results.

        Args:
            text: Newly detected symbol
            generation: Session the symbol was detected in

        Returns:
            True if translations were applied
        """
        if not text:
            return False

        request = self._state.translation_started(generation, text)
        if request is None:
            return False

        try:
            results = await asyncio.gather(
                *(self._translator.translate(text, language.value)
                  for language in TARGET_LANGUAGES),
                return_exceptions=True,
            )

            # Both calls have settled; fail the pair if either failed
            for result in results:
                if isinstance(result, BaseException):
                    raise result

            applied = self._state.translations_resolved(
                request, dict(zip(TARGET_LANGUAGES, results))
            )
            if applied:
                logger.info(f"Translated '{text}': {results}")
            return applied

        except Exception as e:
            logger.error(f"Translation error: {e}")
            self._state.translation_failed(
                request, config.MESSAGES['translation'], self.failure_text
            )
            return False

        finally:
            self._state.translation_finished(request)
