"""
Module: gemini_service.py
Description: Sign detection, translation and speech synthesis via Gemini
Author: Hackathon Team
Date: 2026

All three remote collaborators share one google-genai client and use its
asyncio surface, so every call is a suspension point of the session's
event loop. SDK failures are wrapped into the translator's typed errors.
"""
import logging
from typing import Optional

from google import genai
from google.genai import types

import config
from asl_translator.core.errors import (
    ConfigurationError, DetectionError, TranslationError, SynthesisError
)
from asl_translator.utils.text_utils import (
    DETECTION_PROMPT, parse_detected_symbol, build_translation_prompt
)

# Setup logging
logger = logging.getLogger(__name__)


class GeminiService:
    """
    Inference, translation and speech client backed by the Gemini API.

    Example usage:
        service = create_service()
        symbol = await service.detect(jpeg_bytes)
        hindi = await service.translate(symbol, 'Hindi')
        pcm = await service.synthesize(symbol)
    """

    def __init__(self,
                 client: genai.Client,
                 detection_model: str = config.DETECTION_MODEL,
                 translation_model: str = config.TRANSLATION_MODEL,
                 tts_model: str = config.TTS_MODEL,
                 voice_name: str = config.TTS_VOICE):
        """
        Initialize the service.

        Args:
            client: Configured google-genai client
            detection_model: Vision model used for sign detection
            translation_model: Text model used for translation
            tts_model: Model used for speech synthesis
            voice_name: Prebuilt voice for synthesized speech
        """
        self._client = client
        self.detection_model = detection_model
        self.translation_model = translation_model
        self.tts_model = tts_model
        self.voice_name = voice_name

    async def detect(self, image: bytes) -> str:
        """
        Classify the ASL letter shown in a JPEG image.

        Args:
            image: JPEG-encoded frame

        Returns:
            Upper-case letter, or '' when no sign is visible

        Raises:
            DetectionError: On transport or response failure
        """
        try:
            response = await self._client.aio.models.generate_content(
                model=self.detection_model,
                contents=[
                    types.Part.from_bytes(data=image, mime_type='image/jpeg'),
                    DETECTION_PROMPT,
                ],
            )
            raw = response.text or ''
        except Exception as e:
            logger.error(f"Error detecting sign: {e}")
            raise DetectionError('Failed to detect sign from image.') from e

        symbol = parse_detected_symbol(raw)
        logger.debug(f"Detection response '{raw.strip()}' -> '{symbol}'")
        return symbol

    async def translate(self, text: str, target_language: str) -> str:
        """
        Translate text into the target language.

        Raises:
            TranslationError: On transport or response failure
        """
        try:
            response = await self._client.aio.models.generate_content(
                model=self.translation_model,
                contents=build_translation_prompt(text, target_language),
            )
            return (response.text or '').strip()
        except Exception as e:
            logger.error(f"Error translating to {target_language}: {e}")
            raise TranslationError(f'Failed to translate text to {target_language}.') from e

    async def synthesize(self, text: str) -> bytes:
        """
        Synthesize speech for text.

        Args:
            text: Text to speak

        Returns:
            Raw 16-bit PCM audio (mono, config.TTS_SAMPLE_RATE)

        Raises:
            SynthesisError: If text is empty, the call fails or no audio comes back
        """
        if not text:
            raise SynthesisError('Text to speak cannot be empty.')

        try:
            response = await self._client.aio.models.generate_content(
                model=self.tts_model,
                contents=text,
                config=types.GenerateContentConfig(
                    response_modalities=['AUDIO'],
                    speech_config=types.SpeechConfig(
                        voice_config=types.VoiceConfig(
                            prebuilt_voice_config=types.PrebuiltVoiceConfig(
                                voice_name=self.voice_name,
                            )
                        )
                    ),
                ),
            )
        except Exception as e:
            logger.error(f"Error generating speech: {e}")
            raise SynthesisError('Failed to generate speech.') from e

        audio = _first_inline_data(response)
        if not audio:
            logger.error("No audio data received from API")
            raise SynthesisError('No audio data received from API.')

        return audio


def _first_inline_data(response) -> Optional[bytes]:
    """Dig the first candidate's first inline-data payload out of a response."""
    candidates = getattr(response, 'candidates', None) or []
    if not candidates:
        return None
    content = getattr(candidates[0], 'content', None)
    parts = getattr(content, 'parts', None) or []
    if not parts:
        return None
    inline_data = getattr(parts[0], 'inline_data', None)
    return getattr(inline_data, 'data', None)


def create_service(api_key: Optional[str] = None) -> GeminiService:
    """
    Factory function to create a Gemini-backed service.

    Args:
        api_key: API key, defaults to config.GEMINI_API_KEY

    Raises:
        ConfigurationError: If no API key is available
    """
    api_key = api_key or config.GEMINI_API_KEY
    if not api_key:
        raise ConfigurationError(
            "GEMINI_API_KEY environment variable is not set."
        )

    client = genai.Client(api_key=api_key)
    logger.info("Gemini client created")
    return GeminiService(client)
