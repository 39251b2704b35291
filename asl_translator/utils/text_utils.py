"""
Module: text_utils.py
Description: Prompt construction and response parsing for the Gemini calls
Author: Hackathon Team
Date: 2026
"""
import re
import logging

import config

# Setup logging
logger = logging.getLogger(__name__)

_SINGLE_LETTER = re.compile(r'^[A-Z]$', re.IGNORECASE)

DETECTION_PROMPT = (
    "Identify the American Sign Language (ASL) alphabet letter (A-Z) shown in "
    "this image. Respond with only the single capital letter that corresponds "
    "to the sign. For example, if you see the sign for 'C', respond with 'C'. "
    "If no ASL alphabet sign is visible, or if the gesture represents a number "
    f"or a word, respond with '{config.NO_SIGN_RESPONSE}'."
)


def parse_detected_symbol(response_text: str) -> str:
    """
    Turn a raw detection response into a symbol.

    Only a single letter A-Z is accepted; the no-sign reply, numbers,
    words and anything else map to the empty string.

    Args:
        response_text: Raw model output

    Returns:
        Upper-case letter, or '' when no sign was recognized

    Example:
        >>> parse_detected_symbol(" c\\n")
        'C'
        >>> parse_detected_symbol("No sign detected")
        ''
    """
    if not response_text:
        return ''

    result = response_text.strip()

    if config.NO_SIGN_RESPONSE.lower() in result.lower():
        return ''

    if not _SINGLE_LETTER.match(result):
        logger.debug(f"Ignoring non-letter detection response: '{result}'")
        return ''

    return result.upper()


def build_translation_prompt(text: str, target_language: str) -> str:
    """
    Build the prompt asking for a bare translation.

    Args:
        text: English text (normally a single letter)
        target_language: Display name of the target language

    Returns:
        Prompt string
    """
    return (
        f'Translate the following English letter into {target_language}: "{text}". '
        "Only return the translated text, with no additional explanation or formatting."
    )
