"""Tests for the Gemini-backed service with a stubbed SDK client."""
import asyncio
from types import SimpleNamespace

import pytest

import config
from asl_translator.core import gemini_service
from asl_translator.core.errors import (
    ConfigurationError, DetectionError, SynthesisError, TranslationError
)
from asl_translator.core.gemini_service import GeminiService, create_service


class StubModels:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    async def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


def make_service(response=None, error=None):
    models = StubModels(response, error)
    client = SimpleNamespace(aio=SimpleNamespace(models=models))
    return GeminiService(client), models


def text_response(text):
    return SimpleNamespace(text=text)


def audio_response(data):
    part = SimpleNamespace(inline_data=SimpleNamespace(data=data))
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=[part]))])


def test_detect_returns_upper_case_letter():
    service, models = make_service(text_response(" b \n"))

    assert asyncio.run(service.detect(b'jpeg')) == 'B'

    call = models.calls[0]
    assert call['model'] == config.DETECTION_MODEL
    assert len(call['contents']) == 2


@pytest.mark.parametrize("text", ["No sign detected", "7", "hello", None])
def test_detect_maps_non_letters_to_empty(text):
    service, _ = make_service(text_response(text))

    assert asyncio.run(service.detect(b'jpeg')) == ''


def test_detect_wraps_transport_errors():
    service, _ = make_service(error=RuntimeError("503"))

    with pytest.raises(DetectionError):
        asyncio.run(service.detect(b'jpeg'))


def test_translate_strips_response_and_names_language():
    service, models = make_service(text_response("  ए \n"))

    assert asyncio.run(service.translate('A', 'Hindi')) == 'ए'

    call = models.calls[0]
    assert call['model'] == config.TRANSLATION_MODEL
    assert 'into Hindi: "A"' in call['contents']


def test_translate_wraps_errors():
    service, _ = make_service(error=ValueError("bad request"))

    with pytest.raises(TranslationError, match="Gujarati"):
        asyncio.run(service.translate('A', 'Gujarati'))


def test_synthesize_returns_inline_audio():
    service, models = make_service(audio_response(b'\x01\x02\x03\x04'))

    assert asyncio.run(service.synthesize('A')) == b'\x01\x02\x03\x04'

    call = models.calls[0]
    assert call['model'] == config.TTS_MODEL
    voice = call['config'].speech_config.voice_config.prebuilt_voice_config.voice_name
    assert voice == config.TTS_VOICE


def test_synthesize_rejects_empty_text_without_calling():
    service, models = make_service(audio_response(b'\x00\x00'))

    with pytest.raises(SynthesisError):
        asyncio.run(service.synthesize(''))
    assert models.calls == []


@pytest.mark.parametrize("response", [
    SimpleNamespace(candidates=[]),
    SimpleNamespace(candidates=None),
    audio_response(None),
    SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=[]))]),
])
def test_synthesize_without_audio_fails(response):
    service, _ = make_service(response)

    with pytest.raises(SynthesisError):
        asyncio.run(service.synthesize('A'))


def test_synthesize_wraps_transport_errors():
    service, _ = make_service(error=ConnectionError("reset"))

    with pytest.raises(SynthesisError):
        asyncio.run(service.synthesize('A'))


def test_create_service_requires_api_key(monkeypatch):
    monkeypatch.setattr(config, 'GEMINI_API_KEY', '')

    with pytest.raises(ConfigurationError):
        create_service()


def test_create_service_builds_client(monkeypatch):
    created = {}

    def fake_client(api_key):
        created['api_key'] = api_key
        return SimpleNamespace()

    monkeypatch.setattr(gemini_service.genai, 'Client', fake_client)

    service = create_service(api_key='test-key')

    assert isinstance(service, GeminiService)
    assert created == {'api_key': 'test-key'}
