"""
Shared fakes for the translator tests.

The fakes stand in for the camera, the Gemini service and the audio
device. Gates are asyncio.Events that tests create inside a running
loop to hold a call open.
"""
import asyncio

import pytest

from asl_translator.core.errors import CaptureError, TranslationError
from asl_translator.core.state import AppState


class FakeCamera:
    def __init__(self, fail_open=False):
        self.fail_open = fail_open
        self.fail_frames = False
        self.has_frame = False
        self.opened = 0
        self.released = 0
        self.on_lost = None
        self.frames_taken = 0

    def open(self):
        if self.fail_open:
            raise CaptureError("permission denied")
        self.opened += 1
        self.has_frame = True

    def release(self):
        self.released += 1
        self.has_frame = False

    def get_frame(self):
        if self.fail_frames:
            raise CaptureError("stream lost")
        self.frames_taken += 1
        return b'\xff\xd8fake-jpeg'

    def get_latest_frame(self):
        return None


class FakeService:
    """Detector, translator and synthesizer in one, like GeminiService."""

    def __init__(self):
        self.detect_results = []
        self.detect_calls = 0
        self.pending_detects = 0
        self.max_pending_detects = 0
        self.detect_gate = None

        self.translate_calls = []
        self.translate_error = None
        self.translate_gates = {}

        self.synth_calls = []
        self.synth_error = None
        self.synth_gates = {}

    async def detect(self, image):
        self.detect_calls += 1
        self.pending_detects += 1
        self.max_pending_detects = max(self.max_pending_detects, self.pending_detects)
        try:
            if self.detect_gate is not None:
                await self.detect_gate.wait()
            result = self.detect_results.pop(0) if self.detect_results else ''
            if isinstance(result, Exception):
                raise result
            return result
        finally:
            self.pending_detects -= 1

    async def translate(self, text, target_language):
        self.translate_calls.append((text, target_language))
        gate = self.translate_gates.get(target_language)
        if gate is not None:
            await gate.wait()
        if self.translate_error is not None and target_language in self.translate_error:
            raise TranslationError(f"Failed to translate text to {target_language}.")
        return f"{target_language.lower()}({text})"

    async def synthesize(self, text):
        self.synth_calls.append(text)
        gate = self.synth_gates.get(text)
        if gate is not None:
            await gate.wait()
        if self.synth_error is not None:
            raise self.synth_error
        return b'\x00\x01' * 8


class FakePlayer:
    def __init__(self):
        self.played = []
        self.error = None

    def play(self, audio):
        if self.error is not None:
            raise self.error
        self.played.append(audio)


async def settle(delay: float = 0.05):
    """Let pending tasks and to_thread calls make progress."""
    await asyncio.sleep(delay)


@pytest.fixture
def state():
    return AppState()


@pytest.fixture
def camera():
    return FakeCamera()


@pytest.fixture
def service():
    return FakeService()


@pytest.fixture
def player():
    return FakePlayer()
