"""
Module: audio_utils.py
Description: Decoding and playback of synthesized speech
Author: Hackathon Team
Date: 2026

Speech arrives as raw 16-bit little-endian PCM. Playback goes through
sounddevice and blocks until the clip has finished, so callers on the
event loop run it with asyncio.to_thread.
"""
import logging
import numpy as np

import config
from asl_translator.core.errors import PlaybackError

# Setup logging
logger = logging.getLogger(__name__)

# Try to import sounddevice
try:
    import sounddevice as sd
    SOUNDDEVICE_AVAILABLE = True
except (ImportError, OSError):
    SOUNDDEVICE_AVAILABLE = False
    logger.warning("sounddevice not available. Audio playback will be unavailable.")


def decode_pcm(data: bytes, channels: int = config.TTS_CHANNELS) -> np.ndarray:
    """
    Decode raw PCM bytes into float samples.

    Args:
        data: 16-bit little-endian PCM
        channels: Number of interleaved channels

    Returns:
        float32 array of shape (frames, channels) scaled to [-1.0, 1.0)

    Raises:
        PlaybackError: If the buffer is empty or not whole frames
    """
    if not data:
        raise PlaybackError("No audio data to decode")

    frame_bytes = 2 * channels
    if len(data) % frame_bytes != 0:
        raise PlaybackError(
            f"PCM buffer of {len(data)} bytes is not a whole number of frames"
        )

    samples = np.frombuffer(data, dtype='<i2').astype(np.float32) / 32768.0
    return samples.reshape(-1, channels)


class AudioPlayer:
    """
    Plays decoded speech on the default output device.
    """

    def __init__(self,
                 sample_rate: int = config.TTS_SAMPLE_RATE,
                 channels: int = config.TTS_CHANNELS):
        self.sample_rate = sample_rate
        self.channels = channels

    @property
    def is_available(self) -> bool:
        return SOUNDDEVICE_AVAILABLE

    def play(self, audio: bytes) -> None:
        """
        Decode and play audio, blocking until playback completes.

        Args:
            audio: Raw PCM from the speech service

        Raises:
            PlaybackError: On decode or device failure
        """
        samples = decode_pcm(audio, self.channels)

        if not self.is_available:
            raise PlaybackError("sounddevice not available")

        duration = len(samples) / self.sample_rate
        logger.debug(f"Playing {duration:.2f}s of audio")

        try:
            sd.play(samples, samplerate=self.sample_rate)
            sd.wait()
        except Exception as e:
            logger.error(f"Audio playback error: {e}")
            raise PlaybackError(f"Audio playback failed: {e}") from e
