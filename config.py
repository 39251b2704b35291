"""
Central configuration file for the ASL Sign Translator
Author: Hackathon Team
Date: 2026
"""
import os

# Gemini API
# Read from the environment so the key never lands in source control
GEMINI_API_KEY = os.environ.get('GEMINI_API_KEY') or os.environ.get('API_KEY', '')
DETECTION_MODEL = 'gemini-2.5-flash'
TRANSLATION_MODEL = 'gemini-2.5-flash'
TTS_MODEL = 'gemini-2.5-flash-preview-tts'
TTS_VOICE = 'Kore'

# Detection Settings
DETECTION_INTERVAL_MS = 4000  # one remote call every 4 seconds at most
JPEG_QUALITY = 80
NO_SIGN_RESPONSE = 'No sign detected'

# Video Settings
CAMERA_INDEX = 0
FRAME_WIDTH = 640
FRAME_HEIGHT = 480
FPS_TARGET = 30
MAX_FAILED_READS = 30  # consecutive failed reads before the camera counts as lost

# Speech Settings
# Gemini TTS returns raw 16-bit little-endian PCM
TTS_SAMPLE_RATE = 24000
TTS_CHANNELS = 1

# User-facing messages
TRANSLATION_FAILED_TEXT = 'Translation failed.'
MESSAGES = {
    'detection': 'Could not analyze the image. Please try again.',
    'translation': 'Failed to translate the sign. Please try again.',
    'speech': 'Failed to generate audio. Please try again.',
    'camera': 'Could not access the camera. Please check permissions and try again.',
    'camera_lost': 'Camera connection was lost. Please restart the camera.',
}

# UI Settings
WINDOW_TITLE = "Sign Language Translator"
WINDOW_WIDTH = 1100
WINDOW_HEIGHT = 720
PREVIEW_SIZE = (480, 360)
UI_REFRESH_MS = 100

# UI Colors Dictionary (for Tkinter app)
COLORS = {
    'bg_primary': '#0F172A',      # Deep navy - main background
    'bg_secondary': '#1E293B',    # Slightly lighter navy - cards
    'bg_tertiary': '#334155',     # Medium slate - hover states
    'text_primary': '#F8FAFC',    # Almost white - main text
    'text_secondary': '#94A3B8',  # Light slate - secondary text
    'accent': '#06B6D4',          # Cyan - primary actions
    'accent_hover': '#0891B2',    # Darker cyan - hover
    'error': '#EF4444',           # Red - errors and stop button
    'error_bg': '#FEE2E2',        # Error banner background
    'camera_bg': '#111827',       # Camera background
}

# Logging
import logging
LOG_LEVEL = logging.INFO
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
