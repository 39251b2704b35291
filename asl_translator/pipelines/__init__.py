# Pipelines package
from .detection_loop import DetectionLoop
from .translation_pipeline import TranslationPipeline
from .playback_controller import PlaybackController
from .session import TranslatorSession, create_session
