# Utils package
from .text_utils import parse_detected_symbol, build_translation_prompt
from .video_utils import VideoCapture, encode_jpeg, list_cameras
from .audio_utils import AudioPlayer, decode_pcm
