"""
Module: video_utils.py
Description: Webcam capture source for the sign translator
Author: Hackathon Team
Date: 2026
"""
import logging
import threading
from typing import Callable, List, Optional
import numpy as np

import config
from asl_translator.core.errors import CaptureError

# Setup logging
logger = logging.getLogger(__name__)

# Try to import OpenCV
try:
    import cv2
    OPENCV_AVAILABLE = True
except ImportError:
    OPENCV_AVAILABLE = False
    logger.warning("OpenCV not installed")


def encode_jpeg(frame: np.ndarray, quality: int = config.JPEG_QUALITY) -> bytes:
    """
    Encode a BGR frame as JPEG.

    Args:
        frame: BGR image array
        quality: JPEG quality (0-100)

    Returns:
        JPEG bytes

    Raises:
        CaptureError: If encoding fails
    """
    if not OPENCV_AVAILABLE:
        raise CaptureError("OpenCV not available")

    ok, buffer = cv2.imencode('.jpg', frame, [int(cv2.IMWRITE_JPEG_QUALITY), quality])
    if not ok:
        raise CaptureError("Could not encode frame as JPEG")
    return buffer.tobytes()


class VideoCapture:
    """
    Threaded webcam capture that always holds the latest frame.

    A background thread reads continuously so the preview and the
    detection loop never block on the device. After `max_failed_reads`
    consecutive failed reads the camera is declared lost and `on_lost`
    is called once from the capture thread.
    """

    def __init__(self,
                 camera_index: int = config.CAMERA_INDEX,
                 width: int = config.FRAME_WIDTH,
                 height: int = config.FRAME_HEIGHT,
                 fps: int = config.FPS_TARGET,
                 max_failed_reads: int = config.MAX_FAILED_READS):
        """
        Initialize video capture.

        Args:
            camera_index: Camera device index
            width: Frame width
            height: Frame height
            fps: Target FPS
            max_failed_reads: Consecutive read failures tolerated
        """
        self.camera_index = camera_index
        self.width = width
        self.height = height
        self.fps = fps
        self.max_failed_reads = max_failed_reads

        self.on_lost: Optional[Callable[[], None]] = None

        self._capture = None
        self._is_opened = False
        self._is_lost = False
        self._latest_frame: Optional[np.ndarray] = None
        self._frame_lock = threading.Lock()
        self._capture_thread = None
        self._is_running = False

    def open(self) -> None:
        """
        Open the camera and start the capture thread.

        Raises:
            CaptureError: If the device cannot be opened
        """
        if not OPENCV_AVAILABLE:
            raise CaptureError("OpenCV not available")

        try:
            self._capture = cv2.VideoCapture(self.camera_index)
        except Exception as e:
            raise CaptureError(f"Error opening camera {self.camera_index}: {e}") from e

        if not self._capture.isOpened():
            self._capture.release()
            self._capture = None
            raise CaptureError(f"Could not open camera {self.camera_index}")

        # Set properties
        self._capture.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
        self._capture.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)
        self._capture.set(cv2.CAP_PROP_FPS, self.fps)

        self._is_opened = True
        self._is_lost = False
        logger.info(f"Camera opened: {self.width}x{self.height} @ {self.fps}fps")

        self._start_capture_thread()

    def read_frame(self) -> Optional[np.ndarray]:
        """
        Read a single frame from the device.

        Returns:
            BGR frame or None if failed
        """
        if not self._is_opened or self._capture is None:
            return None

        ret, frame = self._capture.read()
        return frame if ret else None

    def _start_capture_thread(self) -> None:
        if self._is_running:
            return

        self._is_running = True
        self._capture_thread = threading.Thread(target=self._capture_loop, daemon=True)
        self._capture_thread.start()
        logger.info("Capture thread started")

    def _capture_loop(self) -> None:
        """Background capture loop."""
        failed_reads = 0

        while self._is_running:
            frame = self.read_frame()

            if frame is None:
                failed_reads += 1
                if failed_reads >= self.max_failed_reads:
                    self._mark_lost()
                    break
                continue

            failed_reads = 0
            with self._frame_lock:
                self._latest_frame = frame

    def _mark_lost(self) -> None:
        logger.error(f"Camera {self.camera_index} stopped delivering frames")
        self._is_lost = True
        self._is_running = False
        if self.on_lost:
            self.on_lost()

    @property
    def has_frame(self) -> bool:
        """Check if a frame is available for capture."""
        return self._is_opened and not self._is_lost and self._latest_frame is not None

    def get_latest_frame(self) -> Optional[np.ndarray]:
        """
        Get a copy of the most recent frame.

        Returns:
            BGR frame or None if nothing has been captured yet
        """
        with self._frame_lock:
            if self._latest_frame is None:
                return None
            return self._latest_frame.copy()

    def get_frame(self) -> bytes:
        """
        Capture the current frame as JPEG.

        Raises:
            CaptureError: If there is no active stream
        """
        if not self._is_opened or self._is_lost:
            raise CaptureError("No active camera stream")

        frame = self.get_latest_frame()
        if frame is None:
            raise CaptureError("No frame captured yet")

        return encode_jpeg(frame)

    def release(self) -> None:
        """Stop the capture thread and release the device."""
        self._is_running = False
        if self._capture_thread and self._capture_thread is not threading.current_thread():
            self._capture_thread.join(timeout=1.0)
        self._capture_thread = None

        if self._capture:
            self._capture.release()
            self._capture = None

        with self._frame_lock:
            self._latest_frame = None

        self._is_opened = False
        logger.info("Camera released")

    @property
    def is_opened(self) -> bool:
        """Check if camera is opened."""
        return self._is_opened

    @property
    def is_lost(self) -> bool:
        """Check if the camera stopped delivering frames mid-session."""
        return self._is_lost


def list_cameras(max_cameras: int = 5) -> List[int]:
    """
    Probe the first `max_cameras` device indices.

    Every probed handle is released, whether it opened or not.

    Returns:
        Indices that opened and delivered a frame
    """
    if not OPENCV_AVAILABLE:
        logger.warning("Cannot list cameras without OpenCV")
        return []

    available = []
    for index in range(max_cameras):
        device = cv2.VideoCapture(index)
        try:
            if device.isOpened() and device.read()[0]:
                available.append(index)
        finally:
            device.release()

    logger.info(f"Cameras found: {available}")
    return available
