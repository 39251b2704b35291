"""
Module: session.py
Description: Camera session lifecycle and component wiring
Author: Hackathon Team
Date: 2026

TranslatorSession ties together:
1. Camera capture (VideoCapture)
2. Periodic sign detection (DetectionLoop)
3. Translation of each new sign (TranslationPipeline)
4. Speech playback on demand (PlaybackController)

All state transitions run on one asyncio event loop. A GUI thread
drives the session through `submit()` and renders `snapshot()`.
"""
import asyncio
import concurrent.futures
import logging
import threading
from typing import Optional, Set

import config
from asl_translator.core.errors import CaptureError
from asl_translator.core.state import AppState, Language, SessionState
from asl_translator.pipelines.detection_loop import DetectionLoop
from asl_translator.pipelines.translation_pipeline import TranslationPipeline
from asl_translator.pipelines.playback_controller import PlaybackController

# Setup logging
logger = logging.getLogger(__name__)


class TranslatorSession:
    """
    Owner of the application state and every core component.

    Example usage:
        session = create_session()
        session.start_background()
        session.submit(session.toggle_camera())
        ...
        print(session.snapshot().detected_symbol)
        session.shutdown()
    """

    def __init__(self,
                 service,
                 camera,
                 player,
                 interval_ms: int = config.DETECTION_INTERVAL_MS):
        """
        Initialize the session.

        Args:
            service: Detector, translator and synthesizer (see GeminiService)
            camera: Capture source (see VideoCapture)
            player: Playback device (see AudioPlayer)
            interval_ms: Detection interval in milliseconds
        """
        self.state = AppState()
        self.camera = camera

        self.detection_loop = DetectionLoop(
            self.state, camera, service,
            on_new_symbol=self._on_new_symbol,
            on_capture_lost=self._on_capture_lost,
            interval_ms=interval_ms,
        )
        self.translation = TranslationPipeline(self.state, service)
        self.playback = PlaybackController(self.state, service, player)

        self._tasks: Set[asyncio.Task] = set()
        self._camera_lock: Optional[asyncio.Lock] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread] = None

        logger.info("TranslatorSession initialized")

    def snapshot(self) -> SessionState:
        """Current state; safe to call from any thread."""
        return self.state.snapshot

    def _lock(self) -> asyncio.Lock:
        # Created lazily so it binds to the loop that actually runs the session
        if self._camera_lock is None:
            self._camera_lock = asyncio.Lock()
        return self._camera_lock

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def wait_idle(self) -> None:
        """Wait until every background task spawned so far has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    # ------------------------------------------------------------------
    # Camera lifecycle
    # ------------------------------------------------------------------

    async def start_camera(self) -> bool:
        """
        Open the camera and start detection.

        Returns:
            True if the camera is running afterwards
        """
        async with self._lock():
            if self.state.snapshot.camera_active:
                return True

            self.state.clear_error()

            try:
                await asyncio.to_thread(self.camera.open)
            except CaptureError as e:
                logger.error(f"Error accessing camera: {e}")
                self.state.camera_failed(config.MESSAGES['camera'])
                return False

            generation = self.state.camera_started()
            loop = asyncio.get_running_loop()
            self.camera.on_lost = lambda: loop.call_soon_threadsafe(
                self._on_capture_lost, generation
            )
            self.detection_loop.start(generation)
            return True

    async def stop_camera(self, error: Optional[str] = None) -> None:
        """
        Stop detection, release the camera and reset the session.

        Args:
            error: Optional message to leave in the error banner
        """
        async with self._lock():
            if not self.state.snapshot.camera_active:
                return

            self.detection_loop.stop()
            self.camera.on_lost = None
            await asyncio.to_thread(self.camera.release)
            self.state.camera_stopped(error)

    async def toggle_camera(self) -> None:
        if self.state.snapshot.camera_active:
            await self.stop_camera()
        else:
            await self.start_camera()

    def _on_capture_lost(self, generation: int) -> None:
        if not self.state.is_current(generation):
            return
        logger.warning("Camera lost, ending session")
        self._spawn(self.stop_camera(config.MESSAGES['camera_lost']))

    # ------------------------------------------------------------------
    # Derived work
    # ------------------------------------------------------------------

    def _on_new_symbol(self, symbol: str, generation: int) -> None:
        self._spawn(self.translation.run(symbol, generation))

    async def speak(self, language: Language) -> bool:
        """Speak the current text for `language`."""
        text = self.state.snapshot.translations[language]
        return await self.playback.speak(language, text)

    # ------------------------------------------------------------------
    # Background event loop (for GUI use)
    # ------------------------------------------------------------------

    def start_background(self) -> None:
        """Run the session's event loop on a daemon thread."""
        if self._thread is not None:
            return

        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(target=self._run_loop,
                                        name='translator-loop', daemon=True)
        self._thread.start()
        logger.info("Session event loop started")

    def _run_loop(self) -> None:
        asyncio.set_event_loop(self._loop)
        self._loop.run_forever()

    def submit(self, coro) -> concurrent.futures.Future:
        """Schedule a coroutine on the session loop from another thread."""
        if self._loop is None:
            raise RuntimeError("Session event loop is not running")
        return asyncio.run_coroutine_threadsafe(coro, self._loop)

    async def _cancel_pending(self) -> None:
        """Cancel every other task on the loop and wait for them to unwind."""
        current = asyncio.current_task()
        pending = [task for task in asyncio.all_tasks() if task is not current]
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        if pending:
            logger.info(f"Cancelled {len(pending)} pending task(s)")

    def shutdown(self, timeout: float = 2.0) -> None:
        """
        Stop the camera and the background event loop.

        Outstanding tasks are cancelled before the loop stops. The loop is
        closed only once its thread has exited; a thread that outlives
        `timeout` is left to die with the process.
        """
        if self._loop is None:
            return

        try:
            self.submit(self.stop_camera()).result(timeout=timeout)
        except concurrent.futures.TimeoutError:
            logger.warning("Timed out stopping camera during shutdown")

        try:
            self.submit(self._cancel_pending()).result(timeout=timeout)
        except concurrent.futures.TimeoutError:
            logger.warning("Timed out cancelling pending tasks during shutdown")

        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join(timeout=timeout)
        if self._thread.is_alive():
            logger.warning("Session event loop did not stop in time; leaving it open")
        else:
            self._loop.close()

        self._loop = None
        self._thread = None
        logger.info("Session shutdown complete")


def create_session(**kwargs) -> TranslatorSession:
    """
    Factory function to create a session with the real collaborators.

    Raises:
        ConfigurationError: If the Gemini API key is missing
    """
    from asl_translator.core.gemini_service import create_service
    from asl_translator.utils.audio_utils import AudioPlayer
    from asl_translator.utils.video_utils import VideoCapture

    return TranslatorSession(
        service=create_service(),
        camera=VideoCapture(),
        player=AudioPlayer(),
        **kwargs,
    )
