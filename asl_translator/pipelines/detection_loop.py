"""
Module: detection_loop.py
Description: Timer-driven sign detection loop
Author: Hackathon Team
Date: 2026

Every interval the loop offers one detection tick: grab the current
camera frame, send it to the detector and publish the result. A tick
that fires while the previous one is still waiting on the network is
dropped, never queued.
"""
import asyncio
import logging
from typing import Callable, Optional, Set

import config
from asl_translator.core.errors import CaptureError
from asl_translator.core.in_flight import InFlightGuard, InFlightToken
from asl_translator.core.state import AppState

# Setup logging
logger = logging.getLogger(__name__)


class DetectionLoop:
    """
    Polls the camera and the detector at a fixed interval.

    Must be started and stopped from the session's event loop.

    Example usage:
        loop = DetectionLoop(state, camera, service,
                             on_new_symbol=handle_symbol)
        loop.start(generation)
        ...
        loop.stop()
    """

    def __init__(self,
                 state: AppState,
                 camera,
                 detector,
                 on_new_symbol: Optional[Callable[[str, int], None]] = None,
                 on_capture_lost: Optional[Callable[[int], None]] = None,
                 interval_ms: int = config.DETECTION_INTERVAL_MS):
        """
        Initialize the detection loop.

        Args:
            state: Shared application state
            camera: Capture source exposing `has_frame` and `get_frame()`
            detector: Object with `async detect(image) -> str`
            on_new_symbol: Called with (symbol, generation) when a new sign is accepted
            on_capture_lost: Called with the generation when the camera fails mid-tick
            interval_ms: Timer interval in milliseconds
        """
        self._state = state
        self._camera = camera
        self._detector = detector
        self.on_new_symbol = on_new_symbol
        self.on_capture_lost = on_capture_lost
        self.interval_ms = interval_ms

        self._guard = InFlightGuard('detection')
        self._timer_task: Optional[asyncio.Task] = None
        self._ticks: Set[asyncio.Task] = set()
        self._generation = 0

    @property
    def is_running(self) -> bool:
        return self._timer_task is not None and not self._timer_task.done()

    @property
    def tick_in_flight(self) -> bool:
        return self._guard.busy

    def start(self, generation: int) -> None:
        """
        Arm the timer for a session.

        Any previous timer is stopped first, so there is never more than one.
        """
        self.stop()
        self._generation = generation
        self._timer_task = asyncio.get_running_loop().create_task(self._run_timer())
        logger.info(f"Detection loop started ({self.interval_ms} ms interval)")

    def stop(self) -> None:
        """Disarm the timer and clear the in-flight guard."""
        if self._timer_task is not None:
            self._timer_task.cancel()
            self._timer_task = None
            logger.info("Detection loop stopped")
        self._guard.reset()
        self._state.clear_detection_loading()

    async def _run_timer(self) -> None:
        interval = self.interval_ms / 1000.0
        while True:
            await asyncio.sleep(interval)
            self.trigger()

    def trigger(self) -> bool:
        """
        Offer one detection tick.

        Returns:
            True if a tick was started, False if it was dropped
        """
        if not self._camera.has_frame:
            logger.debug("No camera frame available, skipping tick")
            return False

        token = self._guard.try_acquire()
        if token is None:
            logger.debug("Previous detection still in flight, dropping tick")
            return False

        task = asyncio.get_running_loop().create_task(self._tick(token, self._generation))
        self._ticks.add(task)
        task.add_done_callback(self._ticks.discard)
        return True

    async def wait_idle(self) -> None:
        """Wait for every tick started so far to finish."""
        while self._ticks:
            await asyncio.gather(*list(self._ticks), return_exceptions=True)

    async def _tick(self, token: InFlightToken, generation: int) -> None:
        try:
            image = await asyncio.to_thread(self._camera.get_frame)

            if not self._state.detection_started(generation):
                return

            symbol = await self._detector.detect(image)

            if self._state.detection_succeeded(generation, symbol) and self.on_new_symbol:
                self.on_new_symbol(symbol, generation)

        except CaptureError as e:
            logger.error(f"Camera failure during detection: {e}")
            if self._state.is_current(generation) and self.on_capture_lost:
                self.on_capture_lost(generation)

        except Exception as e:
            logger.error(f"Detection failed: {e}")
            self._state.detection_failed(generation, config.MESSAGES['detection'])

        finally:
            # A stopped loop has already reset the guard; only the holder clears the flag
            if self._guard.release(token):
                self._state.detection_finished(generation)
