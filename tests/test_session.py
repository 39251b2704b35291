"""End-to-end tests for the camera session with fake collaborators."""
import asyncio
import time

import config
from asl_translator.core.state import Language
from asl_translator.pipelines.session import TranslatorSession
from conftest import FakeCamera, settle


def make_session(service, player, camera=None):
    return TranslatorSession(service=service, camera=camera or FakeCamera(),
                             player=player, interval_ms=1000)


async def detect_once(session):
    assert session.detection_loop.trigger()
    await session.detection_loop.wait_idle()
    await session.wait_idle()


def test_camera_on_starts_detection(service, player):
    session = make_session(service, player)

    async def scenario():
        assert await session.start_camera()
        running = session.detection_loop.is_running
        await session.stop_camera()
        return running

    assert asyncio.run(scenario())
    assert session.camera.opened == 1
    assert session.camera.released == 1


def test_camera_failure_leaves_camera_off(service, player):
    session = make_session(service, player, camera=FakeCamera(fail_open=True))

    assert not asyncio.run(session.start_camera())

    snap = session.snapshot()
    assert not snap.camera_active
    assert snap.last_error == config.MESSAGES['camera']
    assert not session.detection_loop.is_running


def test_detect_translate_scenario(service, player):
    session = make_session(service, player)

    async def scenario():
        await session.start_camera()

        service.detect_results = ['A']
        await detect_once(session)
        after_a = dict(session.snapshot().translations)

        service.detect_results = ['A']
        await detect_once(session)
        calls_after_repeat = len(service.translate_calls)

        service.detect_results = ['B']
        await detect_once(session)
        after_b = dict(session.snapshot().translations)

        service.translate_error = {'Hindi'}
        service.detect_results = ['C']
        await detect_once(session)
        after_c = dict(session.snapshot().translations)

        await session.stop_camera()
        return after_a, calls_after_repeat, after_b, after_c

    after_a, calls_after_repeat, after_b, after_c = asyncio.run(scenario())

    assert after_a == {Language.ENGLISH: 'A', Language.HINDI: 'hindi(A)',
                       Language.GUJARATI: 'gujarati(A)'}
    assert calls_after_repeat == 2
    assert after_b == {Language.ENGLISH: 'B', Language.HINDI: 'hindi(B)',
                       Language.GUJARATI: 'gujarati(B)'}
    assert after_c == {Language.ENGLISH: 'C', Language.HINDI: 'Translation failed.',
                       Language.GUJARATI: 'Translation failed.'}


def test_camera_off_resets_everything(service, player):
    session = make_session(service, player)

    async def scenario():
        await session.start_camera()
        service.detect_results = ['A']
        await detect_once(session)
        await session.stop_camera()

    asyncio.run(scenario())

    snap = session.snapshot()
    assert not snap.camera_active
    assert snap.detected_symbol is None
    assert snap.translations == {Language.ENGLISH: '', Language.HINDI: '', Language.GUJARATI: ''}
    assert not session.detection_loop.is_running


def test_toggle_camera(service, player):
    session = make_session(service, player)

    async def scenario():
        await session.toggle_camera()
        on = session.snapshot().camera_active
        await session.toggle_camera()
        return on, session.snapshot().camera_active

    assert asyncio.run(scenario()) == (True, False)


def test_translation_in_flight_at_stop_is_ignored(service, player):
    session = make_session(service, player)

    async def scenario():
        await session.start_camera()
        gate = asyncio.Event()
        service.translate_gates = {'Hindi': gate, 'Gujarati': gate}
        service.detect_results = ['A']
        session.detection_loop.trigger()
        await session.detection_loop.wait_idle()
        await settle()

        await session.stop_camera()
        gate.set()
        await session.wait_idle()

    asyncio.run(scenario())

    snap = session.snapshot()
    assert snap.detected_symbol is None
    assert set(snap.translations.values()) == {''}
    assert not snap.loading.translation


def test_capture_loss_during_tick_turns_camera_off(service, player):
    session = make_session(service, player)

    async def scenario():
        await session.start_camera()
        session.camera.fail_frames = True
        await detect_once(session)

    asyncio.run(scenario())

    snap = session.snapshot()
    assert not snap.camera_active
    assert snap.last_error == config.MESSAGES['camera_lost']
    assert session.camera.released == 1


def test_capture_thread_loss_turns_camera_off(service, player):
    session = make_session(service, player)

    async def scenario():
        await session.start_camera()
        # VideoCapture calls on_lost from its capture thread
        await asyncio.to_thread(session.camera.on_lost)
        await settle()
        await session.wait_idle()

    asyncio.run(scenario())

    assert not session.snapshot().camera_active
    assert session.snapshot().last_error == config.MESSAGES['camera_lost']


def test_speak_uses_current_translation(service, player):
    session = make_session(service, player)

    async def scenario():
        await session.start_camera()
        service.detect_results = ['A']
        await detect_once(session)
        spoke = await session.speak(Language.GUJARATI)
        await session.stop_camera()
        return spoke

    assert asyncio.run(scenario())
    assert service.synth_calls == ['gujarati(A)']


def test_speak_with_no_text_is_a_no_op(service, player):
    session = make_session(service, player)

    assert not asyncio.run(session.speak(Language.ENGLISH))
    assert service.synth_calls == []


def test_background_loop_round_trip(service, player):
    session = make_session(service, player)
    session.start_background()
    loop = session._loop
    try:
        assert session.submit(session.start_camera()).result(timeout=2)
        assert session.snapshot().camera_active
    finally:
        session.shutdown()

    assert not session.snapshot().camera_active
    assert session.camera.released == 1
    assert loop.is_closed()


def wait_for(condition, timeout=2.0):
    deadline = time.monotonic() + timeout
    while not condition():
        assert time.monotonic() < deadline, "condition not reached"
        time.sleep(0.01)


async def make_gate():
    return asyncio.Event()


def test_shutdown_cancels_speech_in_flight(service, player):
    session = make_session(service, player)
    session.start_background()
    loop = session._loop

    service.synth_gates = {'A': session.submit(make_gate()).result(timeout=2)}
    future = session.submit(session.playback.speak(Language.ENGLISH, 'A'))
    wait_for(lambda: service.synth_calls == ['A'])
    assert session.snapshot().loading.speech[Language.ENGLISH]

    session.shutdown(timeout=1)

    assert future.cancelled()
    assert not session.snapshot().loading.speech[Language.ENGLISH]
    assert not session.playback.is_speaking(Language.ENGLISH)
    assert player.played == []
    assert loop.is_closed()


class StuckThread:
    """A loop thread that never reports having exited."""

    def join(self, timeout=None):
        pass

    def is_alive(self):
        return True


def test_shutdown_does_not_close_a_loop_that_is_still_running(service, player):
    session = make_session(service, player)
    session.start_background()
    loop, thread = session._loop, session._thread
    session._thread = StuckThread()

    session.shutdown(timeout=0.5)

    assert not loop.is_closed()
    assert session._loop is None
    thread.join(timeout=2)
    loop.close()
